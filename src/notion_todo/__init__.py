"""Example todo CLI built on the Notion API client."""
