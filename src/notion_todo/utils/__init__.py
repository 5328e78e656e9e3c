"""Utilities for the todo CLI."""
