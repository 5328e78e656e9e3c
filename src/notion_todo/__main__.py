"""Run the todo CLI with ``python -m notion_todo``."""

from notion_todo.cli import main

if __name__ == "__main__":
    main()
