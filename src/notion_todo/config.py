"""Configuration for the todo CLI using pydantic-settings."""

import logging
from pathlib import Path

from dotenv import set_key
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_FILE = Path("todo_config.env")

DATABASE_ID_KEY = "NOTION_TASK_DATABASE_ID"


class ConfigError(Exception):
    """Raised when the CLI is missing required configuration."""


class TodoConfig(BaseSettings):
    """Configuration for the todo CLI.

    Settings are read from environment variables with the NOTION_ prefix,
    falling back to the key-value file ``todo_config.env``.

    :param api_token: Notion integration token.
    :param task_database_id: ID of the database holding the tasks.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTION_",
        env_file=CONFIG_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_token: SecretStr | None = Field(default=None, description="Notion integration token")
    task_database_id: str | None = Field(
        default=None,
        description="Database selected with the config command",
    )

    def require_token(self) -> str:
        """Get the API token.

        :returns: The token.
        :raises ConfigError: If no token is configured.
        """
        if self.api_token is None or not self.api_token.get_secret_value().strip():
            raise ConfigError(
                "No Notion API token found in either the environment variable "
                "`NOTION_API_TOKEN` or the config file!"
            )
        return self.api_token.get_secret_value()

    def require_database_id(self) -> str:
        """Get the task database ID.

        :returns: The database ID.
        :raises ConfigError: If no database has been selected yet.
        """
        if not self.task_database_id:
            raise ConfigError("No task database configured. Run `notion-todo config` first.")
        return self.task_database_id


def load_config(env_file: Path | None = CONFIG_FILE) -> TodoConfig:
    """Load the CLI configuration.

    :param env_file: Key-value file to read, or None to use the environment only.
    :returns: Loaded configuration.
    """
    return TodoConfig(_env_file=env_file)  # type: ignore[call-arg]


def save_database_id(database_id: str, env_file: Path = CONFIG_FILE) -> None:
    """Persist the selected task database in the config file.

    Other keys already in the file are kept.

    :param database_id: ID of the selected database.
    :param env_file: Key-value file to write.
    """
    env_file.touch(exist_ok=True)
    set_key(env_file, DATABASE_ID_KEY, database_id, quote_mode="never")
    logger.info(f"Saved {DATABASE_ID_KEY} to {env_file}")
