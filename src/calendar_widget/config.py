"""Configuration management for Calendar Widget application."""

import logging
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .inference.keywords import KeywordRule, KeywordTable
from .utils.exceptions import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)


class NotionConfig(BaseSettings):
    """Notion API configuration."""

    api_token: Optional[str] = Field(None, validation_alias="NOTION_API_TOKEN")
    api_version: str = Field(default="2022-06-28", validation_alias="NOTION_API_VERSION")
    base_url: str = Field(
        default="https://api.notion.com/v1", validation_alias="NOTION_BASE_URL"
    )
    timeout: float = Field(default=30.0, validation_alias="NOTION_TIMEOUT")
    # Single bounded query window, no pagination beyond it
    page_size: int = Field(default=100, validation_alias="NOTION_PAGE_SIZE")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_parse_none_str="",  # Treat empty string as None
    )


class AppConfig(BaseSettings):
    """Application configuration."""

    notion: NotionConfig = Field(default_factory=NotionConfig)

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: Optional[Path] = Field(default=None, validation_alias="LOG_FILE")

    # Widget settings
    timezone: str = Field(default="UTC", validation_alias="WIDGET_TIMEZONE")
    keywords_file: Path = Field(
        default=Path("keywords.yaml"), validation_alias="KEYWORDS_FILE"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


class KeywordConfig:
    """Vernacular keyword overrides loaded from YAML.

    Example::

        keywords:
          - role: schedule
            match_mode: contains
            tokens: [schedule, agenda, 일정]
    """

    def __init__(self, config_path: Path = Path("keywords.yaml")):
        self.rules: list[KeywordRule] = []

        if config_path.exists():
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"{config_path} must contain a mapping")

            try:
                self.rules = [
                    KeywordRule(**entry) for entry in data.get("keywords", [])
                ]
            except (PydanticValidationError, TypeError) as e:
                raise ConfigurationError(
                    f"Invalid keyword rules in {config_path}: {e}"
                ) from e

            logger.debug(f"Loaded {len(self.rules)} keyword rules from {config_path}")

    @property
    def has_overrides(self) -> bool:
        return len(self.rules) > 0

    def table(self) -> KeywordTable:
        """Default keyword table with this file's rules applied."""
        return KeywordTable().with_overrides(self.rules)


# Global config instance
config = AppConfig()
