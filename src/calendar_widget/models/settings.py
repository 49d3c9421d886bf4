"""Saved widget settings."""

from pydantic import BaseModel, Field

from .mapping import RoleMapping

DEFAULT_PRIMARY_COLOR = "#4A5568"
DEFAULT_ACCENT_COLOR = "#ED64A6"
DEFAULT_IMPORTANT_COLOR = "#ED64A6"


class ThemeConfig(BaseModel):
    """Widget color theme."""

    primary_color: str = DEFAULT_PRIMARY_COLOR
    accent_color: str = DEFAULT_ACCENT_COLOR
    important_color: str = DEFAULT_IMPORTANT_COLOR

    model_config = {"frozen": True}


class WidgetSettings(BaseModel):
    """Everything a rendered widget needs to fetch its events."""

    credential: str
    collection_id: str
    mapping: RoleMapping
    theme: ThemeConfig = Field(default_factory=ThemeConfig)

    model_config = {"frozen": True}
