"""Normalized calendar event data model."""

from pydantic import BaseModel, Field


class CalendarEvent(BaseModel):
    """Normalized calendar event model."""

    id: str  # Source record ID
    date: str  # YYYY-MM-DD
    title: str = ""
    schedules: tuple[str, ...] = Field(default_factory=tuple)
    is_important: bool = Field(default=False, serialization_alias="isImportant")
    source_url: str = Field(default="", serialization_alias="sourceUrl")

    model_config = {"frozen": True, "populate_by_name": True}

    def to_payload(self) -> dict:
        """Serialize for the presentation layer."""
        return self.model_dump(by_alias=True, mode="json")
