"""Record store schema models."""

from enum import Enum

from pydantic import BaseModel


class PropertyKind(str, Enum):
    """Property type tags understood by the widget."""

    DATE = "date"
    TITLE = "title"
    RICH_TEXT = "rich_text"
    SELECT = "select"
    CHECKBOX = "checkbox"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: str) -> "PropertyKind":
        """Map a record store type tag to a kind; unknown tags become OTHER."""
        try:
            return cls(tag)
        except ValueError:
            return cls.OTHER


TEXT_KINDS = frozenset({PropertyKind.TITLE, PropertyKind.RICH_TEXT})
IMPORTANCE_KINDS = frozenset({PropertyKind.SELECT, PropertyKind.CHECKBOX})


class PropertyDescriptor(BaseModel):
    """One entry of a collection schema."""

    name: str
    kind: PropertyKind

    model_config = {"frozen": True}


class Collection(BaseModel):
    """Record collection metadata."""

    id: str
    display_name: str = "Untitled"

    model_config = {"frozen": True}
