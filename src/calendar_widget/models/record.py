"""Raw record models as handed over by the record store.

A property value is a tagged union keyed by its ``kind``, mirroring
:class:`~calendar_widget.models.schema.PropertyKind`, so the extractor can
branch on the concrete value type instead of probing open dictionaries.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class TextRun(BaseModel):
    """A single run of rich text."""

    plain_text: str = ""

    model_config = {"frozen": True}


class DateValue(BaseModel):
    kind: Literal["date"] = "date"
    start: Optional[str] = None
    end: Optional[str] = None

    model_config = {"frozen": True}


class TitleValue(BaseModel):
    kind: Literal["title"] = "title"
    runs: tuple[TextRun, ...] = ()

    model_config = {"frozen": True}


class RichTextValue(BaseModel):
    kind: Literal["rich_text"] = "rich_text"
    runs: tuple[TextRun, ...] = ()

    model_config = {"frozen": True}


class SelectValue(BaseModel):
    kind: Literal["select"] = "select"
    option_name: Optional[str] = None

    model_config = {"frozen": True}


class CheckboxValue(BaseModel):
    kind: Literal["checkbox"] = "checkbox"
    checked: bool = False

    model_config = {"frozen": True}


class OtherValue(BaseModel):
    """Any property type the widget does not interpret."""

    kind: Literal["other"] = "other"
    type_tag: str = ""

    model_config = {"frozen": True}


PropertyValue = Annotated[
    Union[DateValue, TitleValue, RichTextValue, SelectValue, CheckboxValue, OtherValue],
    Field(discriminator="kind"),
]

TextValue = Union[TitleValue, RichTextValue]


def first_text(value: TextValue) -> str:
    """Plain text of the first run, or an empty string."""
    if not value.runs:
        return ""
    return value.runs[0].plain_text or ""


class RawRecord(BaseModel):
    """One row of a record collection."""

    id: str
    url: Optional[str] = None
    properties: dict[str, PropertyValue] = Field(default_factory=dict)

    model_config = {"frozen": True}
