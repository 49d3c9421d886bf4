"""Shared fixtures for calendar widget tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from calendar_widget.models.mapping import RoleMapping
from calendar_widget.models.record import (
    CheckboxValue,
    DateValue,
    RawRecord,
    RichTextValue,
    SelectValue,
    TextRun,
    TitleValue,
)
from calendar_widget.models.schema import PropertyDescriptor, PropertyKind


@pytest.fixture
def catalog() -> Callable[..., list[PropertyDescriptor]]:
    """Build a catalog from (name, kind) pairs, keeping their order."""

    def _build(*pairs: tuple[str, PropertyKind]) -> list[PropertyDescriptor]:
        return [PropertyDescriptor(name=name, kind=kind) for name, kind in pairs]

    return _build


@pytest.fixture
def text() -> Callable[..., RichTextValue]:
    def _build(*runs: str) -> RichTextValue:
        return RichTextValue(runs=tuple(TextRun(plain_text=r) for r in runs))

    return _build


@pytest.fixture
def title() -> Callable[..., TitleValue]:
    def _build(*runs: str) -> TitleValue:
        return TitleValue(runs=tuple(TextRun(plain_text=r) for r in runs))

    return _build


@pytest.fixture
def record() -> Callable[..., RawRecord]:
    def _build(record_id: str, **properties: Any) -> RawRecord:
        return RawRecord(id=record_id, properties=properties)

    return _build


@pytest.fixture
def mapping() -> RoleMapping:
    return RoleMapping(
        date_property="Date",
        title_property="Name",
        schedule_properties=("Schedule 1", "Schedule 2", "Schedule 3"),
        importance_property="Important",
    )


@pytest.fixture
def sample_records(title, text) -> list[RawRecord]:
    """Three well-formed records in February 2024."""
    return [
        RawRecord(
            id="11111111-2222-3333-4444-555555555555",
            properties={
                "Date": DateValue(start="2024-02-01"),
                "Name": title("Kickoff"),
                "Schedule 1": text("09:00 standup"),
                "Important": SelectValue(option_name="Important"),
            },
        ),
        RawRecord(
            id="aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee",
            properties={
                "Date": DateValue(start="2024-02-29T10:00:00.000+09:00"),
                "Name": title("Leap day review"),
                "Important": SelectValue(option_name="Normal"),
            },
        ),
        RawRecord(
            id="ffffffff-0000-1111-2222-333333333333",
            properties={
                "Date": DateValue(start="2024-02-29"),
                "Name": title("Wrap-up"),
                "Important": CheckboxValue(checked=True),
            },
        ),
    ]
