"""Turn raw records into calendar events."""

import logging
from typing import Iterable, Optional

from ..inference.keywords import KeywordTable
from ..models.event import CalendarEvent
from ..models.mapping import RoleMapping
from ..models.record import (
    CheckboxValue,
    DateValue,
    PropertyValue,
    RawRecord,
    RichTextValue,
    SelectValue,
    TitleValue,
    first_text,
)
from ..utils.date_utils import date_part

logger = logging.getLogger(__name__)

SOURCE_URL_BASE = "https://notion.so/"


class RecordSkipped(Exception):
    """Raised internally when a record cannot become an event."""


def source_url_for(record_id: str) -> str:
    """Link back to the source record, with id separators stripped."""
    return f"{SOURCE_URL_BASE}{record_id.replace('-', '')}"


def group_events_by_date(events: Iterable[CalendarEvent]) -> dict[str, list[CalendarEvent]]:
    """Group events by their date, keeping input order within each day."""
    grouped: dict[str, list[CalendarEvent]] = {}
    for event in events:
        grouped.setdefault(event.date, []).append(event)
    return grouped


class EventExtractor:
    """Extract normalized events from raw records using a role mapping."""

    def __init__(self, keywords: Optional[KeywordTable] = None):
        self.keywords = keywords or KeywordTable()

    def extract(
        self, records: Iterable[RawRecord], mapping: RoleMapping
    ) -> list[CalendarEvent]:
        """
        Extract events, skipping records that cannot be parsed.

        Args:
            records: Raw records from the record store
            mapping: Role mapping to apply

        Returns:
            One CalendarEvent per parseable record, in input order
        """
        events = []
        skipped = 0

        for record in records:
            try:
                events.append(self._transform_record(record, mapping))
            except Exception as e:
                skipped += 1
                record_id = getattr(record, "id", "<unknown>")
                logger.warning(f"Skipping record {record_id}: {e}")

        logger.info(f"Extracted {len(events)} events ({skipped} skipped)")
        return events

    def _transform_record(self, record: RawRecord, mapping: RoleMapping) -> CalendarEvent:
        properties = record.properties

        date_value = properties.get(mapping.date_property)
        if not isinstance(date_value, DateValue) or not date_value.start:
            raise RecordSkipped(f"no date in '{mapping.date_property}'")
        day = date_part(date_value.start)
        if day is None:
            raise RecordSkipped(f"malformed date {date_value.start!r}")

        return CalendarEvent(
            id=record.id,
            date=day,
            title=self._text(properties.get(mapping.title_property)) or "",
            schedules=self._schedules(properties, mapping),
            is_important=self._is_important(properties, mapping),
            source_url=source_url_for(record.id),
        )

    @staticmethod
    def _text(value: Optional[PropertyValue]) -> Optional[str]:
        if isinstance(value, (TitleValue, RichTextValue)):
            return first_text(value)
        return None

    def _schedules(
        self, properties: dict[str, PropertyValue], mapping: RoleMapping
    ) -> tuple[str, ...]:
        schedules = []
        for name in mapping.schedule_properties:
            text = self._text(properties.get(name))
            if text:
                schedules.append(text)
        return tuple(schedules)

    def _is_important(
        self, properties: dict[str, PropertyValue], mapping: RoleMapping
    ) -> bool:
        if not mapping.importance_property:
            return False

        value = properties.get(mapping.importance_property)
        if isinstance(value, SelectValue):
            return self.keywords.is_important_term(value.option_name)
        if isinstance(value, CheckboxValue):
            return value.checked
        return False
