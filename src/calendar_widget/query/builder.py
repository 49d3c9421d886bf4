"""Translate a date range into a record store query filter."""

from typing import Any, Optional

from pydantic import BaseModel

from ..utils.date_utils import date_part, is_valid_date
from ..utils.exceptions import ValidationError, ValidationErrorCode


class QueryFilter(BaseModel):
    """Inclusive date range filter: on_or_after <= property <= on_or_before."""

    property: str
    on_or_after: str
    on_or_before: str

    model_config = {"frozen": True}

    def to_notion(self) -> dict[str, Any]:
        """Render as a Notion database query filter body."""
        return {
            "and": [
                {"property": self.property, "date": {"on_or_after": self.on_or_after}},
                {"property": self.property, "date": {"on_or_before": self.on_or_before}},
            ]
        }

    def matches(self, value: Optional[str]) -> bool:
        """Evaluate the filter against a date or date-time string."""
        day = date_part(value) if value else None
        if day is None:
            return False
        # ISO dates order lexicographically
        return self.on_or_after <= day <= self.on_or_before


class DateRangeQueryBuilder:
    """Build inclusive date range filters."""

    def build(self, date_property: str, start: str, end: str) -> QueryFilter:
        """
        Build a filter for records dated between start and end, inclusive.

        Args:
            date_property: Name of the mapped date property
            start: First day of the range (YYYY-MM-DD)
            end: Last day of the range (YYYY-MM-DD)

        Returns:
            QueryFilter for the range

        Raises:
            ValidationError: If either bound is not a real YYYY-MM-DD date
        """
        for bound in (start, end):
            if not is_valid_date(bound):
                raise ValidationError(
                    ValidationErrorCode.INVALID_DATE_FORMAT,
                    f"Invalid date format: {bound!r}. Use YYYY-MM-DD",
                    which=bound,
                )

        return QueryFilter(property=date_property, on_or_after=start, on_or_before=end)
