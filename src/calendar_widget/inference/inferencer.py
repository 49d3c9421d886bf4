"""Infer a role mapping from a collection schema."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..models.mapping import MAX_SCHEDULE_PROPERTIES, RoleMapping
from ..models.schema import PropertyDescriptor, PropertyKind
from ..utils.exceptions import InferenceError, InferenceErrorCode
from .keywords import KeywordRole, KeywordTable, MatchMode

logger = logging.getLogger(__name__)


@dataclass
class InferenceResult:
    """Result of a schema inference."""

    mapping: Optional[RoleMapping] = None
    error: Optional[InferenceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> RoleMapping:
        """Return the mapping or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.mapping


class SchemaInferencer:
    """Pick date, title, schedule and importance properties from a schema.

    The scan is order dependent: the first Date and the first Title property
    win, so the catalog must arrive in a stable (declaration) order.
    """

    def __init__(self, keywords: Optional[KeywordTable] = None):
        self.keywords = keywords or KeywordTable()

    def infer(self, catalog: Iterable[PropertyDescriptor]) -> InferenceResult:
        """
        Infer a role mapping.

        Args:
            catalog: Schema properties in declaration order

        Returns:
            InferenceResult carrying either the mapping or an InferenceError
        """
        properties = list(catalog)

        date_property = self._first_of_kind(properties, PropertyKind.DATE)
        if date_property is None:
            return InferenceResult(error=InferenceError(InferenceErrorCode.MISSING_DATE))

        title_property = self._first_of_kind(properties, PropertyKind.TITLE)
        if title_property is None:
            return InferenceResult(error=InferenceError(InferenceErrorCode.MISSING_TITLE))

        mapping = RoleMapping(
            date_property=date_property,
            title_property=title_property,
            schedule_properties=self._schedule_properties(properties),
            importance_property=self._importance_property(properties) or "",
        )
        logger.info(
            f"Inferred mapping: date={mapping.date_property!r}, "
            f"title={mapping.title_property!r}, "
            f"schedules={list(mapping.schedule_properties)}, "
            f"importance={mapping.importance_property!r}"
        )
        return InferenceResult(mapping=mapping)

    @staticmethod
    def _first_of_kind(
        properties: list[PropertyDescriptor], kind: PropertyKind
    ) -> Optional[str]:
        for prop in properties:
            if prop.kind is kind:
                return prop.name
        return None

    def _schedule_properties(self, properties: list[PropertyDescriptor]) -> tuple[str, ...]:
        rich_text = [p.name for p in properties if p.kind is PropertyKind.RICH_TEXT]
        matched = [name for name in rich_text if self.keywords.is_schedule_name(name)]
        # Fallback only when nothing matched, not when too few matched
        chosen = matched or rich_text
        return tuple(dict.fromkeys(chosen))[:MAX_SCHEDULE_PROPERTIES]

    def _importance_property(self, properties: list[PropertyDescriptor]) -> Optional[str]:
        selects = [p.name for p in properties if p.kind is PropertyKind.SELECT]
        if not selects:
            return None

        for mode in (MatchMode.EXACT_CI, MatchMode.CONTAINS):
            for name in selects:
                if self.keywords.matches(KeywordRole.IMPORTANCE, name, mode):
                    return name

        # Known heuristic: may pick an unrelated Select when no name matches
        logger.debug(f"No importance keyword matched, falling back to {selects[0]!r}")
        return selects[0]
