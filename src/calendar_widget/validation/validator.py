"""Check a saved role mapping against a live schema."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..models.mapping import RoleMapping
from ..models.schema import IMPORTANCE_KINDS, TEXT_KINDS, PropertyDescriptor, PropertyKind
from ..utils.exceptions import ValidationError, ValidationErrorCode

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a schema validation."""

    error: Optional[ValidationError] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class SchemaValidator:
    """Confirm required roles still exist; downgrade optional drift to warnings."""

    def validate(
        self, mapping: RoleMapping, catalog: Iterable[PropertyDescriptor]
    ) -> ValidationResult:
        """
        Validate a role mapping.

        Args:
            mapping: Role mapping to check
            catalog: Current schema of the collection

        Returns:
            ValidationResult with a fatal error (missing date/title property)
            or a list of warnings for stale optional roles
        """
        kinds = {prop.name: prop.kind for prop in catalog}
        result = ValidationResult()

        for role, name in (("Date", mapping.date_property), ("Title", mapping.title_property)):
            if name not in kinds:
                result.error = ValidationError(
                    ValidationErrorCode.MISSING_REQUIRED_PROPERTY,
                    f"{role} property '{name}' not found",
                    which=name,
                )
                logger.error(result.error.message)
                return result

        self._check_kind(result, "Date", mapping.date_property, kinds, {PropertyKind.DATE})
        self._check_kind(result, "Title", mapping.title_property, kinds, TEXT_KINDS)

        for name in mapping.schedule_properties:
            if name not in kinds:
                result.warnings.append(f"Schedule property '{name}' not found")
            else:
                self._check_kind(result, "Schedule", name, kinds, TEXT_KINDS)

        if mapping.importance_property:
            name = mapping.importance_property
            if name not in kinds:
                result.warnings.append(f"Important property '{name}' not found")
            else:
                self._check_kind(result, "Important", name, kinds, IMPORTANCE_KINDS)

        for warning in result.warnings:
            logger.warning(warning)
        return result

    @staticmethod
    def _check_kind(
        result: ValidationResult,
        role: str,
        name: str,
        kinds: dict[str, PropertyKind],
        expected: Iterable[PropertyKind],
    ) -> None:
        kind = kinds[name]
        if kind not in expected:
            result.warnings.append(
                f"{role} property '{name}' has unexpected type '{kind.value}'"
            )
