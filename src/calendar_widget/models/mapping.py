"""Role mapping model."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

MAX_SCHEDULE_PROPERTIES = 5


class RoleMapping(BaseModel):
    """Assignment of semantic roles to property names for one widget."""

    date_property: str
    title_property: str
    # Order determines tooltip display order
    schedule_properties: tuple[str, ...] = Field(default_factory=tuple)
    importance_property: str = ""

    model_config = {"frozen": True}

    @field_validator("date_property", "title_property")
    @classmethod
    def _require_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("property name must not be empty")
        return value

    @field_validator("schedule_properties", mode="before")
    @classmethod
    def _coerce_schedules(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            raise ValueError("schedule_properties must be a sequence of names")
        return value

    @field_validator("schedule_properties")
    @classmethod
    def _check_schedules(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(value) > MAX_SCHEDULE_PROPERTIES:
            raise ValueError(
                f"at most {MAX_SCHEDULE_PROPERTIES} schedule properties are allowed"
            )
        if any(not name.strip() for name in value):
            raise ValueError("schedule property names must not be empty")
        if len(set(value)) != len(value):
            raise ValueError("schedule property names must be distinct")
        return value

    @field_validator("importance_property", mode="before")
    @classmethod
    def _coerce_importance(cls, value: Any) -> Any:
        if value is None:
            return ""
        # Non-strings are left for the str check to reject
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def has_importance(self) -> bool:
        return bool(self.importance_property)
