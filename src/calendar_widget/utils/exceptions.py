"""Custom exceptions for Calendar Widget application."""

from enum import Enum
from typing import Optional


class CalendarWidgetError(Exception):
    """Base exception for calendar widget errors."""

    code: str = "CALENDAR_WIDGET_ERROR"

    @property
    def message(self) -> str:
        return str(self)

    def to_dict(self) -> dict[str, str]:
        """Code and message as surfaced to callers."""
        code = self.code.value if isinstance(self.code, Enum) else self.code
        return {"code": code, "message": self.message}


class InferenceErrorCode(str, Enum):
    """Fatal schema inference outcomes."""

    MISSING_DATE = "MISSING_DATE"
    MISSING_TITLE = "MISSING_TITLE"


class ValidationErrorCode(str, Enum):
    """Fatal validation outcomes."""

    MISSING_REQUIRED_PROPERTY = "MISSING_REQUIRED_PROPERTY"
    INVALID_DATE_FORMAT = "INVALID_DATE_FORMAT"
    INVALID_COLLECTION_ID = "INVALID_COLLECTION_ID"


_INFERENCE_MESSAGES = {
    InferenceErrorCode.MISSING_DATE: (
        "No Date property found. Add a Date column to the database "
        "so events can be placed on the calendar."
    ),
    InferenceErrorCode.MISSING_TITLE: (
        "No Title property found. The database needs a Title column "
        "to name each event."
    ),
}


class InferenceError(CalendarWidgetError):
    """Raised when required roles cannot be inferred from a schema."""

    def __init__(self, code: InferenceErrorCode, message: Optional[str] = None):
        self.code = code
        super().__init__(message or _INFERENCE_MESSAGES[code])


class ValidationError(CalendarWidgetError):
    """Raised when a role mapping or query input is invalid."""

    def __init__(
        self,
        code: ValidationErrorCode,
        message: str,
        which: Optional[str] = None,
    ):
        self.code = code
        self.which = which
        super().__init__(message)


class RemoteError(CalendarWidgetError):
    """Raised when the record store cannot be reached or rejects a request."""

    code = "REMOTE_ERROR"

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class SettingsTokenError(CalendarWidgetError):
    """Raised when a settings token cannot be decoded."""

    code = "INVALID_SETTINGS_TOKEN"


class ConfigurationError(CalendarWidgetError):
    """Raised when configuration is invalid."""

    code = "CONFIGURATION_ERROR"
