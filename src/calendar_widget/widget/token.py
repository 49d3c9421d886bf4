"""Compact, URL-safe encoding of widget settings."""

import base64
import binascii
import json
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..models.mapping import RoleMapping
from ..models.settings import ThemeConfig, WidgetSettings
from ..utils.exceptions import SettingsTokenError


def encode_settings(settings: WidgetSettings) -> str:
    """
    Encode settings as base64url (unpadded) of a flat JSON object.

    Args:
        settings: Widget settings to encode

    Returns:
        URL-safe token
    """
    payload = {
        "token": settings.credential,
        "dbId": settings.collection_id,
        "dateProp": settings.mapping.date_property,
        "titleProp": settings.mapping.title_property,
        "scheduleProps": list(settings.mapping.schedule_properties),
        "importantProp": settings.mapping.importance_property,
        "primaryColor": settings.theme.primary_color,
        "accentColor": settings.theme.accent_color,
        "importantColor": settings.theme.important_color,
    }
    raw = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _load_payload(token: str) -> dict[str, Any]:
    # Some embedders append ":<n>" to the path segment
    cleaned = token.strip().split(":")[0]
    if not cleaned:
        raise SettingsTokenError("Settings token is empty")

    padded = cleaned + "=" * (-len(cleaned) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise SettingsTokenError(f"Settings token could not be decoded: {e}") from e

    if not isinstance(payload, dict):
        raise SettingsTokenError("Settings token does not hold an object")
    return payload


def decode_settings(token: str) -> WidgetSettings:
    """
    Decode a settings token.

    Missing or empty schedule and importance fields degrade to empty values;
    missing theme colors fall back to defaults.

    Raises:
        SettingsTokenError: If the token is malformed or lacks required fields
    """
    payload = _load_payload(token)

    theme_fields = {
        "primary_color": payload.get("primaryColor"),
        "accent_color": payload.get("accentColor"),
        "important_color": payload.get("importantColor"),
    }
    try:
        mapping = RoleMapping(
            date_property=payload.get("dateProp") or "",
            title_property=payload.get("titleProp") or "",
            schedule_properties=payload.get("scheduleProps") or (),
            importance_property=payload.get("importantProp") or "",
        )
        return WidgetSettings(
            credential=payload.get("token") or "",
            collection_id=payload.get("dbId") or "",
            mapping=mapping,
            theme=ThemeConfig(**{k: v for k, v in theme_fields.items() if v}),
        )
    except PydanticValidationError as e:
        raise SettingsTokenError(f"Settings token is incomplete: {e}") from e
