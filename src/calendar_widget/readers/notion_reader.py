"""Notion record store reader using the REST API."""

import logging
from typing import Any, Optional

import requests

from ..config import NotionConfig
from ..models.record import (
    CheckboxValue,
    DateValue,
    OtherValue,
    RawRecord,
    RichTextValue,
    SelectValue,
    TextRun,
    TitleValue,
)
from ..models.schema import Collection, PropertyDescriptor, PropertyKind
from ..query.builder import QueryFilter
from ..utils.exceptions import RemoteError
from .base import RecordStoreReader

logger = logging.getLogger(__name__)


def _text_runs(items: Optional[list[dict[str, Any]]]) -> tuple[TextRun, ...]:
    return tuple(
        TextRun(plain_text=item.get("plain_text") or "")
        for item in items or []
        if isinstance(item, dict)
    )


def parse_property_value(prop: dict[str, Any]):
    """Translate one Notion page property into a tagged property value."""
    type_tag = prop.get("type", "")
    kind = PropertyKind.from_tag(type_tag)

    if kind is PropertyKind.DATE:
        date = prop.get("date") or {}
        return DateValue(start=date.get("start"), end=date.get("end"))
    if kind is PropertyKind.TITLE:
        return TitleValue(runs=_text_runs(prop.get("title")))
    if kind is PropertyKind.RICH_TEXT:
        return RichTextValue(runs=_text_runs(prop.get("rich_text")))
    if kind is PropertyKind.SELECT:
        select = prop.get("select") or {}
        return SelectValue(option_name=select.get("name"))
    if kind is PropertyKind.CHECKBOX:
        return CheckboxValue(checked=prop.get("checkbox") is True)
    return OtherValue(type_tag=type_tag)


def parse_page(page: dict[str, Any]) -> Optional[RawRecord]:
    """Translate a Notion page into a raw record, or None for non-page results."""
    if "properties" not in page or "id" not in page:
        return None

    properties = {}
    for name, prop in page["properties"].items():
        if isinstance(prop, dict):
            properties[name] = parse_property_value(prop)

    return RawRecord(id=page["id"], url=page.get("url"), properties=properties)


def parse_schema(database: dict[str, Any]) -> list[PropertyDescriptor]:
    """Translate a Notion database object into property descriptors."""
    return [
        PropertyDescriptor(name=name, kind=PropertyKind.from_tag(prop.get("type", "")))
        for name, prop in (database.get("properties") or {}).items()
    ]


def parse_collection(database: dict[str, Any]) -> Collection:
    """Translate a Notion database search result into collection metadata."""
    title = "Untitled"
    runs = database.get("title")
    if isinstance(runs, list) and runs and isinstance(runs[0], dict):
        title = runs[0].get("plain_text") or "Untitled"
    return Collection(id=database["id"], display_name=title)


class NotionReader(RecordStoreReader):
    """Read schemas and records from Notion databases."""

    def __init__(self, api_token: str, config: Optional[NotionConfig] = None):
        """
        Initialize Notion reader.

        Args:
            api_token: Notion integration token
            config: Notion API configuration
        """
        self.api_token = api_token
        self.config = config or NotionConfig()
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        """Get or create an authenticated requests session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({
                "Authorization": f"Bearer {self.api_token}",
                "Notion-Version": self.config.api_version,
                "Content-Type": "application/json",
            })
        return self._session

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            resp = self._get_session().request(
                method, url, timeout=self.config.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise RemoteError(f"Notion request failed: {e}") from e

        logger.debug(f"Notion {method} {path}: status={resp.status_code}")
        if resp.status_code != 200:
            try:
                detail = resp.json().get("message", resp.text)
            except ValueError:
                detail = resp.text
            raise RemoteError(
                f"Notion API error {resp.status_code}: {detail}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise RemoteError(f"Invalid JSON from Notion: {e}") from e

    def fetch_schema(self, collection_id: str) -> list[PropertyDescriptor]:
        """Retrieve a database's properties in the order Notion returns them."""
        database = self._request("GET", f"databases/{collection_id}")
        schema = parse_schema(database)
        logger.info(f"Found {len(schema)} properties in database {collection_id}")
        return schema

    def query_records(
        self, collection_id: str, query_filter: QueryFilter
    ) -> list[RawRecord]:
        """Run a single date range query against a database."""
        payload = {
            "filter": query_filter.to_notion(),
            "page_size": self.config.page_size,
        }
        response = self._request("POST", f"databases/{collection_id}/query", json=payload)

        records = []
        for page in response.get("results", []):
            record = parse_page(page)
            if record is not None:
                records.append(record)

        if response.get("has_more"):
            logger.warning(
                f"Query returned more than {self.config.page_size} records; "
                "only the first page is used"
            )
        logger.info(f"Read {len(records)} records from Notion")
        return records

    def list_collections(self) -> list[Collection]:
        """List databases shared with the integration."""
        payload = {
            "filter": {"value": "database", "property": "object"},
            "page_size": self.config.page_size,
        }
        response = self._request("POST", "search", json=payload)

        result = [
            parse_collection(item)
            for item in response.get("results", [])
            if "properties" in item and "id" in item
        ]
        logger.info(f"Found {len(result)} Notion databases")
        return result

    def check_credential(self) -> bool:
        """Check the token against the users/me endpoint."""
        try:
            self._request("GET", "users/me")
            return True
        except RemoteError as e:
            logger.warning(f"Notion credential check failed: {e}")
            return False
