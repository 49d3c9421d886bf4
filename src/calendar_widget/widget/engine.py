"""Widget setup and render flows."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..extraction.extractor import EventExtractor
from ..inference.inferencer import InferenceResult, SchemaInferencer
from ..models.event import CalendarEvent
from ..models.mapping import RoleMapping
from ..models.settings import ThemeConfig, WidgetSettings
from ..query.builder import DateRangeQueryBuilder
from ..readers.base import RecordStoreReader
from ..utils.date_utils import is_valid_collection_id, month_window
from ..utils.exceptions import RemoteError, ValidationError, ValidationErrorCode
from ..validation.validator import SchemaValidator
from .token import encode_settings

logger = logging.getLogger(__name__)

LOAD_EVENTS_FAILED = "could not load events"


@dataclass
class SetupResult:
    """Result of a widget setup."""

    token: str
    settings: WidgetSettings
    warnings: list[str] = field(default_factory=list)


@dataclass
class FetchResult:
    """Result of an event fetch."""

    events: list[CalendarEvent] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class WidgetEngine:
    """Orchestrates schema analysis, setup and event fetches.

    Each cycle is sequential: fetch schema, infer or validate, fetch records
    for the range, extract. Transport failures are terminal for the cycle and
    never retried here.
    """

    def __init__(
        self,
        reader: RecordStoreReader,
        inferencer: Optional[SchemaInferencer] = None,
        validator: Optional[SchemaValidator] = None,
        builder: Optional[DateRangeQueryBuilder] = None,
        extractor: Optional[EventExtractor] = None,
    ):
        """
        Initialize widget engine.

        Args:
            reader: Record store reader
            inferencer: Schema inferencer (defaults to SchemaInferencer())
            validator: Schema validator (defaults to SchemaValidator())
            builder: Query builder (defaults to DateRangeQueryBuilder())
            extractor: Event extractor (defaults to EventExtractor())
        """
        self.reader = reader
        self.inferencer = inferencer or SchemaInferencer()
        self.validator = validator or SchemaValidator()
        self.builder = builder or DateRangeQueryBuilder()
        self.extractor = extractor or EventExtractor()

    def analyze(self, collection_id: str) -> InferenceResult:
        """
        Infer a role mapping for a collection.

        Raises:
            RemoteError: If the schema cannot be fetched
        """
        catalog = self.reader.fetch_schema(collection_id)
        return self.inferencer.infer(catalog)

    def setup(
        self,
        credential: str,
        collection_id: str,
        mapping: Optional[RoleMapping] = None,
        theme: Optional[ThemeConfig] = None,
    ) -> SetupResult:
        """
        Resolve a mapping and produce the widget's settings token.

        The collection ID and credential are checked before the schema is
        read. A supplied mapping is validated against the live schema;
        otherwise one is inferred.

        Raises:
            ValidationError: If the collection ID is malformed, or a supplied
                mapping names a missing required property
            RemoteError: If the credential is rejected or the schema cannot be fetched
            InferenceError: If required roles cannot be inferred
        """
        if not is_valid_collection_id(collection_id):
            raise ValidationError(
                ValidationErrorCode.INVALID_COLLECTION_ID,
                f"Invalid collection ID: {collection_id!r}",
                which=collection_id,
            )
        if not self.reader.check_credential():
            raise RemoteError("Failed to connect to the record store")

        catalog = self.reader.fetch_schema(collection_id)
        warnings: list[str] = []

        if mapping is None:
            mapping = self.inferencer.infer(catalog).unwrap()
        else:
            validation = self.validator.validate(mapping, catalog)
            validation.raise_for_error()
            warnings = validation.warnings

        settings = WidgetSettings(
            credential=credential,
            collection_id=collection_id,
            mapping=mapping,
            theme=theme or ThemeConfig(),
        )
        logger.info(f"Widget configured for collection {collection_id}")
        return SetupResult(token=encode_settings(settings), settings=settings, warnings=warnings)

    def fetch_events(self, settings: WidgetSettings, start: str, end: str) -> FetchResult:
        """
        Fetch events dated between start and end, inclusive.

        Raises:
            ValidationError: If either bound is not a real YYYY-MM-DD date
        """
        query_filter = self.builder.build(settings.mapping.date_property, start, end)
        result = FetchResult()

        try:
            records = self.reader.query_records(settings.collection_id, query_filter)
        except RemoteError as e:
            logger.error(f"Failed to load events for {start}..{end}: {e}")
            result.errors.append(LOAD_EVENTS_FAILED)
            return result

        result.events = self.extractor.extract(records, settings.mapping)
        return result

    def fetch_month(self, settings: WidgetSettings, year: int, month: int) -> FetchResult:
        """Fetch events for one calendar month."""
        start, end = month_window(year, month)
        return self.fetch_events(settings, start, end)
