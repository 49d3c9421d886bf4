"""Unit tests for schema inference.

Covers role selection order (first match wins), the schedule keyword
fallback, importance selection tiers and the two fatal outcomes.
"""

from __future__ import annotations

import pytest

from calendar_widget.inference.inferencer import SchemaInferencer
from calendar_widget.inference.keywords import (
    KeywordRole,
    KeywordRule,
    KeywordTable,
    MatchMode,
)
from calendar_widget.models.schema import PropertyKind as K
from calendar_widget.utils.exceptions import InferenceError, InferenceErrorCode

pytestmark = pytest.mark.unit


@pytest.fixture
def inferencer() -> SchemaInferencer:
    return SchemaInferencer()


class TestRequiredRoles:
    def test_first_date_and_title_win(self, inferencer, catalog):
        result = inferencer.infer(
            catalog(
                ("Notes", K.RICH_TEXT),
                ("When", K.DATE),
                ("Name", K.TITLE),
                ("Due", K.DATE),
            )
        )

        assert result.ok
        assert result.mapping.date_property == "When"
        assert result.mapping.title_property == "Name"

    def test_missing_date_fails(self, inferencer, catalog):
        result = inferencer.infer(catalog(("Name", K.TITLE), ("Notes", K.RICH_TEXT)))

        assert not result.ok
        assert result.mapping is None
        assert result.error.code is InferenceErrorCode.MISSING_DATE
        assert "Date" in result.error.message

    def test_missing_title_fails(self, inferencer, catalog):
        result = inferencer.infer(catalog(("When", K.DATE), ("Notes", K.RICH_TEXT)))

        assert result.error.code is InferenceErrorCode.MISSING_TITLE
        assert "Title" in result.error.message

    def test_missing_both_reports_date_first(self, inferencer, catalog):
        result = inferencer.infer(catalog(("Notes", K.RICH_TEXT)))
        assert result.error.code is InferenceErrorCode.MISSING_DATE

    def test_empty_catalog_fails(self, inferencer):
        assert inferencer.infer([]).error.code is InferenceErrorCode.MISSING_DATE

    def test_rich_text_is_not_a_title(self, inferencer, catalog):
        result = inferencer.infer(catalog(("When", K.DATE), ("Title", K.RICH_TEXT)))
        assert result.error.code is InferenceErrorCode.MISSING_TITLE

    def test_unwrap_raises_carried_error(self, inferencer, catalog):
        result = inferencer.infer(catalog(("Name", K.TITLE)))
        with pytest.raises(InferenceError) as excinfo:
            result.unwrap()
        assert excinfo.value.code is InferenceErrorCode.MISSING_DATE

    def test_infer_is_deterministic(self, inferencer, catalog):
        props = catalog(
            ("Date", K.DATE),
            ("Name", K.TITLE),
            ("일정1", K.RICH_TEXT),
            ("Memo", K.RICH_TEXT),
            ("Status", K.SELECT),
        )
        assert inferencer.infer(props).mapping == inferencer.infer(props).mapping


class TestScheduleProperties:
    def test_keyword_matches_in_catalog_order(self, inferencer, catalog):
        result = inferencer.infer(
            catalog(
                ("Date", K.DATE),
                ("Name", K.TITLE),
                ("Memo", K.RICH_TEXT),
                ("Evening Schedule", K.RICH_TEXT),
                ("일정2", K.RICH_TEXT),
                ("schedule-morning", K.RICH_TEXT),
            )
        )

        assert result.mapping.schedule_properties == (
            "Evening Schedule",
            "일정2",
            "schedule-morning",
        )

    def test_keyword_match_requires_rich_text(self, inferencer, catalog):
        result = inferencer.infer(
            catalog(
                ("Date", K.DATE),
                ("Name", K.TITLE),
                ("Schedule", K.SELECT),
                ("Memo", K.RICH_TEXT),
            )
        )
        # Falls back because no rich text property carries the keyword
        assert result.mapping.schedule_properties == ("Memo",)

    def test_keyword_matches_capped_at_five(self, inferencer, catalog):
        pairs = [("Date", K.DATE), ("Name", K.TITLE)]
        pairs += [(f"일정{i}", K.RICH_TEXT) for i in range(1, 8)]

        result = inferencer.infer(catalog(*pairs))

        assert result.mapping.schedule_properties == tuple(f"일정{i}" for i in range(1, 6))

    def test_fallback_takes_first_five_rich_text(self, inferencer, catalog):
        pairs = [("Date", K.DATE)]
        pairs += [(f"Note {i}", K.RICH_TEXT) for i in range(1, 8)]
        pairs.insert(3, ("Name", K.TITLE))

        result = inferencer.infer(catalog(*pairs))

        assert result.mapping.schedule_properties == tuple(f"Note {i}" for i in range(1, 6))

    def test_fallback_with_fewer_than_five(self, inferencer, catalog):
        result = inferencer.infer(
            catalog(("Date", K.DATE), ("Name", K.TITLE), ("A", K.RICH_TEXT), ("B", K.RICH_TEXT))
        )
        assert result.mapping.schedule_properties == ("A", "B")

    def test_single_keyword_match_does_not_trigger_fallback(self, inferencer, catalog):
        result = inferencer.infer(
            catalog(
                ("Date", K.DATE),
                ("Name", K.TITLE),
                ("Memo", K.RICH_TEXT),
                ("My schedule", K.RICH_TEXT),
                ("Other", K.RICH_TEXT),
            )
        )
        assert result.mapping.schedule_properties == ("My schedule",)

    def test_no_rich_text_gives_empty_schedules(self, inferencer, catalog):
        result = inferencer.infer(catalog(("Date", K.DATE), ("Name", K.TITLE)))
        assert result.mapping.schedule_properties == ()


class TestImportanceProperty:
    def test_exact_term_preferred_over_contains_and_first(self, inferencer, catalog):
        result = inferencer.infer(
            catalog(
                ("Date", K.DATE),
                ("Name", K.TITLE),
                ("Status", K.SELECT),
                ("중요도", K.SELECT),
                ("IMPORTANT", K.SELECT),
            )
        )
        assert result.mapping.importance_property == "IMPORTANT"

    def test_korean_exact_term(self, inferencer, catalog):
        result = inferencer.infer(
            catalog(("Date", K.DATE), ("Name", K.TITLE), ("Status", K.SELECT), ("중요", K.SELECT))
        )
        assert result.mapping.importance_property == "중요"

    def test_contains_level_token(self, inferencer, catalog):
        result = inferencer.infer(
            catalog(
                ("Date", K.DATE),
                ("Name", K.TITLE),
                ("Status", K.SELECT),
                ("Task Priority", K.SELECT),
            )
        )
        assert result.mapping.importance_property == "Task Priority"

    def test_exact_term_must_be_select(self, inferencer, catalog):
        result = inferencer.infer(
            catalog(
                ("Date", K.DATE),
                ("Name", K.TITLE),
                ("Important", K.CHECKBOX),
                ("Status", K.SELECT),
            )
        )
        assert result.mapping.importance_property == "Status"

    def test_falls_back_to_first_select(self, inferencer, catalog):
        # Known heuristic: an unrelated select is chosen when no name matches
        result = inferencer.infer(
            catalog(
                ("Date", K.DATE),
                ("Name", K.TITLE),
                ("Category", K.SELECT),
                ("Status", K.SELECT),
            )
        )
        assert result.mapping.importance_property == "Category"

    def test_absent_select_leaves_importance_empty(self, inferencer, catalog):
        result = inferencer.infer(
            catalog(("Date", K.DATE), ("Name", K.TITLE), ("Done", K.CHECKBOX))
        )
        assert result.ok
        assert result.mapping.importance_property == ""
        assert not result.mapping.has_importance


class TestCustomKeywords:
    def test_custom_schedule_tokens(self, catalog):
        keywords = KeywordTable().with_overrides(
            [KeywordRule(role=KeywordRole.SCHEDULE, match_mode=MatchMode.CONTAINS, tokens=("agenda",))]
        )
        inferencer = SchemaInferencer(keywords)

        result = inferencer.infer(
            catalog(
                ("Date", K.DATE),
                ("Name", K.TITLE),
                ("Schedule", K.RICH_TEXT),
                ("Team Agenda", K.RICH_TEXT),
            )
        )

        assert result.mapping.schedule_properties == ("Team Agenda",)
