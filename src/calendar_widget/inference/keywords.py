"""Vernacular keyword table used to recognise role-bearing property names."""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, field_validator


class KeywordRole(str, Enum):
    """Roles recognised by property name."""

    SCHEDULE = "schedule"
    IMPORTANCE = "importance"


class MatchMode(str, Enum):
    """How a token is compared with a name."""

    CONTAINS = "contains"
    EXACT_CI = "exact_ci"


class KeywordRule(BaseModel):
    """A set of tokens for one role, compared with one match mode."""

    role: KeywordRole
    match_mode: MatchMode
    tokens: tuple[str, ...]

    model_config = {"frozen": True}

    @field_validator("tokens")
    @classmethod
    def _normalize_tokens(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        tokens = tuple(t.strip() for t in value if t and t.strip())
        if not tokens:
            raise ValueError("a keyword rule needs at least one token")
        return tokens

    def matches(self, name: Optional[str]) -> bool:
        """Case-insensitive comparison of name against this rule's tokens."""
        if not name:
            return False
        folded = name.casefold()
        if self.match_mode is MatchMode.EXACT_CI:
            return any(folded == token.casefold() for token in self.tokens)
        return any(token.casefold() in folded for token in self.tokens)


DEFAULT_KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        role=KeywordRole.SCHEDULE,
        match_mode=MatchMode.CONTAINS,
        tokens=("schedule", "일정"),
    ),
    KeywordRule(
        role=KeywordRole.IMPORTANCE,
        match_mode=MatchMode.EXACT_CI,
        tokens=("important", "중요"),
    ),
    KeywordRule(
        role=KeywordRole.IMPORTANCE,
        match_mode=MatchMode.CONTAINS,
        tokens=("중요도", "importance", "priority"),
    ),
)


class KeywordTable:
    """Lookup over keyword rules, consulted by inference and extraction."""

    def __init__(self, rules: Iterable[KeywordRule] = DEFAULT_KEYWORD_RULES):
        self.rules: tuple[KeywordRule, ...] = tuple(rules)

    def rules_for(
        self, role: KeywordRole, match_mode: Optional[MatchMode] = None
    ) -> list[KeywordRule]:
        return [
            rule
            for rule in self.rules
            if rule.role is role and (match_mode is None or rule.match_mode is match_mode)
        ]

    def matches(
        self, role: KeywordRole, name: Optional[str], match_mode: Optional[MatchMode] = None
    ) -> bool:
        """True if any rule for the role (and mode, if given) matches name."""
        return any(rule.matches(name) for rule in self.rules_for(role, match_mode))

    def is_schedule_name(self, name: str) -> bool:
        return self.matches(KeywordRole.SCHEDULE, name)

    def is_important_term(self, value: Optional[str]) -> bool:
        """True if value equals an "important" term, ignoring case."""
        return self.matches(KeywordRole.IMPORTANCE, value, MatchMode.EXACT_CI)

    def with_overrides(self, rules: Iterable[KeywordRule]) -> "KeywordTable":
        """
        Replace the rules of every (role, match mode) pair present in rules.

        Pairs not mentioned keep their current rules, so overriding the
        importance name tokens leaves the exact "important" terms in place.
        """
        overrides = tuple(rules)
        replaced = {(rule.role, rule.match_mode) for rule in overrides}
        kept = tuple(
            rule for rule in self.rules if (rule.role, rule.match_mode) not in replaced
        )
        return KeywordTable(kept + overrides)
