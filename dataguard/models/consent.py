"""Pydantic models for partner consent records and their rules."""

from __future__ import annotations

import collections
from typing import Literal, get_args

import pydantic

from dataguard.utils import serialization

Category = Literal[
    "Email",
    "Phone",
    "Location",
    "Browsing History",
    "Payments",
    "Contacts",
]

ConsentLevel = Literal["deny", "limited", "full"]

# Display order of every category in a rule set.
CATEGORIES: tuple[Category, ...] = get_args(Category)

# Levels ordered by disclosure amount (deny < limited < full).
CONSENT_LEVELS: tuple[ConsentLevel, ...] = get_args(ConsentLevel)


def next_level(level: ConsentLevel) -> ConsentLevel:
    """Return the level after *level* in the deny → limited → full cycle."""
    return CONSENT_LEVELS[(CONSENT_LEVELS.index(level) + 1) % len(CONSENT_LEVELS)]


class ConsentRule(pydantic.BaseModel):
    """Access level granted to a partner for one data category."""

    model_config = pydantic.ConfigDict(frozen=True)

    category: Category
    level: ConsentLevel


def uniform_rules(level: ConsentLevel) -> list[ConsentRule]:
    """Build a complete rule set with every category at *level*."""
    return [ConsentRule(category=c, level=level) for c in CATEGORIES]


def validate_rule_set(rules: list[ConsentRule]) -> list[ConsentRule]:
    """Check *rules* holds exactly one rule per category.

    Returns the rules re-ordered into :data:`CATEGORIES` order.

    Raises:
        ValueError: On a duplicated or missing category.
    """
    counts = collections.Counter(r.category for r in rules)
    duplicates = sorted(c for c, n in counts.items() if n > 1)
    if duplicates:
        raise ValueError(f"Duplicate rules for categories: {', '.join(duplicates)}")
    missing = [c for c in CATEGORIES if c not in counts]
    if missing:
        raise ValueError(f"Missing rules for categories: {', '.join(missing)}")
    by_category = {r.category: r for r in rules}
    return [by_category[c] for c in CATEGORIES]


class PartnerTemplate(pydantic.BaseModel):
    """Example partner used to pre-fill a new consent policy."""

    model_config = pydantic.ConfigDict(alias_generator=serialization.snake_to_camel, populate_by_name=True)

    partner_name: str
    partner_type: str
    description: str


class PartnerConsent(pydantic.BaseModel):
    """A data-sharing partner together with its consent rules.

    ``risk_score`` is derived from ``rules`` by the risk engine.
    The store recomputes it on every write and on restore, so a
    stale value in a snapshot is never served.
    """

    model_config = pydantic.ConfigDict(alias_generator=serialization.snake_to_camel, populate_by_name=True)

    id: str
    partner_name: str
    partner_type: str = ""
    description: str = ""
    risk_score: int = pydantic.Field(ge=0, le=100)
    rules: list[ConsentRule]
    last_updated: str

    @pydantic.field_validator("rules")
    @classmethod
    def _one_rule_per_category(cls, rules: list[ConsentRule]) -> list[ConsentRule]:
        return validate_rule_set(rules)

    def level_for(self, category: Category) -> ConsentLevel:
        """Return the level currently granted for *category*."""
        for rule in self.rules:
            if rule.category == category:
                return rule.level
        raise KeyError(category)
