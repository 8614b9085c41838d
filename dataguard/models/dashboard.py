"""Pydantic models for dashboard metrics and risk summaries."""

from __future__ import annotations

from typing import Literal

import pydantic

from dataguard.models.consent import Category, ConsentLevel
from dataguard.utils.serialization import snake_to_camel

RiskBand = Literal["Very Low", "Low", "Medium", "High", "Critical"]

RiskTone = Literal["positive", "neutral", "negative"]


class ConsentMetrics(pydantic.BaseModel):
    """Aggregate figures across every stored partner."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    partners: int = 0
    avg_risk: int = 0
    full_access_rules: int = 0
    deny_rules: int = 0


class RiskSummary(pydantic.BaseModel):
    """Score of a rule set together with its band and tone."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    score: int
    band: RiskBand
    summary: str
    tone: RiskTone


class DraftSummary(RiskSummary):
    """Risk summary for an unsaved draft plus its sharing counts."""

    shared_categories: int
    denied_categories: int
    total_categories: int


class RuleView(pydantic.BaseModel):
    """A consent rule together with the text shown beside it."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    category: Category
    level: ConsentLevel
    label: str
    description: str
