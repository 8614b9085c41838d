"""Aggregate metrics over the stored partner list."""

from __future__ import annotations

import math
from collections.abc import Sequence

from dataguard.models import consent, dashboard
from dataguard.scoring import summary


def _round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def aggregate(partners: Sequence[consent.PartnerConsent]) -> dashboard.ConsentMetrics:
    """Reduce *partners* to dashboard metrics.

    The average risk is the mean of the stored scores rounded
    to the nearest integer, and 0 for an empty list.
    """
    if not partners:
        return dashboard.ConsentMetrics()

    total_risk = 0
    full_access_rules = 0
    deny_rules = 0
    for partner in partners:
        total_risk += partner.risk_score
        for rule in partner.rules:
            if rule.level == "full":
                full_access_rules += 1
            elif rule.level == "deny":
                deny_rules += 1

    return dashboard.ConsentMetrics(
        partners=len(partners),
        avg_risk=_round_half_up(total_risk / len(partners)),
        full_access_rules=full_access_rules,
        deny_rules=deny_rules,
    )


def summarize_draft(rules: Sequence[consent.ConsentRule]) -> dashboard.DraftSummary:
    """Score an unsaved rule set and count how much it shares."""
    return dashboard.DraftSummary(
        **summary.assess(rules).model_dump(),
        shared_categories=sum(1 for r in rules if r.level != "deny"),
        denied_categories=sum(1 for r in rules if r.level == "deny"),
        total_categories=len(consent.CATEGORIES),
    )
