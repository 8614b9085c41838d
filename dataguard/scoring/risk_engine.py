"""Rule-based privacy risk engine.

Maps a partner's consent rules to an integer score in
the range 0–100.  The score is a plain additive model:

- every rule set starts from a baseline of 20 points;
- a category shared in ``full`` adds its category weight
  (25 for payments and browsing history, 18 for location
  and contacts, 10 for everything else);
- a category shared as ``limited`` adds 5 points;
- a denied category adds nothing.

A rule set that denies every category is pinned to 5 so
that a fully locked-down partner always sits below the
baseline.  The result is clamped to 0–100.
"""

from __future__ import annotations

from collections.abc import Iterable

from dataguard.models import consent

BASELINE_SCORE = 20
ALL_DENIED_SCORE = 5
LIMITED_POINTS = 5

HEAVY_CATEGORIES: frozenset[consent.Category] = frozenset({"Payments", "Browsing History"})
MID_CATEGORIES: frozenset[consent.Category] = frozenset({"Location", "Contacts"})

HEAVY_FULL_POINTS = 25
MID_FULL_POINTS = 18
LIGHT_FULL_POINTS = 10

MIN_SCORE = 0
MAX_SCORE = 100


def full_access_points(category: consent.Category) -> int:
    """Return the points a ``full`` rule for *category* contributes."""
    if category in HEAVY_CATEGORIES:
        return HEAVY_FULL_POINTS
    if category in MID_CATEGORIES:
        return MID_FULL_POINTS
    return LIGHT_FULL_POINTS


def rule_points(rule: consent.ConsentRule) -> int:
    """Return the points a single rule adds to the baseline."""
    if rule.level == "full":
        return full_access_points(rule.category)
    if rule.level == "limited":
        return LIMITED_POINTS
    return 0


def compute_risk_score(rules: Iterable[consent.ConsentRule]) -> int:
    """Compute the privacy risk score for a rule set.

    The function is pure and order-independent.

    Args:
        rules: One rule per data category.

    Returns:
        Integer score in the range 0–100.
    """
    rules = list(rules)
    if all(r.level == "deny" for r in rules):
        score = ALL_DENIED_SCORE
    else:
        score = BASELINE_SCORE + sum(rule_points(r) for r in rules)
    return min(MAX_SCORE, max(MIN_SCORE, score))
