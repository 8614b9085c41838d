"""Human-readable labels for risk scores and consent levels."""

from __future__ import annotations

from collections.abc import Iterable

from dataguard.models import consent, dashboard
from dataguard.scoring import risk_engine

# Upper bound (inclusive) of each band, lowest first.  Scores
# above the last bound fall into the "Critical" band.
_BANDS: tuple[tuple[int, dashboard.RiskBand, str], ...] = (
    (20, "Very Low", "minimal personal data shared."),
    (40, "Low", "only non-sensitive or partially anonymized data is shared."),
    (65, "Medium", "trade-off between personalization and privacy."),
    (85, "High", "partner has wide visibility into your personal footprint."),
)
_TOP_BAND: tuple[dashboard.RiskBand, str] = (
    "Critical",
    "this partner can reconstruct a detailed profile about you.",
)

_LEVEL_LABELS: dict[consent.ConsentLevel, str] = {
    "full": "Full access",
    "limited": "Limited",
    "deny": "Denied",
}

_LEVEL_DESCRIPTIONS: dict[consent.ConsentLevel, str] = {
    "full": "Partner sees full, raw data in this category.",
    "limited": "Shared in a coarse or anonymized form.",
    "deny": "No access to this category.",
}


def _band_for(score: int) -> tuple[dashboard.RiskBand, str]:
    for upper, band, text in _BANDS:
        if score <= upper:
            return band, text
    return _TOP_BAND


def risk_band(score: int) -> dashboard.RiskBand:
    """Map a 0-100 score to its band label."""
    return _band_for(score)[0]


def summarize_risk(score: int) -> str:
    """Map a 0-100 score to a one-line risk summary.

    Returns:
        ``"<band> — <explanation>"``, e.g.
        ``"Low — only non-sensitive or partially anonymized data is shared."``
    """
    band, text = _band_for(score)
    return f"{band} — {text}"


def risk_tone(score: int) -> dashboard.RiskTone:
    """Return the badge tone used to colour a score."""
    if score > 65:
        return "negative"
    if score <= 40:
        return "positive"
    return "neutral"


def level_label(level: consent.ConsentLevel) -> str:
    """Return the button label for a consent level."""
    return _LEVEL_LABELS[level]


def level_description(level: consent.ConsentLevel) -> str:
    """Return the one-line explanation shown next to a rule."""
    return _LEVEL_DESCRIPTIONS[level]


def assess(rules: Iterable[consent.ConsentRule]) -> dashboard.RiskSummary:
    """Score *rules* and describe the result."""
    score = risk_engine.compute_risk_score(rules)
    return dashboard.RiskSummary(
        score=score,
        band=risk_band(score),
        summary=summarize_risk(score),
        tone=risk_tone(score),
    )


def describe_rules(rules: Iterable[consent.ConsentRule]) -> list[dashboard.RuleView]:
    """Attach the level label and description to each rule."""
    return [
        dashboard.RuleView(
            category=rule.category,
            level=rule.level,
            label=level_label(rule.level),
            description=level_description(rule.level),
        )
        for rule in rules
    ]
