"""Privacy risk scoring package.

The risk engine, the band summarizer and the metrics
aggregator are pure functions over consent rules.  The
public API is re-exported here.
"""

from __future__ import annotations

from dataguard.scoring.metrics import aggregate, summarize_draft
from dataguard.scoring.risk_engine import compute_risk_score
from dataguard.scoring.summary import assess, describe_rules, risk_band, risk_tone, summarize_risk

__all__ = [
    "aggregate",
    "assess",
    "compute_risk_score",
    "describe_rules",
    "risk_band",
    "risk_tone",
    "summarize_draft",
    "summarize_risk",
]
