"""Tests for dataguard.scoring.metrics: dashboard aggregation."""

from __future__ import annotations

from dataguard.models import consent
from dataguard.scoring import metrics, risk_engine
from tests.conftest import rules_from


def _partner(pid: str, rules: list[consent.ConsentRule], *, risk_score: int | None = None) -> consent.PartnerConsent:
    return consent.PartnerConsent(
        id=pid,
        partner_name=f"Partner {pid}",
        rules=rules,
        risk_score=risk_engine.compute_risk_score(rules) if risk_score is None else risk_score,
        last_updated="2026-01-01T00:00:00.000Z",
    )


class TestAggregate:
    def test_empty_list(self) -> None:
        result = metrics.aggregate([])
        assert result.partners == 0
        assert result.avg_risk == 0
        assert result.full_access_rules == 0
        assert result.deny_rules == 0

    def test_counts_rules_across_partners(self) -> None:
        partners = [
            _partner("a", consent.uniform_rules("full")),
            _partner("b", rules_from({"Email": "limited"})),
        ]
        result = metrics.aggregate(partners)
        assert result.partners == 2
        assert result.full_access_rules == 6
        assert result.deny_rules == 5

    def test_limited_rules_are_not_counted(self) -> None:
        result = metrics.aggregate([_partner("a", consent.uniform_rules("limited"))])
        assert result.full_access_rules == 0
        assert result.deny_rules == 0

    def test_average_uses_stored_scores(self) -> None:
        partners = [
            _partner("a", consent.uniform_rules("deny"), risk_score=10),
            _partner("b", consent.uniform_rules("deny"), risk_score=20),
            _partner("c", consent.uniform_rules("deny"), risk_score=30),
        ]
        assert metrics.aggregate(partners).avg_risk == 20

    def test_average_rounds_half_up(self) -> None:
        partners = [
            _partner("a", consent.uniform_rules("deny"), risk_score=5),
            _partner("b", consent.uniform_rules("deny"), risk_score=10),
        ]
        # 7.5 rounds up, not to the even neighbour.
        assert metrics.aggregate(partners).avg_risk == 8

    def test_average_rounds_down_below_half(self) -> None:
        partners = [
            _partner("a", consent.uniform_rules("deny"), risk_score=5),
            _partner("b", consent.uniform_rules("deny"), risk_score=5),
            _partner("c", consent.uniform_rules("deny"), risk_score=6),
        ]
        assert metrics.aggregate(partners).avg_risk == 5

    def test_serializes_camel_case(self) -> None:
        data = metrics.aggregate([_partner("a", consent.uniform_rules("full"))]).model_dump(by_alias=True)
        assert data == {"partners": 1, "avgRisk": 100, "fullAccessRules": 6, "denyRules": 0}


class TestSummarizeDraft:
    def test_counts_shared_and_denied(self) -> None:
        rules = rules_from({"Email": "limited", "Payments": "full"})
        result = metrics.summarize_draft(rules)
        assert result.shared_categories == 2
        assert result.denied_categories == 4
        assert result.total_categories == 6
        assert result.score == 50

    def test_all_denied(self) -> None:
        result = metrics.summarize_draft(consent.uniform_rules("deny"))
        assert result.score == 5
        assert result.band == "Very Low"
        assert result.shared_categories == 0
        assert result.denied_categories == 6
