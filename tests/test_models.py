"""Tests for Pydantic models in dataguard.models."""

from __future__ import annotations

import pydantic
import pytest

from dataguard.models import consent, dashboard
from tests.conftest import rules_from


def _record(**overrides: object) -> consent.PartnerConsent:
    data: dict[str, object] = {
        "id": "abc",
        "partnerName": "ShopSphere",
        "partnerType": "E-commerce analytics",
        "description": "Tracks purchases",
        "riskScore": 50,
        "rules": [{"category": c, "level": "limited"} for c in consent.CATEGORIES],
        "lastUpdated": "2026-01-01T00:00:00.000Z",
    }
    data.update(overrides)
    return consent.PartnerConsent.model_validate(data)


# ── Levels ──────────────────────────────────────────────────────


class TestConsentLevels:
    def test_ordered_by_disclosure(self) -> None:
        assert consent.CONSENT_LEVELS == ("deny", "limited", "full")

    @pytest.mark.parametrize(
        ("level", "expected"),
        [("deny", "limited"), ("limited", "full"), ("full", "deny")],
    )
    def test_next_level_cycles(self, level: consent.ConsentLevel, expected: consent.ConsentLevel) -> None:
        assert consent.next_level(level) == expected

    def test_categories_order(self) -> None:
        assert consent.CATEGORIES == ("Email", "Phone", "Location", "Browsing History", "Payments", "Contacts")


# ── Rules ───────────────────────────────────────────────────────


class TestConsentRule:
    def test_rejects_unknown_category(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            consent.ConsentRule.model_validate({"category": "Health", "level": "full"})

    def test_rejects_unknown_level(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            consent.ConsentRule.model_validate({"category": "Email", "level": "partial"})

    def test_frozen(self) -> None:
        rule = consent.ConsentRule(category="Email", level="deny")
        with pytest.raises(pydantic.ValidationError):
            rule.level = "full"  # type: ignore[misc]


class TestValidateRuleSet:
    def test_reorders_to_category_order(self) -> None:
        rules = list(reversed(consent.uniform_rules("deny")))
        assert [r.category for r in consent.validate_rule_set(rules)] == list(consent.CATEGORIES)

    def test_rejects_missing_category(self) -> None:
        with pytest.raises(ValueError, match="Missing rules for categories: Contacts"):
            consent.validate_rule_set(consent.uniform_rules("deny")[:-1])

    def test_rejects_duplicate_category(self) -> None:
        rules = consent.uniform_rules("deny") + [consent.ConsentRule(category="Email", level="full")]
        with pytest.raises(ValueError, match="Duplicate rules for categories: Email"):
            consent.validate_rule_set(rules)


# ── Partner records ─────────────────────────────────────────────


class TestPartnerConsent:
    def test_accepts_camel_case(self) -> None:
        record = _record()
        assert record.partner_name == "ShopSphere"
        assert record.last_updated == "2026-01-01T00:00:00.000Z"

    def test_accepts_snake_case(self) -> None:
        record = consent.PartnerConsent(
            id="x",
            partner_name="MoveSense",
            risk_score=5,
            rules=consent.uniform_rules("deny"),
            last_updated="2026-01-01T00:00:00.000Z",
        )
        assert record.partner_type == ""
        assert record.description == ""

    def test_dumps_camel_case(self) -> None:
        data = _record().model_dump(by_alias=True)
        assert set(data) == {"id", "partnerName", "partnerType", "description", "riskScore", "rules", "lastUpdated"}

    def test_rejects_incomplete_rule_set(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            _record(rules=[{"category": "Email", "level": "full"}])

    def test_rejects_out_of_range_score(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            _record(riskScore=101)

    def test_level_for(self) -> None:
        record = _record(rules=[r.model_dump() for r in rules_from({"Location": "full"})])
        assert record.level_for("Location") == "full"
        assert record.level_for("Email") == "deny"


class TestPartnerTemplate:
    def test_aliases(self) -> None:
        template = consent.PartnerTemplate.model_validate({"partnerName": "A", "partnerType": "B", "description": "C"})
        assert template.model_dump(by_alias=True) == {"partnerName": "A", "partnerType": "B", "description": "C"}


class TestConsentMetrics:
    def test_defaults(self) -> None:
        m = dashboard.ConsentMetrics()
        assert (m.partners, m.avg_risk, m.full_access_rules, m.deny_rules) == (0, 0, 0, 0)
