"""Editable draft of a partner consent policy.

A draft is the "design a data-sharing contract" form: the
partner details plus a complete rule set that the user
adjusts before saving it into the store.  The draft's risk
score is always computed from its current rules.
"""

from __future__ import annotations

import pydantic

from dataguard.data import loader
from dataguard.models import consent, dashboard
from dataguard.scoring import metrics, risk_engine
from dataguard.utils import errors, serialization


class ConsentDraft(pydantic.BaseModel):
    """Unsaved partner details and consent rules."""

    model_config = pydantic.ConfigDict(alias_generator=serialization.snake_to_camel, populate_by_name=True)

    partner_name: str = ""
    partner_type: str = ""
    description: str = ""
    rules: list[consent.ConsentRule] = pydantic.Field(default_factory=lambda: consent.uniform_rules("limited"))

    @pydantic.field_validator("rules")
    @classmethod
    def _one_rule_per_category(cls, rules: list[consent.ConsentRule]) -> list[consent.ConsentRule]:
        return consent.validate_rule_set(rules)

    @classmethod
    def from_template(cls, index: int = 0) -> ConsentDraft:
        """Start a draft pre-filled from template *index* with every category limited."""
        draft = cls()
        draft.apply_template(index)
        return draft

    def apply_template(self, index: int) -> bool:
        """Copy the details of template *index* into the draft.

        Rules are left untouched.  Out-of-range indices are
        ignored.

        Returns:
            ``True`` when a template was applied.
        """
        try:
            template = loader.get_template(index)
        except errors.UnknownTemplateError:
            return False
        self.partner_name = template.partner_name
        self.partner_type = template.partner_type
        self.description = template.description
        return True

    def level_for(self, category: consent.Category) -> consent.ConsentLevel:
        """Return the draft's level for *category*."""
        return next(r.level for r in self.rules if r.category == category)

    def set_level(self, category: consent.Category, level: consent.ConsentLevel) -> None:
        """Set the level for one category."""
        self.rules = [consent.ConsentRule(category=r.category, level=level) if r.category == category else r for r in self.rules]

    def cycle(self, category: consent.Category) -> consent.ConsentLevel:
        """Advance *category* to its next level and return the new level."""
        level = consent.next_level(self.level_for(category))
        self.set_level(category, level)
        return level

    def deny_all(self) -> None:
        """Deny every category."""
        self.rules = consent.uniform_rules("deny")

    @property
    def risk_score(self) -> int:
        return risk_engine.compute_risk_score(self.rules)

    @property
    def can_save(self) -> bool:
        """Whether the draft has a non-blank partner name."""
        return bool(self.partner_name.strip())

    def summary(self) -> dashboard.DraftSummary:
        """Score the draft and count its shared and denied categories."""
        return metrics.summarize_draft(self.rules)
