"""In-memory consent store mirrored to a persistence slot.

Holds the ordered list of partner consent records (newest
first).  Every mutation recomputes the affected partner's
risk score, stamps a fresh ``last_updated`` and rewrites
the whole snapshot to the injected :class:`StoragePort`.

Storage failures never reach the caller: a failed or
malformed read falls back to the seed partners, and a
failed write is logged and ignored.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import UTC, datetime

import pydantic

from dataguard.data import loader
from dataguard.models import consent, dashboard
from dataguard.scoring import metrics, risk_engine
from dataguard.store import draft as draft_mod
from dataguard.store import persistence
from dataguard.utils import errors, logger, serialization

log = logger.create_logger("ConsentStore")

STORAGE_KEY = "hushvault:partner-consents:v1"

# Seed partner at this template index gets full access everywhere.
_FULL_ACCESS_SEED_INDEX = 2

# Categories denied in every other seed partner.
_SEED_DENIED: frozenset[consent.Category] = frozenset({"Payments", "Browsing History"})


def utc_timestamp() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_partner_id() -> str:
    """Return a fresh random partner id."""
    return uuid.uuid4().hex[:12]


def seed_rules(template_index: int) -> list[consent.ConsentRule]:
    """Build the default rule set for the seed partner at *template_index*."""
    if template_index == _FULL_ACCESS_SEED_INDEX:
        return consent.uniform_rules("full")
    return [consent.ConsentRule(category=c, level="deny" if c in _SEED_DENIED else "limited") for c in consent.CATEGORIES]


def _rescored(partner: consent.PartnerConsent) -> consent.PartnerConsent:
    """Return *partner* with a risk score matching its rules."""
    score = risk_engine.compute_risk_score(partner.rules)
    if score == partner.risk_score:
        return partner
    return partner.model_copy(update={"risk_score": score})


class ConsentStore:
    """Ordered partner consent records with snapshot persistence."""

    def __init__(
        self,
        storage: persistence.StoragePort,
        *,
        key: str = STORAGE_KEY,
        clock: Callable[[], str] = utc_timestamp,
        id_factory: Callable[[], str] = new_partner_id,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self._id_factory = id_factory
        self._partners: list[consent.PartnerConsent] = []

    # ── Loading ────────────────────────────────────────────────

    def load(self) -> list[consent.PartnerConsent]:
        """Restore the partner list from storage.

        Falls back to (and persists) the seed partners when
        the snapshot is absent, empty, malformed or cannot be
        read.  Restored scores are recomputed from the rules,
        and the snapshot is rewritten if any were stale.
        """
        restored = self._read_snapshot()
        if restored:
            self._partners = [_rescored(p) for p in restored]
            log.info("Partner consents restored", {"partners": len(restored), "key": self._key})
            stale = sum(1 for old, new in zip(restored, self._partners, strict=True) if old is not new)
            if stale:
                log.warn("Corrected stale risk scores", {"partners": stale})
                self._persist()
        else:
            self._partners = self._build_seed()
            log.info("Seeding default partner consents", {"partners": len(self._partners)})
            self._persist()
        return self.partners

    def _read_snapshot(self) -> list[consent.PartnerConsent]:
        try:
            raw = self._storage.get_item(self._key)
        except Exception as exc:
            log.warn("Failed to read consent snapshot", {"key": self._key, "error": errors.get_error_message(exc)})
            return []
        if not raw:
            return []
        try:
            return serialization.load_model_list(raw, consent.PartnerConsent)
        except pydantic.ValidationError as exc:
            log.warn("Ignoring malformed consent snapshot", {"key": self._key, "errors": exc.error_count()})
            return []

    def _build_seed(self) -> list[consent.PartnerConsent]:
        return [
            self._new_record(template.partner_name, template.partner_type, template.description, seed_rules(index))
            for index, template in enumerate(loader.get_templates())
        ]

    # ── Queries ────────────────────────────────────────────────

    @property
    def partners(self) -> list[consent.PartnerConsent]:
        """A copy of the partner list, newest first."""
        return list(self._partners)

    def __len__(self) -> int:
        return len(self._partners)

    def get(self, partner_id: str) -> consent.PartnerConsent:
        """Return the partner with *partner_id*.

        Raises:
            PartnerNotFoundError: If no partner has that id.
        """
        for partner in self._partners:
            if partner.id == partner_id:
                return partner
        raise errors.PartnerNotFoundError(partner_id)

    def metrics(self) -> dashboard.ConsentMetrics:
        """Aggregate metrics over every stored partner."""
        return metrics.aggregate(self._partners)

    # ── Mutations ──────────────────────────────────────────────

    def add(
        self,
        partner_name: str,
        partner_type: str,
        description: str,
        rules: list[consent.ConsentRule],
    ) -> consent.PartnerConsent:
        """Create a partner record and insert it at the front of the list."""
        record = self._new_record(partner_name, partner_type, description, rules)
        self._partners.insert(0, record)
        log.info("Partner consent added", {"id": record.id, "partner": record.partner_name, "riskScore": record.risk_score})
        self._persist()
        return record

    def create_from_template(
        self,
        index: int,
        rules: list[consent.ConsentRule] | None = None,
    ) -> consent.PartnerConsent:
        """Add a partner using template *index* for its details.

        Rules default to every category at ``limited``.

        Raises:
            UnknownTemplateError: If *index* is out of range.
        """
        template = loader.get_template(index)
        return self.add(
            template.partner_name,
            template.partner_type,
            template.description,
            rules if rules is not None else consent.uniform_rules("limited"),
        )

    def save_draft(self, draft: draft_mod.ConsentDraft) -> consent.PartnerConsent:
        """Save *draft* as a new partner policy.

        Raises:
            InvalidDraftError: If the draft has a blank partner name.
        """
        if not draft.can_save:
            raise errors.InvalidDraftError("Partner name must not be blank")
        return self.add(draft.partner_name, draft.partner_type, draft.description, list(draft.rules))

    def toggle_rule(self, partner_id: str, category: consent.Category) -> consent.PartnerConsent:
        """Cycle one of a partner's rules to its next level.

        The partner's score and timestamp are refreshed and the
        snapshot is rewritten.

        Raises:
            PartnerNotFoundError: If no partner has *partner_id*.
        """
        for position, partner in enumerate(self._partners):
            if partner.id != partner_id:
                continue
            rules = [
                consent.ConsentRule(category=r.category, level=consent.next_level(r.level)) if r.category == category else r
                for r in partner.rules
            ]
            updated = partner.model_copy(
                update={
                    "rules": rules,
                    "risk_score": risk_engine.compute_risk_score(rules),
                    "last_updated": self._clock(),
                }
            )
            self._partners[position] = updated
            log.info(
                "Consent rule toggled",
                {"id": partner_id, "category": category, "level": updated.level_for(category), "riskScore": updated.risk_score},
            )
            self._persist()
            return updated
        raise errors.PartnerNotFoundError(partner_id)

    # ── Internals ──────────────────────────────────────────────

    def _new_record(
        self,
        partner_name: str,
        partner_type: str,
        description: str,
        rules: list[consent.ConsentRule],
    ) -> consent.PartnerConsent:
        ordered = consent.validate_rule_set(list(rules))
        return consent.PartnerConsent(
            id=self._id_factory(),
            partner_name=partner_name,
            partner_type=partner_type,
            description=description,
            rules=ordered,
            risk_score=risk_engine.compute_risk_score(ordered),
            last_updated=self._clock(),
        )

    def _persist(self) -> None:
        try:
            self._storage.set_item(self._key, serialization.dump_model_list(self._partners, consent.PartnerConsent))
        except Exception as exc:
            log.warn("Failed to write consent snapshot", {"key": self._key, "error": errors.get_error_message(exc)})
