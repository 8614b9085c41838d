"""
Server entry point: FastAPI app setup and route configuration.

Exposes the consent dashboard as a small JSON API: partner
templates, draft risk previews, the partner list with rule
toggling, and aggregate metrics.  All state lives in one
:class:`ConsentStore` per process.
"""

from __future__ import annotations

import contextlib
from collections.abc import AsyncGenerator
from typing import Any

import dotenv
import fastapi
import pydantic
import uvicorn
from fastapi.middleware import cors
from starlette import responses

from dataguard import config
from dataguard.data import loader
from dataguard.models import consent, dashboard
from dataguard.scoring import metrics, summary
from dataguard.store import consent_store, persistence
from dataguard.store import draft as draft_mod
from dataguard.utils import errors, logger

dotenv.load_dotenv()

log = logger.create_logger("Server")


class RiskPreviewRequest(pydantic.BaseModel):
    """Rule set to score without saving it."""

    rules: list[consent.ConsentRule]

    @pydantic.field_validator("rules")
    @classmethod
    def _one_rule_per_category(cls, rules: list[consent.ConsentRule]) -> list[consent.ConsentRule]:
        return consent.validate_rule_set(rules)


def _build_storage(settings: config.Settings) -> persistence.StoragePort:
    path = settings.storage_path
    if path is None:
        return persistence.InMemoryStorage()
    return persistence.JsonFileStorage(path)


def get_store(request: fastapi.Request) -> consent_store.ConsentStore:
    """Return the process-wide consent store."""
    return request.app.state.store


def create_app(
    settings: config.Settings | None = None,
    storage: persistence.StoragePort | None = None,
) -> fastapi.FastAPI:
    """Build the dashboard application.

    Args:
        settings: Runtime settings; read from the environment
            when omitted.
        storage: Persistence port for the consent snapshot;
            derived from *settings* when omitted.
    """
    settings = settings or config.Settings()
    store = consent_store.ConsentStore(storage or _build_storage(settings), key=settings.storage_key)

    @contextlib.asynccontextmanager
    async def lifespan(_app: fastapi.FastAPI) -> AsyncGenerator[None]:
        """Restore the consent snapshot on startup."""
        log_path = logger.start_log_file()
        log.section(f"{settings.app_name} Server Started")
        log.info("Environment", {"env": settings.environment, "storageKey": settings.storage_key, "logFile": str(log_path) if log_path else None})
        store.load()
        yield
        logger.end_log_file()

    app = fastapi.FastAPI(title=f"{settings.app_name} Consent Dashboard", lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings

    # ========================================================================
    # Middleware
    # ========================================================================

    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================================================
    # Error Handlers
    # ========================================================================

    @app.exception_handler(errors.PartnerNotFoundError)
    @app.exception_handler(errors.UnknownTemplateError)
    async def not_found_handler(_request: fastapi.Request, exc: errors.DataGuardError) -> responses.JSONResponse:
        return responses.JSONResponse(status_code=404, content={"detail": errors.get_error_message(exc)})

    @app.exception_handler(errors.InvalidDraftError)
    async def invalid_draft_handler(_request: fastapi.Request, exc: errors.InvalidDraftError) -> responses.JSONResponse:
        return responses.JSONResponse(status_code=422, content={"detail": errors.get_error_message(exc)})

    # ========================================================================
    # API Routes
    # ========================================================================

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "appName": settings.app_name}

    @app.get("/api/templates")
    async def list_templates() -> list[consent.PartnerTemplate]:
        """Example partners available as starting points."""
        return loader.get_templates()

    @app.get("/api/draft")
    async def new_draft(template: int = fastapi.Query(0, description="Template index to pre-fill from")) -> dict[str, Any]:
        """A fresh draft pre-filled from a template, with its risk summary."""
        draft = draft_mod.ConsentDraft.from_template(template)
        return {
            "draft": draft.model_dump(by_alias=True),
            "summary": draft.summary().model_dump(by_alias=True),
            "rules": [r.model_dump(by_alias=True) for r in summary.describe_rules(draft.rules)],
        }

    @app.post("/api/risk/preview")
    async def preview_risk(body: RiskPreviewRequest) -> dashboard.DraftSummary:
        """Score a rule set without saving it."""
        return metrics.summarize_draft(body.rules)

    @app.get("/api/partners")
    async def list_partners(
        store: consent_store.ConsentStore = fastapi.Depends(get_store),
    ) -> list[consent.PartnerConsent]:
        return store.partners

    @app.post("/api/partners", status_code=201)
    async def create_partner(
        body: draft_mod.ConsentDraft,
        store: consent_store.ConsentStore = fastapi.Depends(get_store),
    ) -> consent.PartnerConsent:
        """Save a draft as a new partner policy."""
        return store.save_draft(body)

    @app.post("/api/partners/from-template/{index}", status_code=201)
    async def create_partner_from_template(
        index: int,
        store: consent_store.ConsentStore = fastapi.Depends(get_store),
    ) -> consent.PartnerConsent:
        return store.create_from_template(index)

    @app.get("/api/partners/{partner_id}")
    async def get_partner(
        partner_id: str,
        store: consent_store.ConsentStore = fastapi.Depends(get_store),
    ) -> consent.PartnerConsent:
        return store.get(partner_id)

    @app.get("/api/partners/{partner_id}/rules")
    async def get_partner_rules(
        partner_id: str,
        store: consent_store.ConsentStore = fastapi.Depends(get_store),
    ) -> list[dashboard.RuleView]:
        """A partner's rules with their level labels."""
        return summary.describe_rules(store.get(partner_id).rules)

    @app.post("/api/partners/{partner_id}/rules/{category}/toggle")
    async def toggle_rule(
        partner_id: str,
        category: consent.Category,
        store: consent_store.ConsentStore = fastapi.Depends(get_store),
    ) -> consent.PartnerConsent:
        """Cycle one rule deny → limited → full → deny."""
        return store.toggle_rule(partner_id, category)

    @app.get("/api/metrics")
    async def get_metrics(
        store: consent_store.ConsentStore = fastapi.Depends(get_store),
    ) -> dashboard.ConsentMetrics:
        return store.metrics()

    return app


app = create_app()


# ============================================================================
# Start Server
# ============================================================================


def main() -> None:
    """Entry point for running the server."""
    settings = config.Settings()
    log.success(f"Server listening on {settings.host}:{settings.port}")
    log.info("Open your browser", {"url": f"http://localhost:{settings.port}/docs"})

    uvicorn.run(
        "dataguard.app:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )


if __name__ == "__main__":
    main()
