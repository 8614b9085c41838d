"""
Runtime configuration for the dashboard server.

Uses ``pydantic_settings.BaseSettings`` for environment
variable binding and type coercion.  A ``.env`` file in the
working directory is loaded by the server entry point.
"""

from __future__ import annotations

import pathlib

import pydantic
import pydantic_settings

from dataguard.store import consent_store


class Settings(pydantic_settings.BaseSettings):
    """Server and storage settings.

    Attributes:
        app_name: Name shown in the dashboard header.
        storage_dir: Directory holding the JSON snapshot files.
            Empty keeps the snapshot in memory only.
        storage_key: Key of the consent snapshot slot.
        host: Interface uvicorn binds to.
        port: Port uvicorn listens on.
        environment: ``development`` or ``production``.
    """

    model_config = pydantic_settings.SettingsConfigDict(populate_by_name=True, extra="ignore")

    app_name: str = pydantic.Field(default="DataGuard", validation_alias="DATAGUARD_APP_NAME")
    storage_dir: str = pydantic.Field(default=".data", validation_alias="DATAGUARD_STORAGE_DIR")
    storage_key: str = pydantic.Field(default=consent_store.STORAGE_KEY, validation_alias="DATAGUARD_STORAGE_KEY")
    host: str = pydantic.Field(default="127.0.0.1", validation_alias="UVICORN_HOST")
    port: int = pydantic.Field(default=3001, validation_alias="UVICORN_PORT")
    environment: str = pydantic.Field(default="development", validation_alias="ENVIRONMENT")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def storage_path(self) -> pathlib.Path | None:
        """Resolved snapshot directory, or ``None`` for in-memory storage."""
        if not self.storage_dir:
            return None
        return pathlib.Path(self.storage_dir).expanduser()
