"""Key-value persistence ports for the consent snapshot.

The store only needs to read and write one string value
under a fixed key, mirroring browser ``localStorage``.
Two implementations are provided:

- :class:`InMemoryStorage` keeps values in a dict (tests
  and ephemeral runs).
- :class:`JsonFileStorage` keeps one JSON file per key in
  a directory (defaults to ``.data/`` in the working
  directory).

Either may raise on read or write; callers decide how to
degrade.
"""

from __future__ import annotations

import pathlib
from typing import Protocol, runtime_checkable

from dataguard.utils import logger

log = logger.create_logger("Storage")


@runtime_checkable
class StoragePort(Protocol):
    """Minimal read/write interface over a key-value slot."""

    def get_item(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None``."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...


class InMemoryStorage:
    """Dict-backed storage."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class JsonFileStorage:
    """One JSON file per key under *directory*.

    Keys are mapped to file names by replacing every
    character that is not alphanumeric, ``.`` or ``-`` with
    an underscore, so ``hushvault:partner-consents:v1`` is
    stored as ``hushvault_partner-consents_v1.json``.
    """

    def __init__(self, directory: pathlib.Path | str) -> None:
        self._directory = pathlib.Path(directory)

    @property
    def directory(self) -> pathlib.Path:
        return self._directory

    def path_for(self, key: str) -> pathlib.Path:
        """Build the file path used for *key*."""
        safe = "".join(c if c.isalnum() or c in ".-" else "_" for c in key)[:100]
        return self._directory / f"{safe}.json"

    def get_item(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            log.debug("No stored value for key", {"key": key})
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        # Atomic replace: readers never see a partial snapshot.
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)
        log.debug("Stored value written", {"key": key, "path": path.name, "bytes": len(value)})
