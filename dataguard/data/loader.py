"""
Data loader for the bundled partner template database.

The JSON data files live alongside this module.  Templates
are validated into Pydantic models once and cached.
"""

from __future__ import annotations

import json
import pathlib
from typing import Any

from dataguard.models import consent
from dataguard.utils import errors

# Resolve path to the data directory (same directory as this module)
_DATA_DIR = pathlib.Path(__file__).resolve().parent

TEMPLATES_FILE = "partner-templates.json"

# ============================================================================
# JSON File Loading
# ============================================================================


def _load_json(relative_path: str) -> Any:
    """Load and parse a JSON file relative to the data directory.

    Raises:
        FileNotFoundError: If the JSON file does not exist.
        json.JSONDecodeError: If the file contains invalid JSON.
    """
    full_path = _DATA_DIR / relative_path
    if not full_path.exists():
        raise FileNotFoundError(f"Data file not found: {relative_path}")
    with open(full_path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise json.JSONDecodeError(
                f"Invalid JSON in {relative_path}: {exc.msg}",
                exc.doc,
                exc.pos,
            ) from exc


# ============================================================================
# Partner Templates
# ============================================================================

_templates: list[consent.PartnerTemplate] | None = None


def get_templates() -> list[consent.PartnerTemplate]:
    """Get the example partner templates (lazy loaded and cached)."""
    global _templates
    if _templates is None:
        raw: list[dict[str, str]] = _load_json(TEMPLATES_FILE)
        _templates = [consent.PartnerTemplate.model_validate(entry) for entry in raw]
    return _templates


def get_template(index: int) -> consent.PartnerTemplate:
    """Look up a template by its position in the template list.

    Raises:
        UnknownTemplateError: If *index* is out of range.
    """
    templates = get_templates()
    if not 0 <= index < len(templates):
        raise errors.UnknownTemplateError(index)
    return templates[index]
