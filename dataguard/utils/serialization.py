"""Serialization helpers for the camelCase wire format.

Stored snapshots and API payloads use the same camelCase
keys as the browser dashboard (``partnerName``,
``riskScore``, ``lastUpdated``).  ``snake_to_camel`` is
the Pydantic alias generator for every model, and the
list helpers turn model sequences into JSON arrays and back.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from typing import Any, TypeVar

import pydantic

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as
            ``"partner_name"``.

    Returns:
        The camelCase equivalent, e.g. ``"partnerName"``.
    """
    head, *rest = name.split("_")
    return head + "".join(w.capitalize() for w in rest)


@functools.cache
def _list_adapter(model_type: type[pydantic.BaseModel]) -> pydantic.TypeAdapter[Any]:
    """Return a cached ``TypeAdapter`` for ``list[model_type]``."""
    return pydantic.TypeAdapter(list[model_type])  # type: ignore[valid-type]


def dump_model_list(items: Iterable[pydantic.BaseModel], model_type: type[pydantic.BaseModel]) -> str:
    """Serialize *items* to a camelCase JSON array."""
    return _list_adapter(model_type).dump_json(list(items), by_alias=True).decode("utf-8")


def load_model_list(raw: str | bytes, model_type: type[ModelT]) -> list[ModelT]:
    """Parse a JSON array into a list of *model_type* instances.

    Raises:
        pydantic.ValidationError: If *raw* is not valid JSON or
            an element does not validate against *model_type*.
    """
    return _list_adapter(model_type).validate_json(raw)
