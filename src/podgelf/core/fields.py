"""Custom field merging for GELF packets."""

from __future__ import annotations

from typing import Any, Dict, Mapping, MutableMapping

from .events import LogEvent

__all__ = [
    "GELF_MARKER",
    "build_default_fields",
    "is_custom_field_key",
    "is_field_carrier",
    "merge_custom_fields",
]

GELF_MARKER = "GELF"
_RESERVED_ID = "_id"


def is_custom_field_key(key: object) -> bool:
    """Return ``True`` for keys Graylog accepts as additional fields."""

    return isinstance(key, str) and key.startswith("_") and key != _RESERVED_ID


def is_field_carrier(item: object) -> bool:
    """Return ``True`` when ``item`` is a mapping tagged with a truthy ``GELF``."""

    return isinstance(item, Mapping) and bool(item.get(GELF_MARKER))


def build_default_fields(
    custom_fields: Mapping[str, Any] | None = None,
    facility: str | None = None,
) -> Dict[str, Any]:
    """Combine configured custom fields and the facility into one mapping."""

    defaults: Dict[str, Any] = dict(custom_fields or {})
    if facility:
        defaults["_facility"] = facility
    return defaults


def _copy_fields(source: Mapping[Any, Any], output: MutableMapping[str, Any]) -> None:
    for key, value in source.items():
        if is_custom_field_key(key):
            output[key] = value


def merge_custom_fields(
    event: LogEvent,
    defaults: Mapping[str, Any],
    output: MutableMapping[str, Any],
    append_category: str | None = None,
) -> None:
    """Populate ``output`` with the custom fields for ``event``.

    Defaults go first, then the category field, then the per-call fields of a
    tagged first data item. A consumed carrier is removed from ``event.data``.
    """

    _copy_fields(defaults, output)

    if append_category:
        output[f"_{append_category}"] = event.category_name

    if not event.data:
        return
    first = event.data[0]
    if not is_field_carrier(first):
        return
    _copy_fields(first, output)
    del event.data[0]
