# wallcon_monitor/models/fields.py
"""Strict field extraction for device API payloads.

Every helper either returns a value of the requested type or raises
``DecodeError``; records are therefore never built from partial data.
"""

from __future__ import annotations

from typing import Any, Mapping

from wallcon_monitor.errors import DecodeError


def require_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, dict):
        raise DecodeError(f"expected a JSON object, got {type(payload).__name__}")
    return payload


def _lookup(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload:
        raise DecodeError(f"missing field '{key}'")
    return payload[key]


def _mismatch(key: str, expected: str, value: Any) -> DecodeError:
    return DecodeError(
        f"field '{key}' expected {expected}, got {type(value).__name__}"
    )


def get_str(payload: Mapping[str, Any], key: str) -> str:
    value = _lookup(payload, key)
    if not isinstance(value, str):
        raise _mismatch(key, "string", value)
    return value


def get_bool(payload: Mapping[str, Any], key: str) -> bool:
    value = _lookup(payload, key)
    if not isinstance(value, bool):
        raise _mismatch(key, "boolean", value)
    return value


def get_int(payload: Mapping[str, Any], key: str) -> int:
    value = _lookup(payload, key)
    # bool is a subclass of int; the device never sends flags as counters.
    if isinstance(value, bool) or not isinstance(value, int):
        raise _mismatch(key, "integer", value)
    return value


def get_float(payload: Mapping[str, Any], key: str) -> float:
    value = _lookup(payload, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch(key, "number", value)
    return float(value)


def get_int_list(payload: Mapping[str, Any], key: str) -> tuple[int, ...]:
    value = _lookup(payload, key)
    if not isinstance(value, list):
        raise _mismatch(key, "list", value)
    items = []
    for idx, item in enumerate(value):
        if isinstance(item, bool) or not isinstance(item, int):
            raise _mismatch(f"{key}[{idx}]", "integer", item)
        items.append(item)
    return tuple(items)
