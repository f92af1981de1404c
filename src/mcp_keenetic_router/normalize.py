"""Field decoders for vendor JSON.

The router is inconsistent about shapes: the same endpoint may answer
with a bare object or an array, booleans arrive as ``true`` or
``"true"``, and MAC case differs between reads and writes. Every
normalizer decodes fields through these helpers so the fallback rules
live in one place. None of them raise on malformed input.
"""

from __future__ import annotations

import ipaddress
from typing import Any, Dict, Iterator, List, Optional, Tuple

_TRUE_STRINGS = {"true", "yes", "on"}
_FALSE_STRINGS = {"false", "no", "off"}


def optional_bool(value: Any) -> Optional[bool]:
    """Decode a native or string boolean.

    Returns:
        True/False for recognised values, None for anything else.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def as_bool(value: Any) -> bool:
    """Decode a boolean, treating unrecognised values as False."""
    return optional_bool(value) is True


def as_int(value: Any) -> Optional[int]:
    """Decode an integer that may arrive as a string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def as_str(value: Any) -> Optional[str]:
    """Return the value if it is a string, else None."""
    return value if isinstance(value, str) else None


def as_dict(value: Any) -> Dict[str, Any]:
    """Return the value if it is a mapping, else an empty dict."""
    return value if isinstance(value, dict) else {}


def as_list(value: Any, key: Optional[str] = None) -> List[Any]:
    """Accept a bare object or an array and always return a list.

    Args:
        value: Raw response value.
        key: Optional wrapper key, e.g. ``"host"`` for ``{"host": [...]}``.
            When given and present, its value is unwrapped first.

    Returns:
        List of items; empty when the value is missing.
    """
    if key is not None and isinstance(value, dict) and key in value:
        value = value[key]
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, dict) and key is not None and not value:
        return []
    return [value]


def keyed_items(value: Any) -> Iterator[Tuple[str, Dict[str, Any]]]:
    """Iterate ``(id, record)`` pairs from an id-keyed object or a list.

    ``/rci/show/interface`` answers with ``{"Bridge0": {...}, ...}`` on
    most firmware and with ``[{"id": "Bridge0", ...}]`` on some. Records
    that are not mappings are skipped.
    """
    if isinstance(value, dict):
        for key, record in value.items():
            if isinstance(record, dict):
                yield str(key), record
    elif isinstance(value, list):
        for record in value:
            if isinstance(record, dict) and record.get("id"):
                yield str(record["id"]), record


def upper_mac(value: Any) -> Optional[str]:
    """Canonical read form of a MAC address (uppercase, colons)."""
    if not isinstance(value, str) or not value:
        return None
    return value.strip().replace("-", ":").upper()


def lower_mac(value: str) -> str:
    """Write form of a MAC address (lowercase, colons)."""
    return value.strip().replace("-", ":").lower()


def percent(part: float, total: float) -> float:
    """Percentage rounded to one decimal; 0.0 when total is zero."""
    if not total:
        return 0.0
    return round(part / total * 100, 1)


def prefix_to_mask(prefix: int) -> Optional[str]:
    """Convert an IPv4 prefix length to a dotted netmask."""
    try:
        return str(ipaddress.IPv4Network(f"0.0.0.0/{prefix}").netmask)
    except ValueError:
        return None


def snake_keys(value: Any) -> Any:
    """Recursively rename ``hyphen-keys`` to ``snake_keys``."""
    if isinstance(value, dict):
        return {str(k).replace("-", "_"): snake_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [snake_keys(item) for item in value]
    return value


def dig(value: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None at the first missing key."""
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value
