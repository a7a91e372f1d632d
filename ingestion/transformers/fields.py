"""
Field extraction helpers for nested, partially-optional payloads.

Upstream payloads carry maps keyed by currency (``{"usd": 1.0, "btc": ...}``)
or by platform (``{"ethereum": "0xabc", ...}``). These helpers read such maps
without ever reconstructing missing structure: an absent parent means every
dependent field is absent.
"""

from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple


def pick(mapping: Optional[Mapping[str, Any]], key: str) -> Any:
    """Value under ``key``, or None when the map itself is absent."""
    if not isinstance(mapping, Mapping):
        return None
    return mapping.get(key)


def dig(payload: Any, *keys: str) -> Any:
    """Nested lookup: ``dig(pair, "liquidity", "usd")``."""
    current = payload
    for key in keys:
        current = pick(current, key)
        if current is None:
            return None
    return current


def non_empty_entries(mapping: Optional[Mapping[str, Any]]) -> Iterator[Tuple[str, Any]]:
    """
    Lazily yield ``(key, value)`` pairs for one-row-per-key relations.

    Keys whose value is None or an empty string produce nothing, so an item
    with no usable sub-keys contributes zero rows. Native coins come back
    as ``{"": ""}``; empty keys are dropped as well.
    """
    if not isinstance(mapping, Mapping):
        return
    for key, value in mapping.items():
        if not key or value is None or value == "":
            continue
        yield key, value


def clean_string_list(values: Optional[Iterable[Any]]) -> Optional[List[str]]:
    """Drop empty entries; an empty result is normalized to None."""
    if values is None or isinstance(values, (str, bytes)):
        return None
    cleaned = [value for value in values if isinstance(value, str) and value != ""]
    return cleaned or None
