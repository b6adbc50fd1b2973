"""Logic for deep merging configuration mappings."""

from collections.abc import Iterable
from typing import Any

# Lists under these keys accumulate instead of being replaced.
ADDITIVE_KEYS = frozenset({"extension_modules"})


def _union(base: list[Any], extra: list[Any]) -> list[Any]:
    """Keep the order of ``base`` and append unseen entries of ``extra``."""
    merged = list(base)
    merged.extend(v for v in extra if v not in merged)
    return merged


def deep_merge(
    base: dict[str, Any],
    update: dict[str, Any],
    additive: Iterable[str] = ADDITIVE_KEYS,
) -> dict[str, Any]:
    """Return ``base`` overlaid with ``update`` without touching either.

    Nested mappings merge key by key. Lists are replaced, except for the keys
    named in ``additive`` (``extension_modules`` by default), which keep the
    base entries and append the new ones.
    """
    additive = frozenset(additive)
    result = dict(base)
    for key, new in update.items():
        old = result.get(key)
        if isinstance(old, dict) and isinstance(new, dict):
            result[key] = deep_merge(old, new, additive)
        elif key in additive and isinstance(old, list) and isinstance(new, list):
            result[key] = _union(old, new)
        else:
            result[key] = new
    return result
