"""Raw record shape detection and field accessors.

Scraped records arrive in two layouts:

- component: ``components.<field>.content`` / ``components.<field>.chunks[0]``
  / ``components.productImages.images`` / ``components.warranty.text``
- flat: ``information.<field>``, ``specifications.basic``,
  ``specifications.<field>``, ``media.images``

A record may mix both or carry neither. ``classify`` names the layout once;
each field is then resolved with ``first_of`` over an ordered chain of
accessors, and accessors belonging to a family the record lacks are skipped.
"""

from enum import Enum
from typing import Any, Callable, Dict, NamedTuple, Optional, Sequence

from catalog.models import RawProductRecord

__all__ = [
    "RawShape",
    "Accessor",
    "classify",
    "dig",
    "first_of",
    "is_missing",
    "component",
    "flat",
    "top_level",
    "mapped",
    "mapping_or_none",
]

_FLAT_KEYS = ("information", "specifications", "media")


class RawShape(Enum):
    COMPONENT = "component"
    FLAT = "flat"
    MIXED = "mixed"
    UNSHAPED = "unshaped"
    # Accessor family for keys that are shared by every layout (id, name, ...)
    ANY = "any"

    def includes(self, family: "RawShape") -> bool:
        """Return True if a record of this shape can satisfy ``family`` accessors."""
        if family is RawShape.ANY:
            return True
        if self is RawShape.MIXED:
            return family in (RawShape.COMPONENT, RawShape.FLAT)
        return self is family


class Accessor(NamedTuple):
    """One candidate location for a field, tagged with its layout family."""

    family: RawShape
    get: Callable[[RawProductRecord], Any]
    label: str


def classify(raw: RawProductRecord) -> RawShape:
    """Detect which layout family (or families) a raw record uses."""
    has_component = isinstance(raw.get("components"), dict)
    has_flat = any(isinstance(raw.get(key), dict) for key in _FLAT_KEYS)
    if has_component and has_flat:
        return RawShape.MIXED
    if has_component:
        return RawShape.COMPONENT
    if has_flat:
        return RawShape.FLAT
    return RawShape.UNSHAPED


def dig(data: Any, *path: Any) -> Any:
    """Walk nested dicts/lists, returning None at the first missing step.

    String steps index dicts, integer steps index lists.
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, (list, tuple)) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def is_missing(value: Any) -> bool:
    """None and blank strings count as missing; empty containers do not."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def first_of(
    raw: RawProductRecord,
    chain: Sequence[Accessor],
    default: Any = None,
    shape: Optional[RawShape] = None,
) -> Any:
    """Return the first present value produced by ``chain``, else ``default``.

    Args:
        raw: Raw product record
        chain: Accessors in descending priority
        default: Terminal value of the chain
        shape: Pre-computed ``classify(raw)``; computed when omitted

    Returns:
        The winning value, or ``default``
    """
    if shape is None:
        shape = classify(raw)
    for accessor in chain:
        if not shape.includes(accessor.family):
            continue
        value = accessor.get(raw)
        if not is_missing(value):
            return value
    return default


def component(*path: Any) -> Accessor:
    """Accessor for ``components.<path>``."""
    return Accessor(
        RawShape.COMPONENT,
        lambda raw: dig(raw, "components", *path),
        "components." + ".".join(str(p) for p in path),
    )


def flat(*path: Any) -> Accessor:
    """Accessor for a path rooted at one of the flat-layout blocks."""
    return Accessor(
        RawShape.FLAT,
        lambda raw: dig(raw, *path),
        ".".join(str(p) for p in path),
    )


def top_level(key: str) -> Accessor:
    """Accessor for a key every layout may carry at the top level."""
    return Accessor(RawShape.ANY, lambda raw: raw.get(key), key)


def mapping_or_none(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def mapped(accessor: Accessor, convert: Callable[[Any], Any]) -> Accessor:
    """Wrap an accessor so its raw value is converted (None stays missing)."""

    def get(raw: RawProductRecord) -> Any:
        value = accessor.get(raw)
        return None if value is None else convert(value)

    return Accessor(accessor.family, get, accessor.label)
