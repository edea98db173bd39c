"""
Identifier registry: the deduplicated union of content ids seen across
both recommendation sources.
"""

from typing import Iterable, List


def merge_identifiers(existing: Iterable[str], incoming: Iterable[str]) -> List[str]:
    """
    Union ``incoming`` into ``existing`` without mutating either.

    Order is first-seen, which keeps the result deterministic; callers
    should only rely on set semantics.  Idempotent and commutative as a set.
    """
    seen = set()
    out: List[str] = []
    for ident in list(existing) + list(incoming):
        if ident not in seen:
            seen.add(ident)
            out.append(ident)
    return out


def build_registry(*id_groups: Iterable[str]) -> List[str]:
    """Fold any number of identifier sequences through :func:`merge_identifiers`."""
    registry: List[str] = []
    for group in id_groups:
        registry = merge_identifiers(registry, group)
    return registry
