from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

Pair = Tuple[str, str]
Groups = Dict[str, List[str]]


def _is_valid_pair(pair: Optional[Sequence[str]]) -> bool:
    if pair is None or len(pair) != 2:
        return False
    key, value = pair
    return bool(key) and value is not None


def group_pairs(pairs: Iterable[Optional[Pair]]) -> Groups:
    """Group (key, value) pairs by key, keeping every value (duplicates included)."""

    groups: Groups = {}
    for pair in pairs:
        if not _is_valid_pair(pair):
            continue
        key, value = pair
        values = groups.get(key)
        if values is None:
            groups[key] = [value]
        else:
            values.append(value)
    return groups


def merge_groups(partials: Iterable[Groups]) -> Groups:
    merged: Groups = {}
    for partial in partials:
        for key, values in partial.items():
            existing = merged.get(key)
            if existing is None:
                merged[key] = list(values)
            else:
                existing.extend(values)
    return merged


def join_by_key(left: Iterable[Optional[Pair]], right: Iterable[Optional[Pair]]) -> Groups:
    """Union both datasets and group on the shared key.

    Keys present in either input appear once in the result; left values precede
    right values for the same key.
    """

    return merge_groups((group_pairs(left), group_pairs(right)))
