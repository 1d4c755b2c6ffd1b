from __future__ import annotations

from typing import Iterable, Mapping

from dbpedia_graph.data.schema.constants import _ONE, _PAGE_ID_BASE
from dbpedia_graph.data.schema.types import IdentityAssigner, IdentityMap


def assign_identities(keys: Iterable[str], *, kind: str, base: int = _PAGE_ID_BASE) -> IdentityMap:
    assigner = IdentityAssigner(kind=kind, base=base)
    assigner.add_keys(keys)
    return assigner.freeze()


def next_offset(identity_map: IdentityMap, *, base: int = _PAGE_ID_BASE) -> int:
    """First id of the next identity space: one past the largest id actually assigned."""

    max_id = identity_map.max_id
    if max_id is None:
        return int(base)
    return max(int(base), max_id + _ONE)


def identity_map_from_mapping(mapping: Mapping[str, int], *, kind: str) -> IdentityMap:
    key_to_id = {str(key): int(idx) for key, idx in mapping.items()}
    if len(set(key_to_id.values())) != len(key_to_id):
        raise ValueError(f"{kind} identity map contains duplicate ids.")
    return IdentityMap(kind, key_to_id)


def assert_disjoint(first: IdentityMap, second: IdentityMap) -> None:
    if not first or not second:
        return
    if first.max_id < second.min_id or second.max_id < first.min_id:
        return
    overlap = set(first.ids()) & set(second.ids())
    if overlap:
        sample = sorted(overlap)[:5]
        raise ValueError(f"{first.kind} and {second.kind} identity spaces collide on ids {sample}.")
