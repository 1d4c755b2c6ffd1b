from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from dbpedia_graph.data.schema.types import EncodedEdge, IdentityMap, StageCounters


def encode_edge(source: str, target: str, identity_map: IdentityMap) -> Optional[EncodedEdge]:
    source_id = identity_map.get(source)
    if source_id is None:
        return None
    target_id = identity_map.get(target)
    if target_id is None:
        return None
    return EncodedEdge(source_id, target_id)


def encode_edges(
    edges: Iterable[Tuple[str, str]],
    identity_map: IdentityMap,
    counters: Optional[StageCounters] = None,
) -> List[EncodedEdge]:
    """Rewrite key edges as id edges; edges with an unresolved endpoint are dropped."""

    encoded: List[EncodedEdge] = []
    total = 0
    for source, target in edges:
        total += 1
        edge = encode_edge(source, target, identity_map)
        if edge is not None:
            encoded.append(edge)
    if counters is not None:
        counters.add("edges_total", total)
        counters.add("edges_kept", len(encoded))
        counters.add("edges_dropped", total - len(encoded))
    return encoded
