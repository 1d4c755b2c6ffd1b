from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from dbpedia_graph.data.components.link_encoder import encode_edges
from dbpedia_graph.data.components.partitions import map_partitions
from dbpedia_graph.data.components.table_emitter import TableWriter, format_edge_row
from dbpedia_graph.data.components.triple_parser import parse_lines
from dbpedia_graph.data.context import StageContext
from dbpedia_graph.data.io.triple_reader import iter_partitions, resolve_source_paths
from dbpedia_graph.data.schema.constants import (
    _ENCODE_STAT_KEYS,
    _PARSE_STAT_KEYS,
    _SOURCE_PAGE_LINKS,
    _TABLE_PAGE_LINKS,
)
from dbpedia_graph.data.schema.types import EdgeStageOutput, IdentityMap, StageCounters, TripleProfile
from dbpedia_graph.data.utils.stats import _drop_rate, _init_counters
from dbpedia_graph.utils.logging_utils import log_event


@dataclass(frozen=True)
class _EncodeState:
    profile: TripleProfile
    identity_map: IdentityMap
    relation: str


def _encode_partition_worker(state: _EncodeState, lines: List[str]) -> Tuple[List[str], Dict[str, int]]:
    counters = StageCounters()
    edges = parse_lines(lines, state.profile, counters)
    encoded = encode_edges(edges, state.identity_map, counters)
    rows = [format_edge_row(edge.source_id, edge.target_id, state.relation) for edge in encoded]
    return rows, counters.as_dict()


def encode_page_links(ctx: StageContext, identity_map: IdentityMap) -> EdgeStageOutput:
    """Encode the page-link source against the frozen page identity map."""

    spec = ctx.source(_SOURCE_PAGE_LINKS)
    table = ctx.table(_TABLE_PAGE_LINKS)
    paths = resolve_source_paths(spec.path)
    state = _EncodeState(profile=spec.profile, identity_map=identity_map, relation=str(table.relation))
    log_event(
        ctx.logger,
        "page_links_start",
        files=[str(path) for path in paths],
        pages=len(identity_map),
        num_workers=ctx.num_workers,
    )
    counters = _init_counters(_PARSE_STAT_KEYS + _ENCODE_STAT_KEYS)
    with TableWriter(path=table.path, header=table.header, chunk_size=ctx.chunk_size) as writer:
        for rows, partition_counters in map_partitions(
            _encode_partition_worker,
            iter_partitions(paths, ctx.chunk_size),
            state=state,
            num_workers=ctx.num_workers,
            desc="Encode page links",
            progress_bar=ctx.progress_bar,
        ):
            writer.extend(rows)
            counters.merge(partition_counters)
    stats = counters.as_dict()
    log_event(
        ctx.logger,
        "page_links_written",
        rows=writer.rows_written,
        path=str(table.path),
        drop_rate=_drop_rate(stats, dropped="edges_dropped", total="edges_total"),
        **stats,
    )
    return EdgeStageOutput(rows=writer.rows_written, counters={_SOURCE_PAGE_LINKS: stats})
