from __future__ import annotations

from typing import Dict, List, Tuple

from dbpedia_graph.data.components.identity import assign_identities
from dbpedia_graph.data.components.key_join import Groups, group_pairs, merge_groups
from dbpedia_graph.data.components.partitions import map_partitions
from dbpedia_graph.data.components.table_emitter import TableWriter, format_page_row
from dbpedia_graph.data.components.triple_parser import parse_lines
from dbpedia_graph.data.context import StageContext
from dbpedia_graph.data.io.index_io import write_identity_map
from dbpedia_graph.data.io.triple_reader import iter_partitions, resolve_source_paths
from dbpedia_graph.data.schema.constants import (
    _PAGE_ID_BASE,
    _PARSE_STAT_KEYS,
    _SOURCE_LABELS,
    _SOURCE_WIKIPEDIA_LINKS,
    _TABLE_PAGE_NODES,
)
from dbpedia_graph.data.schema.types import NodeStageOutput, StageCounters, TripleProfile
from dbpedia_graph.data.utils.stats import _drop_rate, _init_counters
from dbpedia_graph.utils.logging_utils import log_event

_PAGE_KIND = "page"


def _group_partition_worker(profile: TripleProfile, lines: List[str]) -> Tuple[Groups, Dict[str, int]]:
    counters = StageCounters()
    pairs = parse_lines(lines, profile, counters)
    return group_pairs(pairs), counters.as_dict()


def collect_source_groups(ctx: StageContext, source_name: str) -> Tuple[Groups, Dict[str, int]]:
    """Parse one source in partitions and merge the per-partition groups."""

    spec = ctx.source(source_name)
    paths = resolve_source_paths(spec.path)
    log_event(
        ctx.logger,
        "source_parse_start",
        source=source_name,
        files=[str(path) for path in paths],
        predicate=spec.profile.predicate,
        exclude=list(spec.profile.exclude),
    )
    counters = _init_counters(_PARSE_STAT_KEYS)
    partials: List[Groups] = []
    for groups, partition_counters in map_partitions(
        _group_partition_worker,
        iter_partitions(paths, ctx.chunk_size),
        state=spec.profile,
        num_workers=ctx.num_workers,
        desc=f"Parse {source_name}",
        progress_bar=ctx.progress_bar,
    ):
        partials.append(groups)
        counters.merge(partition_counters)
    merged = merge_groups(partials)
    stats = counters.as_dict()
    log_event(
        ctx.logger,
        "source_parse_done",
        source=source_name,
        keys=len(merged),
        reject_rate=_drop_rate(stats, dropped="lines_rejected", total="lines_matched"),
        **stats,
    )
    return merged, stats


def build_page_nodes(ctx: StageContext) -> NodeStageOutput:
    link_groups, link_stats = collect_source_groups(ctx, _SOURCE_WIKIPEDIA_LINKS)
    label_groups, label_stats = collect_source_groups(ctx, _SOURCE_LABELS)
    page_groups = merge_groups((link_groups, label_groups))
    del link_groups, label_groups
    log_event(ctx.logger, "page_join_done", pages=len(page_groups))

    identity_map = assign_identities(page_groups.keys(), kind=_PAGE_KIND, base=_PAGE_ID_BASE)
    log_event(
        ctx.logger,
        "page_identity_assigned",
        pages=len(identity_map),
        min_id=identity_map.min_id,
        max_id=identity_map.max_id,
    )
    write_identity_map(identity_map, ctx.page_index_path)
    log_event(ctx.logger, "page_index_saved", path=str(ctx.page_index_path))

    table = ctx.table(_TABLE_PAGE_NODES)
    with TableWriter(path=table.path, header=table.header, chunk_size=ctx.chunk_size) as writer:
        for key, page_id in identity_map.items():
            writer.append(format_page_row(page_id, page_groups[key]))
    log_event(ctx.logger, "page_nodes_written", rows=writer.rows_written, path=str(table.path))
    return NodeStageOutput(
        identity_map=identity_map,
        rows=writer.rows_written,
        counters={_SOURCE_WIKIPEDIA_LINKS: link_stats, _SOURCE_LABELS: label_stats},
    )
