from __future__ import annotations

from typing import Dict, Tuple

from dbpedia_graph.data.components.identity import assert_disjoint, assign_identities, next_offset
from dbpedia_graph.data.components.key_join import Groups
from dbpedia_graph.data.components.table_emitter import TableWriter, format_category_row, format_edge_row
from dbpedia_graph.data.context import StageContext
from dbpedia_graph.data.io.index_io import write_identity_map
from dbpedia_graph.data.schema.constants import (
    _ENCODE_STAT_KEYS,
    _PAGE_ID_BASE,
    _SOURCE_ARTICLE_CATEGORIES,
    _TABLE_CATEGORY_LINKS,
    _TABLE_CATEGORY_NODES,
)
from dbpedia_graph.data.schema.types import CategoryStageResult, IdentityMap, StageCounters
from dbpedia_graph.data.stages.step1_pages import collect_source_groups
from dbpedia_graph.data.utils.stats import _drop_rate, _init_counters
from dbpedia_graph.utils.logging_utils import log_event

_CATEGORY_KIND = "category"


def _write_memberships(
    ctx: StageContext,
    category_groups: Groups,
    category_map: IdentityMap,
    page_map: IdentityMap,
) -> Tuple[int, Dict[str, int]]:
    table = ctx.table(_TABLE_CATEGORY_LINKS)
    counters: StageCounters = _init_counters(_ENCODE_STAT_KEYS)
    with TableWriter(path=table.path, header=table.header, chunk_size=ctx.chunk_size) as writer:
        for key, category_id in category_map.items():
            for page_key in category_groups[key]:
                counters.add("edges_total")
                page_id = page_map.get(page_key)
                if page_id is None:
                    counters.add("edges_dropped")
                    continue
                counters.add("edges_kept")
                writer.append(format_edge_row(page_id, category_id, str(table.relation)))
    stats = counters.as_dict()
    log_event(
        ctx.logger,
        "category_links_written",
        rows=writer.rows_written,
        path=str(table.path),
        drop_rate=_drop_rate(stats, dropped="edges_dropped", total="edges_total"),
        **stats,
    )
    return writer.rows_written, stats


def build_category_nodes(ctx: StageContext, page_map: IdentityMap) -> CategoryStageResult:
    """Assign category ids in the space after the last page id and emit the category tables.

    Must only run once ``page_map`` is complete: the offset is taken from its largest id.
    """

    category_groups, parse_stats = collect_source_groups(ctx, _SOURCE_ARTICLE_CATEGORIES)
    offset = next_offset(page_map, base=_PAGE_ID_BASE)
    category_map = assign_identities(category_groups.keys(), kind=_CATEGORY_KIND, base=offset)
    assert_disjoint(page_map, category_map)
    log_event(
        ctx.logger,
        "category_identity_assigned",
        categories=len(category_map),
        offset=offset,
        min_id=category_map.min_id,
        max_id=category_map.max_id,
        max_page_id=page_map.max_id,
    )
    write_identity_map(category_map, ctx.category_index_path)
    log_event(ctx.logger, "category_index_saved", path=str(ctx.category_index_path))

    table = ctx.table(_TABLE_CATEGORY_NODES)
    with TableWriter(path=table.path, header=table.header, chunk_size=ctx.chunk_size) as writer:
        for key, category_id in category_map.items():
            writer.append(format_category_row(category_id, key))
    log_event(ctx.logger, "category_nodes_written", rows=writer.rows_written, path=str(table.path))

    counters = {_SOURCE_ARTICLE_CATEGORIES: parse_stats}
    membership_rows = 0
    if ctx.emit_category_edges:
        membership_rows, membership_stats = _write_memberships(ctx, category_groups, category_map, page_map)
        counters[_TABLE_CATEGORY_LINKS] = membership_stats
    return CategoryStageResult(
        identity_map=category_map,
        category_rows=writer.rows_written,
        membership_rows=membership_rows,
        offset=offset,
        counters=counters,
    )
