from __future__ import annotations

import uuid

from dbpedia_graph.data.context import StageContext
from dbpedia_graph.data.io.index_io import load_identity_map
from dbpedia_graph.data.io.manifest import clear_manifest, read_manifest, write_manifest
from dbpedia_graph.data.io.paths import ensure_dir
from dbpedia_graph.data.io.triple_reader import resolve_source_paths
from dbpedia_graph.data.schema.constants import _TABLE_CATEGORY_LINKS, _TABLE_PAGE_LINKS, _TABLE_PAGE_NODES
from dbpedia_graph.data.schema.types import CategoryStageResult, GraphBuildSummary, PageStageResult
from dbpedia_graph.data.stages.step1_pages import build_page_nodes
from dbpedia_graph.data.stages.step2_links import encode_page_links
from dbpedia_graph.data.stages.step3_categories import build_category_nodes
from dbpedia_graph.utils.logging_utils import get_logger, log_event

LOGGER = get_logger(__name__)


def _validate_pipeline_cfg(ctx: StageContext) -> None:
    # Touch every lazily-resolved setting so a bad config fails before any stage runs.
    _ = ctx.out_dir
    _ = ctx.chunk_size
    _ = ctx.num_workers
    _ = ctx.language
    tables = ctx.tables
    sources = ctx.sources
    for spec in sources.values():
        resolve_source_paths(spec.path)
    source_paths = {spec.path.resolve() for spec in sources.values()}
    for table in tables.values():
        if table.path.resolve() in source_paths:
            raise ValueError(f"Output table {table.path} would overwrite a source file.")


def _ensure_pipeline_dirs(ctx: StageContext) -> None:
    ensure_dir(ctx.out_dir)
    log_event(ctx.logger, "pipeline_dirs_ready", out_dir=str(ctx.out_dir))


def _can_reuse_page_stage(ctx: StageContext) -> bool:
    if not ctx.reuse_page_index:
        return False
    # The manifest is written last, so its presence means every phase-1 output is complete.
    required = (
        ctx.page_manifest_path,
        ctx.page_index_path,
        ctx.table(_TABLE_PAGE_NODES).path,
        ctx.table(_TABLE_PAGE_LINKS).path,
    )
    return all(path.exists() for path in required)


def _reuse_page_phase(ctx: StageContext) -> PageStageResult:
    manifest = read_manifest(ctx.page_manifest_path) or {}
    identity_map = load_identity_map(ctx.page_index_path, kind="page")
    if int(manifest.get("pages", -1)) != len(identity_map):
        raise ValueError(
            f"Page manifest {ctx.page_manifest_path} records {manifest.get('pages')} pages, "
            f"but {ctx.page_index_path} holds {len(identity_map)}."
        )
    log_event(
        ctx.logger,
        "page_phase_reused",
        pages=len(identity_map),
        page_links=manifest.get("page_links"),
        source_run_id=manifest.get("run_id"),
        path=str(ctx.page_index_path),
    )
    ctx.publish_page_identity_map(identity_map)
    return PageStageResult(
        identity_map=identity_map,
        page_rows=int(manifest.get("page_nodes", len(identity_map))),
        edge_rows=int(manifest.get("page_links", 0)),
        reused=True,
    )


def run_page_phase(ctx: StageContext) -> PageStageResult:
    if _can_reuse_page_stage(ctx):
        return _reuse_page_phase(ctx)

    clear_manifest(ctx.page_manifest_path)
    log_event(ctx.logger, "page_phase_start")
    nodes = build_page_nodes(ctx)
    # The map is frozen from here on; link encoding only reads it.
    ctx.publish_page_identity_map(nodes.identity_map)
    links = encode_page_links(ctx, ctx.page_identity_map)
    write_manifest(
        {
            "run_id": ctx.run_id,
            "pages": len(nodes.identity_map),
            "page_nodes": nodes.rows,
            "page_links": links.rows,
        },
        ctx.page_manifest_path,
    )
    log_event(ctx.logger, "page_phase_done", pages=nodes.rows, page_links=links.rows)
    return PageStageResult(
        identity_map=nodes.identity_map,
        page_rows=nodes.rows,
        edge_rows=links.rows,
        counters={**nodes.counters, **links.counters},
    )


def run_category_phase(ctx: StageContext) -> CategoryStageResult:
    page_map = ctx.page_identity_map
    log_event(ctx.logger, "category_phase_start", pages=len(page_map), max_page_id=page_map.max_id)
    result = build_category_nodes(ctx, page_map)
    log_event(
        ctx.logger,
        "category_phase_done",
        categories=result.category_rows,
        category_links=result.membership_rows,
        offset=result.offset,
    )
    return result


def build_pipeline(cfg, *, logger=None) -> GraphBuildSummary:
    run_id = str(cfg.get("run_id") or uuid.uuid4().hex)
    ctx = StageContext(cfg=cfg, logger=logger or LOGGER, run_id=run_id)
    _validate_pipeline_cfg(ctx)
    _ensure_pipeline_dirs(ctx)
    log_event(
        ctx.logger,
        "pipeline_start",
        run_id=run_id,
        language=ctx.language,
        chunk_size=ctx.chunk_size,
        num_workers=ctx.num_workers,
        sources={name: str(spec.path) for name, spec in ctx.sources.items()},
    )

    # Phase 1 must finish completely: category ids are offset from the final page maximum.
    pages = run_page_phase(ctx)
    categories = run_category_phase(ctx)

    summary = GraphBuildSummary(
        run_id=run_id,
        out_dir=ctx.out_dir,
        pages=len(pages.identity_map),
        page_links=pages.edge_rows,
        categories=categories.category_rows,
        category_links=categories.membership_rows,
        category_offset=categories.offset,
        tables={name: spec.path for name, spec in ctx.tables.items()},
        counters={**pages.counters, **categories.counters},
    )
    if not ctx.emit_category_edges:
        summary.tables.pop(_TABLE_CATEGORY_LINKS, None)
    log_event(
        ctx.logger,
        "pipeline_done",
        run_id=run_id,
        pages=summary.pages,
        page_links=summary.page_links,
        categories=summary.categories,
        category_links=summary.category_links,
        category_offset=summary.category_offset,
    )
    return summary
