from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

from dbpedia_graph.data.components.triple_parser import build_profile
from dbpedia_graph.data.schema.constants import (
    _DEFAULT_CHUNK_SIZE,
    _DEFAULT_LANGUAGE,
    _DEFAULT_RELATION_TAGS,
    _DEFAULT_TABLE_FILENAMES,
    _DEFAULT_TABLE_HEADERS,
    _DISABLE_PARALLEL_WORKERS,
    _MIN_CHUNK_SIZE,
    _REQUIRED_SOURCES,
    _TABLES,
)
from dbpedia_graph.data.schema.types import SourceSpec, TableSpec
from dbpedia_graph.data.utils.validation import _validate_source_names, _validate_table_names


def _resolve_chunk_size(cfg, *, fallback: int = _DEFAULT_CHUNK_SIZE) -> int:
    chunk_cfg = cfg.get("chunk_size")
    chunk_size = fallback if chunk_cfg is None else int(chunk_cfg)
    if chunk_size < _MIN_CHUNK_SIZE:
        raise ValueError(f"chunk_size must be >= {_MIN_CHUNK_SIZE}, got {chunk_size}")
    return chunk_size


def _resolve_num_workers(cfg) -> int:
    workers_cfg = cfg.get("num_workers", _DISABLE_PARALLEL_WORKERS)
    num_workers = int(_DISABLE_PARALLEL_WORKERS if workers_cfg is None else workers_cfg)
    if num_workers < _DISABLE_PARALLEL_WORKERS:
        raise ValueError(f"num_workers must be >= {_DISABLE_PARALLEL_WORKERS}, got {num_workers}")
    return num_workers


def _resolve_language(cfg) -> str:
    language = str(cfg.get("language") or _DEFAULT_LANGUAGE).strip()
    if not language:
        raise ValueError("language must be a non-empty language tag.")
    return language


def build_source_specs(cfg, resolve_path: Callable[[str], Path]) -> Dict[str, SourceSpec]:
    sources_cfg = cfg.get("sources")
    if not sources_cfg:
        raise ValueError(f"sources must configure {list(_REQUIRED_SOURCES)}.")
    names = _validate_source_names(list(sources_cfg.keys()), context="sources")
    missing = sorted(set(_REQUIRED_SOURCES) - set(names))
    if missing:
        raise ValueError(f"sources is missing required entries: {missing}")
    language = _resolve_language(cfg)
    specs: Dict[str, SourceSpec] = {}
    for name in names:
        source_cfg = sources_cfg[name]
        path_cfg = source_cfg.get("path")
        if not path_cfg:
            raise ValueError(f"sources.{name}.path must be set.")
        exclude_cfg = source_cfg.get("exclude")
        profile = build_profile(
            name,
            predicate=source_cfg.get("predicate"),
            exclude=None if exclude_cfg is None else [str(item) for item in exclude_cfg],
            language=language,
        )
        specs[name] = SourceSpec(name=name, path=resolve_path(str(path_cfg)), profile=profile)
    return specs


def build_table_specs(cfg, out_dir: Path) -> Dict[str, TableSpec]:
    tables_cfg = cfg.get("tables") or {}
    _validate_table_names(list(tables_cfg.keys()), context="tables")
    specs: Dict[str, TableSpec] = {}
    for name in _TABLES:
        table_cfg = tables_cfg.get(name) or {}
        filename = str(table_cfg.get("filename") or _DEFAULT_TABLE_FILENAMES[name])
        header = table_cfg.get("header")
        header = _DEFAULT_TABLE_HEADERS[name] if header is None else str(header)
        relation = table_cfg.get("relation") or _DEFAULT_RELATION_TAGS.get(name)
        specs[name] = TableSpec(
            name=name,
            path=out_dir / filename,
            header=header,
            relation=None if relation is None else str(relation),
        )
    filenames = [spec.path.name for spec in specs.values()]
    if len(set(filenames)) != len(filenames):
        raise ValueError(f"tables must use distinct filenames, got {sorted(filenames)}")
    return specs
