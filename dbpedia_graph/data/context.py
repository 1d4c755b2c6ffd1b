from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Dict, Optional

import hydra

from dbpedia_graph.data.schema.constants import (
    _CATEGORY_INDEX_FILENAME,
    _PAGE_INDEX_FILENAME,
    _PAGE_MANIFEST_FILENAME,
)
from dbpedia_graph.data.schema.types import IdentityMap, SourceSpec, TableSpec
from dbpedia_graph.data.utils.config import (
    _resolve_chunk_size,
    _resolve_language,
    _resolve_num_workers,
    build_source_specs,
    build_table_specs,
)


@dataclass
class StageContext:
    cfg: object
    logger: object
    run_id: str

    _page_identity_map: Optional[IdentityMap] = None

    def _to_abs_path(self, value: str | Path) -> Path:
        return Path(hydra.utils.to_absolute_path(str(value)))

    def resolve_path(self, value: str | Path) -> Path:
        return self._to_abs_path(value)

    @cached_property
    def out_dir(self) -> Path:
        out_dir = self.cfg.get("out_dir")
        if not out_dir:
            raise ValueError("out_dir must be set in config.")
        return self._to_abs_path(out_dir)

    @cached_property
    def sources(self) -> Dict[str, SourceSpec]:
        return build_source_specs(self.cfg, self.resolve_path)

    @cached_property
    def tables(self) -> Dict[str, TableSpec]:
        return build_table_specs(self.cfg, self.out_dir)

    @cached_property
    def language(self) -> str:
        return _resolve_language(self.cfg)

    @cached_property
    def chunk_size(self) -> int:
        return _resolve_chunk_size(self.cfg)

    @cached_property
    def num_workers(self) -> int:
        return _resolve_num_workers(self.cfg)

    @cached_property
    def progress_bar(self) -> bool:
        return bool(self.cfg.get("progress_bar", True))

    @cached_property
    def emit_category_edges(self) -> bool:
        return bool(self.cfg.get("emit_category_edges", True))

    @cached_property
    def reuse_page_index(self) -> bool:
        return bool(self.cfg.get("reuse_page_index_if_exists", False))

    @cached_property
    def page_index_path(self) -> Path:
        return self.out_dir / str(self.cfg.get("page_index_filename") or _PAGE_INDEX_FILENAME)

    @cached_property
    def page_manifest_path(self) -> Path:
        return self.out_dir / _PAGE_MANIFEST_FILENAME

    @cached_property
    def category_index_path(self) -> Path:
        return self.out_dir / str(self.cfg.get("category_index_filename") or _CATEGORY_INDEX_FILENAME)

    @property
    def page_identity_map(self) -> IdentityMap:
        if self._page_identity_map is None:
            raise RuntimeError("Page identity map is not built yet; run the page stage first.")
        return self._page_identity_map

    def publish_page_identity_map(self, identity_map: IdentityMap) -> None:
        if self._page_identity_map is not None:
            raise RuntimeError("Page identity map is already published.")
        self._page_identity_map = identity_map

    def source(self, name: str) -> SourceSpec:
        return self.sources[name]

    def table(self, name: str) -> TableSpec:
        return self.tables[name]
