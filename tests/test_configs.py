from pathlib import Path

import pytest

pytest.importorskip("hydra")
pytest.importorskip("omegaconf")
from omegaconf import DictConfig

from dbpedia_graph.data.utils.config import (
    _resolve_chunk_size,
    _resolve_num_workers,
    build_source_specs,
    build_table_specs,
)


def test_build_graph_config(cfg_build_graph: DictConfig) -> None:
    """The shipped config resolves into all four sources and tables."""
    assert cfg_build_graph.language == "en"
    assert _resolve_chunk_size(cfg_build_graph) == 100000
    assert _resolve_num_workers(cfg_build_graph) == 0

    sources = build_source_specs(cfg_build_graph, Path)
    assert sources["labels"].path == Path("/data/dbpedia/labels_en.nt")
    assert sources["page_links"].profile.exclude == (
        "http://dbpedia.org/resource/File:",
        "http://dbpedia.org/resource/Category:",
    )
    assert sources["article_categories"].profile.exclude == ()

    tables = build_table_specs(cfg_build_graph, Path("/out"))
    assert tables["page_nodes"].path == Path("/out/pagenodes.tsv")
    assert tables["page_nodes"].header == "id:ID\t:LABEL\twikipedia\ttitle"
    assert tables["page_links"].relation == "HAS_LINK"
    assert tables["category_links"].relation == "HAS_CATEGORY"


def test_unknown_source_is_rejected() -> None:
    from omegaconf import OmegaConf

    cfg = OmegaConf.create({"sources": {"redirects": {"path": "x"}}})
    with pytest.raises(ValueError, match="unsupported sources"):
        build_source_specs(cfg, Path)


def test_table_filenames_must_differ() -> None:
    from omegaconf import OmegaConf

    cfg = OmegaConf.create({"tables": {"page_links": {"filename": "pagenodes.tsv"}}})
    with pytest.raises(ValueError, match="distinct filenames"):
        build_table_specs(cfg, Path("/out"))


def test_negative_workers_rejected() -> None:
    from omegaconf import OmegaConf

    with pytest.raises(ValueError):
        _resolve_num_workers(OmegaConf.create({"num_workers": -1}))


def test_entry_point_finds_shipped_config() -> None:
    import dbpedia_graph.build_graph as build_graph

    config_dir = (Path(build_graph.__file__).parent / "../configs").resolve()
    assert (config_dir / "build_graph.yaml").is_file()
    assert config_dir == (Path(__file__).resolve().parents[1] / "configs")
