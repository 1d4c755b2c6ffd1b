from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest
from triples import write_lines


@pytest.fixture
def write_sources(tmp_path):
    """Write the four triple sources under ``tmp_path/raw`` and return a pipeline config."""

    def _write(
        *,
        wikipedia_links: Iterable[str] = (),
        labels: Iterable[str] = (),
        page_links: Iterable[str] = (),
        article_categories: Iterable[str] = (),
        overrides: Optional[Dict] = None,
    ):
        pytest.importorskip("omegaconf")
        from omegaconf import OmegaConf

        raw_dir = tmp_path / "raw"
        paths = {
            "wikipedia_links": write_lines(raw_dir / "wikipedia_links_en.nt", wikipedia_links),
            "labels": write_lines(raw_dir / "labels_en.nt", labels),
            "page_links": write_lines(raw_dir / "page_links_en.nt", page_links),
            "article_categories": write_lines(raw_dir / "article_categories_en.nt", article_categories),
        }
        cfg = {
            "out_dir": str(tmp_path / "out"),
            "run_id": "test",
            "language": "en",
            "chunk_size": 2,
            "num_workers": 0,
            "progress_bar": False,
            "emit_category_edges": True,
            "reuse_page_index_if_exists": False,
            "sources": {name: {"path": str(path)} for name, path in paths.items()},
        }
        cfg.update(overrides or {})
        return OmegaConf.create(cfg)

    return _write


@pytest.fixture(scope="package")
def cfg_build_graph():
    pytest.importorskip("hydra")
    pytest.importorskip("omegaconf")

    from hydra import compose, initialize_config_dir
    from hydra.core.global_hydra import GlobalHydra

    config_dir = Path(__file__).resolve().parents[1] / "configs"
    GlobalHydra.instance().clear()
    with initialize_config_dir(version_base="1.3", config_dir=str(config_dir)):
        return compose(config_name="build_graph.yaml", overrides=["data_dir=/data/dbpedia"])
