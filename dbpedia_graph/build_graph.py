"""Turn DBpedia triple dumps into Neo4j-ready node and edge tables.

Phase 1 (pages):
  - Join wikipedia_links and labels on the DBpedia resource key.
  - Assign dense page ids, checkpoint them, emit page nodes.
  - Encode page_links against the frozen page ids and emit the link table.

Phase 2 (categories):
  - Group article_categories by category key.
  - Assign category ids after the largest page id, emit category nodes
    and (optionally) page -> category membership edges.
"""

from __future__ import annotations

import hydra
from omegaconf import DictConfig, OmegaConf

from dbpedia_graph.data.pipeline_main import build_pipeline
from dbpedia_graph.utils.logging_utils import get_logger, init_logging, log_event

LOGGER = get_logger(__name__)


@hydra.main(version_base=None, config_path="../configs", config_name="build_graph")
def main(cfg: DictConfig) -> None:
    init_logging(log_path=cfg.get("log_path"), level=str(cfg.get("log_level", "INFO")).upper())
    log_event(LOGGER, "config", cfg=OmegaConf.to_container(cfg, resolve=True))
    build_pipeline(cfg)


if __name__ == "__main__":
    main()
