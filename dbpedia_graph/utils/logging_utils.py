from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_ROOT_LOGGER_NAME = "dbpedia_graph"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def init_logging(*, log_path: Optional[str | Path] = None, level: int | str = logging.INFO) -> logging.Logger:
    """Attach stream (and optional file) handlers to the package logger.

    Safe to call more than once: handlers installed by a previous call are replaced.
    """

    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    formatter = logging.Formatter(_LOG_FORMAT)
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if log_path is not None:
        path = Path(log_path).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger


def log_event(logger: logging.Logger, event: str, *, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a single structured event line: ``<event> {json fields}``."""

    if not logger.isEnabledFor(level):
        return
    if fields:
        payload = json.dumps(fields, sort_keys=True, default=str, ensure_ascii=False)
        logger.log(level, "%s %s", event, payload)
    else:
        logger.log(level, "%s", event)
