from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from dbpedia_graph.data.io.paths import ensure_dir

_PARTIAL_SUFFIX = ".partial"


def write_manifest(payload: Dict[str, object], path: Path) -> None:
    """Write a stage manifest; it only appears under ``path`` once fully written."""

    ensure_dir(path.parent)
    partial = path.with_name(path.name + _PARTIAL_SUFFIX)
    partial.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    partial.replace(path)


def read_manifest(path: Path) -> Optional[Dict[str, object]]:
    if not path.exists():
        return None
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Stage manifest {path} must hold a JSON object.")
    return payload


def clear_manifest(path: Path) -> None:
    path.unlink(missing_ok=True)
