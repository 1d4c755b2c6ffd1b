from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pyarrow as pa
import pyarrow.parquet as pq

from dbpedia_graph.data.components.identity import identity_map_from_mapping
from dbpedia_graph.data.io.paths import ensure_dir
from dbpedia_graph.data.schema.constants import IdentityFields, _IDENTITY_PARQUET_FIELDS
from dbpedia_graph.data.schema.types import IdentityMap


def _validate_identity_schema(table: pa.Table, path: Path) -> None:
    missing = sorted(set(_IDENTITY_PARQUET_FIELDS) - set(table.column_names))
    if missing:
        raise ValueError(f"Identity index {path} is missing columns: {missing}")


def write_identity_map(identity_map: IdentityMap, output_path: Path) -> None:
    keys: List[str] = []
    ids: List[int] = []
    for key, idx in sorted(identity_map.items(), key=lambda item: item[1]):
        keys.append(key)
        ids.append(idx)
    table = pa.table(
        {
            IdentityFields.KEY: pa.array(keys, type=pa.string()),
            IdentityFields.ID: pa.array(ids, type=pa.int64()),
            IdentityFields.KIND: pa.array([identity_map.kind] * len(keys), type=pa.string()),
        }
    )
    ensure_dir(output_path.parent)
    pq.write_table(table, output_path, compression="zstd")


def load_identity_map(path: Path, *, kind: str) -> IdentityMap:
    if not path.exists():
        raise FileNotFoundError(f"Missing identity index: {path}")
    table = pq.read_table(path)
    _validate_identity_schema(table, path)
    kinds = set(table.column(IdentityFields.KIND).to_pylist())
    if kinds and kinds != {kind}:
        raise ValueError(f"Identity index {path} holds kinds {sorted(kinds)}, expected {kind!r}.")
    keys = table.column(IdentityFields.KEY).to_pylist()
    ids = table.column(IdentityFields.ID).to_pylist()
    mapping: Dict[str, int] = dict(zip(keys, ids))
    if len(mapping) != len(keys):
        raise ValueError(f"Identity index {path} contains duplicate keys.")
    return identity_map_from_mapping(mapping, kind=kind)
