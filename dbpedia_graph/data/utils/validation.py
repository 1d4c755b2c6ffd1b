from __future__ import annotations

from typing import List, Sequence

from dbpedia_graph.data.schema.constants import _REQUIRED_SOURCES, _TABLES


def _validate_source_names(names: Sequence[str], *, context: str) -> List[str]:
    normalized = [str(name) for name in names]
    unknown = sorted(set(normalized) - set(_REQUIRED_SOURCES))
    if unknown:
        raise ValueError(f"{context} contains unsupported sources: {unknown}. Expected one of {_REQUIRED_SOURCES}.")
    return normalized


def _validate_table_names(names: Sequence[str], *, context: str) -> List[str]:
    normalized = [str(name) for name in names]
    unknown = sorted(set(normalized) - set(_TABLES))
    if unknown:
        raise ValueError(f"{context} contains unsupported tables: {unknown}. Expected one of {_TABLES}.")
    return normalized
