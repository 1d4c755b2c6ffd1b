from __future__ import annotations

import glob
from pathlib import Path
from typing import Iterator, List, Sequence

from dbpedia_graph.data.schema.constants import _MIN_CHUNK_SIZE, _SOURCE_ENCODING, _SOURCE_PART_GLOB

_GLOB_CHARS = ("*", "?", "[")


def resolve_source_paths(source: str | Path) -> List[Path]:
    """Expand a source location into its files.

    A location is a single file, a directory of ``part-*`` shards (falling back
    to every regular file in it), or a glob pattern.
    """

    source_str = str(source)
    if any(char in source_str for char in _GLOB_CHARS):
        paths = sorted(Path(p) for p in glob.glob(source_str))
        paths = [p for p in paths if p.is_file()]
        if not paths:
            raise FileNotFoundError(f"No triple files match {source_str}")
        return paths
    path = Path(source_str)
    if path.is_file():
        return [path]
    if path.is_dir():
        parts = sorted(p for p in path.glob(_SOURCE_PART_GLOB) if p.is_file())
        if not parts:
            parts = sorted(p for p in path.iterdir() if p.is_file() and not p.name.startswith((".", "_")))
        if not parts:
            raise FileNotFoundError(f"Triple directory {path} contains no files")
        return parts
    raise FileNotFoundError(f"Missing triple source: {path}")


def iter_lines(paths: Sequence[Path]) -> Iterator[str]:
    for path in paths:
        # Undecodable bytes are replaced; the parser rejects whatever no longer matches.
        with path.open("r", encoding=_SOURCE_ENCODING, errors="replace") as handle:
            for line in handle:
                yield line.rstrip("\r\n")


def iter_partitions(paths: Sequence[Path], chunk_size: int) -> Iterator[List[str]]:
    if chunk_size < _MIN_CHUNK_SIZE:
        raise ValueError(f"chunk_size must be >= {_MIN_CHUNK_SIZE}, got {chunk_size}")
    partition: List[str] = []
    for line in iter_lines(paths):
        partition.append(line)
        if len(partition) >= chunk_size:
            yield partition
            partition = []
    if partition:
        yield partition
