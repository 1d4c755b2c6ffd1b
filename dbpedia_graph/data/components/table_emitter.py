from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re
from typing import IO, Iterable, List, Optional, Sequence

from dbpedia_graph.data.schema.constants import (
    _CATEGORY_TYPE_TAG,
    _DEFAULT_CHUNK_SIZE,
    _FIELD_SEPARATOR,
    _LINE_TERMINATOR,
    _MIN_CHUNK_SIZE,
    _PAGE_TYPE_TAG,
)

_PARTIAL_SUFFIX = ".partial"
_CELL_BREAKS_RE = re.compile(r"[\t\r\n]+")


def _cell(value: object) -> str:
    return _CELL_BREAKS_RE.sub(" ", str(value))


def format_row(cells: Sequence[object]) -> str:
    return _FIELD_SEPARATOR.join(_cell(cell) for cell in cells)


def format_page_row(page_id: int, values: Sequence[str]) -> str:
    return format_row([page_id, _PAGE_TYPE_TAG, *values])


def format_category_row(category_id: int, key: str) -> str:
    return format_row([category_id, _CATEGORY_TYPE_TAG, key])


def format_edge_row(source_id: int, target_id: int, relation: str) -> str:
    return format_row([source_id, target_id, relation])


@dataclass
class TableWriter:
    """Buffered tab-delimited table; the header is always the first line written.

    Rows go to a sibling ``.partial`` file that replaces ``path`` only on a clean
    ``close``. ``abort`` (or leaving the context on an exception) removes it, so
    ``path`` never holds a truncated table.
    """

    path: Path
    header: str
    chunk_size: int = _DEFAULT_CHUNK_SIZE
    rows_written: int = 0
    _pending: List[str] = field(default_factory=list)
    _handle: Optional[IO[str]] = None

    def __post_init__(self) -> None:
        if self.chunk_size < _MIN_CHUNK_SIZE:
            raise ValueError(f"chunk_size must be >= {_MIN_CHUNK_SIZE}, got {self.chunk_size}")
        if _LINE_TERMINATOR in self.header:
            raise ValueError(f"Table header for {self.path.name} must be a single line.")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.partial_path.open("w", encoding="utf-8", newline=_LINE_TERMINATOR)
        self._handle.write(self.header + _LINE_TERMINATOR)

    @property
    def partial_path(self) -> Path:
        return self.path.with_name(self.path.name + _PARTIAL_SUFFIX)

    def append(self, row: str) -> None:
        self._pending.append(row)
        if len(self._pending) >= self.chunk_size:
            self.flush()

    def extend(self, rows: Iterable[str]) -> None:
        for row in rows:
            self.append(row)

    def flush(self) -> None:
        if self._handle is None:
            raise RuntimeError(f"Table {self.path.name} is already closed.")
        if self._pending:
            self._handle.write(_LINE_TERMINATOR.join(self._pending) + _LINE_TERMINATOR)
            self.rows_written += len(self._pending)
            self._pending = []

    def close(self) -> None:
        if self._handle is None:
            return
        self.flush()
        self._handle.close()
        self._handle = None
        self.partial_path.replace(self.path)

    def abort(self) -> None:
        self._pending = []
        if self._handle is None:
            return
        self._handle.close()
        self._handle = None
        self.partial_path.unlink(missing_ok=True)

    def __enter__(self) -> "TableWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.abort()
        else:
            self.close()


def emit_table(path: Path, header: str, rows: Iterable[str], *, chunk_size: int = _DEFAULT_CHUNK_SIZE) -> int:
    with TableWriter(path=path, header=header, chunk_size=chunk_size) as writer:
        writer.extend(rows)
    return writer.rows_written
