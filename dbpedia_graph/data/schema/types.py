from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re
from typing import Dict, Iterable, ItemsView, Iterator, Mapping, NamedTuple, Optional, Tuple, ValuesView

from dbpedia_graph.data.schema.constants import _ONE, _PAGE_ID_BASE


@dataclass(frozen=True)
class TripleProfile:
    """Line-shape rules for one source family.

    ``split_pattern`` cuts a raw triple line into fragments; the fragment holding
    ``predicate`` is discarded and the survivors are addressed by ``key_index``
    and ``value_index``.
    """

    name: str
    predicate: str
    exclude: Tuple[str, ...]
    split_pattern: re.Pattern
    key_index: int
    value_index: int
    literal_value: bool = False

    def matches(self, line: str) -> bool:
        if self.predicate not in line:
            return False
        return not any(pattern in line for pattern in self.exclude)


@dataclass(frozen=True)
class SourceSpec:
    name: str
    path: Path
    profile: TripleProfile


@dataclass(frozen=True)
class TableSpec:
    name: str
    path: Path
    header: str
    relation: Optional[str] = None


class EncodedEdge(NamedTuple):
    source_id: int
    target_id: int


class IdentityMap:
    """Read-only key -> id mapping.

    Holds its own copy of the entries and exposes no mutators. Equality and
    hashing are by identity; compare ``dict(a.items())`` for content.
    """

    __slots__ = ("_kind", "_key_to_id")

    def __init__(self, kind: str, key_to_id: Mapping[str, int]) -> None:
        self._kind = str(kind)
        self._key_to_id: Dict[str, int] = dict(key_to_id)

    @property
    def kind(self) -> str:
        return self._kind

    def get(self, key: str, default: Optional[int] = None) -> Optional[int]:
        return self._key_to_id.get(key, default)

    def __getitem__(self, key: str) -> int:
        idx = self._key_to_id.get(key)
        if idx is None:
            raise KeyError(f"Unknown {self._kind} key: {key}")
        return idx

    def __contains__(self, key: object) -> bool:
        return key in self._key_to_id

    def __len__(self) -> int:
        return len(self._key_to_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self._key_to_id)

    def __repr__(self) -> str:
        return f"IdentityMap(kind={self._kind!r}, size={len(self._key_to_id)})"

    def items(self) -> ItemsView[str, int]:
        return self._key_to_id.items()

    def ids(self) -> ValuesView[int]:
        return self._key_to_id.values()

    @property
    def max_id(self) -> Optional[int]:
        if not self._key_to_id:
            return None
        return max(self._key_to_id.values())

    @property
    def min_id(self) -> Optional[int]:
        if not self._key_to_id:
            return None
        return min(self._key_to_id.values())


class IdentityAssigner:
    """Collect distinct keys, then hand out dense ids starting at ``base``.

    Ids follow the sorted key order so the assignment does not depend on how
    the keys were partitioned or in which order partitions finished.
    """

    def __init__(self, kind: str, base: int = _PAGE_ID_BASE) -> None:
        self.kind = kind
        self.base = int(base)
        self._keys: set[str] = set()
        self._frozen: Optional[IdentityMap] = None

    def add_key(self, key: str) -> None:
        if self._frozen is not None:
            raise RuntimeError(f"Cannot add {self.kind} keys after freeze")
        if not key:
            raise ValueError(f"{self.kind} key must be non-empty")
        self._keys.add(key)

    def add_keys(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.add_key(key)

    def __len__(self) -> int:
        if self._frozen is not None:
            return len(self._frozen)
        return len(self._keys)

    def freeze(self) -> IdentityMap:
        if self._frozen is None:
            key_to_id = {key: self.base + idx for idx, key in enumerate(sorted(self._keys))}
            self._frozen = IdentityMap(self.kind, key_to_id)
            self._keys = set()
        return self._frozen

    @property
    def identity_map(self) -> IdentityMap:
        if self._frozen is None:
            raise RuntimeError(f"{self.kind} identity map is not frozen yet.")
        return self._frozen


@dataclass(frozen=True)
class NodeStageOutput:
    identity_map: IdentityMap
    rows: int
    counters: Dict[str, Dict[str, int]] = field(default_factory=dict)


@dataclass(frozen=True)
class EdgeStageOutput:
    rows: int
    counters: Dict[str, Dict[str, int]] = field(default_factory=dict)


@dataclass(frozen=True)
class PageStageResult:
    identity_map: IdentityMap
    page_rows: int
    edge_rows: int
    counters: Dict[str, Dict[str, int]] = field(default_factory=dict)
    reused: bool = False


@dataclass(frozen=True)
class CategoryStageResult:
    identity_map: IdentityMap
    category_rows: int
    membership_rows: int
    offset: int
    counters: Dict[str, Dict[str, int]] = field(default_factory=dict)


@dataclass
class GraphBuildSummary:
    run_id: str
    out_dir: Path
    pages: int = 0
    page_links: int = 0
    categories: int = 0
    category_links: int = 0
    category_offset: int = _PAGE_ID_BASE
    tables: Dict[str, Path] = field(default_factory=dict)
    counters: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def max_page_id(self) -> Optional[int]:
        if self.pages <= 0:
            return None
        return self.category_offset - _ONE


@dataclass
class StageCounters:
    values: Dict[str, int] = field(default_factory=dict)

    def add(self, key: str, amount: int = _ONE) -> None:
        self.values[key] = self.values.get(key, 0) + int(amount)

    def merge(self, other: Dict[str, int]) -> None:
        for key, amount in other.items():
            self.add(key, amount)

    def as_dict(self) -> Dict[str, int]:
        return dict(self.values)
