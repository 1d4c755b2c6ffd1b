from __future__ import annotations

from typing import Dict, Sequence

from dbpedia_graph.data.schema.constants import _ZERO
from dbpedia_graph.data.schema.types import StageCounters


def _init_counters(keys: Sequence[str]) -> StageCounters:
    return StageCounters(values={key: _ZERO for key in keys})


def _safe_div(numer: int, denom: int) -> float:
    if denom <= _ZERO:
        return 0.0
    return float(numer) / float(denom)


def _drop_rate(counters: Dict[str, int], *, dropped: str, total: str) -> float:
    return round(_safe_div(counters.get(dropped, _ZERO), counters.get(total, _ZERO)), 6)
