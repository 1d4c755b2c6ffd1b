from dbpedia_graph.data.schema.constants import IdentityFields
from dbpedia_graph.data.schema.types import (
    CategoryStageResult,
    EdgeStageOutput,
    EncodedEdge,
    GraphBuildSummary,
    IdentityAssigner,
    IdentityMap,
    NodeStageOutput,
    PageStageResult,
    SourceSpec,
    StageCounters,
    TableSpec,
    TripleProfile,
)

__all__ = [
    "CategoryStageResult",
    "EdgeStageOutput",
    "EncodedEdge",
    "GraphBuildSummary",
    "IdentityAssigner",
    "IdentityFields",
    "IdentityMap",
    "NodeStageOutput",
    "PageStageResult",
    "SourceSpec",
    "StageCounters",
    "TableSpec",
    "TripleProfile",
]
