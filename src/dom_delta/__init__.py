"""dom-delta - classify changes between two forests of XML nodes."""

from __future__ import annotations

from dom_delta.algorithm.config import ClassifierConfig, CriticalMatch, MatchStrategy
from dom_delta.api import (
    aggregate_difference,
    classify_actions,
    difference_degree,
    document_actions,
    exact_match_filter,
)
from dom_delta.differ import NodeDiffer
from dom_delta.exceptions import (
    AmbiguousRelatedNodeError,
    DocumentParseError,
    DomDeltaError,
    RelatedPathError,
    UnclassifiedNodesError,
)
from dom_delta.result import (
    ActionMap,
    ActionType,
    ClassificationResult,
    DifferenceReport,
    ExactMatchResult,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "ActionMap",
    "ActionType",
    "AmbiguousRelatedNodeError",
    "ClassificationResult",
    "ClassifierConfig",
    "CriticalMatch",
    "DifferenceReport",
    "DocumentParseError",
    "DomDeltaError",
    "ExactMatchResult",
    "MatchStrategy",
    "NodeDiffer",
    "RelatedPathError",
    "UnclassifiedNodesError",
    "aggregate_difference",
    "classify_actions",
    "difference_degree",
    "document_actions",
    "exact_match_filter",
]
