"""algorithm subpackage: exact filter, difference scoring and classification.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from dom_delta.algorithm import ClassifierConfig, MatchStrategy, classify
    from dom_delta.tree import DomEqualityChecker, XPathSelector

    result = classify(
        existing, modified, [], ["name", "mfr"],
        DomEqualityChecker(), XPathSelector(),
        ClassifierConfig(strategy=MatchStrategy.FIRST_FIT),
    )
"""

from __future__ import annotations

from dom_delta.algorithm.classifier import classify
from dom_delta.algorithm.config import ClassifierConfig, CriticalMatch, MatchStrategy
from dom_delta.algorithm.degree import aggregate_difference, difference_degree
from dom_delta.algorithm.exact import exact_match_filter

__all__ = [
    "ClassifierConfig",
    "CriticalMatch",
    "MatchStrategy",
    "aggregate_difference",
    "classify",
    "difference_degree",
    "exact_match_filter",
]
