"""Public API functions for dom-delta.

This module provides the user-facing functions: exact_match_filter,
difference_degree, aggregate_difference, classify_actions and
document_actions.  Each call creates a fresh NodeDiffer to guarantee zero
global state mutation between calls.  Capabilities and the logger are
injected per call; omitted ones fall back to the lxml defaults and the
``dom_delta.differ`` module logger.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

from dom_delta.algorithm.config import ClassifierConfig
from dom_delta.differ import NodeDiffer
from dom_delta.result import ActionMap, DifferenceReport, ExactMatchResult

if TYPE_CHECKING:
    from lxml.etree import _Element

    from dom_delta.protocols import PathSelector, TreeEqualityChecker

__all__ = [
    "aggregate_difference",
    "classify_actions",
    "difference_degree",
    "document_actions",
    "exact_match_filter",
]


def exact_match_filter(
    existing: Sequence[_Element],
    modified: Sequence[_Element],
    related_paths: Sequence[str] = (),
    *,
    checker: TreeEqualityChecker | None = None,
    selector: PathSelector | None = None,
    logger: logging.Logger | None = None,
) -> ExactMatchResult:
    """Remove node pairs that are identical, related nodes included.

    Args:
        existing:      Existing forest.  Not mutated.
        modified:      Modified forest.  Not mutated.
        related_paths: Related-path expressions checked for each pair.
        checker:       Tree equality checker.  Defaults to ``DomEqualityChecker``.
        selector:      Path selector.  Defaults to ``XPathSelector``.
        logger:        Diagnostics sink.

    Returns:
        An ``ExactMatchResult`` with the unmatched nodes of both forests and
        the number of identical pairs eliminated.
    """
    differ = NodeDiffer(checker=checker, selector=selector, logger=logger)
    return differ.exact_match_filter(existing, modified, related_paths)


def difference_degree(
    exist_node: _Element | None,
    mod_node: _Element | None,
    critical_fields: Collection[str] = (),
    *,
    config: ClassifierConfig | None = None,
    checker: TreeEqualityChecker | None = None,
    logger: logging.Logger | None = None,
) -> DifferenceReport:
    """Return the ``DifferenceReport`` for two candidate nodes.

    When both nodes are childless the degree is 0.0 for no differences and
    1.0 otherwise.
    """
    differ = NodeDiffer(config=config, checker=checker, logger=logger)
    return differ.difference_degree(exist_node, mod_node, critical_fields)


def aggregate_difference(
    exist_node: _Element,
    mod_node: _Element,
    related_paths: Sequence[str] = (),
    critical_fields: Collection[str] = (),
    *,
    config: ClassifierConfig | None = None,
    checker: TreeEqualityChecker | None = None,
    selector: PathSelector | None = None,
    logger: logging.Logger | None = None,
) -> DifferenceReport:
    """Return the combined ``DifferenceReport`` of two nodes and their related nodes.

    Raises:
        AmbiguousRelatedNodeError: If a related path selects several nodes.
    """
    differ = NodeDiffer(
        config=config, checker=checker, selector=selector, logger=logger
    )
    return differ.aggregate_difference(
        exist_node, mod_node, related_paths, critical_fields
    )


def classify_actions(
    existing: Sequence[_Element],
    modified: Sequence[_Element],
    related_paths: Sequence[str] = (),
    critical_fields: Collection[str] = (),
    *,
    config: ClassifierConfig | None = None,
    checker: TreeEqualityChecker | None = None,
    selector: PathSelector | None = None,
    logger: logging.Logger | None = None,
) -> ActionMap:
    """Classify residual forests into CREATE, UPDATE and DELETE.

    Args:
        existing:        Existing forest, usually ``unique_existing`` from
                         ``exact_match_filter``.  Not mutated.
        modified:        Modified forest, usually ``unique_modified``.  Not mutated.
        related_paths:   Related-path expressions, in significant order.
        critical_fields: Field names whose change forbids an UPDATE pairing.
        config:          Strategy and scoring parameters.  Defaults to
                         first-fit.

    Returns:
        An ``ActionMap`` holding only the non-empty action lists.  UPDATE
        entries are the modified-forest nodes.

    Raises:
        UnclassifiedNodesError: If a modified node was left without an action.
        AmbiguousRelatedNodeError: If a related path selects several nodes.
    """
    differ = NodeDiffer(
        config=config, checker=checker, selector=selector, logger=logger
    )
    return differ.classify_actions(existing, modified, related_paths, critical_fields)


def document_actions(
    current_xml: str | bytes | None,
    new_xml: str | bytes,
    forest_path: str,
    critical_fields: Collection[str] = (),
    related_paths: Sequence[str] = (),
    *,
    config: ClassifierConfig | None = None,
    checker: TreeEqualityChecker | None = None,
    selector: PathSelector | None = None,
    logger: logging.Logger | None = None,
) -> ActionMap:
    """Parse two XML documents and classify the entries ``forest_path`` selects.

    With no current document every selected entry is a CREATE, in document
    order.  ``selector`` also resolves ``forest_path``.

    Raises:
        DocumentParseError: If either document is malformed.
    """
    differ = NodeDiffer(
        config=config, checker=checker, selector=selector, logger=logger
    )
    return differ.diff_documents(
        current_xml, new_xml, forest_path, critical_fields, related_paths
    )
