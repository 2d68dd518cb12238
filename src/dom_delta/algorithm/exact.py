"""Exact-match filter: drop node pairs that are fully identical.

A pair is fully identical when the checker finds no difference between the
primary nodes and none between the nodes each related path resolves to.
Related nodes absent on both sides are equal; absent on one side only,
unequal.  Identical pairs need no action and are removed before
classification.

The scan runs over the modified forest from last to first and, for each
modified node, over the remaining existing nodes from last to first; the
first identical existing node wins.  The input sequences are never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from dom_delta.result import ExactMatchResult

if TYPE_CHECKING:
    from lxml.etree import _Element

    from dom_delta.protocols import PathSelector, TreeEqualityChecker

__all__ = ["exact_match_filter", "fully_equal"]

_log = logging.getLogger(__name__)


def fully_equal(
    exist_node: _Element,
    mod_node: _Element,
    related_paths: Sequence[str],
    checker: TreeEqualityChecker,
    selector: PathSelector,
) -> bool:
    """Return True if the primary nodes and all related nodes are equal."""
    if not checker.compare(exist_node, mod_node).equal:
        return False
    return all(
        checker.compare(
            selector.select_one(path, exist_node), selector.select_one(path, mod_node)
        ).equal
        for path in related_paths
    )


def exact_match_filter(
    existing: Sequence[_Element],
    modified: Sequence[_Element],
    related_paths: Sequence[str],
    checker: TreeEqualityChecker,
    selector: PathSelector,
    logger: logging.Logger | None = None,
) -> ExactMatchResult:
    """Remove fully identical pairs from two forests.

    Args:
        existing:      Existing forest.
        modified:      Modified forest.
        related_paths: Related-path expressions checked alongside each pair.
        checker:       Tree equality checker.
        selector:      Path selector for related nodes.
        logger:        Diagnostics sink.  Defaults to this module's logger.

    Returns:
        An ``ExactMatchResult`` with the unmatched nodes of each forest in
        their input order and the number of pairs removed.
    """
    log = logger if logger is not None else _log
    consumed_existing: set[int] = set()
    consumed_modified: set[int] = set()

    for j in range(len(modified) - 1, -1, -1):
        for i in range(len(existing) - 1, -1, -1):
            if i in consumed_existing:
                continue
            if fully_equal(existing[i], modified[j], related_paths, checker, selector):
                consumed_existing.add(i)
                consumed_modified.add(j)
                break

    result = ExactMatchResult(
        unique_existing=[
            n for i, n in enumerate(existing) if i not in consumed_existing
        ],
        unique_modified=[
            n for j, n in enumerate(modified) if j not in consumed_modified
        ],
        eliminated_count=len(consumed_modified),
    )
    log.debug(
        "Exact match eliminated %d identical pair(s); %d existing and %d modified "
        "node(s) remain",
        result.eliminated_count,
        len(result.unique_existing),
        len(result.unique_modified),
    )
    return result
