"""Action classifier: pair residual nodes into CREATE, UPDATE and DELETE.

Architecture:
- FIRST_FIT (default): the modified forest is scanned from its last node to
  its first.  For each modified node the unconsumed existing nodes are
  scanned from last to first, and the first one whose aggregate difference
  does not touch a critical field becomes its UPDATE partner.  A modified
  node with no such partner is a CREATE.  The result depends on forest
  order; it is deterministic for a given order.
- MIN_DEGREE: every (modified, existing) pair is scored up front, critical
  pairs are forbidden with ``np.inf``, and ``match_by_degree`` picks the
  assignment with the lowest summed difference degree.

Both strategies emit CREATE/UPDATE in reverse modified-forest order and
DELETE in existing-forest order.  Existing nodes never paired are DELETEs.
The input sequences are never mutated; consumption is tracked by index.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

import numpy as np

from dom_delta.algorithm.config import ClassifierConfig, MatchStrategy
from dom_delta.algorithm.degree import aggregate_difference
from dom_delta.algorithm.matcher import match_by_degree
from dom_delta.exceptions import UnclassifiedNodesError
from dom_delta.result import ClassificationResult

if TYPE_CHECKING:
    from lxml.etree import _Element

    from dom_delta.protocols import PathSelector, TreeEqualityChecker

__all__ = ["classify"]

_log = logging.getLogger(__name__)


def classify(
    existing: Sequence[_Element],
    modified: Sequence[_Element],
    related_paths: Sequence[str],
    critical_fields: Collection[str],
    checker: TreeEqualityChecker,
    selector: PathSelector,
    config: ClassifierConfig | None = None,
    logger: logging.Logger | None = None,
) -> ClassificationResult:
    """Classify every node of both forests as CREATE, UPDATE or DELETE.

    Args:
        existing:        Residual existing forest (after the exact filter).
        modified:        Residual modified forest (after the exact filter).
        related_paths:   Related-path expressions, in significant order.
        critical_fields: Field names whose change forbids an UPDATE pairing.
        checker:         Tree equality checker.
        selector:        Path selector for related nodes.
        config:          Strategy and scoring parameters.
        logger:          Diagnostics sink.  Defaults to this module's logger.

    Returns:
        A ``ClassificationResult``; ``as_action_map()`` gives the ActionMap.

    Raises:
        UnclassifiedNodesError: If a modified node was left without an action.
        AmbiguousRelatedNodeError: If a related path selects several nodes.
    """
    config = config if config is not None else ClassifierConfig()
    log = logger if logger is not None else _log

    strategy = (
        _min_degree_matches
        if config.strategy == MatchStrategy.MIN_DEGREE
        else _first_fit_matches
    )
    matches = strategy(
        existing,
        modified,
        related_paths,
        critical_fields,
        checker,
        selector,
        config,
        log,
    )

    result = ClassificationResult()
    classified: set[int] = set()
    paired: set[int] = set()
    for j in range(len(modified) - 1, -1, -1):
        node = modified[j]
        i = matches.get(j)
        if i is None:
            result.create.append(node)
            log.debug("C - Flagged modified node %d for CREATE action", j)
        elif i in paired:
            # An existing node can back a single UPDATE only.
            continue
        else:
            result.update.append(node)
            result.pairs.append((existing[i], node))
            paired.add(i)
            log.debug("U - Flagged modified node %d for UPDATE action", j)
        classified.add(j)

    remaining = len(modified) - len(classified)
    if remaining:
        log.error(
            "DANGER: %d modified node(s) left unclassified; this is a logic error "
            "in the classifier",
            remaining,
        )
        raise UnclassifiedNodesError(remaining)

    result.delete.extend(n for i, n in enumerate(existing) if i not in paired)
    if result.delete:
        log.debug("R - Flagged %d node(s) for DELETE action", len(result.delete))

    log.info(
        "Action summary: %d flagged for CREATE, %d flagged for UPDATE, "
        "%d flagged for DELETE",
        len(result.create),
        len(result.update),
        len(result.delete),
    )
    return result


def _first_fit_matches(
    existing: Sequence[_Element],
    modified: Sequence[_Element],
    related_paths: Sequence[str],
    critical_fields: Collection[str],
    checker: TreeEqualityChecker,
    selector: PathSelector,
    config: ClassifierConfig,
    log: logging.Logger,
) -> dict[int, int]:
    """Map modified index to existing index using reverse-scan first fit."""
    matches: dict[int, int] = {}
    consumed: set[int] = set()
    for j in range(len(modified) - 1, -1, -1):
        for i in range(len(existing) - 1, -1, -1):
            if i in consumed:
                continue
            report = aggregate_difference(
                existing[i],
                modified[j],
                related_paths,
                critical_fields,
                checker,
                selector,
                config,
            )
            log.debug(
                "existing %d/%d vs modified %d/%d: %s",
                i,
                len(existing),
                j,
                len(modified),
                report,
            )
            if not report.diff_is_in_critical_nodes:
                matches[j] = i
                consumed.add(i)
                break
    return matches


def _min_degree_matches(
    existing: Sequence[_Element],
    modified: Sequence[_Element],
    related_paths: Sequence[str],
    critical_fields: Collection[str],
    checker: TreeEqualityChecker,
    selector: PathSelector,
    config: ClassifierConfig,
    log: logging.Logger,
) -> dict[int, int]:
    """Map modified index to existing index by minimum summed degree."""
    cost = np.full((len(modified), len(existing)), np.inf, dtype=float)
    for j, mod_node in enumerate(modified):
        for i, exist_node in enumerate(existing):
            report = aggregate_difference(
                exist_node,
                mod_node,
                related_paths,
                critical_fields,
                checker,
                selector,
                config,
            )
            log.debug("existing %d vs modified %d: %s", i, j, report)
            if not report.diff_is_in_critical_nodes:
                cost[j, i] = report.diff_degree

    return match_by_degree(cost)
