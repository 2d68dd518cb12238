"""Difference degree and aggregate difference for candidate node pairs.

Formula::

    diff_degree = min(1, diff_count * 2 / (child_count(e) + child_count(m)))

``diff_count`` is doubled because two nodes are being compared; the
denominator is the total number of child nodes the two nodes have.  When
both nodes are childless the ratio is undefined and the degree is pinned to
0.0 for no differences and 1.0 otherwise.

The aggregate over related paths folds each related report into the
primary one with ``DifferenceReport.combine``: counts add, critical flags
OR, and the degree is the running average ``(aggregate + related) / 2``
applied in related-path order.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from typing import TYPE_CHECKING

from dom_delta.algorithm.config import ClassifierConfig, CriticalMatch
from dom_delta.result import Difference, DifferenceReport
from dom_delta.tree.checker import child_count

if TYPE_CHECKING:
    from lxml.etree import _Element

    from dom_delta.protocols import PathSelector, TreeEqualityChecker

__all__ = [
    "aggregate_difference",
    "difference_degree",
    "normalize_degree",
    "touches_critical_field",
]


def normalize_degree(diff_count: int, n_exist: int, n_mod: int) -> float:
    """Normalise a difference count to a degree in [0.0, 1.0].

    Args:
        diff_count: Number of difference records.
        n_exist:    Child count of the existing node.
        n_mod:      Child count of the modified node.

    Returns:
        0.0 means identical, 1.0 maximally different.
    """
    denominator = n_exist + n_mod
    if denominator == 0:
        return 0.0 if diff_count == 0 else 1.0
    return min(1.0, (diff_count * 2) / denominator)


def touches_critical_field(
    differences: Iterable[Difference],
    critical_fields: Collection[str],
    mode: CriticalMatch = CriticalMatch.SEGMENT,
) -> bool:
    """Return True if any difference names one of ``critical_fields``."""
    if not critical_fields:
        return False
    if mode == CriticalMatch.SUFFIX:
        return any(
            diff.path.endswith(name) for diff in differences for name in critical_fields
        )
    names = set(critical_fields)
    return any(diff.field_name in names for diff in differences)


def difference_degree(
    exist_node: _Element | None,
    mod_node: _Element | None,
    critical_fields: Collection[str],
    checker: TreeEqualityChecker,
    config: ClassifierConfig | None = None,
) -> DifferenceReport:
    """Quantify how different two candidate nodes are.

    Args:
        exist_node:      Node from the existing forest (None when absent).
        mod_node:        Node from the modified forest (None when absent).
        critical_fields: Field names whose change disqualifies the pair.
        checker:         Tree equality checker producing the difference records.
        config:          Scoring parameters.  Defaults to ``ClassifierConfig()``.

    Returns:
        A ``DifferenceReport`` for the pair.
    """
    config = config if config is not None else ClassifierConfig()
    differences = checker.compare(exist_node, mod_node).differences
    diff_count = len(differences)
    return DifferenceReport(
        diff_count=diff_count,
        diff_degree=normalize_degree(
            diff_count, child_count(exist_node), child_count(mod_node)
        ),
        diff_is_in_critical_nodes=touches_critical_field(
            differences, critical_fields, config.critical_match
        ),
    )


def aggregate_difference(
    exist_node: _Element,
    mod_node: _Element,
    related_paths: Sequence[str],
    critical_fields: Collection[str],
    checker: TreeEqualityChecker,
    selector: PathSelector,
    config: ClassifierConfig | None = None,
) -> DifferenceReport:
    """Difference report over a primary pair and its related nodes.

    Each related path is resolved against both primary nodes and scored with
    ``difference_degree``.  The reports are folded in ``related_paths`` order,
    which matters because the degree is a running average.

    Raises:
        AmbiguousRelatedNodeError: If a related path selects several nodes.
    """
    report = difference_degree(exist_node, mod_node, critical_fields, checker, config)
    for path in related_paths:
        related = difference_degree(
            selector.select_one(path, exist_node),
            selector.select_one(path, mod_node),
            critical_fields,
            checker,
            config,
        )
        report = report.combine(related)
    return report
