"""Result types for node comparison and action classification.

This module provides the value types passed between the checker, the degree
calculators and the classifier, plus the ``ActionMap`` returned to callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lxml.etree import _Element

__all__ = [
    "ActionMap",
    "ActionType",
    "ClassificationResult",
    "ComparisonOutcome",
    "Difference",
    "DifferenceKind",
    "DifferenceReport",
    "ExactMatchResult",
]


class ActionType(StrEnum):
    """Action to take for a node: the lowercased member name is the value."""

    CREATE = auto()
    UPDATE = auto()
    DELETE = auto()


ActionMap = dict[ActionType, list["_Element"]]


class DifferenceKind(StrEnum):
    """What kind of discrepancy a ``Difference`` record describes."""

    TAG = auto()
    ATTRIBUTE_MISSING = auto()
    ATTRIBUTE_EXTRA = auto()
    ATTRIBUTE_VALUE = auto()
    TEXT = auto()
    CHILD_MISSING = auto()
    CHILD_EXTRA = auto()
    MISSING_NODE = auto()


@dataclass(frozen=True, slots=True)
class Difference:
    """One discrepancy found by a tree equality checker.

    Attributes:
        path:    Slash path of the node where the discrepancy lies, e.g.
                 ``"/food/mfr"``.  Attribute discrepancies end in ``@name``.
        kind:    Category of the discrepancy.
        message: Human-readable description for logs.
    """

    path: str
    kind: DifferenceKind
    message: str = ""

    @property
    def field_name(self) -> str:
        """Last path segment without a leading ``@``."""
        return self.path.rsplit("/", 1)[-1].lstrip("@")


@dataclass(frozen=True, slots=True)
class ComparisonOutcome:
    """Result of comparing two trees: equality plus ordered differences."""

    equal: bool
    differences: tuple[Difference, ...] = ()


@dataclass(frozen=True, slots=True)
class DifferenceReport:
    """How different two candidate nodes are.

    Attributes:
        diff_count: Number of difference records.
        diff_degree: Normalised dissimilarity in [0.0, 1.0].  0.0 is identical.
        diff_is_in_critical_nodes: True when any difference names a critical
            field.  Such a pair never represents the same entity.
    """

    diff_count: int = 0
    diff_degree: float = 0.0
    diff_is_in_critical_nodes: bool = False

    def combine(self, related: DifferenceReport) -> DifferenceReport:
        """Fold a related node's report into this aggregate.

        Counts add up, the critical flags are OR-ed, and the degree is the
        running average ``(self + related) / 2``.  Applying this once per
        related path in order is not the same as a plain mean over all paths.
        """
        return DifferenceReport(
            diff_count=self.diff_count + related.diff_count,
            diff_degree=(self.diff_degree + related.diff_degree) / 2.0,
            diff_is_in_critical_nodes=(
                self.diff_is_in_critical_nodes or related.diff_is_in_critical_nodes
            ),
        )


@dataclass(frozen=True, slots=True)
class ExactMatchResult:
    """Residual forests after removing fully identical pairs.

    Attributes:
        unique_existing: Existing nodes with no identical modified node,
            in input order.
        unique_modified: Modified nodes with no identical existing node,
            in input order.
        eliminated_count: Number of identical pairs removed.
    """

    unique_existing: list[_Element]
    unique_modified: list[_Element]
    eliminated_count: int

    @property
    def difference_count(self) -> int:
        """Total number of nodes left in both residual forests."""
        return len(self.unique_existing) + len(self.unique_modified)


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Output of the action classifier.

    Attributes:
        create: Modified nodes with no counterpart.
        update: Modified nodes paired with an existing node (new version).
        delete: Existing nodes with no counterpart.
        pairs:  ``(existing, modified)`` pairs behind ``update``, same order.
    """

    create: list[_Element] = field(default_factory=list)
    update: list[_Element] = field(default_factory=list)
    delete: list[_Element] = field(default_factory=list)
    pairs: list[tuple[_Element, _Element]] = field(default_factory=list)

    def as_action_map(self) -> ActionMap:
        """Return an ``ActionMap`` holding only the non-empty lists."""
        actions: ActionMap = {}
        if self.create:
            actions[ActionType.CREATE] = list(self.create)
        if self.update:
            actions[ActionType.UPDATE] = list(self.update)
        if self.delete:
            actions[ActionType.DELETE] = list(self.delete)
        return actions
