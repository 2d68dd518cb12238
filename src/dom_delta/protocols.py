"""Capability Protocols consumed by the dom-delta core.

The core never imports a concrete checker or selector.  It only relies on
these structural interfaces, so callers can plug in their own comparison or
path-resolution logic without inheriting from any base class.

Example::

    from dom_delta.protocols import TreeEqualityChecker
    from dom_delta.result import ComparisonOutcome

    class TagOnlyChecker:
        def compare(self, node_a, node_b) -> ComparisonOutcome:
            return ComparisonOutcome(equal=node_a.tag == node_b.tag)

    assert isinstance(TagOnlyChecker(), TreeEqualityChecker)  # True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lxml.etree import _Element

    from dom_delta.result import ComparisonOutcome


@runtime_checkable
class TreeEqualityChecker(Protocol):
    """Structural protocol for tree equality checkers.

    ``compare`` must be deterministic, side-effect free and symmetric in the
    number of differences it reports.  Either argument may be ``None`` (an
    absent related node).
    """

    def compare(
        self, node_a: _Element | None, node_b: _Element | None
    ) -> ComparisonOutcome: ...


@runtime_checkable
class PathSelector(Protocol):
    """Structural protocol for resolving path expressions against a node.

    ``select_one`` returns the single match or ``None`` and must raise
    ``AmbiguousRelatedNodeError`` when more than one node matches.
    """

    def select_one(self, path: str, node: _Element) -> _Element | None: ...

    def select_all(self, path: str, node: _Element) -> list[_Element]: ...
