"""Typed errors raised by dom-delta.

Every error derives from ``DomDeltaError`` so callers can catch the whole
family at once.  Each also derives from the closest built-in exception so
existing ``except ValueError`` / ``except RuntimeError`` handlers keep working.
"""

from __future__ import annotations

__all__ = [
    "AmbiguousRelatedNodeError",
    "DocumentParseError",
    "DomDeltaError",
    "RelatedPathError",
    "UnclassifiedNodesError",
]


class DomDeltaError(Exception):
    """Base class for all dom-delta errors."""


class UnclassifiedNodesError(DomDeltaError, RuntimeError):
    """Modified nodes were left without an action after classification.

    This signals a logic defect in the classifier, never bad input.  No
    partial ``ActionMap`` is returned when it is raised.

    Attributes:
        remaining: Number of modified nodes left unclassified.
    """

    def __init__(self, remaining: int) -> None:
        self.remaining = remaining
        super().__init__(
            f"{remaining} modified node(s) left unclassified after action "
            f"classification"
        )


class RelatedPathError(DomDeltaError, ValueError):
    """A related path did not resolve to an element (or nothing)."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"related path {path!r}: {message}")


class AmbiguousRelatedNodeError(RelatedPathError):
    """A related path resolved to more than one node.

    Attributes:
        path:  The offending XPath expression.
        count: How many nodes it selected.
    """

    def __init__(self, path: str, count: int) -> None:
        self.count = count
        super().__init__(path, f"ambiguous related node ({count} matches)")


class DocumentParseError(DomDeltaError, ValueError):
    """XML text could not be parsed into a document."""
