"""XPathSelector: default PathSelector backed by lxml XPath.

Resolves related-path expressions relative to a context node.  Compiled
expressions are kept in a per-instance ``XPathCache``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from dom_delta.cache import XPathCache
from dom_delta.exceptions import AmbiguousRelatedNodeError, RelatedPathError

if TYPE_CHECKING:
    from lxml.etree import _Element

__all__ = ["XPathSelector"]


class XPathSelector:
    """Resolve XPath expressions to elements relative to a context node.

    Satisfies the ``PathSelector`` Protocol structurally.

    Args:
        max_cache_size: Maximum number of compiled expressions held in the
            per-instance LRU cache.  Defaults to 128.
    """

    def __init__(self, max_cache_size: int = 128) -> None:
        self._cache = XPathCache(max_size=max_cache_size)

    def select_all(self, path: str, node: _Element) -> list[_Element]:
        """Return every element ``path`` selects from ``node``, in document order.

        Raises:
            RelatedPathError: If the expression is invalid, cannot be
                evaluated, or selects something other than elements.
        """
        expr = self._cache.compile(path)
        try:
            result = expr(node)
        except etree.XPathEvalError as exc:
            raise RelatedPathError(path, f"evaluation failed ({exc})") from exc

        if not isinstance(result, list):
            raise RelatedPathError(
                path, f"expected a node-set, got {type(result).__name__}"
            )
        for item in result:
            if not isinstance(item, etree._Element) or not isinstance(item.tag, str):
                raise RelatedPathError(
                    path, f"selected a non-element result {item!r}"
                )
        return list(result)

    def select_one(self, path: str, node: _Element) -> _Element | None:
        """Return the single element ``path`` selects, or None when it selects none.

        Raises:
            AmbiguousRelatedNodeError: If more than one element is selected.
            RelatedPathError: See ``select_all``.
        """
        matches = self.select_all(path, node)
        if len(matches) > 1:
            raise AmbiguousRelatedNodeError(path, len(matches))
        return matches[0] if matches else None
