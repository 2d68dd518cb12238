"""XPathCache: LRU cache of compiled XPath expressions.

Related paths are evaluated once per candidate pair, so the same handful of
expressions is compiled over and over during classification.  This cache
keeps the compiled ``lxml.etree.XPath`` objects in memory.  LRU eviction
occurs silently when ``max_size`` is exceeded.

Each ``XPathCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state, so two separate instances never interfere with
each other.

Example::

    from dom_delta.cache import XPathCache

    cache = XPathCache(max_size=128)
    expr = cache.compile("../serving")      # compiled and stored
    expr_again = cache.compile("../serving")  # served from memory
"""

from __future__ import annotations

from cachetools import LRUCache
from lxml import etree

from dom_delta.exceptions import RelatedPathError

__all__ = ["XPathCache"]


class XPathCache:
    """LRU-backed store of compiled XPath expressions.

    Args:
        max_size: Maximum number of compiled expressions to hold.  Defaults
            to 128.  When exceeded, the least-recently-used entry is evicted.
    """

    def __init__(self, max_size: int = 128) -> None:
        self._cache: LRUCache[str, etree.XPath] = LRUCache(maxsize=max_size)

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    def compile(self, path: str) -> etree.XPath:
        """Return the compiled expression for ``path``, compiling on a miss.

        Raises:
            RelatedPathError: If ``path`` is not a valid XPath expression.
        """
        expr = self._cache.get(path)
        if expr is None:
            try:
                expr = etree.XPath(path)
            except etree.XPathSyntaxError as exc:
                raise RelatedPathError(path, f"invalid XPath ({exc})") from exc
            self._cache[path] = expr
        return expr
