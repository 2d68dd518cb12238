"""Tree subpackage: default capabilities over lxml elements.

Re-exports the public API for the tree module:
- DomEqualityChecker: structural equality with ordered difference records
- XPathSelector: related-path resolution via lxml XPath
- parse_document / select_forest / strip_tag_whitespace: document helpers
- log_nodes: serialize nodes to a logger
"""

from dom_delta.tree.builder import (
    log_nodes,
    parse_document,
    select_forest,
    strip_tag_whitespace,
)
from dom_delta.tree.checker import DomEqualityChecker, child_count
from dom_delta.tree.selector import XPathSelector

__all__ = [
    "DomEqualityChecker",
    "XPathSelector",
    "child_count",
    "log_nodes",
    "parse_document",
    "select_forest",
    "strip_tag_whitespace",
]
