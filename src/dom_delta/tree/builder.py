"""Document helpers: parse XML text and select the forests to compare.

These are the thin parsing and selection collaborators that feed forests
into the core.  Whitespace between tags is stripped before parsing so that
formatting differences never show up as text differences.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from lxml import etree

from dom_delta.exceptions import DocumentParseError
from dom_delta.tree.selector import XPathSelector

if TYPE_CHECKING:
    from lxml.etree import _Element

    from dom_delta.protocols import PathSelector

__all__ = ["log_nodes", "parse_document", "select_forest", "strip_tag_whitespace"]

_AFTER_TAG = re.compile(r">\s*")
_BEFORE_TAG = re.compile(r"\s*<")
_AFTER_TAG_BYTES = re.compile(rb">\s*")
_BEFORE_TAG_BYTES = re.compile(rb"\s*<")
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def strip_tag_whitespace(text: str) -> str:
    """Remove whitespace after every ``>`` and before every ``<``."""
    text = _AFTER_TAG.sub(">", text)
    return _BEFORE_TAG.sub("<", text)


def parse_document(text: str | bytes) -> _Element:
    """Parse XML text into its root element.

    Bytes are handed to lxml undecoded so the declared encoding applies.  A
    leading XML declaration on str input is dropped, since the text is
    already decoded.

    Args:
        text: XML document as str or bytes.

    Returns:
        The root element of the parsed document.

    Raises:
        DocumentParseError: If the text is not well-formed XML or cannot be
            decoded.
    """
    try:
        if isinstance(text, bytes):
            cleaned: str | bytes = _BEFORE_TAG_BYTES.sub(
                b"<", _AFTER_TAG_BYTES.sub(b">", text)
            )
        else:
            cleaned = strip_tag_whitespace(_XML_DECLARATION.sub("", text, count=1))
        return etree.fromstring(cleaned)
    except (etree.XMLSyntaxError, UnicodeError, ValueError) as exc:
        msg = f"could not parse XML document: {exc}"
        raise DocumentParseError(msg) from exc


def select_forest(
    document: _Element,
    path: str,
    selector: PathSelector | None = None,
) -> list[_Element]:
    """Return the elements ``path`` selects from ``document``.

    Example: ``select_forest(root, "//nutrition/food")``.
    """
    selector = selector if selector is not None else XPathSelector()
    return selector.select_all(path, document)


def log_nodes(nodes: Iterable[_Element], logger: logging.Logger) -> None:
    """Log the serialized form of each node at INFO level."""
    for node in nodes:
        logger.info(etree.tostring(node, encoding="unicode", with_tail=False))
