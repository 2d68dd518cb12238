"""DomEqualityChecker: default TreeEqualityChecker for lxml elements.

Walks two element trees in lockstep and records every discrepancy as a
``Difference`` whose path names the node (or ``@attribute``) involved.
The walk order is fixed, so the records come out in the same order on
every run.

Comparison rules, applied per element pair:

- Tag mismatch: a single TAG record; the subtree is not descended.
- Attributes: compared by sorted name; missing, extra and changed values
  each produce one record at ``<path>/@<name>``.
- Text: compared after optional ``str.strip()``; a change produces one TEXT
  record at the element's own path.
- Child elements: paired by position.  Surplus children on either side
  produce one CHILD_MISSING / CHILD_EXTRA record each.
- Tail text of paired children (mixed content) follows the text rule; a
  change produces one TEXT record at the parent's path.

Comments and processing instructions are ignored.  Every rule
reports one record whichever side holds the extra content, so
``compare(a, b)`` and ``compare(b, a)`` report the same number of records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from dom_delta.result import ComparisonOutcome, Difference, DifferenceKind

if TYPE_CHECKING:
    from lxml.etree import _Element

__all__ = ["DomEqualityChecker", "child_count", "element_children", "local_name"]


def local_name(node: _Element) -> str:
    """Tag without its ``{namespace}`` prefix."""
    tag = str(node.tag)
    return tag.rsplit("}", 1)[-1]


def element_children(node: _Element) -> list[_Element]:
    """Child elements only (comments and processing instructions dropped)."""
    return [child for child in node if isinstance(child.tag, str)]


def child_count(node: _Element | None) -> int:
    """Number of child nodes as a whitespace-stripped DOM would count them.

    Element children, plus one for non-blank text and one for each non-blank
    tail between or after them.  An absent node has none.
    """
    if node is None:
        return 0
    children = element_children(node)
    count = len(children)
    if node.text is not None and node.text.strip():
        count += 1
    count += sum(1 for child in children if child.tail and child.tail.strip())
    return count


@dataclass
class DomEqualityChecker:
    """Structural equality checker over lxml elements.

    Satisfies the ``TreeEqualityChecker`` Protocol structurally.

    Attributes:
        strip_text: Compare text after ``str.strip()``.  Defaults to True.

    Example::

        from lxml import etree
        checker = DomEqualityChecker()
        outcome = checker.compare(
            etree.fromstring('<food mfr="X"/>'),
            etree.fromstring('<food mfr="Y"/>'),
        )
        # outcome.equal is False
        # outcome.differences[0].path == "/food/@mfr"
    """

    strip_text: bool = True

    def compare(
        self, node_a: _Element | None, node_b: _Element | None
    ) -> ComparisonOutcome:
        """Compare two elements (either may be ``None``).

        Args:
            node_a: Existing-side element, or None when absent.
            node_b: Modified-side element, or None when absent.

        Returns:
            A ``ComparisonOutcome`` with ``equal`` True iff no differences.
        """
        if node_a is None and node_b is None:
            return ComparisonOutcome(equal=True)

        if node_a is None or node_b is None:
            if node_a is None:
                present, side = node_b, "modified"
            else:
                present, side = node_a, "existing"
            record = Difference(
                path=f"/{local_name(present)}",
                kind=DifferenceKind.MISSING_NODE,
                message=f"node present only on the {side} side",
            )
            return ComparisonOutcome(equal=False, differences=(record,))

        differences: list[Difference] = []
        self._compare_elements(node_a, node_b, f"/{local_name(node_a)}", differences)
        return ComparisonOutcome(
            equal=not differences, differences=tuple(differences)
        )

    # ------------------------------------------------------------------
    # Recursive walk
    # ------------------------------------------------------------------

    def _compare_elements(
        self,
        node_a: _Element,
        node_b: _Element,
        path: str,
        out: list[Difference],
    ) -> None:
        if node_a.tag != node_b.tag:
            out.append(
                Difference(
                    path=path,
                    kind=DifferenceKind.TAG,
                    message=(
                        f"expected element {node_a.tag!r} instead of {node_b.tag!r}"
                    ),
                )
            )
            return

        self._compare_attributes(node_a, node_b, path, out)

        text_a = self._text(node_a)
        text_b = self._text(node_b)
        if text_a != text_b:
            out.append(
                Difference(
                    path=path,
                    kind=DifferenceKind.TEXT,
                    message=f"expected text {text_a!r} instead of {text_b!r}",
                )
            )

        children_a = element_children(node_a)
        children_b = element_children(node_b)
        for child_a, child_b in zip(children_a, children_b, strict=False):
            self._compare_elements(
                child_a, child_b, f"{path}/{local_name(child_a)}", out
            )
            tail_a = self._normalize(child_a.tail)
            tail_b = self._normalize(child_b.tail)
            if tail_a != tail_b:
                out.append(
                    Difference(
                        path=path,
                        kind=DifferenceKind.TEXT,
                        message=(
                            f"expected text {tail_a!r} after {child_a.tag!r} "
                            f"instead of {tail_b!r}"
                        ),
                    )
                )

        shared = min(len(children_a), len(children_b))
        for child in children_a[shared:]:
            out.append(
                Difference(
                    path=f"{path}/{local_name(child)}",
                    kind=DifferenceKind.CHILD_MISSING,
                    message=f"element {child.tag!r} missing from modified node",
                )
            )
        for child in children_b[shared:]:
            out.append(
                Difference(
                    path=f"{path}/{local_name(child)}",
                    kind=DifferenceKind.CHILD_EXTRA,
                    message=f"extra element {child.tag!r} in modified node",
                )
            )

    def _compare_attributes(
        self,
        node_a: _Element,
        node_b: _Element,
        path: str,
        out: list[Difference],
    ) -> None:
        attrs_a = node_a.attrib
        attrs_b = node_b.attrib
        for name in sorted(set(attrs_a) | set(attrs_b)):
            attr_path = f"{path}/@{name.rsplit('}', 1)[-1]}"
            if name not in attrs_b:
                out.append(
                    Difference(
                        path=attr_path,
                        kind=DifferenceKind.ATTRIBUTE_MISSING,
                        message=f"attribute {name!r} missing from modified node",
                    )
                )
            elif name not in attrs_a:
                out.append(
                    Difference(
                        path=attr_path,
                        kind=DifferenceKind.ATTRIBUTE_EXTRA,
                        message=f"extra attribute {name!r} in modified node",
                    )
                )
            elif attrs_a[name] != attrs_b[name]:
                out.append(
                    Difference(
                        path=attr_path,
                        kind=DifferenceKind.ATTRIBUTE_VALUE,
                        message=(
                            f"attribute {name!r}: expected {attrs_a[name]!r} "
                            f"instead of {attrs_b[name]!r}"
                        ),
                    )
                )

    def _text(self, node: _Element) -> str:
        return self._normalize(node.text)

    def _normalize(self, text: str | None) -> str:
        text = text or ""
        return text.strip() if self.strip_text else text
