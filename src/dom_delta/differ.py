"""NodeDiffer: orchestrator that wires checker, selector, config and logger.

This is the wiring layer between the algorithm functions and the public
API.  Each entry point of the algorithm subpackage is exposed as a method
that supplies the injected capabilities.

Architecture:
- ``exact_match_filter`` drops identical pairs.
- ``classify`` pairs the residual forests and returns a rich
  ``ClassificationResult``; ``classify_actions`` returns only its ActionMap.
- ``diff_forests`` runs both stages in sequence.
- ``diff_documents`` parses two XML texts, selects the forests to compare
  and runs ``diff_forests``.  With no current document every selected node
  is a CREATE.

A ``NodeDiffer`` holds no state between calls apart from the selector's
compiled-expression cache, which never affects results.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

from dom_delta.algorithm.classifier import classify
from dom_delta.algorithm.config import ClassifierConfig
from dom_delta.algorithm.degree import aggregate_difference, difference_degree
from dom_delta.algorithm.exact import exact_match_filter
from dom_delta.result import (
    ActionMap,
    ClassificationResult,
    DifferenceReport,
    ExactMatchResult,
)
from dom_delta.tree.builder import parse_document, select_forest
from dom_delta.tree.checker import DomEqualityChecker
from dom_delta.tree.selector import XPathSelector

if TYPE_CHECKING:
    from lxml.etree import _Element

    from dom_delta.protocols import PathSelector, TreeEqualityChecker

__all__ = ["NodeDiffer"]

_log = logging.getLogger(__name__)


class NodeDiffer:
    """Orchestrator for node correlation and action classification.

    Example::

        from dom_delta.differ import NodeDiffer

        differ = NodeDiffer()
        actions = differ.diff_documents(
            old_xml, new_xml, "//nutrition/food", critical_fields=["name", "mfr"]
        )
        # {"update": [<food>], "create": [<food>]}
    """

    def __init__(
        self,
        config: ClassifierConfig | None = None,
        checker: TreeEqualityChecker | None = None,
        selector: PathSelector | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialise the differ.

        Args:
            config:   Strategy and scoring parameters.  Defaults to
                ``ClassifierConfig()``.
            checker:  A TreeEqualityChecker-conformant object.  Defaults to
                ``DomEqualityChecker(strip_text=config.strip_text)``.
            selector: A PathSelector-conformant object.  Defaults to
                ``XPathSelector()``.
            logger:   Diagnostics sink.  Defaults to this module's logger.
        """
        self._config: ClassifierConfig = (
            config if config is not None else ClassifierConfig()
        )
        self._checker: TreeEqualityChecker = (
            checker
            if checker is not None
            else DomEqualityChecker(strip_text=self._config.strip_text)
        )
        self._selector: PathSelector = (
            selector if selector is not None else XPathSelector()
        )
        self._logger = logger if logger is not None else _log

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    # ------------------------------------------------------------------
    # Core entry points
    # ------------------------------------------------------------------

    def exact_match_filter(
        self,
        existing: Sequence[_Element],
        modified: Sequence[_Element],
        related_paths: Sequence[str] = (),
    ) -> ExactMatchResult:
        return exact_match_filter(
            existing,
            modified,
            related_paths,
            self._checker,
            self._selector,
            self._logger,
        )

    def difference_degree(
        self,
        exist_node: _Element | None,
        mod_node: _Element | None,
        critical_fields: Collection[str] = (),
    ) -> DifferenceReport:
        report = difference_degree(
            exist_node, mod_node, critical_fields, self._checker, self._config
        )
        self._logger.debug("Node difference: %s", report)
        return report

    def aggregate_difference(
        self,
        exist_node: _Element,
        mod_node: _Element,
        related_paths: Sequence[str] = (),
        critical_fields: Collection[str] = (),
    ) -> DifferenceReport:
        self._logger.debug("Calculating node aggregate difference")
        return aggregate_difference(
            exist_node,
            mod_node,
            related_paths,
            critical_fields,
            self._checker,
            self._selector,
            self._config,
        )

    def classify(
        self,
        existing: Sequence[_Element],
        modified: Sequence[_Element],
        related_paths: Sequence[str] = (),
        critical_fields: Collection[str] = (),
    ) -> ClassificationResult:
        return classify(
            existing,
            modified,
            related_paths,
            critical_fields,
            self._checker,
            self._selector,
            self._config,
            self._logger,
        )

    def classify_actions(
        self,
        existing: Sequence[_Element],
        modified: Sequence[_Element],
        related_paths: Sequence[str] = (),
        critical_fields: Collection[str] = (),
    ) -> ActionMap:
        return self.classify(
            existing, modified, related_paths, critical_fields
        ).as_action_map()

    # ------------------------------------------------------------------
    # Pipelines
    # ------------------------------------------------------------------

    def diff_forests(
        self,
        existing: Sequence[_Element],
        modified: Sequence[_Element],
        related_paths: Sequence[str] = (),
        critical_fields: Collection[str] = (),
    ) -> ActionMap:
        """Run the exact filter and then classify the residual forests."""
        residual = self.exact_match_filter(existing, modified, related_paths)
        return self.classify_actions(
            residual.unique_existing,
            residual.unique_modified,
            related_paths,
            critical_fields,
        )

    def diff_documents(
        self,
        current_xml: str | bytes | None,
        new_xml: str | bytes,
        forest_path: str,
        critical_fields: Collection[str] = (),
        related_paths: Sequence[str] = (),
    ) -> ActionMap:
        """Parse two XML documents and classify the forests ``forest_path`` selects.

        Args:
            current_xml:     Current document text.  Empty or None means there
                is nothing to compare against; every selected node is then a
                CREATE, in document order.
            new_xml:         New document text.
            forest_path:     XPath selecting the comparable entries, e.g.
                ``"//nutrition/food"``.
            critical_fields: Field names whose change forbids an UPDATE.
            related_paths:   Related-path expressions relative to each entry.

        Raises:
            DocumentParseError: If either document is malformed.
        """
        modified = select_forest(parse_document(new_xml), forest_path, self._selector)
        if not current_xml:
            self._logger.debug(
                "No current document; flagging %d node(s) for CREATE", len(modified)
            )
            return ClassificationResult(create=list(modified)).as_action_map()

        existing = select_forest(
            parse_document(current_xml), forest_path, self._selector
        )
        return self.diff_forests(existing, modified, related_paths, critical_fields)
