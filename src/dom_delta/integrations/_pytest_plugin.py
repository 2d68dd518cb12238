"""pytest plugin for dom-delta.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import Any

import pytest
from lxml import etree

from dom_delta import ClassifierConfig, NodeDiffer


@pytest.fixture(scope="session")
def assert_no_node_actions() -> Any:
    """Fixture that returns a callable asserting two forests need no action.

    The fixture is session-scoped because the returned callable is stateless
    (it creates a fresh NodeDiffer per call).

    Usage in tests::

        def test_roundtrip(assert_no_node_actions):
            assert_no_node_actions(parse_foods(old), parse_foods(new))

    Returns:
        A callable ``_assert(existing, modified, related_paths=(),
        critical_fields=(), config=None) -> None`` that raises
        ``AssertionError`` when the exact filter and classifier produce any
        action.
    """

    def _assert(
        existing: Sequence[etree._Element],
        modified: Sequence[etree._Element],
        related_paths: Sequence[str] = (),
        critical_fields: Collection[str] = (),
        config: ClassifierConfig | None = None,
    ) -> None:
        """Assert that ``existing`` and ``modified`` are identical forests.

        Raises:
            AssertionError: With each non-empty action list serialized.
        """
        actions = NodeDiffer(config=config).diff_forests(
            existing, modified, related_paths, critical_fields
        )
        if actions:
            lines = [
                f"  {action}: "
                + ", ".join(
                    etree.tostring(node, encoding="unicode", with_tail=False)
                    for node in nodes
                )
                for action, nodes in actions.items()
            ]
            raise AssertionError("forests differ:\n" + "\n".join(lines))

    return _assert
