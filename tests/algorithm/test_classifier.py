"""Tests for the action classifier (classify).

Covers:
- Empty-forest scenarios (create-only, delete-only, nothing)
- Critical-field override sends the pair to DELETE + CREATE
- First-fit reverse-scan pairing and output ordering
- MIN_DEGREE strategy picks the lower-degree partner first-fit skips
- Completeness: every node lands in exactly one outcome
- Determinism and non-mutation of inputs
- Invariant violation raises UnclassifiedNodesError and logs at ERROR
- Related-path errors propagate
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import pytest
from lxml import etree

from dom_delta.algorithm import classifier as classifier_module
from dom_delta.algorithm.classifier import classify
from dom_delta.algorithm.config import ClassifierConfig, MatchStrategy
from dom_delta.algorithm.exact import exact_match_filter
from dom_delta.exceptions import AmbiguousRelatedNodeError, UnclassifiedNodesError
from dom_delta.result import ActionType
from dom_delta.tree.checker import DomEqualityChecker
from dom_delta.tree.selector import XPathSelector

FoodFactory = Callable[..., etree._Element]

CRITICAL = ["name", "mfr"]
MIN_DEGREE = ClassifierConfig(strategy=MatchStrategy.MIN_DEGREE)


# ---------------------------------------------------------------------------
# Trivial forests
# ---------------------------------------------------------------------------


class TestTrivialForests:
    def test_only_modified_node_is_created(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        node = food_factory()
        result = classify([], [node], [], CRITICAL, checker, selector)
        assert result.as_action_map() == {ActionType.CREATE: [node]}

    def test_only_existing_node_is_deleted(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        node = food_factory()
        result = classify([node], [], [], CRITICAL, checker, selector)
        assert result.as_action_map() == {ActionType.DELETE: [node]}

    def test_no_nodes_yields_empty_map(
        self, checker: DomEqualityChecker, selector: XPathSelector
    ) -> None:
        assert classify([], [], [], CRITICAL, checker, selector).as_action_map() == {}

    def test_action_keys_are_plain_strings(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        result = classify([], [food_factory()], [], CRITICAL, checker, selector)
        actions = result.as_action_map()
        assert "create" in actions


# ---------------------------------------------------------------------------
# Critical fields
# ---------------------------------------------------------------------------


class TestCriticalOverride:
    def test_critical_change_is_delete_plus_create(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        existing = food_factory(mfr="X")
        modified = food_factory(mfr="Y", carb="3")
        actions = classify(
            [existing], [modified], [], ["mfr"], checker, selector
        ).as_action_map()
        assert actions == {ActionType.CREATE: [modified], ActionType.DELETE: [existing]}
        assert ActionType.UPDATE not in actions

    def test_non_critical_change_is_update(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        existing = food_factory()
        modified = food_factory(carb="3")
        result = classify([existing], [modified], [], CRITICAL, checker, selector)
        assert result.as_action_map() == {ActionType.UPDATE: [modified]}
        assert result.pairs == [(existing, modified)]

    def test_critical_candidate_skipped_for_later_match(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        apple, bagel = food_factory(name="Apple"), food_factory(name="Bagel")
        modified = food_factory(name="Apple", carb="5")
        result = classify([apple, bagel], [modified], [], CRITICAL, checker, selector)
        assert result.pairs == [(apple, modified)]
        assert result.delete == [bagel]


# ---------------------------------------------------------------------------
# First-fit ordering
# ---------------------------------------------------------------------------


class TestFirstFit:
    def test_reverse_scan_pairs_last_with_last(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        e0, e1 = food_factory(carb="1"), food_factory(carb="2")
        m0, m1 = food_factory(carb="3"), food_factory(carb="4")
        result = classify([e0, e1], [m0, m1], [], [], checker, selector)
        assert result.update == [m1, m0]
        assert result.pairs == [(e1, m1), (e0, m0)]

    def test_first_non_critical_candidate_wins_over_closer_one(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        close = food_factory(carb="2")
        far = food_factory(serving="99", carb="9")
        modified = food_factory(carb="3")
        result = classify([close, far], [modified], [], CRITICAL, checker, selector)
        assert result.pairs == [(far, modified)]
        assert result.delete == [close]

    def test_creates_in_reverse_modified_order(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        m0, m1 = food_factory(name="C"), food_factory(name="D")
        existing = [food_factory(name="A")]
        result = classify(existing, [m0, m1], [], CRITICAL, checker, selector)
        assert result.create == [m1, m0]

    def test_deletes_in_existing_order(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        e0, e1, e2 = (food_factory(name=n) for n in "ABC")
        result = classify([e0, e1, e2], [], [], CRITICAL, checker, selector)
        assert result.delete == [e0, e1, e2]


# ---------------------------------------------------------------------------
# Minimum-degree strategy
# ---------------------------------------------------------------------------


class TestMinDegree:
    def test_picks_closest_partner(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        close = food_factory(carb="2")
        far = food_factory(serving="99", carb="9")
        modified = food_factory(carb="3")
        result = classify(
            [close, far], [modified], [], CRITICAL, checker, selector, MIN_DEGREE
        )
        assert result.pairs == [(close, modified)]
        assert result.delete == [far]

    def test_critical_pairs_never_updated(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        existing = food_factory(mfr="X")
        modified = food_factory(mfr="Y")
        actions = classify(
            [existing], [modified], [], ["mfr"], checker, selector, MIN_DEGREE
        ).as_action_map()
        assert actions == {ActionType.CREATE: [modified], ActionType.DELETE: [existing]}

    def test_output_order_matches_first_fit_conventions(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        e0, e1 = food_factory(name="A"), food_factory(name="B")
        m0, m1, m2 = (food_factory(name=n) for n in "ABZ")
        result = classify(
            [e0, e1], [m0, m1, m2], [], CRITICAL, checker, selector, MIN_DEGREE
        )
        assert result.create == [m2]
        assert result.update == [m1, m0]
        assert result.pairs == [(e1, m1), (e0, m0)]


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    @pytest.mark.parametrize("strategy", list(MatchStrategy))
    def test_every_node_classified_exactly_once(
        self,
        strategy: MatchStrategy,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        existing = [
            food_factory(name="A"),
            food_factory(name="B"),
            food_factory(name="C", carb="5"),
            food_factory(name="E"),
        ]
        modified = [
            food_factory(name="A"),
            food_factory(name="B", mfr="Q"),
            food_factory(name="C", carb="6"),
            food_factory(name="D"),
        ]
        residual = exact_match_filter(existing, modified, [], checker, selector)
        result = classify(
            residual.unique_existing,
            residual.unique_modified,
            [],
            CRITICAL,
            checker,
            selector,
            ClassifierConfig(strategy=strategy),
        )
        seen = [id(n) for n in result.create + result.update + result.delete]
        seen += [id(e) for e, _m in result.pairs]
        assert len(seen) == len(set(seen))
        assert (
            2 * residual.eliminated_count
            + len(result.create)
            + 2 * len(result.update)
            + len(result.delete)
            == len(existing) + len(modified)
        )

    def test_deterministic_output(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        def run() -> dict[str, list[bytes]]:
            existing = [food_factory(name=n) for n in "ABC"]
            modified = [food_factory(name=n, carb="7") for n in "BCD"]
            actions = classify(
                existing, modified, [], CRITICAL, checker, selector
            ).as_action_map()
            return {
                str(k): [etree.tostring(n) for n in nodes]
                for k, nodes in actions.items()
            }

        assert run() == run()

    def test_inputs_not_mutated(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
    ) -> None:
        existing = [food_factory(name="A"), food_factory(name="B")]
        modified = [food_factory(name="A", carb="9")]
        snapshot_e, snapshot_m = list(existing), list(modified)
        classify(existing, modified, [], CRITICAL, checker, selector)
        assert existing == snapshot_e
        assert modified == snapshot_m


# ---------------------------------------------------------------------------
# Errors and logging
# ---------------------------------------------------------------------------


class TestErrors:
    def test_double_pairing_is_invariant_violation(
        self,
        monkeypatch: pytest.MonkeyPatch,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setattr(
            classifier_module, "_first_fit_matches", lambda *args: {0: 0, 1: 0}
        )
        with (
            caplog.at_level(logging.ERROR),
            pytest.raises(UnclassifiedNodesError) as excinfo,
        ):
            classify(
                [food_factory()],
                [food_factory(), food_factory()],
                [],
                CRITICAL,
                checker,
                selector,
            )
        assert excinfo.value.remaining == 1
        assert any(r.levelno == logging.ERROR for r in caplog.records)

    def test_invariant_violation_is_runtime_error(self) -> None:
        assert issubclass(UnclassifiedNodesError, RuntimeError)

    def test_ambiguous_related_path_propagates(
        self, checker: DomEqualityChecker, selector: XPathSelector
    ) -> None:
        doc = etree.fromstring("<d><food/><a/><a/></d>")
        food = doc.find("food")
        with pytest.raises(AmbiguousRelatedNodeError):
            classify([food], [food], ["following-sibling::a"], [], checker, selector)


class TestLogging:
    def test_summary_logged_at_info(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="dom_delta.algorithm.classifier"):
            classify(
                [food_factory()],
                [food_factory(carb="4")],
                [],
                CRITICAL,
                checker,
                selector,
            )
        messages = [r.getMessage() for r in caplog.records]
        assert (
            "Action summary: 0 flagged for CREATE, 1 flagged for UPDATE, "
            "0 flagged for DELETE"
        ) in messages

    def test_injected_logger_receives_records(
        self,
        checker: DomEqualityChecker,
        selector: XPathSelector,
        food_factory: FoodFactory,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        logger = logging.getLogger("tests.classifier")
        with caplog.at_level(logging.DEBUG, logger="tests.classifier"):
            classify(
                [food_factory()],
                [food_factory(carb="4")],
                [],
                CRITICAL,
                checker,
                selector,
                logger=logger,
            )
        assert caplog.records
        assert {r.name for r in caplog.records} == {"tests.classifier"}
