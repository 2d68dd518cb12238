"""Shared fixtures: default capabilities and sample nutrition entries."""

from __future__ import annotations

import pytest
from lxml import etree

from dom_delta.tree.checker import DomEqualityChecker
from dom_delta.tree.selector import XPathSelector

FOOD_TEMPLATE = (
    '<food name="{name}" mfr="{mfr}">'
    "<serving>{serving}</serving><calories>110</calories><fat>11</fat>"
    "<sodium>210</sodium><carb>{carb}</carb></food>"
)


def make_food(
    name: str = "A", mfr: str = "X", serving: str = "29", carb: str = "2"
) -> etree._Element:
    """Build a five-child ``<food>`` entry."""
    return etree.fromstring(
        FOOD_TEMPLATE.format(name=name, mfr=mfr, serving=serving, carb=carb)
    )


@pytest.fixture
def checker() -> DomEqualityChecker:
    return DomEqualityChecker()


@pytest.fixture
def selector() -> XPathSelector:
    return XPathSelector()


@pytest.fixture
def food_factory():  # type: ignore[no-untyped-def]
    return make_food
