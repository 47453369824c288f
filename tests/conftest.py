"""Shared setups built from the catalog."""

import pytest

from cranksmith.models.component import Component, Setup
from cranksmith.services.catalog import get_component


def make_setup(crankset_id: str, cassette_id: str, wheel: str = "700c", tire: float = 25) -> Setup:
    return Setup(
        wheel=wheel,
        tire=tire,
        crankset=get_component(crankset_id),
        cassette=get_component(cassette_id),
    )


def make_component(component_id: str, teeth: list[int], weight: float = 500, speeds: int | None = 11) -> Component:
    return Component(id=component_id, model=component_id.title(), teeth=teeth, weight=weight, speeds=speeds)


@pytest.fixture
def road_compact_11_30() -> Setup:
    """50/34 compact with an 11-30 cassette on 700x25."""
    return make_setup("shimano-105-r7000-50-34", "shimano-105-r7000-11-30")


@pytest.fixture
def road_compact_11_28() -> Setup:
    return make_setup("shimano-105-r7000-50-34", "shimano-105-r7000-11-28")
