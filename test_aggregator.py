#!/usr/bin/env python3
"""
Tests for unit conversion and quantity aggregation.
"""

import sys
sys.path.insert(0, 'src')

import itertools

from workspec import (
    CutArea,
    HoleConfig,
    SawingCut,
    WorkTypeId,
    area_linear_feet,
    canonical_quantity,
    inches_to_feet,
    perimeter,
    total_holes,
    total_linear_feet,
)
from workspec.aggregator import average, max_depth
from workspec.details import CoreDrillingDetails, SawingDetails


def test_inches_to_feet():
    assert inches_to_feet(18) == 1.5
    assert inches_to_feet(None) == 0


def test_perimeter_and_area_linear_feet():
    area = CutArea(length=5, width=7, depth=6)
    assert perimeter(area) == 24
    assert area_linear_feet(area) == 24

    area = CutArea(length=5, width=7, depth=6, quantity=3)
    assert area_linear_feet(area) == 72


def test_total_holes_is_order_independent():
    holes = [
        HoleConfig(bit_size='2"', depth_inches=6, quantity=4),
        HoleConfig(bit_size='2"', depth_inches=6, quantity=1),
        HoleConfig(bit_size='8"', depth_inches=12, quantity=7),
    ]
    totals = {total_holes(list(order)) for order in itertools.permutations(holes)}
    assert totals == {12}


def test_totals_of_nothing_are_zero():
    assert total_holes(None) == 0
    assert total_holes([]) == 0
    assert total_linear_feet(None) == 0
    assert max_depth([]) == 0
    assert average([]) == 0


def test_total_linear_feet_mixes_modes():
    cuts = [
        SawingCut.linear(12.5, 4),
        SawingCut.from_areas([CutArea(length=3, width=3, depth=4, quantity=2)]),
    ]
    assert total_linear_feet(cuts) == 12.5 + 24


def test_canonical_quantity_core_drilling_ignores_fallback():
    details = CoreDrillingDetails(holes=[HoleConfig(bit_size='3"', depth_inches=6, quantity=9)])
    assert canonical_quantity(WorkTypeId.CORE_DRILL, details, fallback=100) == 9
    assert canonical_quantity(WorkTypeId.HYDRAULIC_CORE_DRILL, None, fallback=100) == 0


def test_canonical_quantity_sawing():
    details = SawingDetails(cuts=[SawingCut.linear(30, 6), SawingCut.linear(15, 8)])
    assert canonical_quantity(WorkTypeId.SLAB_SAW, details, fallback=1) == 45


def test_canonical_quantity_other_types_keep_count():
    assert canonical_quantity(WorkTypeId.GRINDING, None, fallback=4) == 4
    assert canonical_quantity(WorkTypeId.SPOT_CAUGHT_CORES, None, fallback=2) == 2
