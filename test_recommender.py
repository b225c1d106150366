#!/usr/bin/env python3
"""
Tests for equipment recommendations.
"""

import sys
sys.path.insert(0, 'src')

import pytest

from workspec import DetailRecord, UnknownField, UnknownWorkType, WorkTypeId, compose_description, recommend


def hole(bit_size, above=False):
    return {"bit_size": bit_size, "depth_inches": 6, "above_five_feet": above}


def test_one_bit_per_distinct_diameter():
    details = {"CORE DRILLING": {"holes": [hole('2"'), hole('2"'), hole('4"')]}}
    equipment = recommend(["CORE DRILLING"], details)

    bits = [item for item in equipment if item.endswith("Core Bit")]
    assert bits == ['2" Core Bit', '4" Core Bit']
    assert "Ladder" not in equipment


def test_access_equipment_above_five_feet():
    details = {"CORE DRILLING": {"holes": [hole('2"'), hole('6"', above=True)]}}
    equipment = recommend(["CORE DRILLING"], details)
    assert equipment[-2:] == ["Ladder", "Lift Access"]


def test_static_list_without_details():
    assert recommend(["GPR SCANNING"]) == ["GPR Scanner"]
    assert recommend([]) == []


def test_suggestions_are_deduplicated_in_order():
    equipment = recommend(["WALL CUTTING", "SLAB SAWING"])
    assert equipment[:5] == ["Wall Saw", "Diamond Blades", "Water Hose (250')", "Pump Can", "Generator"]
    assert equipment.count("Diamond Blades") == 1
    assert equipment.count("Water Hose (250')") == 1
    assert equipment[-2:] == ["Slab Saw", "Vacuum System"]


def test_demolition_methods_add_equipment():
    details = {"CONCRETE DEMOLITION": {"methods": ["Brokk Demo", "Jackhammering"]}}
    equipment = recommend(["CONCRETE DEMOLITION"], details)
    assert equipment == ["Safety Gear", "Dust Collection System", "Brokk", "Jack Hammer"]


def test_single_method_string_matches_compositor():
    details = {"CONCRETE DEMOLITION": {"methods": "Brokk Demo"}}
    assert recommend(["CONCRETE DEMOLITION"], details)[-1] == "Brokk"
    assert "Demolition Methods: Brokk Demo" in compose_description(["CONCRETE DEMOLITION"], details)


def test_unknown_detail_field():
    with pytest.raises(UnknownField):
        recommend(["CORE DRILLING"], {"CORE DRILLING": {"diameter": '2"'}})


def test_work_performed_core_drill_dict():
    details = {"CORE DRILL": {"holes": [hole('3"')], "notes": "basement"}}
    assert '3" Core Bit' in recommend(["CORE DRILL"], details)


def test_accepts_detail_records():
    record = DetailRecord(WorkTypeId.CORE_DRILLING)
    record.append_to_list("holes", hole('1-1/2"'))
    equipment = recommend([WorkTypeId.CORE_DRILLING], {WorkTypeId.CORE_DRILLING: record})
    assert '1-1/2" Core Bit' in equipment


def test_unknown_work_type():
    with pytest.raises(UnknownWorkType):
        recommend(["CONCRETE POLISHING"])
