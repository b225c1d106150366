#!/usr/bin/env python3
"""
Tests for detail records and the structured sub-records they hold.
"""

import sys
sys.path.insert(0, 'src')

import pytest

from workspec import (
    CoreDrillingDetails,
    CutArea,
    DetailRecord,
    EmptyBatch,
    HoleConfig,
    InvalidDimension,
    MissingSelection,
    NotAListField,
    SawingCut,
    SawingDetails,
    UnknownField,
    ValidationError,
    WallCut,
    WorkTypeId,
    append_to_list,
    remove_from_list,
    set_field,
    toggle_option,
    visible_fields,
)
from workspec.details import details_from_dict


# ============================================================================
# Sub-records
# ============================================================================

def test_hole_requires_bit_size():
    with pytest.raises(MissingSelection):
        HoleConfig(bit_size="  ", depth_inches=6)


def test_hole_rejects_bad_dimensions():
    with pytest.raises(InvalidDimension):
        HoleConfig(bit_size='2"', depth_inches=0)
    with pytest.raises(InvalidDimension):
        HoleConfig(bit_size='2"', depth_inches=6, quantity=0)
    with pytest.raises(InvalidDimension):
        HoleConfig(bit_size='2"', depth_inches="deep")


def test_hole_diameter_strips_inch_mark():
    assert HoleConfig(bit_size='1-1/4"', depth_inches=4).diameter == "1-1/4"
    assert HoleConfig(bit_size="6", depth_inches=4).diameter == "6"


def test_cut_area_rejects_zero_length():
    with pytest.raises(InvalidDimension):
        CutArea(length=0, width=4, depth=6)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), "-inf", "nan"])
def test_non_finite_dimensions_are_rejected(value):
    with pytest.raises(InvalidDimension):
        CutArea(length=value, width=7, depth=6)
    with pytest.raises(InvalidDimension):
        HoleConfig(bit_size='2"', depth_inches=value)
    with pytest.raises(InvalidDimension):
        HoleConfig(bit_size='2"', depth_inches=6, quantity=value)


def test_area_mode_cut_derives_linear_feet():
    cut = SawingCut.from_areas([CutArea(length=10, width=2, depth=6, quantity=3)])
    assert cut.linear_feet == 72
    assert cut.cut_depth == 6


def test_area_mode_cut_uses_first_depth():
    cut = SawingCut.from_areas([
        CutArea(length=4, width=4, depth=5),
        CutArea(length=2, width=2, depth=9),
    ])
    assert cut.cut_depth == 5
    assert cut.linear_feet == 16 + 8


def test_area_mode_cut_ignores_entered_totals():
    cut = SawingCut(input_mode="area", linear_feet=999, cut_depth=99,
                    areas=({"length": 3, "width": 1, "depth": 4},))
    assert cut.linear_feet == 8
    assert cut.cut_depth == 4


def test_area_mode_cut_requires_areas():
    with pytest.raises(EmptyBatch):
        SawingCut.from_areas([])


def test_linear_cut_validation():
    with pytest.raises(InvalidDimension):
        SawingCut.linear(0, 6)
    with pytest.raises(ValidationError):
        SawingCut(input_mode="diagonal", linear_feet=1, cut_depth=1)


def test_blades_are_trimmed_and_deduplicated():
    cut = SawingCut.linear(10, 4, blades_used=[' 14" Diamond', '14" Diamond', "", "Abrasive"])
    assert cut.blades_used == ('14" Diamond', "Abrasive")
    assert cut.with_blades(["Masonry"]).blades_used == ("Masonry",)


def test_wall_cut_requires_dimensions():
    with pytest.raises(InvalidDimension):
        WallCut(quantity=1, dimensions="", thickness_inches=8)


# ============================================================================
# DetailRecord
# ============================================================================

def test_set_field_unknown_name():
    detail = DetailRecord(WorkTypeId.SLAB_SAWING)
    with pytest.raises(UnknownField):
        set_field(detail, "colour", "red")


def test_set_empty_value_removes_field():
    detail = DetailRecord(WorkTypeId.SLAB_SAWING)
    set_field(detail, "material", "Asphalt")
    assert detail.get("material") == "Asphalt"

    set_field(detail, "material", "  ")
    assert "material" not in detail
    assert len(detail) == 0


def test_yes_no_field_accepts_booleans():
    detail = DetailRecord(WorkTypeId.CONCRETE_DEMOLITION)
    set_field(detail, "removal", True)
    assert detail.get("removal") == "Yes"


def test_append_and_remove_list_entries():
    detail = DetailRecord(WorkTypeId.CORE_DRILLING)
    append_to_list(detail, "holes", {"bit_size": '2"', "depth_inches": 6, "quantity": 4})
    append_to_list(detail, "holes", HoleConfig(bit_size='4"', depth_inches=8))
    assert [hole.bit_size for hole in detail.get("holes")] == ['2"', '4"']

    remove_from_list(detail, "holes", 0)
    assert [hole.bit_size for hole in detail.get("holes")] == ['4"']

    remove_from_list(detail, "holes", 0)
    assert "holes" not in detail


def test_append_rejects_scalar_field():
    detail = DetailRecord(WorkTypeId.CORE_DRILLING)
    with pytest.raises(NotAListField):
        append_to_list(detail, "locations", {"bit_size": '2"', "depth_inches": 6})


def test_append_rejects_wrong_entry_type():
    detail = DetailRecord(WorkTypeId.CORE_DRILLING)
    with pytest.raises(NotAListField):
        append_to_list(detail, "holes", "2 inch hole")


def test_invalid_entry_never_reaches_list():
    detail = DetailRecord(WorkTypeId.CORE_DRILLING)
    with pytest.raises(InvalidDimension):
        append_to_list(detail, "holes", {"bit_size": '2"', "depth_inches": -1})
    assert "holes" not in detail


def test_remove_from_list_out_of_range():
    detail = DetailRecord(WorkTypeId.CORE_DRILLING)
    with pytest.raises(IndexError):
        remove_from_list(detail, "holes", 0)


def test_toggle_option_preserves_order():
    detail = DetailRecord(WorkTypeId.CORE_DRILLING)
    toggle_option(detail, "locations", "Elevated Slab")
    toggle_option(detail, "locations", "Columns")
    assert detail.get("locations") == ("Elevated Slab", "Columns")

    toggle_option(detail, "locations", "Elevated Slab")
    assert detail.get("locations") == ("Columns",)

    with pytest.raises(TypeError):
        toggle_option(detail, "holes", "Columns")


def test_visible_fields_follow_condition():
    detail = DetailRecord(WorkTypeId.WALL_CUTTING)
    set_field(detail, "material", "Duct Bank")
    assert [spec.name for spec in visible_fields(detail)] == ["material", "cuts"]

    set_field(detail, "material", "Other")
    assert [spec.name for spec in visible_fields(detail)] == ["material", "materialOther", "cuts"]


def test_items_follow_catalog_order():
    detail = DetailRecord(WorkTypeId.WALL_CUTTING)
    append_to_list(detail, "cuts", {"quantity": 1, "dimensions": "3' x 7'", "thickness_inches": 8})
    set_field(detail, "material", "Precast Concrete")
    assert list(detail) == ["material", "cuts"]


def test_detail_record_from_dict():
    data = {
        "material": "Reinforced Concrete",
        "cuts": [{"linear_feet": 40, "cut_depth": 6, "blades_used": ['14" Diamond']}],
    }
    detail = DetailRecord.from_dict("SLAB SAWING", data)
    assert detail.get("cuts")[0].linear_feet == 40
    assert DetailRecord.from_dict("SLAB SAWING", detail.to_dict()) == detail


# ============================================================================
# Work-performed details
# ============================================================================

def test_core_drilling_details_total():
    details = CoreDrillingDetails()
    details.add_hole({"bit_size": '2"', "depth_inches": 6, "quantity": 3})
    details.add_hole(HoleConfig(bit_size='6"', depth_inches=10, quantity=2))
    assert details.total_holes == 5

    details.remove_hole(0)
    assert details.total_holes == 2


def test_sawing_details_validate_cut_type():
    with pytest.raises(ValidationError):
        SawingDetails(cut_type="damp")


def test_sawing_details_total():
    details = SawingDetails(cuts=[
        SawingCut.linear(20, 6),
        SawingCut.from_areas([CutArea(length=10, width=2, depth=6, quantity=3)]),
    ])
    assert details.total_linear_feet == 92


def test_details_from_dict_ignores_kind():
    details = details_from_dict(WorkTypeId.CORE_DRILL, {
        "kind": "core_drilling",
        "holes": [{"bit_size": '2"', "depth_inches": 6, "quantity": 2}],
    })
    assert isinstance(details, CoreDrillingDetails)
    assert details.total_holes == 2
    assert details.to_dict()["kind"] == "core_drilling"
