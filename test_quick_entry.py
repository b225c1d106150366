#!/usr/bin/env python3
"""
Tests for the quick-entry batch calculators.
"""

import sys
sys.path.insert(0, 'src')

import pytest

from workspec import (
    BreakAndRemoveBatch,
    BrokkBatch,
    ChainsawBatch,
    EmptyBatch,
    InvalidDimension,
    JackhammerBatch,
    MissingSelection,
    MultiCutBatch,
    ValidationError,
    WorkTypeId,
    batch_for_work_type,
    fold,
    new_batch,
)


def test_chainsaw_batch_folds_inches_to_feet():
    batch = ChainsawBatch()
    batch.add(num_cuts=2, length_inches=48, depth=6)
    batch.add(num_cuts=1, length_inches=24, depth=8)

    total = fold(batch)
    assert total.linear_feet == 10.0
    assert total.cut_depth == 8
    assert total.entry_count == 2
    assert total.to_dict() == {"linear_feet": 10.0, "cut_depth": 8.0, "entry_count": 2}


def test_multi_cut_batch_uses_deepest_cut():
    batch = MultiCutBatch([
        {"num_cuts": 2, "length_feet": 10, "depth": 6},
        {"num_cuts": 3, "length_feet": 5, "depth": 8},
        {"num_cuts": 1, "length_feet": 4, "depth": 5},
    ])
    assert batch.running_total == 39
    total = fold(batch)
    assert total.linear_feet == 39
    assert total.cut_depth == 8


def test_linear_total_becomes_sawing_cut():
    batch = MultiCutBatch()
    batch.add(num_cuts=4, length_feet=5, depth=6)
    cut = fold(batch).to_sawing_cut(['14" Diamond'])
    assert cut.input_mode == "linear"
    assert cut.linear_feet == 20
    assert cut.blades_used == ('14" Diamond',)


def test_jackhammer_batch():
    batch = JackhammerBatch(equipment="hilti_1000")
    batch.add(length=10, width=8)
    batch.add(length=5, width=5)

    total = fold(batch)
    assert total.square_feet == 105
    assert total.notes == "Equipment: Hilti 1000"


def test_jackhammer_other_equipment():
    batch = JackhammerBatch([{"length": 2, "width": 2}], equipment="other", equipment_other=" TE 2000 ")
    assert fold(batch).notes == "Equipment: TE 2000"

    batch = JackhammerBatch([{"length": 2, "width": 2}], equipment="other")
    with pytest.raises(MissingSelection):
        fold(batch)


def test_jackhammer_requires_equipment():
    batch = JackhammerBatch([{"length": 2, "width": 2}])
    with pytest.raises(MissingSelection):
        fold(batch)


def test_empty_batch_is_rejected_before_selections():
    with pytest.raises(EmptyBatch):
        fold(JackhammerBatch())
    with pytest.raises(EmptyBatch):
        fold(BreakAndRemoveBatch())
    with pytest.raises(EmptyBatch):
        fold(ChainsawBatch())


def test_zero_length_entry_is_rejected():
    batch = MultiCutBatch()
    with pytest.raises(InvalidDimension):
        batch.add(num_cuts=1, length_feet=0, depth=4)
    assert len(batch) == 0


def test_fractional_cut_count_is_rejected():
    with pytest.raises(InvalidDimension):
        ChainsawBatch().add(num_cuts=1.5, length_inches=12, depth=4)


@pytest.mark.parametrize("value", [float("nan"), "inf"])
def test_non_finite_entries_are_rejected(value):
    batch = MultiCutBatch()
    with pytest.raises(InvalidDimension):
        batch.add(num_cuts=1, length_feet=value, depth=4)
    with pytest.raises(InvalidDimension):
        batch.add(num_cuts=value, length_feet=10, depth=4)
    with pytest.raises(InvalidDimension):
        BrokkBatch().add(length=4, width=4, thickness=value)
    assert len(batch) == 0


def test_totals_are_not_rounded():
    batch = ChainsawBatch()
    batch.add(num_cuts=1, length_inches=10, depth=4)
    total = fold(batch)
    assert total.to_dict()["linear_feet"] == 10 / 12

    brokk = BrokkBatch([{"length": 1, "width": 1, "thickness": 1}, {"length": 1, "width": 1, "thickness": 2},
                        {"length": 1, "width": 1, "thickness": 2}])
    assert fold(brokk).to_dict()["average_thickness"] == 5 / 3


def test_break_and_remove_notes():
    batch = BreakAndRemoveBatch(removal_method="hand_removal")
    batch.add(length=4, width=5, depth=6)
    total = fold(batch)
    assert total.square_feet == 20
    assert total.notes == "Removal: Hand Removal"

    rigged = BreakAndRemoveBatch([{"length": 4, "width": 5}], removal_method="rigged",
                                 removal_equipment="forklift")
    assert fold(rigged).notes == "Removal: Rigged (Forklift)"


def test_break_and_remove_selections():
    batch = BreakAndRemoveBatch([{"length": 4, "width": 5}])
    with pytest.raises(MissingSelection):
        fold(batch)

    batch.removal_method = "rigged"
    with pytest.raises(MissingSelection):
        fold(batch)


def test_brokk_batch_averages_thickness():
    batch = BrokkBatch()
    batch.add(length=10, width=10, thickness=6)
    batch.add(length=5, width=4, thickness=8)

    total = fold(batch)
    assert total.square_feet == 120
    assert total.average_thickness == 7
    assert total.notes == 'Avg thickness: 7.00"'


def test_remove_entry():
    batch = MultiCutBatch()
    batch.add(num_cuts=1, length_feet=10, depth=4)
    batch.add(num_cuts=1, length_feet=2, depth=4)
    batch.remove(0)
    assert fold(batch).linear_feet == 2


def test_add_rejects_other_entry_types():
    with pytest.raises(TypeError):
        MultiCutBatch().add(object())


def test_batch_lookup():
    assert isinstance(batch_for_work_type(WorkTypeId.CHAIN_SAW), ChainsawBatch)
    assert isinstance(batch_for_work_type("HAND SAW"), MultiCutBatch)
    assert isinstance(new_batch("brokk"), BrokkBatch)

    jackhammer = batch_for_work_type(WorkTypeId.JACK_HAMMERING, equipment="hilti_3000")
    assert jackhammer.equipment == "hilti_3000"

    with pytest.raises(ValidationError):
        batch_for_work_type(WorkTypeId.GRINDING)
