"""
WorkSpec - Equipment Recommendations

Suggests equipment for the selected work types. Suggestions are offered to a
click-to-add picker, so the list is deduplicated and keeps a stable order:
work types in selection order, then each type's static list in table order,
then anything derived from the type's details.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .catalog import DISPATCH_CATALOG, WORK_PERFORMED_CATALOG, WorkTypeId, capabilities, to_work_type
from .details import DetailRecord, HoleConfig

logger = logging.getLogger(__name__)

WATER_HOSE = "Water Hose (250')"

RECOMMENDED_EQUIPMENT: Dict[WorkTypeId, Tuple[str, ...]] = {
    WorkTypeId.CORE_DRILLING: ("Core Drill", "Diamond Bits", WATER_HOSE, "Pump Can", "Vacuum System"),
    WorkTypeId.WALL_CUTTING: ("Wall Saw", "Diamond Blades", WATER_HOSE, "Pump Can", "Generator"),
    WorkTypeId.SLAB_SAWING: ("Slab Saw", "Diamond Blades", WATER_HOSE, "Vacuum System"),
    WorkTypeId.HAND_SAWING: ("Hand Saw", "Diamond Blades", "Dust Collection System", "Safety Gear"),
    WorkTypeId.WIRE_SAWING: ("Wire Saw", "Generator", WATER_HOSE),
    WorkTypeId.CONCRETE_DEMOLITION: ("Safety Gear", "Dust Collection System"),
    WorkTypeId.GPR_SCANNING: ("GPR Scanner",),
    WorkTypeId.CORE_DRILL: ("Core Drill", "Diamond Bits", "Vacuum System"),
    WorkTypeId.HYDRAULIC_CORE_DRILL: ("Hydraulic Core Drill", "Diamond Bits", "Hydraulic Power Unit"),
    WorkTypeId.SLAB_SAW: ("Slab Saw", "Diamond Blades", WATER_HOSE),
    WorkTypeId.ELECTRIC_SLAB_SAW: ("Electric Slab Saw", "Diamond Blades", "Generator"),
    WorkTypeId.WALL_SAW: ("Wall Saw", "Diamond Blades", WATER_HOSE),
    WorkTypeId.WIRE_SAW: ("Wire Saw", "Generator"),
    WorkTypeId.HAND_SAW: ("Hand Saw", "Diamond Blades"),
    WorkTypeId.FLUSH_CUT_HAND_SAW: ("Flush Cut Hand Saw", "Diamond Blades"),
    WorkTypeId.CHAIN_SAW: ("Chain Saw", "Diamond Chains"),
    WorkTypeId.RING_SAW: ("Ring Saw", "Diamond Blades"),
    WorkTypeId.BREAK_AND_REMOVE: ("Jack Hammer", "Skidsteer"),
    WorkTypeId.JACK_HAMMERING: ("Jack Hammer", "Safety Gear"),
    WorkTypeId.BROKK: ("Brokk", "Generator"),
}

DEMOLITION_METHOD_EQUIPMENT: Dict[str, str] = {
    "Brokk Demo": "Brokk",
    "Jackhammering": "Jack Hammer",
}

ACCESS_EQUIPMENT = ("Ladder", "Lift Access")


def core_bit(diameter: str) -> str:
    return f'{diameter}" Core Bit'


def _as_record(work_type: WorkTypeId, value):
    """Plain dicts are read the same way compose_description reads them."""
    if isinstance(value, dict):
        catalog = DISPATCH_CATALOG if work_type in DISPATCH_CATALOG else WORK_PERFORMED_CATALOG
        return DetailRecord.from_dict(work_type, value, catalog)
    return value


def _holes(value) -> List[HoleConfig]:
    if value is None:
        return []
    if isinstance(value, DetailRecord):
        return list(value.get("holes", ()))
    return list(getattr(value, "holes", None) or ())


def _methods(value) -> Tuple[str, ...]:
    if isinstance(value, DetailRecord):
        return value.get("methods", ())
    return ()


def recommend(selected_work_types: Sequence, details: Optional[Mapping] = None) -> List[str]:
    """
    Equipment suggestions for the selected work types.

    Core drilling adds one "<diameter>\" Core Bit" per distinct hole diameter
    (a bit is suggested once however many holes use it) and ladder/lift
    access when any hole is above five feet.
    """
    records = {to_work_type(key): value for key, value in (details or {}).items()}
    suggestions: List[str] = []

    def add(item: str) -> None:
        if item not in suggestions:
            suggestions.append(item)

    for work_type in (to_work_type(t) for t in selected_work_types):
        for item in RECOMMENDED_EQUIPMENT.get(work_type, ()):
            add(item)

        value = _as_record(work_type, records.get(work_type))

        if work_type == WorkTypeId.CONCRETE_DEMOLITION:
            for method in _methods(value):
                if method in DEMOLITION_METHOD_EQUIPMENT:
                    add(DEMOLITION_METHOD_EQUIPMENT[method])

        if capabilities(work_type).is_core_drilling:
            holes = _holes(value)
            for hole in holes:
                add(core_bit(hole.diameter))
            if any(hole.above_five_feet for hole in holes):
                for item in ACCESS_EQUIPMENT:
                    add(item)

    logger.debug("Recommended %d items for %d work types", len(suggestions), len(selected_work_types))
    return suggestions
