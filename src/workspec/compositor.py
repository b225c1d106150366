"""
WorkSpec - Description Compositor

Turns structured work details into text:

* ``compose_description`` writes the scope of work for a dispatch order, one
  block per selected work type in selection order;
* ``format_work_summary`` writes the completed-work summary for a work order.

Both are pure: they read their inputs and never modify them, so they can be
called on every keystroke for a live preview.
"""

from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .aggregator import AREA_MODE
from .catalog import DISPATCH_CATALOG, FieldSpec, WorkTypeCatalog, WorkTypeId, capabilities, to_work_type
from .details import (
    CoreDrillingDetails,
    DemolitionArea,
    DetailRecord,
    GeneralDetails,
    HoleConfig,
    SawingCut,
    SawingDetails,
    WallCut,
    WireCut,
)

BLOCK_SEPARATOR = "\n---\n\n"
ABOVE_FIVE_FEET = " (Above 5ft - Ladder/Lift Required)"


def format_number(value: float) -> str:
    """12.0 -> '12', 2.5 -> '2.5', 10.333 -> '10.33'."""
    if value is None:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _inches(value: float) -> str:
    return f'{format_number(value)}"'


def _removal_suffix(entry) -> str:
    if not entry.removal:
        return ""
    if entry.removal_equipment:
        return f" - Removal: {entry.removal_equipment}"
    return " - Removal Required"


# ============================================================================
# Entry renderers
# ============================================================================

def render_hole(hole: HoleConfig, index: int, work_type: WorkTypeId) -> List[str]:
    line = f"{hole.quantity} holes @ {hole.diameter}\" diameter x {_inches(hole.depth_inches)} deep"
    if hole.above_five_feet:
        line += ABOVE_FIVE_FEET
    return [line]


def render_wall_cut(cut: WallCut, index: int, work_type: WorkTypeId) -> List[str]:
    line = f"{cut.quantity} cuts @ {cut.dimensions} x {_inches(cut.thickness_inches)} thick"
    return [line + _removal_suffix(cut)]


def render_sawing_cut(cut: SawingCut, index: int, work_type: WorkTypeId) -> List[str]:
    suffix = _removal_suffix(cut)
    if cut.input_mode == AREA_MODE:
        lines = []
        for area in cut.areas:
            count = f"{area.quantity} area" if area.quantity == 1 else f"{area.quantity} areas"
            lines.append(
                f"{count} - {format_number(area.length)}' L x {format_number(area.width)}' W"
                f" x {_inches(area.depth)} thick{suffix}"
            )
        return lines

    # Hand sawing is specified by depth of cut, slab sawing by slab thickness.
    word = "deep" if capabilities(work_type).is_hand_saw else "thick"
    return [f"{format_number(cut.linear_feet)} LF x {_inches(cut.cut_depth)} {word}{suffix}"]


def render_wire_cut(cut: WireCut, index: int, work_type: WorkTypeId) -> List[str]:
    return [cut.description]


def render_demolition_area(area: DemolitionArea, index: int, work_type: WorkTypeId) -> List[str]:
    line = f"Area {index}: {area.area_volume}"
    if area.thickness:
        line += f" @ {area.thickness}"
    if area.display_material:
        line += f" - {area.display_material}"
    return [line]


RENDERERS: Dict[type, Callable[..., List[str]]] = {
    HoleConfig: render_hole,
    WallCut: render_wall_cut,
    SawingCut: render_sawing_cut,
    WireCut: render_wire_cut,
    DemolitionArea: render_demolition_area,
}


# ============================================================================
# Dispatch-order description
# ============================================================================

def _header(work_type: WorkTypeId, record: Optional[DetailRecord], catalog: WorkTypeCatalog) -> str:
    if work_type == WorkTypeId.CORE_DRILLING and record is not None:
        locations = record.get("locations")
        if locations:
            return f"CORE DRILLING ON {'/'.join(locations)}"
    return catalog.description(work_type)


def _field_lines(work_type: WorkTypeId, spec: FieldSpec, value) -> List[str]:
    if spec.is_list:
        lines = []
        for index, entry in enumerate(value, start=1):
            lines.extend(RENDERERS[type(entry)](entry, index, work_type))
        return lines
    if isinstance(value, tuple):
        return [f"{spec.label}: {', '.join(value)}"]
    return [f"{spec.label}: {value}"]


def _as_record(work_type: WorkTypeId, value, catalog: WorkTypeCatalog) -> Optional[DetailRecord]:
    if value is None or isinstance(value, DetailRecord):
        return value
    return DetailRecord.from_dict(work_type, value, catalog)


def compose_description(
    selected_work_types: Sequence,
    details: Optional[Mapping] = None,
    catalog: WorkTypeCatalog = DISPATCH_CATALOG,
) -> str:
    """
    Write the scope-of-work text for the selected work types.

    Args:
        selected_work_types: Work type ids in the order they were selected
        details: Work type -> DetailRecord (or plain dict of field values)
        catalog: Catalog supplying headers and field labels

    Returns:
        One block per work type, blocks separated by a '---' line. Each block
        is the type's header followed, when the type has a detail record, by
        one line per rendered entry or field. ``locations`` is never listed
        as a field line.
    """
    records = {to_work_type(key): value for key, value in (details or {}).items()}
    work_types = [to_work_type(work_type) for work_type in selected_work_types]

    desc = ""
    for idx, work_type in enumerate(work_types):
        catalog.config(work_type)
        record = _as_record(work_type, records.get(work_type), catalog)

        desc += _header(work_type, record, catalog)

        if record is not None:
            desc += "\n"
            for spec, value in record.visible_items():
                if spec.name == "locations":
                    continue
                for line in _field_lines(work_type, spec, value):
                    desc += f"{line}\n"

        if idx < len(work_types) - 1:
            desc += BLOCK_SEPARATOR

    return desc


# ============================================================================
# Completed-work summary
# ============================================================================

def _hole_summary(hole: HoleConfig) -> str:
    parts = [
        f"Bit Size: {hole.diameter} inches",
        f"Depth: {format_number(hole.depth_inches)} inches",
        f"Holes: {hole.quantity}",
    ]
    if hole.above_five_feet:
        parts.append("Above 5ft")
    if hole.plastic_setup:
        parts.append("Setup: Plastic/Handheld")
    if hole.cut_steel:
        steel = f" ({hole.steel_encountered})" if hole.steel_encountered else ""
        parts.append(f"Steel Cut: Yes{steel}")
    return ", ".join(parts)


def _cut_summary(cut: SawingCut) -> List[str]:
    parts = [
        f"Linear Feet: {format_number(cut.linear_feet)} LF",
        f"Cut Depth: {format_number(cut.cut_depth)} inches",
    ]
    if cut.blades_used:
        parts.append(f"Blades Used: {', '.join(cut.blades_used)}")
    if cut.cut_steel:
        steel = f" ({cut.steel_encountered})" if cut.steel_encountered else ""
        parts.append(f"Steel Cut: Yes{steel}")
    if cut.overcut:
        parts.append("Overcut: Yes")
    if cut.chainsawed and cut.chainsaw_areas:
        width = f" @ {_inches(cut.chainsaw_width_inches)} width" if cut.chainsaw_width_inches else ""
        parts.append(f"Chainsawed: {cut.chainsaw_areas} areas{width}")

    lines = [", ".join(parts)]
    for area in cut.areas:
        lines.append(
            f"    • {format_number(area.length)}' × {format_number(area.width)}'"
            f" × {_inches(area.depth)} deep (Qty: {area.quantity})"
        )
    return lines


def format_work_summary(order) -> str:
    """Completed-work summary for a WorkOrder, one block per item."""
    blocks = []

    for item in order:
        lines = [item.name]
        if item.quantity > 1:
            lines[0] += f" (Quantity: {format_number(item.quantity)})"

        details = item.details
        if isinstance(details, CoreDrillingDetails):
            lines.append("Core Drilling Specifications:")
            lines.extend(f"  - {_hole_summary(hole)}" for hole in details.holes)
        elif isinstance(details, SawingDetails):
            lines.append("Sawing Specifications:")
            for cut in details.cuts:
                cut_lines = _cut_summary(cut)
                lines.append(f"  - {cut_lines[0]}")
                lines.extend(cut_lines[1:])
            lines.append(f"Cut Type: {'Wet Cut' if details.cut_type == 'wet' else 'Dry Cut'}")
        elif isinstance(details, GeneralDetails):
            if details.duration:
                lines.append(f"Duration: {format_number(details.duration)} hours")
            if details.equipment:
                lines.append(f"Equipment: {', '.join(details.equipment)}")

        if item.notes:
            lines.append(f"Notes: {item.notes}")
        if details is not None and details.notes:
            lines.append(f"Additional Notes: {details.notes}")

        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)
