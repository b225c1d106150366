"""
WorkSpec - Work Type Catalog

Static registry of work types and the structured fields each one collects.

Two catalogs exist over an overlapping set of ids and must not be conflated:

* the dispatch-order catalog, used when a job is scheduled and the scope of
  work is written up for the crew, and
* the work-performed catalog, used by the operator on site to log what was
  actually done.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from enum import Enum

from .errors import UnknownWorkType


class WorkTypeId(str, Enum):
    """Stable work type identifiers. Values are the labels shown to users."""

    # Dispatch order
    CORE_DRILLING = "CORE DRILLING"
    WALL_CUTTING = "WALL CUTTING"
    SLAB_SAWING = "SLAB SAWING"
    WIRE_SAWING = "WIRE SAWING"
    CONCRETE_DEMOLITION = "CONCRETE DEMOLITION"
    HAND_SAWING = "HAND SAWING"
    GPR_SCANNING = "GPR SCANNING"

    # Work performed
    CORE_DRILL = "CORE DRILL"
    HYDRAULIC_CORE_DRILL = "HYDRAULIC CORE DRILL"
    SPOT_CAUGHT_CORES = "SPOT/CAUGHT CORES"
    SLAB_SAW = "SLAB SAW"
    ELECTRIC_SLAB_SAW = "ELECTRIC SLAB SAW"
    WALL_SAW = "WALL SAW"
    WIRE_SAW = "WIRE SAW"
    HAND_SAW = "HAND SAW"
    FLUSH_CUT_HAND_SAW = "FLUSH CUT HAND SAW"
    CHAIN_SAW = "CHAIN SAW"
    RING_SAW = "RING SAW"
    BREAK_AND_REMOVE = "BREAK & REMOVE"
    DEMOLITION = "DEMOLITION"
    REMOVAL = "REMOVAL"
    EXCAVATE_DIRT = "EXCAVATE DIRT"
    BROKK = "BROKK"
    POURED_FINISH_CONCRETE = "POURED/FINISH CONCRETE"
    REPAIR = "REPAIR"
    GRINDING = "GRINDING"
    CHIPPING = "CHIPPING"
    INSTALL_BOLLARDS = "INSTALL BOLLARD(S)"
    INSTALL_LINTELS = "INSTALL LINTEL(S)"
    MANHOLE_BOOT = "MANHOLE BOOT"
    JOINT_SEALING = "JOINT SEALING"
    JACK_HAMMERING = "JACK HAMMERING"
    HAND_DRILL = "HAND DRILL"
    PRESSURE_WASH = "PRESSURE WASH"
    VACUUMING_WATER_CONTROL = "VACUUMING & WATER CONTROL"
    IMAGE_SCAN = "IMAGE SCAN"
    SAFETY_MEETINGS = "SAFETY MEETINGS/ORIENTATION"
    STANDBY_TIME = "STANDBY TIME"
    TRAVEL_CHARGE = "TRAVEL CHARGE"
    TRIP_CHARGE = "TRIP CHARGE"
    HAULING = "HAULING"
    DELIVER = "DELIVER"
    DUMPSTER_CHARGE = "DUMPSTER CHARGE"
    MATERIALS = "MATERIAL(S)"
    SALE_OF = "SALE OF"

    def __str__(self):
        return self.value


def to_work_type(value) -> WorkTypeId:
    """Accept either a WorkTypeId, its value ("CORE DRILLING") or its name ("CORE_DRILLING")."""
    if isinstance(value, WorkTypeId):
        return value
    try:
        return WorkTypeId(value)
    except ValueError:
        pass
    try:
        return WorkTypeId[str(value)]
    except KeyError:
        raise UnknownWorkType(value) from None


class InputKind(Enum):
    TEXT = "text"
    SELECT = "single-select"
    MULTI_SELECT = "multi-select"
    YES_NO = "yes/no"
    STRUCTURED_LIST = "structured-list"


class ListKind(Enum):
    HOLE = "hole"
    CUT = "cut"
    AREA = "area"


class QuickEntryKind(Enum):
    MULTI_CUT = "multi-cut"
    CHAINSAW = "chainsaw"
    BREAK_AND_REMOVE = "break-and-remove"
    JACKHAMMER = "jackhammer"
    BROKK = "brokk"


@dataclass(frozen=True)
class FieldSpec:
    """A single input on a work type form."""
    name: str
    label: str
    input_kind: InputKind = InputKind.TEXT
    options: Tuple[str, ...] = ()
    condition_field: Optional[str] = None
    condition_value: Optional[str] = None
    list_kind: Optional[ListKind] = None
    record: Optional[str] = None  # key into details.RECORD_TYPES
    placeholder: str = ""

    @property
    def is_list(self) -> bool:
        return self.input_kind == InputKind.STRUCTURED_LIST

    @property
    def is_conditional(self) -> bool:
        return self.condition_field is not None

    def is_visible(self, values: Dict[str, object]) -> bool:
        """Conditional fields are shown only while the sibling field equals the stated value."""
        if not self.is_conditional:
            return True
        return values.get(self.condition_field) == self.condition_value

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "label": self.label,
            "input_kind": self.input_kind.value,
        }
        if self.options:
            data["options"] = list(self.options)
        if self.is_conditional:
            data["condition_field"] = self.condition_field
            data["condition_value"] = self.condition_value
        if self.list_kind:
            data["list_kind"] = self.list_kind.value
        if self.placeholder:
            data["placeholder"] = self.placeholder
        return data


@dataclass(frozen=True)
class WorkTypeConfig:
    """Header text and ordered fields for one work type."""
    description: str
    fields: Tuple[FieldSpec, ...]


@dataclass(frozen=True)
class Capabilities:
    """How a work type is treated by the aggregator and the forms."""
    is_core_drilling: bool = False
    is_sawing: bool = False
    is_hand_saw: bool = False
    is_slab_saw: bool = False
    is_wall_saw: bool = False
    is_chainsaw: bool = False
    requires_detailed_data: bool = False
    quick_entry: Optional[QuickEntryKind] = None


# ============================================================================
# Options
# ============================================================================

CORE_DRILLING_LOCATIONS = (
    "Columns",
    "Block Wall",
    "Concrete Wall",
    "Precast Wall",
    "Slab on Grade",
    "Elevated Slab",
)

WALL_SAWING_MATERIALS = (
    "Reinforced Concrete",
    "Duct Bank",
    "Precast Concrete",
    "Block/Brick",
    "Other",
)

SLAB_SAWING_MATERIALS = (
    "Reinforced Concrete",
    "Asphalt",
)

HAND_SAWING_METHODS = (
    "Vertical Cutting",
    "Cutting Block or Brick",
)

HAND_SAWING_LOCATIONS = (
    "Slab on Grade",
    "Elevated Slab",
)

HAND_SAWING_MATERIALS = (
    "Reinforced Concrete",
    "Block/Brick",
    "Other",
)

CONCRETE_DEMOLITION_METHODS = (
    "Brokk Demo",
    "Jackhammering",
)

DEMOLITION_MATERIALS = (
    "Reinforced Concrete",
    "Block/Brick",
    "Other",
)

BIT_SIZES = (
    '1/2"', '3/4"', '1"', '1-1/4"', '1-1/2"', '2"', '2-1/2"',
    '3"', '4"', '5"', '6"', '8"', '10"', '12"',
)

CUT_TYPES = ("wet", "dry")

YES_NO = ("Yes", "No")


# ============================================================================
# Dispatch-order catalog
# ============================================================================

def _material_other(label: str = "Other Material (if selected)") -> FieldSpec:
    return FieldSpec(
        "materialOther", label, InputKind.TEXT,
        condition_field="material", condition_value="Other",
        placeholder="Specify material...",
    )


DISPATCH_WORK_TYPES: Dict[WorkTypeId, WorkTypeConfig] = {
    WorkTypeId.CORE_DRILLING: WorkTypeConfig(
        description="CORE DRILLING",
        fields=(
            FieldSpec("locations", "Drilling Locations", InputKind.MULTI_SELECT, CORE_DRILLING_LOCATIONS),
            FieldSpec("holes", "Holes", InputKind.STRUCTURED_LIST,
                      list_kind=ListKind.HOLE, record="hole"),
        ),
    ),
    WorkTypeId.WALL_CUTTING: WorkTypeConfig(
        description="WALL SAWING - CUTTING OPENINGS IN WALLS",
        fields=(
            FieldSpec("material", "Material", InputKind.SELECT, WALL_SAWING_MATERIALS),
            _material_other(),
            FieldSpec("cuts", "Cuts", InputKind.STRUCTURED_LIST,
                      list_kind=ListKind.CUT, record="wall_cut"),
        ),
    ),
    WorkTypeId.SLAB_SAWING: WorkTypeConfig(
        description="SLAB SAWING - CUTTING CONCRETE FLOORS/SLABS",
        fields=(
            FieldSpec("material", "Material", InputKind.SELECT, SLAB_SAWING_MATERIALS),
            FieldSpec("cuts", "Cuts", InputKind.STRUCTURED_LIST,
                      list_kind=ListKind.CUT, record="sawing_cut"),
        ),
    ),
    WorkTypeId.HAND_SAWING: WorkTypeConfig(
        description="HAND SAWING - MANUAL CUTTING OPERATIONS",
        fields=(
            FieldSpec("methods", "Cutting Method", InputKind.MULTI_SELECT, HAND_SAWING_METHODS),
            FieldSpec("material", "Material", InputKind.SELECT, HAND_SAWING_MATERIALS),
            _material_other(),
            FieldSpec("locations", "Location Type", InputKind.MULTI_SELECT, HAND_SAWING_LOCATIONS),
            FieldSpec("cuts", "Cuts", InputKind.STRUCTURED_LIST,
                      list_kind=ListKind.CUT, record="sawing_cut"),
        ),
    ),
    WorkTypeId.WIRE_SAWING: WorkTypeConfig(
        description="WIRE SAWING - CUTTING LARGE STRUCTURES",
        fields=(
            FieldSpec("cuts", "Cuts", InputKind.STRUCTURED_LIST,
                      list_kind=ListKind.CUT, record="wire_cut"),
        ),
    ),
    WorkTypeId.CONCRETE_DEMOLITION: WorkTypeConfig(
        description="CONCRETE DEMOLITION - BREAKING AND REMOVING CONCRETE",
        fields=(
            FieldSpec("methods", "Demolition Methods", InputKind.MULTI_SELECT, CONCRETE_DEMOLITION_METHODS),
            FieldSpec("removal", "Removal Required?", InputKind.YES_NO, YES_NO),
            FieldSpec("areas", "Areas/Volumes", InputKind.STRUCTURED_LIST,
                      list_kind=ListKind.AREA, record="demolition_area"),
        ),
    ),
    WorkTypeId.GPR_SCANNING: WorkTypeConfig(
        description="GPR SCANNING - GROUND PENETRATING RADAR SURVEY",
        fields=(
            FieldSpec("quantity", "Scan Area", placeholder="e.g., 500 sq ft"),
        ),
    ),
}


# ============================================================================
# Work-performed catalog
# ============================================================================

WORK_CATEGORIES: Dict[str, Tuple[WorkTypeId, ...]] = {
    "Core Drilling": (
        WorkTypeId.CORE_DRILL,
        WorkTypeId.HYDRAULIC_CORE_DRILL,
        WorkTypeId.SPOT_CAUGHT_CORES,
    ),
    "Sawing": (
        WorkTypeId.SLAB_SAW,
        WorkTypeId.ELECTRIC_SLAB_SAW,
        WorkTypeId.WALL_SAW,
        WorkTypeId.WIRE_SAW,
        WorkTypeId.HAND_SAW,
        WorkTypeId.FLUSH_CUT_HAND_SAW,
        WorkTypeId.CHAIN_SAW,
        WorkTypeId.RING_SAW,
    ),
    "Breaking & Removal": (
        WorkTypeId.BREAK_AND_REMOVE,
        WorkTypeId.DEMOLITION,
        WorkTypeId.REMOVAL,
        WorkTypeId.EXCAVATE_DIRT,
        WorkTypeId.BROKK,
    ),
    "Concrete Work": (
        WorkTypeId.POURED_FINISH_CONCRETE,
        WorkTypeId.REPAIR,
        WorkTypeId.GRINDING,
        WorkTypeId.CHIPPING,
    ),
    "Installation": (
        WorkTypeId.INSTALL_BOLLARDS,
        WorkTypeId.INSTALL_LINTELS,
        WorkTypeId.MANHOLE_BOOT,
        WorkTypeId.JOINT_SEALING,
    ),
    "Equipment & Tools": (
        WorkTypeId.JACK_HAMMERING,
        WorkTypeId.HAND_DRILL,
        WorkTypeId.PRESSURE_WASH,
        WorkTypeId.VACUUMING_WATER_CONTROL,
    ),
    "Services": (
        WorkTypeId.IMAGE_SCAN,
        WorkTypeId.SAFETY_MEETINGS,
        WorkTypeId.STANDBY_TIME,
        WorkTypeId.TRAVEL_CHARGE,
        WorkTypeId.TRIP_CHARGE,
        WorkTypeId.HAULING,
        WorkTypeId.DELIVER,
        WorkTypeId.DUMPSTER_CHARGE,
    ),
    "Materials": (
        WorkTypeId.MATERIALS,
        WorkTypeId.SALE_OF,
    ),
}

POPULAR_ITEMS: Tuple[WorkTypeId, ...] = (
    WorkTypeId.CORE_DRILL,
    WorkTypeId.SLAB_SAW,
    WorkTypeId.WALL_SAW,
    WorkTypeId.BREAK_AND_REMOVE,
    WorkTypeId.JACK_HAMMERING,
)

_CORE_DRILL_FIELDS = (
    FieldSpec("holes", "Holes", InputKind.STRUCTURED_LIST, list_kind=ListKind.HOLE, record="hole"),
    FieldSpec("notes", "Notes"),
)

_SAWING_FIELDS = (
    FieldSpec("cuts", "Cuts", InputKind.STRUCTURED_LIST, list_kind=ListKind.CUT, record="sawing_cut"),
    FieldSpec("cutType", "Cut Type", InputKind.SELECT, CUT_TYPES),
    FieldSpec("notes", "Notes"),
)

_GENERAL_FIELDS = (
    FieldSpec("duration", "Duration (hours)"),
    FieldSpec("equipment", "Equipment", InputKind.MULTI_SELECT),
    FieldSpec("notes", "Notes"),
)


# ============================================================================
# Capability classification
# ============================================================================

_CORE = Capabilities(is_core_drilling=True, requires_detailed_data=True)
_SAW = Capabilities(is_sawing=True, requires_detailed_data=True)
_SLAB_SAW = Capabilities(is_sawing=True, is_slab_saw=True, requires_detailed_data=True,
                         quick_entry=QuickEntryKind.MULTI_CUT)
_HAND_SAW = Capabilities(is_sawing=True, is_hand_saw=True, requires_detailed_data=True,
                         quick_entry=QuickEntryKind.MULTI_CUT)
_PLAIN = Capabilities()

CAPABILITIES: Dict[WorkTypeId, Capabilities] = {
    WorkTypeId.CORE_DRILLING: _CORE,
    WorkTypeId.WALL_CUTTING: Capabilities(requires_detailed_data=True),
    WorkTypeId.SLAB_SAWING: _SLAB_SAW,
    WorkTypeId.WIRE_SAWING: _SAW,
    WorkTypeId.HAND_SAWING: _HAND_SAW,
    WorkTypeId.CORE_DRILL: _CORE,
    WorkTypeId.HYDRAULIC_CORE_DRILL: _CORE,
    WorkTypeId.SLAB_SAW: _SLAB_SAW,
    WorkTypeId.ELECTRIC_SLAB_SAW: _SLAB_SAW,
    WorkTypeId.WALL_SAW: Capabilities(is_sawing=True, is_wall_saw=True, requires_detailed_data=True,
                                      quick_entry=QuickEntryKind.MULTI_CUT),
    WorkTypeId.WIRE_SAW: _SAW,
    WorkTypeId.HAND_SAW: _HAND_SAW,
    WorkTypeId.FLUSH_CUT_HAND_SAW: _HAND_SAW,
    WorkTypeId.CHAIN_SAW: Capabilities(is_sawing=True, is_chainsaw=True, requires_detailed_data=True,
                                       quick_entry=QuickEntryKind.CHAINSAW),
    WorkTypeId.RING_SAW: _SAW,
    WorkTypeId.BREAK_AND_REMOVE: Capabilities(quick_entry=QuickEntryKind.BREAK_AND_REMOVE),
    WorkTypeId.JACK_HAMMERING: Capabilities(quick_entry=QuickEntryKind.JACKHAMMER),
    WorkTypeId.BROKK: Capabilities(quick_entry=QuickEntryKind.BROKK),
}


def capabilities(work_type) -> Capabilities:
    """Classification flags for a work type; unlisted ids have none set."""
    return CAPABILITIES.get(to_work_type(work_type), _PLAIN)


def _work_performed_config(work_type: WorkTypeId) -> WorkTypeConfig:
    caps = capabilities(work_type)
    if caps.is_core_drilling:
        fields = _CORE_DRILL_FIELDS
    elif caps.is_sawing:
        fields = _SAWING_FIELDS
    else:
        fields = _GENERAL_FIELDS
    return WorkTypeConfig(description=work_type.value, fields=fields)


# Dispatched scope items can be logged as performed directly, so the dispatch
# ids are registered here too, with work-performed fields.
WORK_PERFORMED_TYPES: Dict[WorkTypeId, WorkTypeConfig] = {
    work_type: _work_performed_config(work_type)
    for work_type in [
        *(item for items in WORK_CATEGORIES.values() for item in items),
        *DISPATCH_WORK_TYPES,
    ]
}


# ============================================================================
# Catalog lookup
# ============================================================================

class WorkTypeCatalog:
    """Read-only lookup over one table of work type configs."""

    def __init__(self, name: str, entries: Dict[WorkTypeId, WorkTypeConfig]):
        self.name = name
        self._entries = dict(entries)

    def __contains__(self, work_type) -> bool:
        try:
            return to_work_type(work_type) in self._entries
        except UnknownWorkType:
            return False

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def config(self, work_type) -> WorkTypeConfig:
        try:
            key = to_work_type(work_type)
        except UnknownWorkType:
            raise UnknownWorkType(work_type, self.name) from None
        if key not in self._entries:
            raise UnknownWorkType(work_type, self.name)
        return self._entries[key]

    def get_field_specs(self, work_type) -> List[FieldSpec]:
        return list(self.config(work_type).fields)

    def get_field(self, work_type, name: str) -> Optional[FieldSpec]:
        for spec in self.config(work_type).fields:
            if spec.name == name:
                return spec
        return None

    def description(self, work_type) -> str:
        return self.config(work_type).description


DISPATCH_CATALOG = WorkTypeCatalog("dispatch", DISPATCH_WORK_TYPES)
WORK_PERFORMED_CATALOG = WorkTypeCatalog("work-performed", WORK_PERFORMED_TYPES)

CATALOGS: Dict[str, WorkTypeCatalog] = {
    DISPATCH_CATALOG.name: DISPATCH_CATALOG,
    WORK_PERFORMED_CATALOG.name: WORK_PERFORMED_CATALOG,
}


def get_field_specs(work_type, catalog: WorkTypeCatalog = DISPATCH_CATALOG) -> List[FieldSpec]:
    """Field specs for a work type. Raises UnknownWorkType if it is not registered."""
    return catalog.get_field_specs(work_type)


def filter_work_items(category: str = "All", search: str = "") -> List[WorkTypeId]:
    """Work-performed items for a category tab ("All", "Popular" or a category name), narrowed by search."""
    if category == "All":
        items = [item for group in WORK_CATEGORIES.values() for item in group]
    elif category == "Popular":
        items = list(POPULAR_ITEMS)
    else:
        items = list(WORK_CATEGORIES.get(category, ()))

    if search:
        needle = search.lower()
        items = [item for item in items if needle in item.value.lower()]

    return items


HAND_SAW_BLADES = ('20" Hand Saw', '24" Hand Saw', '30" Hand Saw')
CHAINSAW_CHAINS = ('10" Chain', '15" Chain', '20" Chain', '24" Chain')
STANDARD_BLADES = (
    '7" Diamond',
    '9" Diamond',
    '12" Diamond',
    '14" Diamond',
    '16" Diamond',
    '18" Diamond',
    '20" Diamond',
    '24" Diamond',
    'Abrasive',
    'Masonry',
    'Metal Cutting',
    'Wire Saw',
)


def get_blade_options(work_type) -> Tuple[str, ...]:
    """Blades (or chains) offered for a saw type."""
    caps = capabilities(work_type)
    if caps.is_hand_saw:
        return HAND_SAW_BLADES
    if caps.is_chainsaw:
        return CHAINSAW_CHAINS
    return STANDARD_BLADES


def allows_custom_blade(work_type) -> bool:
    caps = capabilities(work_type)
    return not (caps.is_hand_saw or caps.is_chainsaw)
