"""
WorkSpec - Detail Record Model

Typed payloads for each work type:

* structured sub-records (holes, cuts, cut areas, demolition areas), validated
  when they are created so a bad dimension never reaches a list;
* ``DetailRecord``, the field-name keyed record behind the dispatch-order form;
* ``CoreDrillingDetails`` / ``SawingDetails`` / ``GeneralDetails``, the tagged
  union carried by a work-performed ``WorkItem``.
"""

import logging
import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .aggregator import AREA_MODE, LINEAR_MODE, areas_cut_depth, areas_linear_feet, total_holes, total_linear_feet
from .catalog import (
    CUT_TYPES,
    DISPATCH_CATALOG,
    FieldSpec,
    InputKind,
    WorkTypeCatalog,
    capabilities,
    to_work_type,
)
from .errors import EmptyBatch, InvalidDimension, MissingSelection, NotAListField, UnknownField, ValidationError

logger = logging.getLogger(__name__)


# ============================================================================
# Validation helpers
# ============================================================================

def require_positive(value, label: str) -> float:
    if isinstance(value, bool):
        raise InvalidDimension(f"{label} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidDimension(f"{label} must be a number") from None
    if not math.isfinite(number):
        raise InvalidDimension(f"{label} must be a number")
    if number <= 0:
        logger.debug("Rejected %s=%r", label, value)
        raise InvalidDimension(f"{label} must be greater than zero")
    return number


def require_count(value, label: str) -> int:
    if isinstance(value, bool):
        raise InvalidDimension(f"{label} must be a whole number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidDimension(f"{label} must be a whole number") from None
    if not math.isfinite(number):
        raise InvalidDimension(f"{label} must be a whole number")
    if number != int(number):
        raise InvalidDimension(f"{label} must be a whole number")
    if number < 1:
        logger.debug("Rejected %s=%r", label, value)
        raise InvalidDimension(f"{label} must be at least 1")
    return int(number)


def _optional_text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _unique_strings(values) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    seen = []
    for value in values:
        text = str(value).strip()
        if text and text not in seen:
            seen.append(text)
    return tuple(seen)


def _is_empty(value) -> bool:
    return value is None or value == "" or value == () or value == []


def _serialize(value):
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


def _compact(record) -> Dict[str, Any]:
    """Dataclass -> dict with None and empty optional values omitted."""
    data = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if _is_empty(value):
            continue
        data[f.name] = _serialize(value)
    return data


def _coerce(cls, value):
    if isinstance(value, cls):
        return value
    if isinstance(value, dict):
        return cls(**value)
    raise NotAListField(cls.__name__, f"Expected {cls.__name__} or dict, got {type(value).__name__}")


# ============================================================================
# Structured sub-records
# ============================================================================

@dataclass(frozen=True)
class HoleConfig:
    """``quantity`` identical holes of one bit size and depth."""
    bit_size: str
    depth_inches: float
    quantity: int = 1
    above_five_feet: bool = False
    plastic_setup: bool = False
    cut_steel: bool = False
    steel_encountered: Optional[str] = None

    def __post_init__(self):
        bit_size = _optional_text(self.bit_size)
        if not bit_size:
            raise MissingSelection("Please specify both bit size and depth for the hole")
        object.__setattr__(self, "bit_size", bit_size)
        object.__setattr__(self, "depth_inches", require_positive(self.depth_inches, "Hole depth"))
        object.__setattr__(self, "quantity", require_count(self.quantity, "Number of holes"))
        object.__setattr__(self, "steel_encountered", _optional_text(self.steel_encountered))

    @property
    def diameter(self) -> str:
        """Bit size without the trailing inch mark, e.g. '1-1/4'."""
        return self.bit_size.rstrip('"').strip()

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)


@dataclass(frozen=True)
class CutArea:
    """``quantity`` identical rectangular openings, length/width in feet, depth in inches."""
    length: float
    width: float
    depth: float
    quantity: int = 1
    cut_steel: bool = False
    overcut: bool = False
    chainsawed: bool = False
    chainsaw_areas: Optional[int] = None
    chainsaw_width_inches: Optional[float] = None
    steel_encountered: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "length", require_positive(self.length, "Length"))
        object.__setattr__(self, "width", require_positive(self.width, "Width"))
        object.__setattr__(self, "depth", require_positive(self.depth, "Depth"))
        object.__setattr__(self, "quantity", require_count(self.quantity, "Quantity"))
        object.__setattr__(self, "steel_encountered", _optional_text(self.steel_encountered))

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)


@dataclass(frozen=True)
class SawingCut:
    """
    One cut entry for a saw.

    In ``linear`` mode ``linear_feet`` and ``cut_depth`` are what the operator
    entered. In ``area`` mode both are derived from ``areas`` when the cut is
    built and any values passed in for them are discarded.
    """
    input_mode: str = LINEAR_MODE
    linear_feet: float = 0.0
    cut_depth: float = 0.0
    areas: Tuple[CutArea, ...] = ()
    blades_used: Tuple[str, ...] = ()
    cut_steel: bool = False
    overcut: bool = False
    chainsawed: bool = False
    chainsaw_areas: Optional[int] = None
    chainsaw_width_inches: Optional[float] = None
    steel_encountered: Optional[str] = None
    removal: bool = False
    removal_equipment: Optional[str] = None

    def __post_init__(self):
        if self.input_mode not in (LINEAR_MODE, AREA_MODE):
            raise ValidationError(f"Unknown input mode '{self.input_mode}'")

        object.__setattr__(self, "blades_used", _unique_strings(self.blades_used))
        object.__setattr__(self, "steel_encountered", _optional_text(self.steel_encountered))
        object.__setattr__(self, "removal_equipment", _optional_text(self.removal_equipment))

        if self.input_mode == AREA_MODE:
            areas = tuple(_coerce(CutArea, area) for area in (self.areas or ()))
            if not areas:
                raise EmptyBatch("Please add at least one area")
            object.__setattr__(self, "areas", areas)
            object.__setattr__(self, "linear_feet", areas_linear_feet(areas))
            object.__setattr__(self, "cut_depth", areas_cut_depth(areas))
        else:
            if self.areas:
                raise ValidationError("Areas are only used in area input mode")
            object.__setattr__(self, "areas", ())
            object.__setattr__(self, "linear_feet", require_positive(self.linear_feet, "Linear feet"))
            object.__setattr__(self, "cut_depth", require_positive(self.cut_depth, "Cut depth"))

    @classmethod
    def linear(cls, linear_feet: float, cut_depth: float, **kwargs) -> "SawingCut":
        return cls(input_mode=LINEAR_MODE, linear_feet=linear_feet, cut_depth=cut_depth, **kwargs)

    @classmethod
    def from_areas(cls, areas, **kwargs) -> "SawingCut":
        return cls(input_mode=AREA_MODE, areas=tuple(areas), **kwargs)

    def with_blades(self, blades) -> "SawingCut":
        return replace(self, blades_used=tuple(blades))

    def to_dict(self) -> Dict[str, Any]:
        data = _compact(self)
        data["input_mode"] = self.input_mode
        return data


@dataclass(frozen=True)
class WallCut:
    """Wall-saw openings of one size."""
    quantity: int
    dimensions: str
    thickness_inches: float
    removal: bool = False
    removal_equipment: Optional[str] = None

    def __post_init__(self):
        dimensions = _optional_text(self.dimensions)
        if not dimensions:
            raise InvalidDimension("Opening dimensions are required")
        object.__setattr__(self, "dimensions", dimensions)
        object.__setattr__(self, "quantity", require_count(self.quantity, "Number of cuts"))
        object.__setattr__(self, "thickness_inches", require_positive(self.thickness_inches, "Wall thickness"))
        object.__setattr__(self, "removal_equipment", _optional_text(self.removal_equipment))

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)


@dataclass(frozen=True)
class WireCut:
    description: str

    def __post_init__(self):
        description = _optional_text(self.description)
        if not description:
            raise MissingSelection("Please describe the wire saw cut")
        object.__setattr__(self, "description", description)

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)


@dataclass(frozen=True)
class DemolitionArea:
    """A demolition area; volume and thickness are free text as written on the order."""
    area_volume: str
    thickness: str = ""
    material: str = ""
    material_other: Optional[str] = None

    def __post_init__(self):
        area_volume = _optional_text(self.area_volume)
        if not area_volume:
            raise InvalidDimension("Area/volume is required")
        object.__setattr__(self, "area_volume", area_volume)
        object.__setattr__(self, "thickness", _optional_text(self.thickness) or "")
        object.__setattr__(self, "material", _optional_text(self.material) or "")
        object.__setattr__(self, "material_other", _optional_text(self.material_other))

    @property
    def display_material(self) -> str:
        if self.material == "Other" and self.material_other:
            return self.material_other
        return self.material

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)


RECORD_TYPES = {
    "hole": HoleConfig,
    "sawing_cut": SawingCut,
    "wall_cut": WallCut,
    "wire_cut": WireCut,
    "demolition_area": DemolitionArea,
}


# ============================================================================
# Dispatch-order detail record
# ============================================================================

class DetailRecord:
    """
    Field values for one selected work type, keyed by the catalog's field names.

    Values are a string, an ordered set of strings (multi-select) or a tuple of
    structured sub-records. Setting an empty value removes the field, so a
    record never holds blank entries.
    """

    def __init__(self, work_type, catalog: WorkTypeCatalog = DISPATCH_CATALOG,
                 values: Optional[Dict[str, Any]] = None):
        self.work_type = to_work_type(work_type)
        self.catalog = catalog
        self._specs: Dict[str, FieldSpec] = {
            spec.name: spec for spec in catalog.get_field_specs(self.work_type)
        }
        self._values: Dict[str, Any] = {}
        for name, value in (values or {}).items():
            self.set_field(name, value)

    def __repr__(self):
        return f"DetailRecord({self.work_type.value!r}, {self._values!r})"

    def __eq__(self, other):
        if not isinstance(other, DetailRecord):
            return NotImplemented
        return self.work_type == other.work_type and self._values == other._values

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __len__(self):
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return (name for name in self._specs if name in self._values)

    def spec(self, name: str) -> FieldSpec:
        if name not in self._specs:
            raise UnknownField(self.work_type, name)
        return self._specs[name]

    def get(self, name: str, default=None):
        return self._values.get(name, default)

    def items(self) -> List[Tuple[FieldSpec, Any]]:
        """Set fields in catalog order."""
        return [(self._specs[name], self._values[name]) for name in self]

    def visible_items(self) -> List[Tuple[FieldSpec, Any]]:
        """Set fields in catalog order, minus conditional fields whose condition does not hold."""
        return [(spec, value) for spec, value in self.items() if spec.is_visible(self._values)]

    def set_field(self, name: str, value) -> None:
        spec = self.spec(name)
        normalized = self._normalize(spec, value)
        if _is_empty(normalized):
            self._values.pop(name, None)
        else:
            self._values[name] = normalized

    def append_to_list(self, name: str, item) -> None:
        spec = self.spec(name)
        if not spec.is_list:
            raise NotAListField(name)
        record = _coerce(RECORD_TYPES[spec.record], item)
        self._values[name] = self._values.get(name, ()) + (record,)

    def remove_from_list(self, name: str, index: int) -> None:
        spec = self.spec(name)
        if not spec.is_list:
            raise NotAListField(name)
        current = list(self._values.get(name, ()))
        if not 0 <= index < len(current):
            raise IndexError(f"No entry {index} in '{name}'")
        del current[index]
        self.set_field(name, current)

    def toggle_option(self, name: str, option: str) -> None:
        spec = self.spec(name)
        if spec.input_kind != InputKind.MULTI_SELECT:
            raise TypeError(f"Field '{name}' is not a multi-select field")
        current = list(self._values.get(name, ()))
        if option in current:
            current.remove(option)
        else:
            current.append(option)
        self.set_field(name, current)

    def _normalize(self, spec: FieldSpec, value):
        if value is None:
            return None
        if spec.is_list:
            if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
                raise NotAListField(spec.name, f"Field '{spec.name}' expects a list of entries")
            record_type = RECORD_TYPES[spec.record]
            return tuple(_coerce(record_type, item) for item in value)
        if spec.input_kind == InputKind.MULTI_SELECT:
            return _unique_strings(value)
        if spec.input_kind == InputKind.YES_NO and isinstance(value, bool):
            return "Yes" if value else "No"
        if isinstance(value, (list, tuple)):
            raise TypeError(f"Field '{spec.name}' takes a single value")
        return str(value).strip()

    def copy(self) -> "DetailRecord":
        clone = DetailRecord(self.work_type, self.catalog)
        clone._values = dict(self._values)
        return clone

    def to_dict(self) -> Dict[str, Any]:
        return {name: _serialize(self._values[name]) for name in self}

    @classmethod
    def from_dict(cls, work_type, data: Optional[Dict[str, Any]],
                  catalog: WorkTypeCatalog = DISPATCH_CATALOG) -> "DetailRecord":
        return cls(work_type, catalog, data or {})


def set_field(detail: DetailRecord, name: str, value) -> None:
    detail.set_field(name, value)


def append_to_list(detail: DetailRecord, name: str, item) -> None:
    detail.append_to_list(name, item)


def remove_from_list(detail: DetailRecord, name: str, index: int) -> None:
    detail.remove_from_list(name, index)


def toggle_option(detail: DetailRecord, name: str, option: str) -> None:
    detail.toggle_option(name, option)


def visible_fields(detail: DetailRecord) -> List[FieldSpec]:
    """Field specs the form should show for the record's current values."""
    return [spec for spec in detail.catalog.get_field_specs(detail.work_type)
            if spec.is_visible(detail._values)]


# ============================================================================
# Work-performed details (tagged union)
# ============================================================================

@dataclass
class CoreDrillingDetails:
    holes: List[HoleConfig] = field(default_factory=list)
    notes: Optional[str] = None

    kind = "core_drilling"

    def __post_init__(self):
        self.holes = [_coerce(HoleConfig, hole) for hole in self.holes]
        self.notes = _optional_text(self.notes)

    def add_hole(self, hole) -> None:
        self.holes.append(_coerce(HoleConfig, hole))

    def remove_hole(self, index: int) -> None:
        del self.holes[index]

    @property
    def total_holes(self) -> int:
        return total_holes(self.holes)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **_compact(self)}


@dataclass
class SawingDetails:
    cuts: List[SawingCut] = field(default_factory=list)
    cut_type: str = "wet"
    notes: Optional[str] = None

    kind = "sawing"

    def __post_init__(self):
        if self.cut_type not in CUT_TYPES:
            raise ValidationError(f"Cut type must be one of: {', '.join(CUT_TYPES)}")
        self.cuts = [_coerce(SawingCut, cut) for cut in self.cuts]
        self.notes = _optional_text(self.notes)

    def add_cut(self, cut) -> None:
        self.cuts.append(_coerce(SawingCut, cut))

    def remove_cut(self, index: int) -> None:
        del self.cuts[index]

    @property
    def total_linear_feet(self) -> float:
        return total_linear_feet(self.cuts)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **_compact(self)}


@dataclass
class GeneralDetails:
    duration: Optional[float] = None
    equipment: List[str] = field(default_factory=list)
    notes: Optional[str] = None

    kind = "general"

    def __post_init__(self):
        if self.duration is not None:
            self.duration = require_positive(self.duration, "Duration")
        self.equipment = list(_unique_strings(self.equipment))
        self.notes = _optional_text(self.notes)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **_compact(self)}


WorkDetails = Union[CoreDrillingDetails, SawingDetails, GeneralDetails]


def details_class_for(work_type):
    caps = capabilities(work_type)
    if caps.is_core_drilling:
        return CoreDrillingDetails
    if caps.is_sawing:
        return SawingDetails
    return GeneralDetails


def details_from_dict(work_type, data: Optional[Dict[str, Any]]) -> Optional[WorkDetails]:
    """Build the details variant the work type calls for. ``kind`` in the data is ignored."""
    if data is None:
        return None
    payload = {key: value for key, value in data.items() if key != "kind"}
    return details_class_for(work_type)(**payload)
