"""
WorkSpec - Quick-Entry Batch Calculators

Short-lived accumulators for repeated (count, dimension) rows entered in one
sitting. A batch is created per entry session, entries are validated as they
are built, and ``fold(batch)`` reduces the batch to one canonical total that
the caller writes onto a work item. Batches are never shared between sessions.

    batch = ChainsawBatch()
    batch.add(num_cuts=2, length_inches=48, depth=6)
    batch.add(num_cuts=1, length_inches=24, depth=8)
    total = fold(batch)          # LinearCutTotal(linear_feet=10.0, cut_depth=8.0)
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .aggregator import (
    INCHES_PER_FOOT,
    average,
    inches_to_feet,
    max_depth,
    square_feet,
    sum_count_by_length,
    total_square_feet,
)
from .catalog import QuickEntryKind, capabilities
from .details import SawingCut, require_count, require_positive
from .errors import EmptyBatch, MissingSelection, ValidationError

logger = logging.getLogger(__name__)


REMOVAL_METHODS: Dict[str, str] = {
    "hand_removal": "Hand Removal",
    "rigged": "Rigged",
}

REMOVAL_EQUIPMENT: Dict[str, str] = {
    "lull": "Lull",
    "forklift": "Forklift",
    "skidsteer": "Skidsteer",
}

JACKHAMMER_EQUIPMENT: Dict[str, str] = {
    "hilti_1000": "Hilti 1000",
    "hilti_3000": "Hilti 3000",
    "other": "Other",
}


# ============================================================================
# Entries
# ============================================================================

@dataclass(frozen=True)
class MultiCutEntry:
    """Slab, wall or hand saw row: ``num_cuts`` cuts of ``length_feet`` at ``depth`` inches."""
    num_cuts: int
    length_feet: float
    depth: float

    def __post_init__(self):
        object.__setattr__(self, "num_cuts", require_count(self.num_cuts, "Number of cuts"))
        object.__setattr__(self, "length_feet", require_positive(self.length_feet, "Length"))
        object.__setattr__(self, "depth", require_positive(self.depth, "Depth"))

    @property
    def linear_feet(self) -> float:
        return self.num_cuts * self.length_feet


@dataclass(frozen=True)
class ChainsawEntry:
    """Chainsaw row, measured in inches."""
    num_cuts: int
    length_inches: float
    depth: float

    def __post_init__(self):
        object.__setattr__(self, "num_cuts", require_count(self.num_cuts, "Number of cuts"))
        object.__setattr__(self, "length_inches", require_positive(self.length_inches, "Length"))
        object.__setattr__(self, "depth", require_positive(self.depth, "Depth"))

    @property
    def length_feet(self) -> float:
        return inches_to_feet(self.length_inches)

    @property
    def linear_feet(self) -> float:
        return self.num_cuts * self.length_inches / INCHES_PER_FOOT


@dataclass(frozen=True)
class BreakRemoveEntry:
    length: float
    width: float
    depth: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "length", require_positive(self.length, "Length"))
        object.__setattr__(self, "width", require_positive(self.width, "Width"))
        if self.depth is not None:
            object.__setattr__(self, "depth", require_positive(self.depth, "Depth"))

    @property
    def square_feet(self) -> float:
        return square_feet(self.length, self.width)


@dataclass(frozen=True)
class JackhammerEntry:
    length: float
    width: float

    def __post_init__(self):
        object.__setattr__(self, "length", require_positive(self.length, "Length"))
        object.__setattr__(self, "width", require_positive(self.width, "Width"))

    @property
    def square_feet(self) -> float:
        return square_feet(self.length, self.width)


@dataclass(frozen=True)
class BrokkEntry:
    length: float
    width: float
    thickness: float

    def __post_init__(self):
        object.__setattr__(self, "length", require_positive(self.length, "Length"))
        object.__setattr__(self, "width", require_positive(self.width, "Width"))
        object.__setattr__(self, "thickness", require_positive(self.thickness, "Thickness"))

    @property
    def square_feet(self) -> float:
        return square_feet(self.length, self.width)


# ============================================================================
# Folded totals
# ============================================================================

@dataclass(frozen=True)
class LinearCutTotal:
    """Linear feet of cut plus the deepest cut in the batch."""
    linear_feet: float
    cut_depth: float
    entry_count: int

    def to_sawing_cut(self, blades_used, **kwargs) -> SawingCut:
        return SawingCut.linear(self.linear_feet, self.cut_depth, blades_used=tuple(blades_used), **kwargs)

    def to_dict(self) -> dict:
        return {
            "linear_feet": self.linear_feet,
            "cut_depth": self.cut_depth,
            "entry_count": self.entry_count,
        }


@dataclass(frozen=True)
class AreaTotal:
    square_feet: float
    entry_count: int
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"square_feet": self.square_feet, "entry_count": self.entry_count}
        if self.notes:
            data["notes"] = self.notes
        return data


@dataclass(frozen=True)
class BrokkTotal:
    square_feet: float
    average_thickness: float
    entry_count: int

    @property
    def notes(self) -> str:
        return f'Avg thickness: {self.average_thickness:.2f}"'

    def to_dict(self) -> dict:
        return {
            "square_feet": self.square_feet,
            "average_thickness": self.average_thickness,
            "entry_count": self.entry_count,
            "notes": self.notes,
        }


# ============================================================================
# Batches
# ============================================================================

class QuickEntryBatch:
    """Ordered rows for one quick-entry session."""

    kind: QuickEntryKind = None
    entry_type = None

    def __init__(self, entries=()):
        self.entries: List = []
        for entry in entries:
            self.add(entry)

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def add(self, entry=None, **values):
        """Validate and append a row. Accepts an entry, a dict, or keyword values."""
        if entry is None:
            entry = self.entry_type(**values)
        elif isinstance(entry, dict):
            entry = self.entry_type(**entry)
        elif not isinstance(entry, self.entry_type):
            raise TypeError(f"{type(self).__name__} takes {self.entry_type.__name__} rows")
        self.entries.append(entry)
        return entry

    def remove(self, index: int) -> None:
        del self.entries[index]

    def fold(self):
        if not self.entries:
            logger.debug("Rejected empty %s batch", self.kind.value)
            raise EmptyBatch("Please add at least one entry before saving")
        total = self._fold()
        logger.debug("Folded %s batch of %d entries: %s", self.kind.value, len(self.entries), total)
        return total

    def _fold(self):
        raise NotImplementedError


class MultiCutBatch(QuickEntryBatch):
    """Slab / wall / hand saw cuts in feet. Depth is the deepest row, not a sum."""

    kind = QuickEntryKind.MULTI_CUT
    entry_type = MultiCutEntry

    @property
    def running_total(self) -> float:
        return sum_count_by_length(self.entries, "length_feet")

    def _fold(self) -> LinearCutTotal:
        return LinearCutTotal(
            linear_feet=self.running_total,
            cut_depth=max_depth(self.entries),
            entry_count=len(self.entries),
        )


class ChainsawBatch(QuickEntryBatch):
    """Chainsaw cuts entered in inches, folded to feet. Depth is the deepest row."""

    kind = QuickEntryKind.CHAINSAW
    entry_type = ChainsawEntry

    @property
    def running_total(self) -> float:
        return sum_count_by_length(self.entries, "length_inches") / INCHES_PER_FOOT

    def _fold(self) -> LinearCutTotal:
        return LinearCutTotal(
            linear_feet=self.running_total,
            cut_depth=max_depth(self.entries),
            entry_count=len(self.entries),
        )


class BreakAndRemoveBatch(QuickEntryBatch):
    """Areas broken out, in square feet. The removal method travels as note text."""

    kind = QuickEntryKind.BREAK_AND_REMOVE
    entry_type = BreakRemoveEntry

    def __init__(self, entries=(), removal_method: Optional[str] = None,
                 removal_equipment: Optional[str] = None):
        super().__init__(entries)
        self.removal_method = removal_method
        self.removal_equipment = removal_equipment

    @property
    def running_total(self) -> float:
        return total_square_feet(self.entries)

    def removal_notes(self) -> str:
        if not self.removal_method:
            raise MissingSelection("Please select a removal method")
        if self.removal_method not in REMOVAL_METHODS:
            raise ValidationError(f"Unknown removal method '{self.removal_method}'")
        text = f"Removal: {REMOVAL_METHODS[self.removal_method]}"
        if self.removal_method == "rigged":
            if not self.removal_equipment:
                raise MissingSelection("Rigged removal requires equipment selection")
            equipment = REMOVAL_EQUIPMENT.get(self.removal_equipment, self.removal_equipment)
            text += f" ({equipment})"
        return text

    def _fold(self) -> AreaTotal:
        return AreaTotal(
            square_feet=self.running_total,
            entry_count=len(self.entries),
            notes=self.removal_notes(),
        )


class JackhammerBatch(QuickEntryBatch):
    """Areas hammered, in square feet. The hammer used travels as note text."""

    kind = QuickEntryKind.JACKHAMMER
    entry_type = JackhammerEntry

    def __init__(self, entries=(), equipment: Optional[str] = None,
                 equipment_other: Optional[str] = None):
        super().__init__(entries)
        self.equipment = equipment
        self.equipment_other = equipment_other

    @property
    def running_total(self) -> float:
        return total_square_feet(self.entries)

    def equipment_notes(self) -> str:
        if not self.equipment:
            raise MissingSelection("Please select the jack hammer used")
        if self.equipment == "other":
            other = (self.equipment_other or "").strip()
            if not other:
                raise MissingSelection("Please specify the other equipment used")
            return f"Equipment: {other}"
        if self.equipment not in JACKHAMMER_EQUIPMENT:
            raise ValidationError(f"Unknown jack hammer '{self.equipment}'")
        return f"Equipment: {JACKHAMMER_EQUIPMENT[self.equipment]}"

    def _fold(self) -> AreaTotal:
        return AreaTotal(
            square_feet=self.running_total,
            entry_count=len(self.entries),
            notes=self.equipment_notes(),
        )


class BrokkBatch(QuickEntryBatch):
    """Brokk demolition areas; thickness is averaged, never summed."""

    kind = QuickEntryKind.BROKK
    entry_type = BrokkEntry

    @property
    def running_total(self) -> float:
        return total_square_feet(self.entries)

    @property
    def average_thickness(self) -> float:
        return average(entry.thickness for entry in self.entries)

    def _fold(self) -> BrokkTotal:
        return BrokkTotal(
            square_feet=self.running_total,
            average_thickness=self.average_thickness,
            entry_count=len(self.entries),
        )


BATCH_TYPES = {
    QuickEntryKind.MULTI_CUT: MultiCutBatch,
    QuickEntryKind.CHAINSAW: ChainsawBatch,
    QuickEntryKind.BREAK_AND_REMOVE: BreakAndRemoveBatch,
    QuickEntryKind.JACKHAMMER: JackhammerBatch,
    QuickEntryKind.BROKK: BrokkBatch,
}


def new_batch(kind, **options) -> QuickEntryBatch:
    """Start an empty batch for a quick-entry kind (or its string value)."""
    return BATCH_TYPES[QuickEntryKind(kind)](**options)


def batch_for_work_type(work_type, **options) -> QuickEntryBatch:
    """Start the quick-entry batch a work-performed item uses."""
    kind = capabilities(work_type).quick_entry
    if kind is None:
        raise ValidationError(f"'{work_type}' has no quick entry")
    return new_batch(kind, **options)


def fold(batch: QuickEntryBatch):
    """Reduce a batch to its canonical total. Raises EmptyBatch for a batch with no rows."""
    return batch.fold()
