"""
WorkSpec - Unit Aggregator

Pure conversion and reduction functions that turn structured work details
into the single canonical quantity stored on a work item:

* core drilling  -> total holes
* sawing         -> total linear feet
* break / hammer -> total square feet

Nothing here raises for missing optional data; absent values count as zero.
"""

import logging
from typing import Iterable, List, Optional

from .catalog import capabilities

logger = logging.getLogger(__name__)

INCHES_PER_FOOT = 12.0

AREA_MODE = "area"
LINEAR_MODE = "linear"


def inches_to_feet(inches: float) -> float:
    return (inches or 0) / INCHES_PER_FOOT


def square_feet(length: float, width: float) -> float:
    return (length or 0) * (width or 0)


# ============================================================================
# Area mode (rectangular openings -> linear feet of cut)
# ============================================================================

def perimeter(area) -> float:
    """Perimeter of one rectangular opening, in feet."""
    return 2 * (area.length or 0) + 2 * (area.width or 0)


def area_linear_feet(area) -> float:
    """Linear feet of cut for ``area.quantity`` identical openings."""
    return perimeter(area) * (area.quantity or 0)


def areas_linear_feet(areas: Optional[Iterable]) -> float:
    return sum(area_linear_feet(area) for area in (areas or ()))


def areas_cut_depth(areas: Optional[List]) -> float:
    """
    Depth of an area-mode cut.

    Every area inside one cut entry is assumed to share a depth, so the first
    area's depth is used. This is not the max() used by quick-entry batches.
    """
    if not areas:
        return 0.0
    return areas[0].depth or 0.0


def cut_linear_feet(cut) -> float:
    if cut.input_mode == AREA_MODE:
        return areas_linear_feet(cut.areas)
    return cut.linear_feet or 0.0


# ============================================================================
# Work item totals
# ============================================================================

def total_holes(holes: Optional[Iterable]) -> int:
    return sum(hole.quantity or 0 for hole in (holes or ()))


def total_linear_feet(cuts: Optional[Iterable]) -> float:
    return sum(cut_linear_feet(cut) for cut in (cuts or ()))


def canonical_quantity(work_type, details, fallback: float = 1) -> float:
    """
    Authoritative quantity for a work item.

    Core drilling and sawing quantities are always recomputed from the
    structured details; any externally supplied number is ignored for them.
    Other work types keep the caller's ``fallback`` count.
    """
    caps = capabilities(work_type)

    if caps.is_core_drilling:
        quantity = total_holes(getattr(details, "holes", None))
    elif caps.is_sawing:
        quantity = total_linear_feet(getattr(details, "cuts", None))
    else:
        return fallback

    logger.debug("Canonical quantity for %s: %s", work_type, quantity)
    return quantity


# ============================================================================
# Quick-entry reductions
# ============================================================================

def sum_count_by_length(entries: Iterable, length_attr: str) -> float:
    """Sum of ``num_cuts * <length_attr>`` over the entries."""
    return sum(entry.num_cuts * getattr(entry, length_attr) for entry in entries)


def max_depth(entries: Iterable) -> float:
    depths = [entry.depth for entry in entries if entry.depth is not None]
    return max(depths) if depths else 0.0


def total_square_feet(entries: Iterable) -> float:
    return sum(square_feet(entry.length, entry.width) for entry in entries)


def average(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)
