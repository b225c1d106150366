"""
WorkSpec - Work Order

The set of work items logged against one job, keyed by work type.

Committing a work type that is already on the order REPLACES that item: its
quantity is overwritten (never added to), its details are swapped for the new
ones, and its notes are swapped when new notes are given. Logging core
drilling with 5 holes and then again with 3 leaves one item of 3 holes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Union

from .aggregator import canonical_quantity
from .catalog import WORK_PERFORMED_CATALOG, QuickEntryKind, WorkTypeId, capabilities, to_work_type
from .details import (
    GeneralDetails,
    SawingDetails,
    WorkDetails,
    details_class_for,
    details_from_dict,
    require_positive,
)
from .errors import EmptyBatch, MissingSelection, UnknownWorkType, ValidationError
from .quick_entry import AreaTotal, BrokkTotal, LinearCutTotal

logger = logging.getLogger(__name__)

AREA_QUICK_ENTRIES = (QuickEntryKind.BREAK_AND_REMOVE, QuickEntryKind.JACKHAMMER, QuickEntryKind.BROKK)


@dataclass
class WorkItem:
    """One line of performed work. ``quantity`` is the canonical total for the work type."""
    work_type: WorkTypeId
    quantity: float
    notes: Optional[str] = None
    details: Optional[WorkDetails] = None

    @property
    def name(self) -> str:
        return self.work_type.value

    def to_dict(self) -> Dict[str, Any]:
        data = {"name": self.name, "quantity": self.quantity}
        if self.notes:
            data["notes"] = self.notes
        if self.details is not None:
            data["details"] = self.details.to_dict()
        return data


class WorkOrder:
    """Work items keyed by work type, in the order they were first committed."""

    def __init__(self):
        self._items: Dict[WorkTypeId, WorkItem] = {}

    def __contains__(self, work_type) -> bool:
        try:
            return to_work_type(work_type) in self._items
        except UnknownWorkType:
            return False

    def __len__(self):
        return len(self._items)

    def __iter__(self) -> Iterator[WorkItem]:
        return iter(list(self._items.values()))

    @property
    def items(self) -> List[WorkItem]:
        return list(self._items.values())

    def get(self, work_type) -> Optional[WorkItem]:
        return self._items.get(to_work_type(work_type))

    def commit(
        self,
        work_type,
        details: Union[WorkDetails, Dict[str, Any], None] = None,
        quantity: float = 1,
        notes: Optional[str] = None,
    ) -> WorkItem:
        """
        Add or replace the item for ``work_type``.

        Args:
            work_type: A work-performed id
            details: Typed details (or a dict of them) for the work type
            quantity: Count used for work types without a derived quantity
            notes: Free-text notes; empty notes leave existing notes alone

        Returns:
            The committed WorkItem
        """
        work_type = to_work_type(work_type)
        WORK_PERFORMED_CATALOG.config(work_type)

        if isinstance(details, dict):
            details = details_from_dict(work_type, details)
        if details is not None and not isinstance(details, details_class_for(work_type)):
            raise TypeError(
                f"{work_type} takes {details_class_for(work_type).__name__}, got {type(details).__name__}"
            )

        self._validate(work_type, details)

        caps = capabilities(work_type)
        if not (caps.is_core_drilling or caps.is_sawing):
            quantity = require_positive(quantity, "Quantity")
        quantity = canonical_quantity(work_type, details, fallback=quantity)
        notes = (notes or "").strip() or None

        existing = self._items.get(work_type)
        if existing is not None:
            existing.quantity = quantity
            if notes:
                existing.notes = notes
            if details is not None:
                existing.details = details
            logger.info("Replaced work item %s (quantity %s)", work_type, quantity)
            return existing

        item = WorkItem(work_type=work_type, quantity=quantity, notes=notes, details=details)
        self._items[work_type] = item
        logger.info("Committed work item %s (quantity %s)", work_type, quantity)
        return item

    def _validate(self, work_type: WorkTypeId, details: Optional[WorkDetails]) -> None:
        caps = capabilities(work_type)

        if caps.is_core_drilling:
            if details is None or not details.holes:
                raise EmptyBatch("Please add at least one hole entry with size and depth")

        elif caps.is_sawing:
            if details is None or not details.cuts:
                raise EmptyBatch("Please add at least one cut entry with linear feet and depth")
            what = "chain size" if caps.is_chainsaw else "blade type"
            for cut in details.cuts:
                if not cut.blades_used:
                    raise MissingSelection(f"Please select at least one {what} used")

    def commit_linear_total(
        self,
        work_type,
        total: LinearCutTotal,
        blades_used,
        cut_type: str = "wet",
        notes: Optional[str] = None,
        **cut_flags,
    ) -> WorkItem:
        """Commit a folded multi-cut or chainsaw batch as a single linear-mode cut."""
        if not capabilities(work_type).is_sawing:
            raise ValidationError(f"'{work_type}' does not take saw cuts")
        details = SawingDetails(cuts=[total.to_sawing_cut(blades_used, **cut_flags)], cut_type=cut_type)
        return self.commit(work_type, details, notes=notes)

    def commit_area_total(
        self,
        work_type,
        total: Union[AreaTotal, BrokkTotal],
        notes: Optional[str] = None,
        duration: Optional[float] = None,
    ) -> WorkItem:
        """Commit a folded break-and-remove, jackhammer or Brokk batch as square feet."""
        if capabilities(work_type).quick_entry not in AREA_QUICK_ENTRIES:
            raise ValidationError(f"'{work_type}' is not measured in square feet")
        combined = "\n".join(part for part in (total.notes, notes) if part)
        details = GeneralDetails(duration=duration) if duration is not None else None
        return self.commit(work_type, details, quantity=total.square_feet, notes=combined)

    def remove(self, work_type) -> Optional[WorkItem]:
        item = self._items.pop(to_work_type(work_type), None)
        if item is not None:
            logger.info("Removed work item %s", item.work_type)
        return item

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [item.to_dict() for item in self._items.values()]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkOrder":
        """Rebuild an order by replaying each item's commit, so quantities are recomputed."""
        order = cls()
        for item in data.get("items", []):
            order.commit(
                item["name"],
                details=item.get("details"),
                quantity=item.get("quantity", 1),
                notes=item.get("notes"),
            )
        return order

