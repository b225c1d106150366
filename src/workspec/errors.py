"""
WorkSpec - Engine Errors

Every failure in the engine is a synchronous rejection. Programmer errors
(unknown ids, list operations on scalar fields) are distinct from the
recoverable input rejections the UI shows to the operator.
"""

from typing import Optional


class WorkSpecError(Exception):
    """Base class for all engine errors."""


class UnknownWorkType(WorkSpecError, KeyError):
    """A work type id is not registered in the catalog being consulted."""

    def __init__(self, work_type, catalog_name: str = ""):
        self.work_type = work_type
        self.catalog_name = catalog_name
        where = f" in {catalog_name} catalog" if catalog_name else ""
        super().__init__(f"Unknown work type '{work_type}'{where}")

    def __str__(self):
        return self.args[0]


class UnknownField(WorkSpecError, KeyError):
    """A field name is not declared for the work type."""

    def __init__(self, work_type, name: str):
        self.work_type = work_type
        self.name = name
        super().__init__(f"Work type '{work_type}' has no field '{name}'")

    def __str__(self):
        return self.args[0]


class NotAListField(WorkSpecError, TypeError):
    """A list operation was attempted on a field that is not a structured list."""

    def __init__(self, name: str, detail: Optional[str] = None):
        self.name = name
        super().__init__(detail or f"Field '{name}' is not a structured-list field")


class ValidationError(WorkSpecError, ValueError):
    """User input was rejected. ``reason`` is shown to the operator as-is."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class EmptyBatch(ValidationError):
    """A batch, hole list or cut list was committed with no entries."""


class InvalidDimension(ValidationError):
    """A dimension or count was zero, negative, or not a number."""


class MissingSelection(ValidationError):
    """A required choice (bit size, blade, removal method, equipment) is absent."""
