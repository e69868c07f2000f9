# src/dayflow/planner/errors.py

from __future__ import annotations


class PlannerError(Exception):
    """Base class for planner errors."""


class ValidationError(PlannerError, ValueError):
    """A required field is empty or malformed. The caller should keep its form open."""


class NotFoundError(PlannerError, LookupError):
    """Raised only by strict lookups; mutators treat unknown ids as no-ops."""


class StorageError(PlannerError):
    """Storage back-end could not read or write the planner blob."""
