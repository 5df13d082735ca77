"""List selection and mass actions."""

from manager_portal.listings.mass_delete import (
    MassDeleteFailure,
    MassDeleteManager,
    MassDeleteOutcome,
)
from manager_portal.listings.selection import SelectionSet

__all__ = [
    "MassDeleteFailure",
    "MassDeleteManager",
    "MassDeleteOutcome",
    "SelectionSet",
]
