"""
Repository layer for data access.

Provides data access abstractions following the Repository pattern,
isolating database access from business logic.
"""

from trial_management.repositories.interfaces import ITrialManagementRepository
from trial_management.repositories.trial_management import (
    GENERIC_ERROR_MESSAGE,
    TrialManagementRepository,
)

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "ITrialManagementRepository",
    "TrialManagementRepository",
]
