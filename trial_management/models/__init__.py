"""
SQLAlchemy ORM models for trial management.

This module exports all database models and the declarative base.
Import models from this module to ensure they're registered with SQLAlchemy.
"""

from trial_management.models.base import Base, TimestampMixin, UUIDMixin, ModelMixin
from trial_management.models.organization import Organization
from trial_management.models.trial import ClinicalTrial, ClinicalSite
from trial_management.models.patient import (
    ClinicalPatient,
    PatientDataFile,
    PatientSiteHistory,
)

# Export all models
__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "ModelMixin",
    # Models
    "Organization",
    "ClinicalTrial",
    "ClinicalSite",
    "ClinicalPatient",
    "PatientDataFile",
    "PatientSiteHistory",
]
