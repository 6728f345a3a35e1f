"""
Clinical trial and clinical site models.

A trial belongs to an organization and is conducted at one or more
sites. Patients are enrolled into a trial at a site.
"""

from sqlalchemy import Column, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from trial_management.models.base import Base, UUIDMixin, TimestampMixin, ModelMixin


class ClinicalTrial(Base, UUIDMixin, TimestampMixin, ModelMixin):
    """
    Clinical trial run by an organization.

    Attributes:
        id: UUID primary key
        organization_id: Foreign key to Organization
        name: Trial name or protocol title
        description: Free-text protocol summary
        clinical_sites: Sites conducting this trial
        patients: Patients enrolled in this trial
    """

    __tablename__ = "clinical_trials"

    organization_id = Column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        doc="Foreign key to Organization"
    )

    name = Column(
        String(255),
        nullable=False,
        doc="Trial name or protocol title"
    )

    description = Column(
        Text,
        nullable=True,
        doc="Free-text protocol summary"
    )

    # Relationships
    organization = relationship("Organization", back_populates="clinical_trials")

    clinical_sites = relationship(
        "ClinicalSite",
        back_populates="clinical_trial",
        cascade="all, delete-orphan"
    )

    patients = relationship(
        "ClinicalPatient",
        back_populates="clinical_trial",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_clinical_trials_organization", "organization_id"),
    )


class ClinicalSite(Base, UUIDMixin, TimestampMixin, ModelMixin):
    """
    Site (hospital, clinic) conducting a clinical trial.

    Attributes:
        id: UUID primary key
        clinical_trial_id: Foreign key to ClinicalTrial
        name: Site name
        location: Site address or city
        patients: Patients currently assigned to this site
    """

    __tablename__ = "clinical_sites"

    clinical_trial_id = Column(
        String(36),
        ForeignKey("clinical_trials.id", ondelete="CASCADE"),
        nullable=False,
        doc="Foreign key to ClinicalTrial"
    )

    name = Column(
        String(255),
        nullable=False,
        doc="Site name"
    )

    location = Column(
        String(500),
        nullable=True,
        doc="Site address or city"
    )

    # Relationships
    clinical_trial = relationship("ClinicalTrial", back_populates="clinical_sites")

    patients = relationship(
        "ClinicalPatient",
        back_populates="clinical_site"
    )

    site_histories = relationship(
        "PatientSiteHistory",
        back_populates="clinical_site"
    )

    __table_args__ = (
        Index("idx_clinical_sites_trial", "clinical_trial_id"),
    )
