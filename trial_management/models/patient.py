"""
Patient models: enrolled patients, their data files and site history.
"""

from sqlalchemy import Column, String, Text, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from trial_management.models.base import Base, UUIDMixin, TimestampMixin, ModelMixin


class ClinicalPatient(Base, UUIDMixin, TimestampMixin, ModelMixin):
    """
    Patient enrolled in a clinical trial at a site.

    Attributes:
        id: UUID primary key
        clinical_trial_id: Foreign key to ClinicalTrial
        clinical_site_id: Foreign key to the patient's current ClinicalSite
        subject_number: Trial-local subject identifier
        diagnosis: Qualifying diagnosis
        data_files: Files uploaded for this patient
        site_histories: Site assignment history
    """

    __tablename__ = "clinical_patients"

    clinical_trial_id = Column(
        String(36),
        ForeignKey("clinical_trials.id", ondelete="CASCADE"),
        nullable=False,
        doc="Foreign key to ClinicalTrial"
    )

    clinical_site_id = Column(
        String(36),
        ForeignKey("clinical_sites.id", ondelete="SET NULL"),
        nullable=True,
        doc="Foreign key to the current ClinicalSite"
    )

    subject_number = Column(
        String(64),
        nullable=False,
        doc="Trial-local subject identifier"
    )

    diagnosis = Column(
        Text,
        nullable=True,
        doc="Qualifying diagnosis"
    )

    # Relationships
    clinical_trial = relationship("ClinicalTrial", back_populates="patients")
    clinical_site = relationship("ClinicalSite", back_populates="patients")

    data_files = relationship(
        "PatientDataFile",
        back_populates="patient",
        cascade="all, delete-orphan"
    )

    site_histories = relationship(
        "PatientSiteHistory",
        back_populates="patient",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_clinical_patients_trial", "clinical_trial_id"),
        Index("idx_clinical_patients_site", "clinical_site_id"),
    )


class PatientDataFile(Base, UUIDMixin, TimestampMixin, ModelMixin):
    """
    Data file (lab report, scan, CRF export) attached to a patient.

    Attributes:
        id: UUID primary key
        patient_id: Foreign key to ClinicalPatient
        file_name: Original file name
        content_type: MIME type
        storage_path: Location of the file contents in blob storage
    """

    __tablename__ = "patient_data_files"

    patient_id = Column(
        String(36),
        ForeignKey("clinical_patients.id", ondelete="CASCADE"),
        nullable=False,
        doc="Foreign key to ClinicalPatient"
    )

    file_name = Column(
        String(255),
        nullable=False,
        doc="Original file name"
    )

    content_type = Column(
        String(100),
        nullable=True,
        doc="MIME type"
    )

    storage_path = Column(
        String(1024),
        nullable=True,
        doc="Location of the file contents"
    )

    # Relationships
    patient = relationship("ClinicalPatient", back_populates="data_files")

    __table_args__ = (
        Index("idx_patient_data_files_patient", "patient_id"),
    )


class PatientSiteHistory(Base, UUIDMixin, TimestampMixin, ModelMixin):
    """
    One stay of a patient at a clinical site.

    Attributes:
        id: UUID primary key
        patient_id: Foreign key to ClinicalPatient
        clinical_site_id: Foreign key to ClinicalSite
        enrolled_at: ISO timestamp the patient joined the site
        withdrawn_at: ISO timestamp the patient left the site (None while active)
    """

    __tablename__ = "patient_site_histories"

    patient_id = Column(
        String(36),
        ForeignKey("clinical_patients.id", ondelete="CASCADE"),
        nullable=False,
        doc="Foreign key to ClinicalPatient"
    )

    clinical_site_id = Column(
        String(36),
        ForeignKey("clinical_sites.id", ondelete="CASCADE"),
        nullable=False,
        doc="Foreign key to ClinicalSite"
    )

    enrolled_at = Column(
        String,
        nullable=False,
        doc="ISO timestamp the patient joined the site"
    )

    withdrawn_at = Column(
        String,
        nullable=True,
        doc="ISO timestamp the patient left the site"
    )

    # Relationships
    patient = relationship("ClinicalPatient", back_populates="site_histories")
    clinical_site = relationship("ClinicalSite", back_populates="site_histories")

    __table_args__ = (
        Index("idx_patient_site_histories_patient", "patient_id"),
        Index("idx_patient_site_histories_site", "clinical_site_id"),
        CheckConstraint(
            "withdrawn_at IS NULL OR withdrawn_at >= enrolled_at",
            name="ck_site_history_dates"
        ),
    )
