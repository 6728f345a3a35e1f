"""
Organization model.

An organization sponsors or runs one or more clinical trials.
"""

from sqlalchemy import Column, String, Index
from sqlalchemy.orm import relationship

from trial_management.models.base import Base, UUIDMixin, TimestampMixin, ModelMixin


class Organization(Base, UUIDMixin, TimestampMixin, ModelMixin):
    """
    Organization owning clinical trials.

    Attributes:
        id: UUID primary key
        name: Organization name (searchable by substring)
        clinical_trials: Trials run by this organization
        created_at: When organization was created
        updated_at: When organization was last modified
    """

    __tablename__ = "organizations"

    name = Column(
        String(255),
        nullable=False,
        doc="Organization name"
    )

    # Relationships
    clinical_trials = relationship(
        "ClinicalTrial",
        back_populates="organization",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_organizations_name", "name"),
    )
