"""
Trial Management Repository Interface (ITrialManagementRepository)

Abstract base class defining the data access contract for organizations,
clinical trials, sites, patients, patient data files and patient site
history records.

Implementation guide:
- All methods must be async
- No method may raise; persistence errors become failed Results
- Reads must not leave fetched entities tracked by the session
- Related collections load only when the matching include flag is set
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Union
import uuid

from trial_management.core.result import Result
from trial_management.models import (
    Organization,
    ClinicalTrial,
    ClinicalSite,
    ClinicalPatient,
    PatientDataFile,
    PatientSiteHistory,
)

EntityId = Union[str, uuid.UUID]


class ITrialManagementRepository(ABC):
    """
    Abstract interface for trial management data access.

    Every operation returns a Result. A successful add wraps the entity
    that was persisted; a successful get wraps the entity or None when
    no row matches; a failure carries a generic error message.
    """

    @abstractmethod
    async def add_organization(
        self, organization: Organization
    ) -> Result[Organization]:
        """Persist a new organization."""
        pass

    @abstractmethod
    async def add_clinical_trial(
        self, clinical_trial: ClinicalTrial
    ) -> Result[ClinicalTrial]:
        """Persist a new clinical trial."""
        pass

    @abstractmethod
    async def add_clinical_site(
        self, clinical_site: ClinicalSite
    ) -> Result[ClinicalSite]:
        """Persist a new clinical site."""
        pass

    @abstractmethod
    async def add_clinical_patient(
        self, patient: ClinicalPatient
    ) -> Result[ClinicalPatient]:
        """Persist a new patient."""
        pass

    @abstractmethod
    async def add_patient_data_file(
        self, patient_data_file: PatientDataFile
    ) -> Result[PatientDataFile]:
        """Persist a new patient data file record."""
        pass

    @abstractmethod
    async def add_patient_site_history(
        self, patient_site_history: PatientSiteHistory
    ) -> Result[PatientSiteHistory]:
        """Persist a new patient site history record."""
        pass

    @abstractmethod
    async def get_organization(
        self,
        organization_id: EntityId,
        include_trials: bool = True
    ) -> Result[Optional[Organization]]:
        """
        Fetch an organization by ID.

        Args:
            organization_id: UUID of the organization
            include_trials: Eager-load the organization's clinical trials

        Returns:
            Result wrapping the organization, or None if not found
        """
        pass

    @abstractmethod
    async def search_organizations_by_name(
        self, name_part: str
    ) -> Result[List[Organization]]:
        """
        Find organizations whose name contains ``name_part``.

        An empty ``name_part`` matches every organization.
        """
        pass

    @abstractmethod
    async def get_clinical_trial(
        self,
        trial_id: EntityId,
        include_sites: bool = False,
        include_patients: bool = False
    ) -> Result[Optional[ClinicalTrial]]:
        """
        Fetch a clinical trial by ID.

        Args:
            trial_id: UUID of the trial
            include_sites: Eager-load the trial's sites
            include_patients: Eager-load the trial's patients

        Returns:
            Result wrapping the trial, or None if not found
        """
        pass

    @abstractmethod
    async def get_clinical_site(
        self,
        site_id: EntityId,
        include_patients: bool = False
    ) -> Result[Optional[ClinicalSite]]:
        """
        Fetch a clinical site by ID.

        Args:
            site_id: UUID of the site
            include_patients: Eager-load the site's patients

        Returns:
            Result wrapping the site, or None if not found
        """
        pass

    @abstractmethod
    async def get_clinical_patient(
        self, patient_id: EntityId
    ) -> Result[Optional[ClinicalPatient]]:
        """Fetch a patient by ID."""
        pass

    @abstractmethod
    async def get_patient_data_file(
        self, data_file_id: EntityId
    ) -> Result[Optional[PatientDataFile]]:
        """Fetch a patient data file record by ID."""
        pass

    @abstractmethod
    async def get_patient_site_history(
        self, history_id: EntityId
    ) -> Result[Optional[PatientSiteHistory]]:
        """Fetch a patient site history record by ID."""
        pass
