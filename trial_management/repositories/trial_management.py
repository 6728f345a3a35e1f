"""
Trial management repository.

Data access facade over organizations, clinical trials, sites, patients,
patient data files and patient site history. Every public method performs
a single ORM operation and reports the outcome as a Result; persistence
errors are logged and never propagate to the caller.
"""

import logging
from typing import Any, Iterable, List, Optional, Set, Type, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from trial_management.core.logging_config import get_logger
from trial_management.core.result import Result
from trial_management.models import (
    Organization,
    ClinicalTrial,
    ClinicalSite,
    ClinicalPatient,
    PatientDataFile,
    PatientSiteHistory,
)
from trial_management.repositories.interfaces import (
    EntityId,
    ITrialManagementRepository,
)

GENERIC_ERROR_MESSAGE = (
    "An Error occured while processing your request. Information has been logged."
)

ModelT = TypeVar("ModelT")


class TrialManagementRepository(ITrialManagementRepository):
    """
    Repository for trial management data access.

    Attributes:
        session: SQLAlchemy async session (one per unit of work)
        logger: Logger receiving one error line per failed operation
    """

    def __init__(
        self,
        session: AsyncSession,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            logger: Logger for failures (defaults to this module's logger)

        Raises:
            ValueError: If session is None
        """
        if session is None:
            raise ValueError("session is required")
        self.session = session
        self.logger = logger or get_logger(__name__)

    async def add_organization(
        self, organization: Organization
    ) -> Result[Organization]:
        return await self._add(organization, "add_organization")

    async def add_clinical_trial(
        self, clinical_trial: ClinicalTrial
    ) -> Result[ClinicalTrial]:
        return await self._add(clinical_trial, "add_clinical_trial")

    async def add_clinical_site(
        self, clinical_site: ClinicalSite
    ) -> Result[ClinicalSite]:
        return await self._add(clinical_site, "add_clinical_site")

    async def add_clinical_patient(
        self, patient: ClinicalPatient
    ) -> Result[ClinicalPatient]:
        return await self._add(patient, "add_clinical_patient")

    async def add_patient_data_file(
        self, patient_data_file: PatientDataFile
    ) -> Result[PatientDataFile]:
        return await self._add(patient_data_file, "add_patient_data_file")

    async def add_patient_site_history(
        self, patient_site_history: PatientSiteHistory
    ) -> Result[PatientSiteHistory]:
        return await self._add(patient_site_history, "add_patient_site_history")

    async def get_organization(
        self,
        organization_id: EntityId,
        include_trials: bool = True
    ) -> Result[Optional[Organization]]:
        """
        Retrieve an organization by ID.

        Example:
            >>> result = await repo.get_organization(org_id, include_trials=False)
            >>> result.value.name if result.value else None
            "Acme Health"
        """
        relations = []
        if include_trials:
            relations.append(Organization.clinical_trials)

        return await self._get_by_id(
            Organization, organization_id, relations, "get_organization"
        )

    async def search_organizations_by_name(
        self, name_part: str
    ) -> Result[List[Organization]]:
        """
        Find organizations whose name contains ``name_part``.

        Wildcard characters in ``name_part`` match literally. Case
        sensitivity follows the database's LIKE operator (SQLite folds
        ASCII case, PostgreSQL does not).

        Example:
            >>> result = await repo.search_organizations_by_name("Health")
            >>> [org.name for org in result.value]
            ["Acme Health", "Northwind Health Partners"]
        """
        try:
            tracked = self._tracked_identities()
            stmt = (
                select(Organization)
                .where(Organization.name.contains(name_part, autoescape=True))
                .order_by(Organization.name)
            )
            result = await self.session.execute(stmt)
            organizations = list(result.scalars().all())

            for organization in organizations:
                if not self._reaches_tracked(organization, tracked):
                    self.session.expunge(organization)

            return Result.ok(organizations)
        except Exception as e:
            return self._failure(e, "search_organizations_by_name")

    async def get_clinical_trial(
        self,
        trial_id: EntityId,
        include_sites: bool = False,
        include_patients: bool = False
    ) -> Result[Optional[ClinicalTrial]]:
        relations = []
        if include_sites:
            relations.append(ClinicalTrial.clinical_sites)
        if include_patients:
            relations.append(ClinicalTrial.patients)

        return await self._get_by_id(
            ClinicalTrial, trial_id, relations, "get_clinical_trial"
        )

    async def get_clinical_site(
        self,
        site_id: EntityId,
        include_patients: bool = False
    ) -> Result[Optional[ClinicalSite]]:
        relations = []
        if include_patients:
            relations.append(ClinicalSite.patients)

        return await self._get_by_id(
            ClinicalSite, site_id, relations, "get_clinical_site"
        )

    async def get_clinical_patient(
        self, patient_id: EntityId
    ) -> Result[Optional[ClinicalPatient]]:
        return await self._get_by_id(
            ClinicalPatient, patient_id, [], "get_clinical_patient"
        )

    async def get_patient_data_file(
        self, data_file_id: EntityId
    ) -> Result[Optional[PatientDataFile]]:
        return await self._get_by_id(
            PatientDataFile, data_file_id, [], "get_patient_data_file"
        )

    async def get_patient_site_history(
        self, history_id: EntityId
    ) -> Result[Optional[PatientSiteHistory]]:
        return await self._get_by_id(
            PatientSiteHistory, history_id, [], "get_patient_site_history"
        )

    async def _add(self, entity: ModelT, operation: str) -> Result[ModelT]:
        """
        Stage ``entity`` for insert and commit it.

        The session is rolled back after a failed commit so it stays
        usable for the next operation.
        """
        try:
            self.session.add(entity)
            await self.session.commit()
            return Result.ok(entity)
        except Exception as e:
            failure = self._failure(e, operation)
            try:
                await self.session.rollback()
            except Exception as rollback_error:
                self.logger.warning(
                    f"Rollback after failed {operation} also failed: {rollback_error}",
                    extra={"operation": operation},
                )
            return failure

    async def _get_by_id(
        self,
        model: Type[ModelT],
        entity_id: EntityId,
        relations: Iterable[Any],
        operation: str
    ) -> Result[Optional[ModelT]]:
        """
        Fetch the first ``model`` row with ``entity_id``.

        Each relationship in ``relations`` is eager-loaded with a separate
        SELECT ... IN query. A newly loaded entity and its eager-loaded
        children are detached from the session, so later changes to them
        are not tracked. Instances the caller already had in the session
        stay attached with their pending edits.
        """
        relations = list(relations)
        try:
            tracked = self._tracked_identities()
            stmt = (
                select(model)
                .where(model.id == str(entity_id))
                .options(*(selectinload(relation) for relation in relations))
                .limit(1)
            )
            result = await self.session.execute(stmt)
            entity = result.scalars().first()

            if entity is not None:
                self._detach(entity, relations, tracked)

            return Result.ok(entity)
        except Exception as e:
            return self._failure(e, operation)

    def _tracked_identities(self) -> Set[Any]:
        return set(self.session.identity_map.keys())

    def _reaches_tracked(self, instance: Any, tracked: Set[Any]) -> bool:
        """True if expunging ``instance`` would detach something already tracked."""
        state = inspect(instance)
        if state.identity_key in tracked:
            return True
        return any(
            cascaded.identity_key in tracked
            for _, _, cascaded, _ in state.mapper.cascade_iterator("expunge", state)
        )

    def _detach(
        self, entity: Any, relations: List[Any], tracked: Set[Any]
    ) -> None:
        if inspect(entity).identity_key in tracked:
            return
        for relation in relations:
            for related in getattr(entity, relation.key):
                if related in self.session and not self._reaches_tracked(related, tracked):
                    self.session.expunge(related)
        if not self._reaches_tracked(entity, tracked):
            self.session.expunge(entity)

    def _failure(self, error: Exception, operation: str) -> Result[Any]:
        self.logger.error(str(error), extra={"operation": operation})
        return Result.fail(GENERIC_ERROR_MESSAGE)
