# ============================================================================
# SUBMISSION SERVICE
# ============================================================================
# STATUS: Business logic - Census write path orchestration
# PURPOSE: Validate -> commit -> notify for household and single-person forms
# EXPORTS: SubmissionService, get_submission_service
# DEPENDENCIES: core.logic, infrastructure.household_repository,
#               services.notification_service
# ============================================================================
"""
Submission Service Layer.

Household submission:
    1. build_submission() validates the whole payload (no store access)
    2. HouseholdRepository.commit_submission() writes it atomically
    3. NotificationService queues the confirmation SMS (best-effort)

Single-person form:
    1. validate_single_member_form()
    2. HouseholdRepository.insert_single_form()

Usage:
    service = get_submission_service()
    result = service.submit_household(body)
"""

from typing import Any, Mapping, Optional

from core.logic import build_submission, validate_single_member_form
from core.models import SubmissionResult
from exceptions import InvalidRequestBody
from infrastructure.household_repository import HouseholdRepository
from util_logger import ComponentType, LoggerFactory
from .notification_service import NotificationService, get_notification_service

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "SubmissionService")


_service_instance: Optional["SubmissionService"] = None


def get_submission_service() -> "SubmissionService":
    """Get singleton SubmissionService instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SubmissionService()
    return _service_instance


def _require_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise InvalidRequestBody("Request body must be a JSON object")
    return payload


class SubmissionService:
    """Orchestrates validation, the transactional writer and notifications."""

    def __init__(
        self,
        repository: Optional[HouseholdRepository] = None,
        notifier: Optional[NotificationService] = None,
    ):
        self.repository = repository or HouseholdRepository()
        self._notifier = notifier

    @property
    def notifier(self) -> NotificationService:
        if self._notifier is None:
            self._notifier = get_notification_service()
        return self._notifier

    def submit_household(self, payload: Any) -> SubmissionResult:
        """
        Validate and persist one household with its members.

        Raises:
            InvalidRequestBody: payload is not an object
            SubmissionValidationError: any validation rejection (nothing written)
            DatabaseError: store failure (everything rolled back)
        """
        body = _require_object(payload)

        aggregate = build_submission(
            body.get("householdLocation"),
            body.get("familyMembers"),
            body.get("titheStatus"),
        )
        logger.debug(f"Submission validated: {aggregate.member_count} members")

        result = self.repository.commit_submission(aggregate)

        self.notifier.notify_submission(aggregate, result)
        return result

    def submit_single_form(self, payload: Any) -> None:
        """
        Validate and persist one single-person form.

        Raises:
            InvalidRequestBody: payload is not an object
            MissingRequiredFields: required fields absent (nothing written)
            StoreFailure: store failure (rolled back)
        """
        form = validate_single_member_form(_require_object(payload))
        self.repository.insert_single_form(form)
