"""
Household Submission HTTP Triggers.

HTTP endpoints:
    POST /api/submit-household  - household + family members (201)
    POST /api/submit-form       - single-person form (200)

Both delegate to SubmissionService; validation failures surface as 400
before the store is touched, store failures as 500 after rollback.

Exports:
    SubmitHouseholdTrigger, submit_household_trigger
    SubmitFormTrigger, submit_form_trigger
"""

from typing import Dict, Any, List, Optional

import azure.functions as func

from services.submission_service import SubmissionService, get_submission_service
from .http_base import BaseHttpTrigger


SUBMISSION_SUCCESS_MESSAGE = "Household and family members saved successfully"


class _SubmissionTrigger(BaseHttpTrigger):
    """Shared service wiring for the write endpoints."""

    def __init__(self, trigger_name: str, service: Optional[SubmissionService] = None):
        super().__init__(trigger_name)
        self._service = service

    @property
    def service(self) -> SubmissionService:
        if self._service is None:
            self._service = get_submission_service()
        return self._service

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]


class SubmitHouseholdTrigger(_SubmissionTrigger):
    """Household submission HTTP trigger implementation."""

    success_status_code = 201

    def __init__(self, service: Optional[SubmissionService] = None):
        super().__init__("submit_household", service)

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        """
        Validate and persist one household.

        Body:
            {"householdLocation": "lat,lon", "familyMembers": [...], "titheStatus": optional}
        """
        body = self.extract_json_body(req, required=True)

        result = self.service.submit_household(body)

        return {
            "success": True,
            "message": SUBMISSION_SUCCESS_MESSAGE,
            "household_id": result.household_id,
            "member_count": result.member_count,
        }


class SubmitFormTrigger(_SubmissionTrigger):
    """Single-person form HTTP trigger implementation."""

    def __init__(self, service: Optional[SubmissionService] = None):
        super().__init__("submit_form", service)

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        body = self.extract_json_body(req, required=True)
        self.service.submit_single_form(body)
        return {"success": True}


submit_household_trigger = SubmitHouseholdTrigger()
submit_form_trigger = SubmitFormTrigger()
