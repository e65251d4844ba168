# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by core, infrastructure, services and triggers
# PURPOSE: Exception hierarchy separating client rejections from store failures
# EXPORTS: ContractViolationError, BusinessLogicError, ValidationError, InvalidRequestBody,
#          SubmissionValidationError, InvalidHouseholdLocation, EmptyMemberList,
#          IncompleteMemberRecord, InvalidFieldValues, MissingRequiredFields, DatabaseError,
#          HouseholdCreationFailed, StoreFailure, NotificationError,
#          ConfigurationError
# DEPENDENCIES: core.errors (error codes only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (expected runtime issues)

Business failures are split again into client rejections (HTTP 400, raised
before any store mutation) and store failures (HTTP 500, raised after the
transaction has been rolled back).
"""

from typing import Any, Dict, List, Optional, Sequence

from core.errors import ErrorCode


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.

    Examples:
        - Writer receives a dict instead of a SubmissionAggregate
        - Session provider yields something without cursor()
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime business logic failures.

    Every subclass carries an ErrorCode so triggers can map it onto an
    HTTP status without string matching.
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response_fields(self) -> Dict[str, Any]:
        """Extra JSON fields describing this failure (beyond error/message)."""
        return {}


# ============================================================================
# CLIENT REJECTIONS - raised before the store is touched
# ============================================================================

class ValidationError(BusinessLogicError):
    """
    Business validation failed.

    Note: This is different from ContractViolationError.
    This is for input validation, not type contracts.
    """

    error_code = ErrorCode.VALIDATION_ERROR


class InvalidRequestBody(ValidationError):
    """Request body is not valid JSON or not a JSON object."""

    error_code = ErrorCode.INVALID_REQUEST_BODY


class SubmissionValidationError(ValidationError):
    """Base for every rejection of a census submission payload."""
    pass


class InvalidHouseholdLocation(SubmissionValidationError):
    """Household location is missing or is not a 'lat,lon' pair."""

    error_code = ErrorCode.INVALID_HOUSEHOLD_LOCATION

    def __init__(self, raw_value: Any):
        self.raw_value = raw_value
        if raw_value is None or raw_value == "":
            message = "householdLocation is required in the format 'latitude,longitude'"
        else:
            message = (
                f"Invalid householdLocation {raw_value!r}: "
                f"expected 'latitude,longitude' (e.g. '9.03,38.74')"
            )
        super().__init__(message)

    def to_response_fields(self) -> Dict[str, Any]:
        raw = self.raw_value if isinstance(self.raw_value, (str, int, float)) else repr(self.raw_value)
        return {"raw_value": raw}


class EmptyMemberList(SubmissionValidationError):
    """familyMembers is missing, not a list, or has no entries."""

    error_code = ErrorCode.EMPTY_MEMBER_LIST

    def __init__(self, message: str = "At least one family member is required"):
        super().__init__(message)


class IncompleteMemberRecord(SubmissionValidationError):
    """
    A family member is missing one of its mandatory fields.

    member_index is zero-based (position in the submitted list); the
    message reports it one-based for people reading the form.
    """

    error_code = ErrorCode.INCOMPLETE_MEMBER_RECORD

    def __init__(self, member_index: int, missing_fields: Sequence[str]):
        self.member_index = member_index
        self.missing_fields: List[str] = list(missing_fields)
        super().__init__(
            f"Family member {member_index + 1} is missing required fields: "
            f"{', '.join(self.missing_fields)}"
        )

    def to_response_fields(self) -> Dict[str, Any]:
        return {
            "member_index": self.member_index,
            "missing_fields": self.missing_fields,
        }


class InvalidFieldValues(SubmissionValidationError):
    """
    One or more form fields hold a nested object or list.

    Every census column is a scalar; member_index is set for family members
    and left None for the single-person form.
    """

    error_code = ErrorCode.VALIDATION_ERROR

    def __init__(self, invalid_fields: Sequence[str], member_index: Optional[int] = None):
        self.member_index = member_index
        self.invalid_fields: List[str] = list(invalid_fields)
        subject = "Form" if member_index is None else f"Family member {member_index + 1}"
        super().__init__(
            f"{subject} has non-scalar values for: {', '.join(self.invalid_fields)}"
        )

    def to_response_fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"invalid_fields": self.invalid_fields}
        if self.member_index is not None:
            fields["member_index"] = self.member_index
        return fields


class MissingRequiredFields(ValidationError):
    """Single-person form submitted without one or more required fields."""

    error_code = ErrorCode.MISSING_PARAMETER

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields: List[str] = list(missing_fields)
        super().__init__(f"Missing required fields: {', '.join(self.missing_fields)}")

    def to_response_fields(self) -> Dict[str, Any]:
        return {"missing_fields": self.missing_fields}


# ============================================================================
# STORE FAILURES - raised after rollback
# ============================================================================

class DatabaseError(BusinessLogicError):
    """
    Database operation failures.

    Raised only after the surrounding transaction has been rolled back.
    """

    error_code = ErrorCode.DATABASE_ERROR

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.details = details

    def to_response_fields(self) -> Dict[str, Any]:
        return {"details": self.details} if self.details else {}


class HouseholdCreationFailed(DatabaseError):
    """Household INSERT completed but the store returned no identifier."""

    error_code = ErrorCode.HOUSEHOLD_CREATION_FAILED

    def __init__(self, details: Optional[str] = None):
        super().__init__("Failed to create household record", details)


class StoreFailure(DatabaseError):
    """Any store error during begin, insert or commit."""

    error_code = ErrorCode.STORE_FAILURE

    def __init__(self, operation: str, details: Optional[str] = None):
        self.operation = operation
        super().__init__(f"Database error during {operation}", details)


# ============================================================================
# OUTBOUND / SYSTEM
# ============================================================================

class NotificationError(BusinessLogicError):
    """
    Outbound SMS delivery failed.

    Never surfaced to HTTP callers - notifications are best-effort.
    """

    error_code = ErrorCode.NOTIFICATION_FAILED


class ConfigurationError(Exception):
    """
    System configuration error.

    Examples:
        - Missing DB_URL and DB_HOST
        - SMS enabled without credentials
    """
    pass
