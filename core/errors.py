"""
Error Code Definitions.

Centralized error code management with HTTP status mapping.

Key Features:
    - Explicit error codes for all failure modes
    - One place that decides the HTTP status for each code

Exports:
    ErrorCode: Standardized error codes enum
    get_http_status_code: ErrorCode -> HTTP status
"""

from enum import Enum


class ErrorCode(str, Enum):
    """
    Standardized error codes for all application errors.

    Returned in API responses as ``error_code`` and attached to log records.
    """

    # ========================================================================
    # VALIDATION ERRORS - CLIENT ERRORS (HTTP 400)
    # ========================================================================

    INVALID_HOUSEHOLD_LOCATION = "INVALID_HOUSEHOLD_LOCATION"  # Bad or missing "lat,lon"
    EMPTY_MEMBER_LIST = "EMPTY_MEMBER_LIST"  # familyMembers missing or empty
    INCOMPLETE_MEMBER_RECORD = "INCOMPLETE_MEMBER_RECORD"  # name/birthDate/gender missing
    VALIDATION_ERROR = "VALIDATION_ERROR"  # Generic validation failure
    MISSING_PARAMETER = "MISSING_PARAMETER"  # Required form field missing
    INVALID_REQUEST_BODY = "INVALID_REQUEST_BODY"  # Body is not a JSON object

    # ========================================================================
    # STORE ERRORS (HTTP 500/503)
    # ========================================================================

    HOUSEHOLD_CREATION_FAILED = "HOUSEHOLD_CREATION_FAILED"  # INSERT returned no id
    STORE_FAILURE = "STORE_FAILURE"  # Error during begin/insert/commit
    DATABASE_ERROR = "DATABASE_ERROR"  # Generic database failure
    DATABASE_CONNECTION_FAILED = "DATABASE_CONNECTION_FAILED"  # Pool checkout failed

    # ========================================================================
    # OUTBOUND
    # ========================================================================

    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"  # SMS provider rejected or unreachable

    # ========================================================================
    # GENERIC ERRORS
    # ========================================================================

    CONFIG_ERROR = "CONFIG_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


_CLIENT_ERRORS = {
    ErrorCode.INVALID_HOUSEHOLD_LOCATION,
    ErrorCode.EMPTY_MEMBER_LIST,
    ErrorCode.INCOMPLETE_MEMBER_RECORD,
    ErrorCode.VALIDATION_ERROR,
    ErrorCode.MISSING_PARAMETER,
    ErrorCode.INVALID_REQUEST_BODY,
}


def get_http_status_code(error_code: ErrorCode) -> int:
    """
    Get the appropriate HTTP status code for an error code.

    Example:
        >>> get_http_status_code(ErrorCode.INCOMPLETE_MEMBER_RECORD)
        400
        >>> get_http_status_code(ErrorCode.STORE_FAILURE)
        500
    """
    if error_code in _CLIENT_ERRORS:
        return 400

    if error_code == ErrorCode.DATABASE_CONNECTION_FAILED:
        return 503

    return 500
