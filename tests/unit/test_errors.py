"""
Error code status mapping and exception payload tests.
"""

import pytest

from core.errors import ErrorCode, get_http_status_code
from exceptions import (
    BusinessLogicError,
    EmptyMemberList,
    HouseholdCreationFailed,
    IncompleteMemberRecord,
    InvalidHouseholdLocation,
    InvalidRequestBody,
    MissingRequiredFields,
    StoreFailure,
    SubmissionValidationError,
    ValidationError,
)


class TestHttpStatus:

    @pytest.mark.parametrize("code", [
        ErrorCode.INVALID_HOUSEHOLD_LOCATION,
        ErrorCode.EMPTY_MEMBER_LIST,
        ErrorCode.INCOMPLETE_MEMBER_RECORD,
        ErrorCode.MISSING_PARAMETER,
        ErrorCode.INVALID_REQUEST_BODY,
    ])
    def test_client_errors(self, code):
        assert get_http_status_code(code) == 400

    @pytest.mark.parametrize("code", [
        ErrorCode.HOUSEHOLD_CREATION_FAILED,
        ErrorCode.STORE_FAILURE,
        ErrorCode.UNEXPECTED_ERROR,
    ])
    def test_server_errors(self, code):
        assert get_http_status_code(code) == 500

    def test_connection_failure_is_unavailable(self):
        assert get_http_status_code(ErrorCode.DATABASE_CONNECTION_FAILED) == 503


class TestExceptionHierarchy:

    def test_submission_errors_are_validation_errors(self):
        for error in (InvalidHouseholdLocation("x"), EmptyMemberList(), IncompleteMemberRecord(0, ["name"])):
            assert isinstance(error, SubmissionValidationError)
            assert isinstance(error, ValidationError)

    def test_request_body_error_is_validation_error(self):
        assert isinstance(InvalidRequestBody("bad"), ValidationError)

    def test_store_errors_are_business_errors(self):
        assert isinstance(StoreFailure("commit"), BusinessLogicError)
        assert isinstance(HouseholdCreationFailed(), BusinessLogicError)


class TestResponseFields:

    def test_incomplete_member_is_one_based_in_message(self):
        error = IncompleteMemberRecord(2, ["birthDate", "gender"])
        assert error.message == "Family member 3 is missing required fields: birthDate, gender"
        assert error.to_response_fields() == {"member_index": 2, "missing_fields": ["birthDate", "gender"]}

    def test_missing_required_fields(self):
        error = MissingRequiredFields(["address"])
        assert error.error_code == ErrorCode.MISSING_PARAMETER
        assert error.to_response_fields() == {"missing_fields": ["address"]}

    def test_location_raw_value_echoed(self):
        assert InvalidHouseholdLocation("9.03").to_response_fields() == {"raw_value": "9.03"}
        assert InvalidHouseholdLocation(["a"]).to_response_fields() == {"raw_value": "['a']"}

    def test_store_failure_details_optional(self):
        assert StoreFailure("commit").to_response_fields() == {}
        assert StoreFailure("commit", "timeout").to_response_fields() == {"details": "timeout"}
