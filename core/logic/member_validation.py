# ============================================================================
# MEMBER RECORD VALIDATION
# ============================================================================
# STATUS: Core - Pure validation functions
# PURPOSE: Mandatory-field checks and optional-field normalization per member
# EXPORTS: find_missing_fields, find_non_scalar_fields, validate_member,
#          validate_single_member_form
# ============================================================================
"""
Member Record Validation.

Applies the field classification from core.models.member to raw form
records. All functions are pure and may be called independently per record.

"Missing" follows form semantics: a field is missing when it is absent or
falsy (None, "", 0, False, empty list). hasDisability on the single-person
form is the one exception - only absence counts, since False is a
legitimate answer.
"""

from typing import Any, Dict, List, Mapping, Sequence

from exceptions import IncompleteMemberRecord, InvalidFieldValues, MissingRequiredFields
from ..models.member import (
    ValidatedMember,
    MANDATORY_MEMBER_FIELDS,
    NULLABLE_MEMBER_FIELDS,
    OPTIONAL_MEMBER_FIELDS,
    RECOGNIZED_MEMBER_FIELDS,
)
from ..models.household import SingleMemberForm


# Single-person form: everything truthy except hasDisability (presence only)
SINGLE_FORM_TRUTHY_FIELDS = (
    "name",
    "phone",
    "birthDate",
    "gender",
    "address",
    "serveInChurch",
    "maritalStatus",
    "community",
    "jobType",
)
SINGLE_FORM_PRESENT_FIELDS = ("hasDisability",)


def find_missing_fields(record: Mapping[str, Any], fields: Sequence[str]) -> List[str]:
    """Return the subset of fields that are absent or falsy in record, in order."""
    return [field for field in fields if not record.get(field)]


def find_non_scalar_fields(record: Mapping[str, Any], fields: Sequence[str]) -> List[str]:
    """Fields holding a nested object or list; every stored column is scalar."""
    return [field for field in fields if isinstance(record.get(field), (Mapping, list, tuple, set))]


def validate_member(raw: Any, index: int) -> ValidatedMember:
    """
    Validate one family member record.

    Args:
        raw: Submitted member object (expected to be a JSON object)
        index: Zero-based position of the record in familyMembers

    Returns:
        ValidatedMember with every recognized field set; optional fields
        that were missing or falsy are None

    Raises:
        IncompleteMemberRecord: name, birthDate or gender missing. A record
            that is not an object at all reports all three.
        InvalidFieldValues: a recognized field holds an object or list
    """
    if not isinstance(raw, Mapping):
        raise IncompleteMemberRecord(index, MANDATORY_MEMBER_FIELDS)

    missing = find_missing_fields(raw, MANDATORY_MEMBER_FIELDS)
    if missing:
        raise IncompleteMemberRecord(index, missing)

    non_scalar = find_non_scalar_fields(raw, RECOGNIZED_MEMBER_FIELDS)
    if non_scalar:
        raise InvalidFieldValues(non_scalar, member_index=index)

    values: Dict[str, Any] = {field: str(raw[field]) for field in MANDATORY_MEMBER_FIELDS}
    for field in NULLABLE_MEMBER_FIELDS:
        values[field] = raw.get(field)
    for field in OPTIONAL_MEMBER_FIELDS:
        values[field] = raw.get(field) or None

    return ValidatedMember.model_validate(values)


def validate_single_member_form(raw: Any) -> SingleMemberForm:
    """
    Validate the flat single-person form.

    Raises:
        MissingRequiredFields: any of SINGLE_FORM_TRUTHY_FIELDS is falsy or
            hasDisability is absent
        InvalidFieldValues: a form field holds an object or list
    """
    if not isinstance(raw, Mapping):
        raise MissingRequiredFields(SINGLE_FORM_TRUTHY_FIELDS + SINGLE_FORM_PRESENT_FIELDS)

    missing = find_missing_fields(raw, SINGLE_FORM_TRUTHY_FIELDS)
    missing.extend(field for field in SINGLE_FORM_PRESENT_FIELDS if field not in raw)
    if missing:
        raise MissingRequiredFields(missing)

    non_scalar = find_non_scalar_fields(
        raw, SINGLE_FORM_TRUTHY_FIELDS + SINGLE_FORM_PRESENT_FIELDS + OPTIONAL_MEMBER_FIELDS
    )
    if non_scalar:
        raise InvalidFieldValues(non_scalar)

    values: Dict[str, Any] = {field: raw[field] for field in SINGLE_FORM_TRUTHY_FIELDS}
    values["hasDisability"] = raw["hasDisability"]
    for field in OPTIONAL_MEMBER_FIELDS:
        values[field] = raw.get(field) or None

    return SingleMemberForm.model_validate(values)
