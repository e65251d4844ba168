# ============================================================================
# CORE MODELS - FAMILY MEMBER
# ============================================================================
# STATUS: Core data models - Family member validated record
# PURPOSE: Field classification and the validated member record
# EXPORTS: ValidatedMember, MANDATORY_MEMBER_FIELDS, NULLABLE_MEMBER_FIELDS,
#          OPTIONAL_MEMBER_FIELDS, RECOGNIZED_MEMBER_FIELDS, MEMBER_COLUMNS
# DEPENDENCIES: pydantic
# ============================================================================

"""
Family Member Models.

Every recognized form field is classified exactly once here:

    MANDATORY   name, birthDate, gender
                Must be present and truthy; otherwise the record is rejected.
    NULLABLE    phone, serveInChurch, maritalStatus, community, jobType,
                hasDisability
                Passed through as submitted; None when absent.
    OPTIONAL    educationLevel, schoolName, studyType, studyYear,
                disabilityType, otherDisability
                Any falsy value (absent, None, "", 0, False) collapses to None.

The empty string and absence therefore end up as the same stored NULL for
optional fields. Every column is scalar, so an object or list in any
recognized field rejects the record.
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


MANDATORY_MEMBER_FIELDS: Tuple[str, ...] = ("name", "birthDate", "gender")

NULLABLE_MEMBER_FIELDS: Tuple[str, ...] = (
    "phone",
    "serveInChurch",
    "maritalStatus",
    "community",
    "jobType",
    "hasDisability",
)

OPTIONAL_MEMBER_FIELDS: Tuple[str, ...] = (
    "educationLevel",
    "schoolName",
    "studyType",
    "studyYear",
    "disabilityType",
    "otherDisability",
)

RECOGNIZED_MEMBER_FIELDS: Tuple[str, ...] = (
    MANDATORY_MEMBER_FIELDS + NULLABLE_MEMBER_FIELDS + OPTIONAL_MEMBER_FIELDS
)

# FamilyMembers columns in INSERT order (household_id first).
MEMBER_COLUMNS: Tuple[str, ...] = (
    "household_id",
    "name",
    "phone",
    "birthdate",
    "gender",
    "serveinchurch",
    "maritalstatus",
    "community",
    "jobtype",
    "hasdisability",
    "educationlevel",
    "schoolname",
    "studytype",
    "studyyear",
    "disabilitytype",
    "otherdisability",
)


class ValidatedMember(BaseModel):
    """
    A family member that passed validation.

    Field names are snake_case; aliases are the camelCase keys the form
    submits. Construct through core.logic.member_validation.validate_member
    rather than directly so the field classification is applied.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Mandatory
    name: str = Field(..., min_length=1)
    birth_date: str = Field(..., min_length=1, alias="birthDate")
    gender: str = Field(..., min_length=1)

    # Required-but-nullable
    phone: Optional[Any] = None
    serve_in_church: Optional[Any] = Field(default=None, alias="serveInChurch")
    marital_status: Optional[Any] = Field(default=None, alias="maritalStatus")
    community: Optional[Any] = None
    job_type: Optional[Any] = Field(default=None, alias="jobType")
    has_disability: Optional[Any] = Field(default=None, alias="hasDisability")

    # Optional (None is the absent marker)
    education_level: Optional[Any] = Field(default=None, alias="educationLevel")
    school_name: Optional[Any] = Field(default=None, alias="schoolName")
    study_type: Optional[Any] = Field(default=None, alias="studyType")
    study_year: Optional[Any] = Field(default=None, alias="studyYear")
    disability_type: Optional[Any] = Field(default=None, alias="disabilityType")
    other_disability: Optional[Any] = Field(default=None, alias="otherDisability")

    def to_row(self, household_id: int) -> Tuple[Any, ...]:
        """Values for a FamilyMembers INSERT, ordered like MEMBER_COLUMNS."""
        return (
            household_id,
            self.name,
            self.phone,
            self.birth_date,
            self.gender,
            self.serve_in_church,
            self.marital_status,
            self.community,
            self.job_type,
            self.has_disability,
            self.education_level,
            self.school_name,
            self.study_type,
            self.study_year,
            self.disability_type,
            self.other_disability,
        )

    def to_form_dict(self) -> Dict[str, Any]:
        """camelCase view with every recognized field present."""
        return self.model_dump(by_alias=True)
