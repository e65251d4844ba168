"""
Household and Submission Models.

Pure data structures for the ingestion pipeline and the read side.

Exports:
    HouseholdLocation: Parsed "lat,lon" coordinate pair
    SubmissionAggregate: Validated household + ordered members (transient)
    SubmissionResult: Successful commit outcome
    HouseholdRecord: Persisted household row
    SingleMemberForm: Validated single-person form record
    SINGLE_FORM_COLUMNS: halaba_form INSERT column order
"""

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .member import ValidatedMember


class HouseholdLocation(BaseModel):
    """Decimal-degree coordinate pair parsed from the submitted location string."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class SubmissionAggregate(BaseModel):
    """
    One household location plus its validated members.

    Lives only for the duration of one request. Members keep the order in
    which they were submitted; that order is also the insert order.
    """

    model_config = ConfigDict(frozen=True)

    location: HouseholdLocation
    members: Tuple[ValidatedMember, ...] = Field(..., min_length=1)
    tithe_status: Optional[str] = None

    @property
    def member_count(self) -> int:
        return len(self.members)


class SubmissionResult(BaseModel):
    """The only successful outcome of a commit."""

    model_config = ConfigDict(frozen=True)

    household_id: int
    member_count: int


class HouseholdRecord(BaseModel):
    """A row of the Households table."""

    household_id: int
    latitude: float
    longitude: float
    tithe_status: Optional[str] = None


class SingleMemberForm(BaseModel):
    """
    Flat single-person form record persisted to halaba_form.

    Stricter than the multi-member form: every field except the optional
    education/disability details must be present.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Any
    phone: Any
    birth_date: Any = Field(..., alias="birthDate")
    gender: Any
    address: Any
    serve_in_church: Any = Field(..., alias="serveInChurch")
    marital_status: Any = Field(..., alias="maritalStatus")
    community: Any
    job_type: Any = Field(..., alias="jobType")
    has_disability: Any = Field(..., alias="hasDisability")
    education_level: Optional[Any] = Field(default=None, alias="educationLevel")
    school_name: Optional[Any] = Field(default=None, alias="schoolName")
    study_type: Optional[Any] = Field(default=None, alias="studyType")
    study_year: Optional[Any] = Field(default=None, alias="studyYear")
    disability_type: Optional[Any] = Field(default=None, alias="disabilityType")
    other_disability: Optional[Any] = Field(default=None, alias="otherDisability")

    def to_row(self) -> Tuple[Any, ...]:
        """Values for a halaba_form INSERT, ordered like SINGLE_FORM_COLUMNS."""
        return (
            self.name,
            self.phone,
            self.birth_date,
            self.gender,
            self.address,
            self.serve_in_church,
            self.marital_status,
            self.community,
            self.job_type,
            self.education_level,
            self.school_name,
            self.study_type,
            self.study_year,
            self.has_disability,
            self.disability_type,
            self.other_disability,
        )


SINGLE_FORM_COLUMNS: Tuple[str, ...] = (
    "name",
    "phone",
    "birth_date",
    "gender",
    "address",
    "serve_in_church",
    "marital_status",
    "community",
    "job_type",
    "education_level",
    "school_name",
    "study_type",
    "study_year",
    "has_disability",
    "disability_type",
    "other_disability",
)
