"""
Household Aggregate Builder.

Turns the raw submission body into a SubmissionAggregate, or rejects it
before anything touches the store.

Exports:
    build_submission: (raw_location, raw_members) -> SubmissionAggregate
"""

from typing import Any, Optional

from exceptions import EmptyMemberList
from ..models.household import SubmissionAggregate
from .geo import parse_household_location
from .member_validation import validate_member


def build_submission(
    raw_location: Any,
    raw_members: Any,
    tithe_status: Optional[str] = None
) -> SubmissionAggregate:
    """
    Build a validated submission aggregate.

    Checks run in a fixed order so the same bad input always produces the
    same rejection: location first, then the member list shape, then each
    member in submitted order. The first failing member stops the build.

    Args:
        raw_location: householdLocation value ("lat,lon")
        raw_members: familyMembers value (list of member objects)
        tithe_status: Optional household tithe status

    Returns:
        SubmissionAggregate ready for the transactional writer

    Raises:
        InvalidHouseholdLocation: location missing or malformed
        EmptyMemberList: familyMembers missing, not a list, or empty
        IncompleteMemberRecord: first member missing name/birthDate/gender
    """
    location = parse_household_location(raw_location)

    if raw_members is None:
        raise EmptyMemberList("familyMembers is required")
    if not isinstance(raw_members, (list, tuple)):
        raise EmptyMemberList("familyMembers must be a list of family member objects")
    if len(raw_members) == 0:
        raise EmptyMemberList()

    members = tuple(validate_member(raw, index) for index, raw in enumerate(raw_members))

    # Stored lowercase so the tithe breakdown groups consistently
    normalized_tithe = str(tithe_status).strip().lower() if tithe_status else None

    return SubmissionAggregate(
        location=location,
        members=members,
        tithe_status=normalized_tithe or None,
    )
