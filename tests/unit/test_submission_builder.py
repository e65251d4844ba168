"""
Submission aggregate builder tests - check order and fail-fast behaviour.
"""

import pytest

from core.logic import build_submission
from exceptions import EmptyMemberList, IncompleteMemberRecord, InvalidHouseholdLocation
from tests.factories.model_factories import make_location, make_raw_member


class TestBuildSubmission:

    def test_members_keep_submitted_order(self):
        members = [make_raw_member(name=f"m{i}") for i in range(4)]
        aggregate = build_submission(make_location(), members)
        assert [m.name for m in aggregate.members] == ["m0", "m1", "m2", "m3"]
        assert aggregate.member_count == 4

    def test_location_checked_before_members(self):
        with pytest.raises(InvalidHouseholdLocation):
            build_submission("not-a-location", [])

    @pytest.mark.parametrize("raw_members", [None, [], {}, "Abel"])
    def test_missing_or_empty_member_list(self, raw_members):
        with pytest.raises(EmptyMemberList):
            build_submission(make_location(), raw_members)

    def test_first_invalid_member_stops_build(self):
        members = [
            make_raw_member(),
            make_raw_member(gender=""),
            make_raw_member(name=""),
        ]
        with pytest.raises(IncompleteMemberRecord) as exc_info:
            build_submission(make_location(), members)
        assert exc_info.value.member_index == 1
        assert exc_info.value.missing_fields == ["gender"]

    def test_tithe_status_normalized(self):
        aggregate = build_submission(make_location(), [make_raw_member()], " Paid ")
        assert aggregate.tithe_status == "paid"

    @pytest.mark.parametrize("tithe", [None, "", "   "])
    def test_blank_tithe_status_is_none(self, tithe):
        aggregate = build_submission(make_location(), [make_raw_member()], tithe)
        assert aggregate.tithe_status is None


class TestRepeatedRejection:
    """A rejected submission fails the same way every time it is resent."""

    @pytest.mark.parametrize("location,members,error", [
        ("9.03", [make_raw_member()], InvalidHouseholdLocation),
        (make_location(), [], EmptyMemberList),
        (make_location(), [make_raw_member(), make_raw_member(birthDate="", gender="")], IncompleteMemberRecord),
    ])
    def test_same_error_on_resubmission(self, location, members, error):
        outcomes = []
        for _ in range(2):
            with pytest.raises(error) as exc_info:
                build_submission(location, members)
            outcomes.append((type(exc_info.value), exc_info.value.message, exc_info.value.to_response_fields()))

        assert outcomes[0] == outcomes[1]

    def test_incomplete_member_details_repeat(self):
        members = [make_raw_member(), make_raw_member(birthDate="", gender="")]

        errors = []
        for _ in range(2):
            with pytest.raises(IncompleteMemberRecord) as exc_info:
                build_submission(make_location(), members)
            errors.append(exc_info.value)

        assert [e.member_index for e in errors] == [1, 1]
        assert [e.missing_fields for e in errors] == [["birthDate", "gender"], ["birthDate", "gender"]]
