"""
Dashboard service tests - against an in-memory read repository.
"""

import logging
from datetime import date

from core.models import HouseholdRecord
from services.dashboard_service import DashboardService


class FakeQueryRepository:
    """Canned answers for every CensusQueryRepository method the service uses."""

    def __init__(self, **overrides):
        self.households = overrides.get("households", 0)
        self.members = overrides.get("members", 0)
        self.tithe_rows = overrides.get("tithe_rows", [])
        self.gender_rows = overrides.get("gender_rows", [])
        self.community_rows = overrides.get("community_rows", [])
        self.serve_rows = overrides.get("serve_rows", [])
        self.birth_dates = overrides.get("birth_dates", [])
        self.household_records = overrides.get("household_records", [])
        self.member_rows = overrides.get("member_rows", [])

    def count_households(self):
        return self.households

    def count_members(self):
        return self.members

    def count_by_tithe_status(self):
        return self.tithe_rows

    def count_by_gender(self):
        return self.gender_rows

    def count_by_community(self):
        return self.community_rows

    def count_by_serve_in_church(self):
        return self.serve_rows

    def list_birth_dates(self):
        return self.birth_dates

    def list_households(self):
        return self.household_records

    def list_members_with_coordinates(self):
        return self.member_rows


def _service(**overrides):
    return DashboardService(
        repository=FakeQueryRepository(**overrides),
        today=lambda: date(2024, 6, 15),
    )


class TestTitheBreakdown:

    def test_both_statuses_zero_when_empty(self):
        result = _service().get_tithe_breakdown()
        assert [b.model_dump() for b in result] == [
            {"name": "Paid", "count": 0},
            {"name": "Pending", "count": 0},
        ]

    def test_counts_merge_case_variants(self):
        service = _service(tithe_rows=[
            {"tithe_status": "paid", "count": 2},
            {"tithe_status": "PAID", "count": 1},
            {"tithe_status": None, "count": 5},
            {"tithe_status": "pending", "count": 4},
        ])
        result = service.get_tithe_breakdown()
        assert [(b.name, b.count) for b in result] == [("Paid", 3), ("Pending", 4)]


class TestKpis:

    def test_kpis(self):
        service = _service(
            households=3,
            members=8,
            tithe_rows=[{"tithe_status": "paid", "count": 2}],
            serve_rows=[
                {"serveinchurch": "yes", "count": 5},
                {"serveinchurch": "no", "count": 2},
                {"serveinchurch": None, "count": 1},
            ],
        )

        kpis = service.get_kpis().model_dump(by_alias=True)

        assert kpis == {
            "totalHouseholds": 3,
            "totalMembers": 8,
            "activeTithers": 2,
            "engagedServers": 5,
        }

    def test_empty_store(self):
        kpis = _service().get_kpis()
        assert kpis.total_households == 0
        assert kpis.engaged_servers == 0


class TestCharts:

    def test_charts_shape(self):
        service = _service(
            gender_rows=[{"gender": "ወንድ", "count": 1}],
            community_rows=[{"community": "Halaba", "count": 1}],
            birth_dates=["1990-01-01"],
        )

        charts = service.get_charts().model_dump(by_alias=True)

        assert set(charts) == {"genderData", "ageData", "locationData"}
        assert charts["genderData"][0] == {"name": "Male", "count": 1}
        assert {"name": "26-60", "count": 1} in charts["ageData"]
        assert charts["locationData"] == [{"name": "Halaba", "count": 1}]

    def test_unparseable_birth_dates_logged(self, caplog):
        service = _service(birth_dates=["garbage", None])

        with caplog.at_level(logging.WARNING):
            charts = service.get_charts()

        assert sum(b.count for b in charts.age_data) == 0
        record = next(r for r in caplog.records if "unparseable birth dates" in r.getMessage())
        assert record.name == "service.DashboardService"
        assert record.custom_dimensions["component_type"] == "service"


class TestListings:

    def test_pass_through(self):
        record = HouseholdRecord(household_id=1, latitude=9.03, longitude=38.74)
        service = _service(household_records=[record], member_rows=[{"name": "Abel"}])

        assert service.list_households() == [record]
        assert service.list_family_members() == [{"name": "Abel"}]
