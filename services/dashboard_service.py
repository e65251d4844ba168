# ============================================================================
# DASHBOARD SERVICE
# ============================================================================
# STATUS: Business logic - Census read side
# PURPOSE: KPIs, tithe breakdown, demographic charts and raw listings
# EXPORTS: DashboardService, get_dashboard_service
# DEPENDENCIES: infrastructure.census_query_repository, core.logic.demographics
# ============================================================================
"""
Dashboard Service Layer.

Everything here is computed on demand from persisted rows; nothing is
cached between requests. Age is derived from birth date at query time.

Usage:
    service = get_dashboard_service()
    kpis = service.get_kpis()
    charts = service.get_charts()
"""

from datetime import date
from typing import Any, Callable, Dict, List, Optional

from core.logic import (
    count_age_brackets,
    count_communities,
    count_genders,
    is_affirmative,
    parse_birth_date,
)
from core.models import (
    DashboardCharts,
    DashboardKpis,
    HouseholdRecord,
    NamedCount,
    TitheStatus,
)
from infrastructure.census_query_repository import CensusQueryRepository
from util_logger import ComponentType, LoggerFactory, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "DashboardService")


_service_instance: Optional["DashboardService"] = None


def get_dashboard_service() -> "DashboardService":
    """Get singleton DashboardService instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = DashboardService()
    return _service_instance


class DashboardService:
    """Aggregations and listings over households and family members."""

    def __init__(
        self,
        repository: Optional[CensusQueryRepository] = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Args:
            repository: Read repository (pool-backed if omitted)
            today: Clock used for age derivation
        """
        self.repository = repository or CensusQueryRepository()
        self._today = today

    # =========================================================================
    # DASHBOARD
    # =========================================================================

    def _tithe_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for row in self.repository.count_by_tithe_status():
            status = row.get("tithe_status")
            if status is None:
                continue
            key = str(status).strip().lower()
            counts[key] = counts.get(key, 0) + int(row.get("count") or 0)
        return counts

    @log_exceptions(ComponentType.SERVICE, "DashboardService")
    def get_kpis(self) -> DashboardKpis:
        engaged = sum(
            int(row.get("count") or 0)
            for row in self.repository.count_by_serve_in_church()
            if is_affirmative(row.get("serveinchurch"))
        )

        return DashboardKpis(
            total_households=self.repository.count_households(),
            total_members=self.repository.count_members(),
            active_tithers=self._tithe_counts().get(TitheStatus.PAID.value, 0),
            engaged_servers=engaged,
        )

    @log_exceptions(ComponentType.SERVICE, "DashboardService")
    def get_tithe_breakdown(self) -> List[NamedCount]:
        """Exactly one entry per TitheStatus (Paid, Pending), zero-defaulted."""
        counts = self._tithe_counts()
        return [
            NamedCount(name=status.label, count=counts.get(status.value, 0))
            for status in TitheStatus
        ]

    @log_exceptions(ComponentType.SERVICE, "DashboardService")
    def get_charts(self) -> DashboardCharts:
        birth_dates = self.repository.list_birth_dates()

        unparseable = sum(1 for value in birth_dates if parse_birth_date(value) is None)
        if unparseable:
            logger.warning(f"Skipped {unparseable} members with unparseable birth dates")

        return DashboardCharts(
            gender_data=count_genders(self.repository.count_by_gender()),
            age_data=count_age_brackets(birth_dates, self._today()),
            location_data=count_communities(self.repository.count_by_community()),
        )

    # =========================================================================
    # LISTINGS
    # =========================================================================

    def list_households(self) -> List[HouseholdRecord]:
        return self.repository.list_households()

    def list_family_members(self) -> List[Dict[str, Any]]:
        return self.repository.list_members_with_coordinates()
