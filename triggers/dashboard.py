"""
Dashboard and Listing HTTP Triggers.

HTTP endpoints (all GET):
    /api/households         - every household row
    /api/family-members     - every member with its household coordinates
    /api/dashboard/kpis     - headline counters
    /api/dashboard/tithe    - Paid / Pending breakdown
    /api/dashboard/charts   - gender, age bracket and community breakdowns

Exports:
    One trigger class and one singleton instance per endpoint
"""

from typing import Dict, Any, List, Optional

import azure.functions as func

from services.dashboard_service import DashboardService, get_dashboard_service
from .http_base import BaseHttpTrigger


class _ReadTrigger(BaseHttpTrigger):
    """GET-only trigger backed by DashboardService."""

    # Dashboard payloads are sent exactly as computed
    add_envelope = False

    def __init__(self, trigger_name: str, service: Optional[DashboardService] = None):
        super().__init__(trigger_name)
        self._service = service

    @property
    def service(self) -> DashboardService:
        if self._service is None:
            self._service = get_dashboard_service()
        return self._service

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]


class HouseholdsTrigger(_ReadTrigger):
    def __init__(self, service: Optional[DashboardService] = None):
        super().__init__("households", service)

    def process_request(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        return [household.model_dump() for household in self.service.list_households()]


class FamilyMembersTrigger(_ReadTrigger):
    def __init__(self, service: Optional[DashboardService] = None):
        super().__init__("family_members", service)

    def process_request(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        return self.service.list_family_members()


class DashboardKpisTrigger(_ReadTrigger):
    def __init__(self, service: Optional[DashboardService] = None):
        super().__init__("dashboard_kpis", service)

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        return self.service.get_kpis().model_dump(by_alias=True)


class DashboardTitheTrigger(_ReadTrigger):
    def __init__(self, service: Optional[DashboardService] = None):
        super().__init__("dashboard_tithe", service)

    def process_request(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        return [bucket.model_dump() for bucket in self.service.get_tithe_breakdown()]


class DashboardChartsTrigger(_ReadTrigger):
    def __init__(self, service: Optional[DashboardService] = None):
        super().__init__("dashboard_charts", service)

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        return self.service.get_charts().model_dump(by_alias=True)


households_trigger = HouseholdsTrigger()
family_members_trigger = FamilyMembersTrigger()
dashboard_kpis_trigger = DashboardKpisTrigger()
dashboard_tithe_trigger = DashboardTitheTrigger()
dashboard_charts_trigger = DashboardChartsTrigger()
