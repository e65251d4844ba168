"""
Health Check HTTP Trigger.

System health monitoring endpoint for GET /api/health.

Components Monitored:
    - Database connectivity (SELECT 1 through a pooled session)
    - Connection pool statistics
    - Environment variable validation
    - SMS notification configuration

The response is 503 when the database check fails, 200 otherwise
(a misconfigured SMS provider only degrades the status).

Exports:
    HealthCheckTrigger: Health check trigger class
    health_check_trigger: Singleton trigger instance
"""

from typing import Dict, Any, List, Optional, Callable
import sys

import azure.functions as func

from config import get_config, debug_config
from config.env_validation import validate_environment
from infrastructure.connection_pool import ConnectionPoolManager
from .http_base import SystemMonitoringTrigger


class HealthCheckTrigger(SystemMonitoringTrigger):
    """Health check HTTP trigger implementation."""

    def __init__(self, database_check: Optional[Callable[[], bool]] = None):
        """
        Args:
            database_check: Callable returning True when the database answers.
                Defaults to CensusQueryRepository().ping().
        """
        super().__init__("health_check")
        self._database_check = database_check

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    def get_status_code(self, data: Dict[str, Any]) -> int:
        return 503 if data.get("status") == "unhealthy" else 200

    def _ping_database(self) -> bool:
        if self._database_check is None:
            from infrastructure.census_query_repository import CensusQueryRepository
            self._database_check = CensusQueryRepository().ping
        return self._database_check()

    def _check_database(self) -> Dict[str, Any]:
        reachable = self._ping_database()
        return {
            "reachable": reachable,
            "pool": ConnectionPoolManager.get_pool_stats(),
            "error": None if reachable else "SELECT 1 returned no row",
        }

    def _check_environment(self) -> Dict[str, Any]:
        errors = [e for e in validate_environment(include_warnings=False) if e.severity == "error"]
        return {
            "error_count": len(errors),
            "errors": [e.to_dict() for e in errors],
            "_status": "degraded" if errors else "healthy",
        }

    def _check_sms(self) -> Dict[str, Any]:
        sms = get_config().sms
        status = "healthy"
        if sms.enabled and not sms.is_ready:
            status = "degraded"
        return {"enabled": sms.enabled, "ready": sms.is_ready, "_status": status}

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        components = {
            "database": self.check_component_health(
                "database", self._check_database, "PostgreSQL census store"
            ),
            "environment": self.check_component_health(
                "environment", self._check_environment, "Environment variable validation"
            ),
            "sms": self.check_component_health(
                "sms", self._check_sms, "Confirmation SMS provider"
            ),
        }

        if components["database"]["status"] == "unhealthy":
            overall = "unhealthy"
        elif any(c["status"] != "healthy" for c in components.values()):
            overall = "degraded"
        else:
            overall = "healthy"

        response = {
            "status": overall,
            "components": components,
            "environment": {
                "name": get_config().environment,
                "python_version": sys.version.split()[0],
            },
            "checked_at": self.get_system_timestamp(),
        }

        # Masked settings only when DEBUG_MODE=true
        if get_config().debug_mode:
            response["config"] = debug_config()

        return response


health_check_trigger = HealthCheckTrigger()
