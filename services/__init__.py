"""
Service Layer - Census business orchestration.

Services sit between HTTP triggers and repositories. They own no state
beyond injected collaborators and are exposed as module-level singletons.

Exports:
    SubmissionService: validate -> commit -> notify
    DashboardService: KPIs, breakdowns, listings
    NotificationService: best-effort confirmation SMS
"""

from .submission_service import SubmissionService, get_submission_service
from .dashboard_service import DashboardService, get_dashboard_service
from .notification_service import NotificationService, get_notification_service

__all__ = [
    'SubmissionService',
    'get_submission_service',
    'DashboardService',
    'get_dashboard_service',
    'NotificationService',
    'get_notification_service',
]
