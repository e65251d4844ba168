"""
Triggers Package.

Azure Functions HTTP trigger implementations.

HTTP Endpoints:
    /api/submit-household: Household submission
    /api/submit-form: Single-person form
    /api/households, /api/family-members: Raw listings
    /api/dashboard/{kpis,tithe,charts}: Aggregations
    /api/health: System health check
"""

# Only import base classes to avoid initialization at import time
# Trigger instances should be imported directly from their modules
from .http_base import BaseHttpTrigger, SystemMonitoringTrigger

__all__ = [
    'BaseHttpTrigger',
    'SystemMonitoringTrigger',
]
