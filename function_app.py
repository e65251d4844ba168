"""
Azure Functions entry point for the Household Census API.

Collects church household registrations (one location plus its family
members, written atomically) and serves the aggregate counts behind the
census dashboard.

Architecture:
    HTTP -> Trigger -> Service -> core.logic (validation, pure)
                               -> Repository -> ConnectionPoolManager -> PostgreSQL
                               -> NotificationService -> SMS provider (best-effort)

Endpoints:
    POST /api/submit-household  - Household + family members (201)
    POST /api/submit-form       - Single-person form
    GET  /api/households        - Household listing
    GET  /api/family-members    - Member listing with household coordinates
    GET  /api/dashboard/kpis    - Headline counters
    GET  /api/dashboard/tithe   - Paid / Pending breakdown
    GET  /api/dashboard/charts  - Gender, age and community breakdowns
    GET  /api/health            - Database and configuration status

Environment Variables:
    DB_URL or DB_HOST/DB_PORT/DB_NAME/DB_USER/DB_PASSWORD: PostgreSQL connection
    DB_SCHEMA: Schema holding households, familymembers and halaba_form
    SMS_ENABLED, SMS_ACCOUNT_SID, SMS_AUTH_TOKEN, SMS_FROM_NUMBER: Confirmation SMS
    LOG_LEVEL, DEBUG_MODE, ENVIRONMENT: Diagnostics
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import atexit
import logging

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress Azure Identity and Azure SDK authentication/HTTP logging
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.identity._internal").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("msal").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("psycopg.pool").setLevel(logging.WARNING)

# Application modules (our code)
from util_logger import LoggerFactory, ComponentType
from config import get_config
from config.env_validation import log_validation_results
from exceptions import ConfigurationError
from infrastructure.connection_pool import ConnectionPoolManager

from triggers.submit_household import submit_household_trigger, submit_form_trigger
from triggers.dashboard import (
    households_trigger,
    family_members_trigger,
    dashboard_kpis_trigger,
    dashboard_tithe_trigger,
    dashboard_charts_trigger,
)
from triggers.health import health_check_trigger

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "function_app")

# ========================================================================
# STARTUP - Environment validation and connection pool lifecycle
# ========================================================================

if not log_validation_results(logger):
    logger.error("Environment validation failed - requests touching the database will fail")

try:
    ConnectionPoolManager.initialize(get_config().database)
except ConfigurationError as e:
    # Keep the host up so /api/health can report the problem
    logger.error(f"Connection pool not configured: {e}")


def _shutdown() -> None:
    from services.notification_service import get_notification_service

    get_notification_service().shutdown()
    ConnectionPoolManager.shutdown()


atexit.register(_shutdown)

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)


# ============================================================================
# SUBMISSIONS
# ============================================================================

@app.route(route="submit-household", methods=["POST"])
def submit_household(req: func.HttpRequest) -> func.HttpResponse:
    """Household with its family members, written in one transaction."""
    return submit_household_trigger.handle_request(req)


@app.route(route="submit-form", methods=["POST"])
def submit_form(req: func.HttpRequest) -> func.HttpResponse:
    """Single-person form."""
    return submit_form_trigger.handle_request(req)


# ============================================================================
# LISTINGS
# ============================================================================

@app.route(route="households", methods=["GET"])
def list_households(req: func.HttpRequest) -> func.HttpResponse:
    return households_trigger.handle_request(req)


@app.route(route="family-members", methods=["GET"])
def list_family_members(req: func.HttpRequest) -> func.HttpResponse:
    return family_members_trigger.handle_request(req)


# ============================================================================
# DASHBOARD
# ============================================================================

@app.route(route="dashboard/kpis", methods=["GET"])
def dashboard_kpis(req: func.HttpRequest) -> func.HttpResponse:
    return dashboard_kpis_trigger.handle_request(req)


@app.route(route="dashboard/tithe", methods=["GET"])
def dashboard_tithe(req: func.HttpRequest) -> func.HttpResponse:
    return dashboard_tithe_trigger.handle_request(req)


@app.route(route="dashboard/charts", methods=["GET"])
def dashboard_charts(req: func.HttpRequest) -> func.HttpResponse:
    return dashboard_charts_trigger.handle_request(req)


# ============================================================================
# MONITORING
# ============================================================================

@app.route(route="health", methods=["GET"])
def health(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint using HTTP trigger base class."""
    return health_check_trigger.handle_request(req)
