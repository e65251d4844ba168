"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - DatabaseDefaults: Connection, schema and pool sizing
    - SmsDefaults: Outbound SMS provider settings
    - AppDefaults: Environment, logging and debug flags

Usage:
    from config.defaults import DatabaseDefaults

    # In Pydantic Field definitions:
    port: int = Field(default=DatabaseDefaults.PORT, ...)
"""


# =============================================================================
# DATABASE DEFAULTS
# =============================================================================

class DatabaseDefaults:
    """
    Database configuration defaults.

    SSL is required by default because the census database is a hosted
    PostgreSQL server.
    """

    PORT = 5432
    SCHEMA = "public"
    SSLMODE = "require"

    # Pool sizing (psycopg_pool)
    POOL_MIN = 1
    POOL_MAX = 10
    POOL_TIMEOUT_SECONDS = 30.0       # Wait for a free connection
    POOL_MAX_LIFETIME_SECONDS = 55 * 60  # Below the 1h managed identity token lifetime
    POOL_CLOSE_TIMEOUT_SECONDS = 30.0

    # Azure AD scope for PostgreSQL Flexible Server tokens
    MANAGED_IDENTITY_SCOPE = "https://ossrdbms-aad.database.windows.net/.default"


# =============================================================================
# SMS DEFAULTS
# =============================================================================

class SmsDefaults:
    """
    Outbound SMS defaults.

    The provider API follows the Twilio Messages resource shape:
    POST {base_url}/Accounts/{account_sid}/Messages.json
    """

    ENABLED = False
    API_BASE_URL = "https://api.twilio.com/2010-04-01"
    TIMEOUT_SECONDS = 10.0
    MAX_WORKERS = 2


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """Application-wide defaults."""

    ENVIRONMENT = "dev"
    LOG_LEVEL = "INFO"
    DEBUG_MODE = False
