# ============================================================================
# POSTGRESQL MANAGED IDENTITY TOKENS
# ============================================================================
# STATUS: Infrastructure - Azure AD token acquisition for PostgreSQL
# PURPOSE: Passwordless authentication for the census database
# EXPORTS: get_postgres_token, POSTGRES_SCOPE
# ============================================================================
"""
PostgreSQL OAuth token acquisition.

Used only when USE_MANAGED_IDENTITY=true. Called once per new pooled
connection; the token becomes that connection's password. The credential
caches tokens until shortly before they expire.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from azure.core.exceptions import ClientAuthenticationError

from config import DatabaseConfig
from config.defaults import DatabaseDefaults
from exceptions import ConfigurationError
from .credential import get_azure_credential

logger = logging.getLogger(__name__)

POSTGRES_SCOPE = DatabaseDefaults.MANAGED_IDENTITY_SCOPE


def get_postgres_token(db_config: DatabaseConfig) -> Optional[str]:
    """
    Get PostgreSQL OAuth token using Managed Identity.

    Returns:
        Bearer token, or None when managed identity is disabled.

    Raises:
        ConfigurationError: If token acquisition fails.
    """
    if not db_config.use_managed_identity:
        logger.debug("Managed identity disabled, using password auth")
        return None

    logger.info(
        f"Acquiring PostgreSQL OAuth token for {db_config.managed_identity_name or db_config.user} "
        f"on {db_config.host}"
    )

    try:
        token_response = get_azure_credential().get_token(POSTGRES_SCOPE)
    except ClientAuthenticationError as e:
        logger.error(f"FAILED TO GET POSTGRESQL OAUTH TOKEN: {e}")
        logger.error("  Verify the managed identity is assigned and matches a database role")
        raise ConfigurationError(f"PostgreSQL token acquisition failed: {e}") from e

    expires_at = datetime.fromtimestamp(token_response.expires_on, tz=timezone.utc)
    logger.info(f"PostgreSQL token acquired, expires: {expires_at.isoformat()}")
    return token_response.token


__all__ = ["get_postgres_token", "POSTGRES_SCOPE"]
