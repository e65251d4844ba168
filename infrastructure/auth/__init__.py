# ============================================================================
# AUTHENTICATION MODULE
# ============================================================================
# STATUS: Infrastructure - Managed identity for PostgreSQL
# ============================================================================
"""
Authentication Module.

Environment Variables:
    USE_MANAGED_IDENTITY=true
    DB_MANAGED_IDENTITY_NAME=<identity-name>
"""

from .credential import get_azure_credential
from .postgres_auth import get_postgres_token, POSTGRES_SCOPE

__all__ = [
    "get_azure_credential",
    "get_postgres_token",
    "POSTGRES_SCOPE",
]
