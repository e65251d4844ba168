# ============================================================================
# SHARED AZURE CREDENTIAL SINGLETON
# ============================================================================
# STATUS: Infrastructure - Canonical credential provider
# PURPOSE: Cached DefaultAzureCredential for PostgreSQL managed identity
# DEPENDENCIES: azure.identity (no infrastructure dependencies)
# ============================================================================
"""
Shared Azure credential singleton.

Depends only on azure.identity so it can be imported before the config
package or the connection pool exist.
"""

from azure.identity import DefaultAzureCredential

_credential = None


def get_azure_credential() -> DefaultAzureCredential:
    """Get cached DefaultAzureCredential singleton."""
    global _credential
    if _credential is None:
        _credential = DefaultAzureCredential()
    return _credential


__all__ = ["get_azure_credential"]
