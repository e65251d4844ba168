# ============================================================================
# INFRASTRUCTURE PACKAGE
# ============================================================================
# STATUS: Infrastructure - PostgreSQL store, SMS client, Azure auth
# PURPOSE: Everything that talks to something outside the process
# ============================================================================
"""
Infrastructure Package.

Import modules directly; nothing is imported here so that loading one
repository does not open the pool or pull in the SMS client.

Modules:
    connection_pool: ConnectionPoolManager (process-wide psycopg_pool)
    postgresql: PostgreSQLRepository base (sessions, SQL checks, errors)
    household_repository: Transactional household writer
    census_query_repository: Dashboard and listing queries
    sms: SmsClient for confirmation messages
    auth: Managed identity tokens for PostgreSQL
"""
