# ============================================================================
# CONNECTION POOL MANAGER
# ============================================================================
# STATUS: Infrastructure - Process-wide PostgreSQL connection pool
# PURPOSE: Explicit pool lifecycle; hands out sessions to repositories
# EXPORTS: ConnectionPoolManager
# DEPENDENCIES: psycopg_pool, config.database_config
# ============================================================================
"""
Connection Pool Manager.

================================================================================
LIFECYCLE
================================================================================

The pool is the only shared mutable resource in the process:

    function_app.py (module load)
        ConnectionPoolManager.initialize(config.database)
            -> pool is created lazily on the first get_connection()

    requests
        with ConnectionPoolManager.get_connection() as conn:
            ...                     # connection returned to the pool on exit

    worker shutdown (atexit)
        ConnectionPoolManager.shutdown()

Repositories never reach for this class directly; they receive a session
provider (any callable returning a connection context manager) and the
application wires ConnectionPoolManager.get_connection in as the default.

================================================================================
MANAGED IDENTITY
================================================================================

With USE_MANAGED_IDENTITY=true the Azure AD token becomes the password.
The pool is built with ManagedIdentityConnection, which asks for a token
each time psycopg opens a connection. Tokens live about an hour and pooled
connections are recycled after POOL_MAX_LIFETIME_SECONDS (55 minutes), so
every replacement connection authenticates with a token that is still valid.

================================================================================
EXPORTS
================================================================================

    ConnectionPoolManager: Class with classmethods for pool management
    ManagedIdentityConnection: psycopg connection that fetches its own token
"""

import threading
import logging
from typing import Optional, Dict, Any
from contextlib import contextmanager

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from config import DatabaseConfig
from config.defaults import DatabaseDefaults
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ConnectionPoolManager:
    """
    Process-wide connection pool manager.

    Class-level state is used because:
    1. Pool should be shared across all repository instances
    2. Only one pool per process is needed
    3. Thread-safe via lock

    Usage:
        ConnectionPoolManager.initialize(get_config().database)

        with ConnectionPoolManager.get_connection() as conn:
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")

        stats = ConnectionPoolManager.get_pool_stats()
    """

    _pool: Optional[ConnectionPool] = None
    _pool_lock = threading.Lock()
    _db_config: Optional[DatabaseConfig] = None

    _initialized = False
    _shutdown_requested = False

    @classmethod
    def initialize(cls, db_config: DatabaseConfig) -> None:
        """
        Register the database configuration.

        The pool itself opens on first use so that a cold start without a
        reachable database still serves validation errors.

        Raises:
            ConfigurationError: If neither DB_URL nor DB_HOST/DB_NAME is set
        """
        if not db_config.is_configured:
            raise ConfigurationError("DB_URL or DB_HOST and DB_NAME must be set")

        with cls._pool_lock:
            cls._db_config = db_config
            cls._initialized = True
            cls._shutdown_requested = False

        logger.info(
            f"Connection pool configured: min={db_config.pool_min}, "
            f"max={db_config.pool_max}, schema={db_config.db_schema}"
        )

    @classmethod
    def _require_config(cls) -> DatabaseConfig:
        if cls._db_config is None:
            raise ConfigurationError(
                "ConnectionPoolManager.initialize() must be called before requesting connections"
            )
        return cls._db_config

    @classmethod
    def _build_connection_string(cls) -> str:
        """
        Connection string for the pool.

        Managed identity: the string carries no password;
        ManagedIdentityConnection adds a token per connection.
        """
        return cls._require_config().connection_string

    @classmethod
    def _uses_managed_identity(cls) -> bool:
        db_config = cls._require_config()
        return db_config.use_managed_identity and not db_config.url

    @classmethod
    def _current_token(cls) -> str:
        """
        Token for a connection that is about to open.

        Raises:
            ConfigurationError: If no token could be acquired
        """
        from infrastructure.auth import get_postgres_token

        token = get_postgres_token(cls._require_config())
        if not token:
            raise ConfigurationError(
                "Failed to get PostgreSQL token for a new connection. "
                "Ensure managed identity is configured."
            )
        return token

    @classmethod
    def _configure_connection(cls, conn) -> None:
        """
        Configure a connection after it's created by the pool.

        Rows come back as dicts and unqualified table names resolve in the
        configured schema. The pool requires the connection to be idle
        afterwards, hence the commit.
        """
        conn.row_factory = dict_row

        schema = cls._require_config().db_schema
        conn.execute(sql.SQL("SET search_path TO {}").format(sql.Identifier(schema)))
        conn.commit()

    @classmethod
    def _create_pool(cls) -> ConnectionPool:
        db_config = cls._require_config()

        logger.info(
            f"Creating connection pool: min={db_config.pool_min}, max={db_config.pool_max}"
        )

        pool = ConnectionPool(
            conninfo=cls._build_connection_string(),
            min_size=db_config.pool_min,
            max_size=db_config.pool_max,
            timeout=db_config.pool_timeout_seconds,
            max_lifetime=DatabaseDefaults.POOL_MAX_LIFETIME_SECONDS,
            configure=cls._configure_connection,
            connection_class=(
                ManagedIdentityConnection if cls._uses_managed_identity() else psycopg.Connection
            ),
            open=True,
        )

        logger.info("Connection pool created successfully")
        return pool

    @classmethod
    def _get_or_create_pool(cls) -> ConnectionPool:
        """Thread-safe via double-check locking."""
        if cls._pool is None:
            with cls._pool_lock:
                if cls._pool is None:
                    cls._pool = cls._create_pool()

        return cls._pool

    @classmethod
    @contextmanager
    def get_connection(cls):
        """
        Get a connection from the pool.

        The connection is returned to the pool when the context exits,
        whatever happened inside it.

        Raises:
            ConfigurationError: If initialize() was not called
            RuntimeError: If shutdown() has been requested
            psycopg_pool.PoolTimeout: If no connection is free within the timeout
        """
        if cls._shutdown_requested:
            raise RuntimeError(
                "Connection pool is shutting down. Cannot get new connections."
            )

        pool = cls._get_or_create_pool()

        with pool.connection() as conn:
            yield conn

    @classmethod
    def shutdown(cls) -> None:
        """
        Drain all connections and refuse new ones.

        Called when the worker process exits.
        """
        cls._shutdown_requested = True

        with cls._pool_lock:
            if cls._pool:
                logger.info("Shutting down connection pool...")
                try:
                    cls._pool.close(timeout=DatabaseDefaults.POOL_CLOSE_TIMEOUT_SECONDS)
                    logger.info("Connection pool shutdown complete")
                except Exception as e:
                    logger.warning(f"Error during pool shutdown: {e}")
                finally:
                    cls._pool = None

    @classmethod
    def get_pool_stats(cls) -> Dict[str, Any]:
        """
        Pool statistics for the health endpoint.

        Returns:
            dict with initialized/shutdown flags, configured sizes and, once
            the pool exists, psycopg_pool's live counters
        """
        stats: Dict[str, Any] = {
            'initialized': cls._initialized,
            'pool_open': cls._pool is not None,
            'shutdown_requested': cls._shutdown_requested,
        }

        if cls._pool is not None:
            try:
                pool_stats = cls._pool.get_stats()
                stats.update({
                    'pool_size': pool_stats.get('pool_size'),
                    'pool_available': pool_stats.get('pool_available'),
                    'requests_waiting': pool_stats.get('requests_waiting'),
                })
            except Exception as e:
                stats['pool_stats_error'] = str(e)

        if cls._db_config is not None:
            stats.update({
                'pool_min': cls._db_config.pool_min,
                'pool_max': cls._db_config.pool_max,
            })

        return stats

    @classmethod
    def reset_for_testing(cls) -> None:
        """
        Reset pool state for testing.

        WARNING: Only use in tests! This does not properly drain connections.
        """
        with cls._pool_lock:
            if cls._pool:
                try:
                    cls._pool.close(timeout=5)
                except Exception as e:
                    logger.debug(f"Ignoring pool close error during test reset: {e}")
            cls._pool = None
            cls._db_config = None
            cls._initialized = False
            cls._shutdown_requested = False


class ManagedIdentityConnection(psycopg.Connection):
    """
    Connection that authenticates with a freshly acquired Azure AD token.

    psycopg_pool opens every connection through connection_class.connect,
    including the replacements it creates after max_lifetime expires.
    """

    @classmethod
    def connect(cls, conninfo: str = "", **kwargs):
        kwargs["password"] = ConnectionPoolManager._current_token()
        return super().connect(conninfo, **kwargs)


__all__ = [
    'ConnectionPoolManager',
    'ManagedIdentityConnection',
]
