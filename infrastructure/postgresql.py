# ============================================================================
# POSTGRESQL REPOSITORY BASE
# ============================================================================
# STATUS: Infrastructure - Base class for census repositories
# PURPOSE: Session acquisition, SQL composition checks, error translation
# EXPORTS: PostgreSQLRepository, SessionProvider
# DEPENDENCIES: psycopg, infrastructure.connection_pool
# ============================================================================
"""
PostgreSQL Repository Base.

Every repository receives a session provider: a zero-argument callable
returning a context manager that yields a psycopg connection and releases
it on exit. Production wires in ConnectionPoolManager.get_connection; tests
pass a fake that records statements.

Key Features:
    - SQL injection prevention (queries must be psycopg.sql composables)
    - dict rows regardless of how the session was configured
    - psycopg errors translated to StoreFailure after rollback
    - Rollback failures logged, never escalated

Exports:
    PostgreSQLRepository: Base class for PostgreSQL repositories
    SessionProvider: Type of the injected session provider
"""

from contextlib import contextmanager
from typing import Any, Callable, ContextManager, Dict, List, Optional, Sequence

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from exceptions import ContractViolationError, StoreFailure
from util_logger import LoggerFactory, ComponentType, log_duration


SessionProvider = Callable[[], ContextManager[Any]]


class PostgreSQLRepository:
    """
    PostgreSQL repository base.

    Subclasses build queries with psycopg.sql and call _fetch_all /
    _fetch_one for reads, or manage a transaction themselves through
    _get_connection for multi-statement writes.
    """

    def __init__(
        self,
        session_provider: Optional[SessionProvider] = None,
        schema_name: Optional[str] = None,
    ):
        """
        Args:
            session_provider: Callable returning a connection context manager.
                Defaults to the process-wide pool.
            schema_name: Schema holding the census tables. Defaults to
                DB_SCHEMA from configuration.
        """
        if session_provider is None:
            from .connection_pool import ConnectionPoolManager
            session_provider = ConnectionPoolManager.get_connection

        if schema_name is None:
            from config import get_config
            schema_name = get_config().database.db_schema

        self._session_provider = session_provider
        self.schema_name = schema_name
        self.logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, self.__class__.__name__)

    def _table(self, table_name: str) -> sql.Identifier:
        """Schema-qualified table identifier."""
        return sql.Identifier(self.schema_name, table_name)

    @contextmanager
    def _get_connection(self):
        """Acquire one session; it is released when the block exits."""
        with self._session_provider() as conn:
            yield conn

    def _rollback_quietly(self, conn, operation: str) -> None:
        """
        Roll back the open transaction.

        A failing rollback is logged at ERROR and swallowed; the caller is
        already propagating the original failure.
        """
        try:
            conn.rollback()
            self.logger.warning(f"Transaction rolled back during {operation}")
        except Exception as rollback_error:
            self.logger.error(
                f"ROLLBACK ALSO FAILED during {operation}: {rollback_error}",
                extra={'custom_dimensions': {
                    'operation': operation,
                    'rollback_error_type': type(rollback_error).__name__,
                }}
            )

    @staticmethod
    def _require_composed(query: Any) -> None:
        if not isinstance(query, sql.Composable):
            raise ContractViolationError(
                f"SECURITY: Query must be a psycopg.sql composable, got {type(query).__name__}"
            )

    def _execute_read(
        self,
        query: sql.Composable,
        params: Optional[Sequence[Any]],
        fetch: str,
        operation: str,
    ):
        """
        Run one read-only statement in its own short-lived session.

        Raises:
            StoreFailure: Any psycopg error, after rollback
        """
        self._require_composed(query)

        with self._get_connection() as conn:
            try:
                with log_duration(self.logger, operation):
                    with conn.cursor(row_factory=dict_row) as cursor:
                        cursor.execute(query, params)
                        result = cursor.fetchone() if fetch == 'one' else cursor.fetchall()
                conn.commit()
                return result
            except psycopg.Error as e:
                self.logger.error(
                    f"QUERY FAILED during {operation}: {e}",
                    extra={'custom_dimensions': {
                        'operation': operation,
                        'sqlstate': getattr(e, 'sqlstate', None),
                    }}
                )
                self._rollback_quietly(conn, operation)
                raise StoreFailure(operation, str(e)) from e

    def _fetch_all(
        self,
        query: sql.Composable,
        params: Optional[Sequence[Any]] = None,
        operation: str = "query",
    ) -> List[Dict[str, Any]]:
        return list(self._execute_read(query, params, 'all', operation))

    def _fetch_one(
        self,
        query: sql.Composable,
        params: Optional[Sequence[Any]] = None,
        operation: str = "query",
    ) -> Optional[Dict[str, Any]]:
        return self._execute_read(query, params, 'one', operation)

    def _fetch_scalar(
        self,
        query: sql.Composable,
        params: Optional[Sequence[Any]] = None,
        operation: str = "query",
        column: str = "count",
    ) -> int:
        """First row's `column` as int, 0 when the query returned nothing."""
        row = self._fetch_one(query, params, operation)
        if not row or row.get(column) is None:
            return 0
        return int(row[column])


__all__ = [
    'PostgreSQLRepository',
    'SessionProvider',
]
