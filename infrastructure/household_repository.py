# ============================================================================
# HOUSEHOLD REPOSITORY - TRANSACTIONAL WRITER
# ============================================================================
# STATUS: Infrastructure - Census write side
# PURPOSE: Persist a household and all of its members atomically
# EXPORTS: HouseholdRepository, HOUSEHOLDS_TABLE, MEMBERS_TABLE, SINGLE_FORM_TABLE
# DEPENDENCIES: psycopg, infrastructure.postgresql
# ============================================================================
"""
Household Repository.

One submission is one transaction:

    IDLE -> TX_OPEN -> HOUSEHOLD_INSERTED -> MEMBERS_INSERTING -> COMMITTED
                 \\______________\\___________________\\______-> ROLLED_BACK

The household row is inserted first to obtain its generated id; members
follow one by one in submission order, all referencing that id. Any
failure rolls everything back, so the store never holds a household
without its members or members without their household.

Calls are made exactly once. Retrying is the caller's decision.
"""

from typing import Any, Optional

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from core.models import (
    MEMBER_COLUMNS,
    SINGLE_FORM_COLUMNS,
    SingleMemberForm,
    SubmissionAggregate,
    SubmissionResult,
    WriterState,
)
from exceptions import HouseholdCreationFailed, StoreFailure
from util_logger import log_duration, update_log_context
from .postgresql import PostgreSQLRepository


HOUSEHOLDS_TABLE = "households"
MEMBERS_TABLE = "familymembers"
SINGLE_FORM_TABLE = "halaba_form"


def _insert_statement(table: sql.Identifier, columns, returning: Optional[str] = None) -> sql.Composed:
    query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({values})").format(
        table=table,
        columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
        values=sql.SQL(", ").join(sql.Placeholder() for _ in columns),
    )
    if returning:
        query = query + sql.SQL(" RETURNING {}").format(sql.Identifier(returning))
    return query


class HouseholdRepository(PostgreSQLRepository):
    """
    Transactional writer for household submissions.

    Shared by concurrent requests; the writer state of a submission is
    local to its commit_submission call and only surfaces in DEBUG logs.
    """

    def _transition(self, state: WriterState, **dimensions: Any) -> WriterState:
        self.logger.debug(
            f"Writer state -> {state.value}",
            extra={'custom_dimensions': {'writer_state': state.value, **dimensions}}
        )
        return state

    def commit_submission(self, aggregate: SubmissionAggregate) -> SubmissionResult:
        """
        Persist the household and every member in one transaction.

        Args:
            aggregate: Validated submission

        Returns:
            SubmissionResult with the generated household id

        Raises:
            HouseholdCreationFailed: INSERT returned no id (rolled back)
            StoreFailure: Any store error, including on commit (rolled back)
        """
        household_insert = _insert_statement(
            self._table(HOUSEHOLDS_TABLE),
            ("latitude", "longitude", "tithe_status"),
            returning="household_id",
        )
        member_insert = _insert_statement(self._table(MEMBERS_TABLE), MEMBER_COLUMNS)

        state = WriterState.IDLE
        household_id: Optional[int] = None
        operation = "household insert"

        with self._get_connection() as conn:
            # psycopg opens the transaction implicitly on the first statement
            state = self._transition(WriterState.TX_OPEN)
            try:
                with log_duration(self.logger, "commit_submission", member_count=aggregate.member_count):
                    with conn.cursor(row_factory=dict_row) as cursor:
                        cursor.execute(household_insert, (
                            aggregate.location.latitude,
                            aggregate.location.longitude,
                            aggregate.tithe_status,
                        ))
                        row = cursor.fetchone()
                        if not row or row.get("household_id") is None:
                            raise HouseholdCreationFailed("INSERT ... RETURNING produced no household_id")

                        household_id = int(row["household_id"])
                        update_log_context(household_id=household_id)
                        state = self._transition(WriterState.HOUSEHOLD_INSERTED, household_id=household_id)

                        state = self._transition(WriterState.MEMBERS_INSERTING, household_id=household_id)
                        for index, member in enumerate(aggregate.members):
                            operation = f"member insert {index}"
                            cursor.execute(member_insert, member.to_row(household_id))

                    operation = "commit"
                    conn.commit()

            except psycopg.Error as e:
                self.logger.error(
                    f"Store error during {operation}: {e}",
                    extra={'custom_dimensions': {
                        'operation': operation,
                        'household_id': household_id,
                        'sqlstate': getattr(e, 'sqlstate', None),
                    }}
                )
                self._rollback_quietly(conn, operation)
                self._transition(WriterState.ROLLED_BACK, failed_in=state.value)
                raise StoreFailure(operation, str(e)) from e

            except Exception:
                self._rollback_quietly(conn, operation)
                self._transition(WriterState.ROLLED_BACK, failed_in=state.value)
                raise

        self._transition(WriterState.COMMITTED, household_id=household_id)
        self.logger.info(
            f"Household {household_id} committed with {aggregate.member_count} members",
            extra={'custom_dimensions': {
                'household_id': household_id,
                'member_count': aggregate.member_count,
            }}
        )
        return SubmissionResult(household_id=household_id, member_count=aggregate.member_count)

    def insert_single_form(self, form: SingleMemberForm) -> None:
        """
        Persist one single-person form row.

        Raises:
            StoreFailure: Any store error (rolled back)
        """
        query = _insert_statement(self._table(SINGLE_FORM_TABLE), SINGLE_FORM_COLUMNS)

        with self._get_connection() as conn:
            try:
                with conn.cursor() as cursor:
                    cursor.execute(query, form.to_row())
                conn.commit()
            except psycopg.Error as e:
                self.logger.error(f"Store error during single form insert: {e}")
                self._rollback_quietly(conn, "single form insert")
                raise StoreFailure("single form insert", str(e)) from e

        self.logger.info("Single-person form stored")


__all__ = [
    'HouseholdRepository',
    'HOUSEHOLDS_TABLE',
    'MEMBERS_TABLE',
    'SINGLE_FORM_TABLE',
]
