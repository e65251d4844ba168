# ============================================================================
# CENSUS QUERY REPOSITORY - READ SIDE
# ============================================================================
# STATUS: Infrastructure - Aggregation and listing queries
# PURPOSE: Counts and groupings behind the dashboard, raw listings
# EXPORTS: CensusQueryRepository
# DEPENDENCIES: psycopg, infrastructure.postgresql
# ============================================================================
"""
Census Query Repository.

Every method runs one statement in its own short-lived session; there is
no isolation across calls. Groupings come back as raw (value, count)
rows. Labelling, zero-defaults and age derivation happen in the service
layer.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List

from psycopg import sql

from core.models import HouseholdRecord
from .household_repository import HOUSEHOLDS_TABLE, MEMBERS_TABLE
from .postgresql import PostgreSQLRepository


def _json_safe(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class CensusQueryRepository(PostgreSQLRepository):
    """Read-only queries over households and familymembers."""

    def count_households(self) -> int:
        query = sql.SQL("SELECT COUNT(*) AS count FROM {}").format(self._table(HOUSEHOLDS_TABLE))
        return self._fetch_scalar(query, operation="count households")

    def count_members(self) -> int:
        query = sql.SQL("SELECT COUNT(*) AS count FROM {}").format(self._table(MEMBERS_TABLE))
        return self._fetch_scalar(query, operation="count members")

    def count_by_tithe_status(self) -> List[Dict[str, Any]]:
        """Rows of {tithe_status (lowercased, may be None), count}."""
        query = sql.SQL(
            "SELECT LOWER(tithe_status) AS tithe_status, COUNT(*) AS count "
            "FROM {} GROUP BY LOWER(tithe_status)"
        ).format(self._table(HOUSEHOLDS_TABLE))
        return self._fetch_all(query, operation="group by tithe status")

    def count_by_gender(self) -> List[Dict[str, Any]]:
        """Rows of {gender, count} over all members."""
        query = sql.SQL(
            "SELECT gender, COUNT(*) AS count FROM {} GROUP BY gender"
        ).format(self._table(MEMBERS_TABLE))
        return self._fetch_all(query, operation="group by gender")

    def count_by_community(self) -> List[Dict[str, Any]]:
        """Rows of {community, count} over all members."""
        query = sql.SQL(
            "SELECT community, COUNT(*) AS count FROM {} GROUP BY community"
        ).format(self._table(MEMBERS_TABLE))
        return self._fetch_all(query, operation="group by community")

    def count_by_serve_in_church(self) -> List[Dict[str, Any]]:
        """Rows of {serveinchurch, count} over all members."""
        query = sql.SQL(
            "SELECT serveinchurch, COUNT(*) AS count FROM {} GROUP BY serveinchurch"
        ).format(self._table(MEMBERS_TABLE))
        return self._fetch_all(query, operation="group by serve in church")

    def list_birth_dates(self) -> List[Any]:
        query = sql.SQL("SELECT birthdate FROM {}").format(self._table(MEMBERS_TABLE))
        rows = self._fetch_all(query, operation="list birth dates")
        return [row.get("birthdate") for row in rows]

    def list_households(self) -> List[HouseholdRecord]:
        query = sql.SQL(
            "SELECT household_id, latitude, longitude, tithe_status FROM {} ORDER BY household_id"
        ).format(self._table(HOUSEHOLDS_TABLE))
        rows = self._fetch_all(query, operation="list households")
        return [HouseholdRecord.model_validate(row) for row in rows]

    def list_members_with_coordinates(self) -> List[Dict[str, Any]]:
        """Every member joined with its household's latitude and longitude."""
        query = sql.SQL(
            "SELECT m.*, h.latitude, h.longitude "
            "FROM {members} AS m JOIN {households} AS h ON h.household_id = m.household_id "
            "ORDER BY m.household_id"
        ).format(
            members=self._table(MEMBERS_TABLE),
            households=self._table(HOUSEHOLDS_TABLE),
        )
        rows = self._fetch_all(query, operation="list members")
        return [{key: _json_safe(value) for key, value in row.items()} for row in rows]

    def ping(self) -> bool:
        """SELECT 1 through a pooled session."""
        row = self._fetch_one(sql.SQL("SELECT 1 AS ok"), operation="health check")
        return bool(row and row.get("ok") == 1)


__all__ = ['CensusQueryRepository']
