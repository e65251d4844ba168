"""
Core Data Models - Pure Data Structures.

Pydantic models and enums only. No database access, no HTTP.

Exports:
    Enums: TitheStatus, Gender, AgeBracket, WriterState
    Members: ValidatedMember and the field classification tuples
    Households: HouseholdLocation, SubmissionAggregate, SubmissionResult,
                HouseholdRecord, SingleMemberForm
    Dashboard: NamedCount, DashboardKpis, DashboardCharts
"""

from .enums import TitheStatus, Gender, AgeBracket, WriterState
from .member import (
    ValidatedMember,
    MANDATORY_MEMBER_FIELDS,
    NULLABLE_MEMBER_FIELDS,
    OPTIONAL_MEMBER_FIELDS,
    RECOGNIZED_MEMBER_FIELDS,
    MEMBER_COLUMNS,
)
from .household import (
    HouseholdLocation,
    SubmissionAggregate,
    SubmissionResult,
    HouseholdRecord,
    SingleMemberForm,
    SINGLE_FORM_COLUMNS,
)
from .dashboard import NamedCount, DashboardKpis, DashboardCharts

__all__ = [
    'TitheStatus',
    'Gender',
    'AgeBracket',
    'WriterState',
    'ValidatedMember',
    'MANDATORY_MEMBER_FIELDS',
    'NULLABLE_MEMBER_FIELDS',
    'OPTIONAL_MEMBER_FIELDS',
    'RECOGNIZED_MEMBER_FIELDS',
    'MEMBER_COLUMNS',
    'HouseholdLocation',
    'SubmissionAggregate',
    'SubmissionResult',
    'HouseholdRecord',
    'SingleMemberForm',
    'SINGLE_FORM_COLUMNS',
    'NamedCount',
    'DashboardKpis',
    'DashboardCharts',
]
