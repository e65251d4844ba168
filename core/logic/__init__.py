"""
Core Business Logic Package.

Contains validation and derivation logic that operates on pure data models.
Separated from models to maintain clean architecture.

Exports:
    Location: parse_household_location
    Members: validate_member, validate_single_member_form, find_missing_fields,
             find_non_scalar_fields
    Submission: build_submission
    Demographics: compute_age, age_bracket, count_age_brackets,
                  count_genders, count_communities, is_affirmative
"""

from .geo import parse_household_location, LOCATION_PATTERN
from .member_validation import (
    find_missing_fields,
    find_non_scalar_fields,
    validate_member,
    validate_single_member_form,
)
from .submission_builder import build_submission
from .demographics import (
    parse_birth_date,
    compute_age,
    age_bracket,
    count_age_brackets,
    count_genders,
    count_communities,
    is_affirmative,
    UNKNOWN_COMMUNITY_LABEL,
)

__all__ = [
    'parse_household_location',
    'LOCATION_PATTERN',
    'find_missing_fields',
    'find_non_scalar_fields',
    'validate_member',
    'validate_single_member_form',
    'build_submission',
    'parse_birth_date',
    'compute_age',
    'age_bracket',
    'count_age_brackets',
    'count_genders',
    'count_communities',
    'is_affirmative',
    'UNKNOWN_COMMUNITY_LABEL',
]
