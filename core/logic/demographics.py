# ============================================================================
# DEMOGRAPHIC DERIVATIONS
# ============================================================================
# STATUS: Core - Pure calculation functions
# PURPOSE: Age, age bracket and bucket counting for the dashboard read side
# EXPORTS: parse_birth_date, compute_age, age_bracket, count_age_brackets,
#          count_genders, count_communities, is_affirmative
# ============================================================================
"""
Demographic Derivations.

Ages are never stored; they are derived from the birth date at the moment
the dashboard is queried. All functions are pure and take ``today`` as an
argument so results are reproducible.
"""

from collections import Counter
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from ..models.dashboard import NamedCount
from ..models.enums import AgeBracket, Gender


UNKNOWN_COMMUNITY_LABEL = "Unknown"

# serveInChurch answers that count as "engaged"
AFFIRMATIVE_VALUES = frozenset({"yes", "true", "1", "y", "አዎ"})


def parse_birth_date(value: Any) -> Optional[date]:
    """
    Coerce a stored birth date into a date.

    Accepts date/datetime objects (DATE columns) and ISO strings
    ("1990-01-01", optionally with a time part). Returns None when the
    value cannot be interpreted.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def compute_age(birth_date: date, today: date) -> int:
    """Whole years between birth_date and today (birthday not yet reached -> one less)."""
    before_birthday = (today.month, today.day) < (birth_date.month, birth_date.day)
    return today.year - birth_date.year - int(before_birthday)


def age_bracket(age: int) -> AgeBracket:
    """
    Map an age onto its bracket.

    Exhaustive: anything below 13 (including negative ages from future
    birth dates) is UNDER_13, anything above 60 is OVER_60.
    """
    if age < 13:
        return AgeBracket.UNDER_13
    if age <= 25:
        return AgeBracket.TEEN_TO_25
    if age <= 60:
        return AgeBracket.ADULT
    return AgeBracket.OVER_60


def count_age_brackets(birth_dates: Iterable[Any], today: date) -> List[NamedCount]:
    """
    Count members per age bracket.

    Every bracket is present in the result, in AgeBracket order.
    Unparseable birth dates are skipped.
    """
    counts: Counter = Counter()
    for raw in birth_dates:
        born = parse_birth_date(raw)
        if born is None:
            continue
        counts[age_bracket(compute_age(born, today))] += 1

    return [NamedCount(name=bracket.value, count=counts[bracket]) for bracket in AgeBracket]


def count_genders(rows: Iterable[Dict[str, Any]]) -> List[NamedCount]:
    """
    Fold (gender, count) rows into the two fixed gender buckets.

    Values outside the Gender encoding are ignored; both buckets are always
    present, Male first.
    """
    counts = {gender.value: 0 for gender in Gender}
    for row in rows:
        value = row.get("gender")
        if value in counts:
            counts[value] += int(row.get("count") or 0)

    return [NamedCount(name=gender.label, count=counts[gender.value]) for gender in Gender]


def count_communities(rows: Iterable[Dict[str, Any]]) -> List[NamedCount]:
    """
    Fold (community, count) rows into labelled buckets.

    NULL/blank communities merge into UNKNOWN_COMMUNITY_LABEL. Sorted by
    count descending, then name.
    """
    counts: Counter = Counter()
    for row in rows:
        community = row.get("community")
        label = str(community).strip() if community is not None else ""
        counts[label or UNKNOWN_COMMUNITY_LABEL] += int(row.get("count") or 0)

    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [NamedCount(name=name, count=count) for name, count in ordered]


def is_affirmative(value: Any) -> bool:
    """True for serveInChurch answers meaning yes (bools, 'yes', 'አዎ', ...)."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in AFFIRMATIVE_VALUES
