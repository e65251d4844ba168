"""
Randomized payload factories - anti-overfitting design.

Every factory call generates randomized non-identity fields (names,
phone numbers, birth dates, coordinates) so tests cannot rely on
specific default values. Pass overrides for anything a test asserts on.
"""

import random
import string
from datetime import date, timedelta


COMMUNITIES = ["Kebele 01", "Kebele 02", "Halaba", "Hosanna"]
GENDERS = ["ወንድ", "ሴት"]


def _random_suffix(length: int = 6) -> str:
    """Generate random alphanumeric suffix."""
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=length))


def _random_birth_date() -> str:
    """ISO birth date between roughly 1 and 80 years ago."""
    offset = random.randint(365, 80 * 365)
    return (date.today() - timedelta(days=offset)).isoformat()


def _random_phone() -> str:
    return "+2519" + "".join(random.choices(string.digits, k=8))


def make_location(latitude: float = None, longitude: float = None) -> str:
    """Build a 'lat,lon' string."""
    lat = latitude if latitude is not None else round(random.uniform(3.5, 14.5), 4)
    lon = longitude if longitude is not None else round(random.uniform(33.0, 47.5), 4)
    return f"{lat},{lon}"


def make_raw_member(**overrides):
    """
    Build one familyMembers entry as the form submits it.

    Only the mandatory fields plus the required-but-nullable ones are
    filled; optional education/disability fields are left out.
    """
    defaults = {
        "name": f"member-{_random_suffix()}",
        "phone": _random_phone(),
        "birthDate": _random_birth_date(),
        "gender": random.choice(GENDERS),
        "serveInChurch": random.choice(["yes", "no"]),
        "maritalStatus": random.choice(["single", "married"]),
        "community": random.choice(COMMUNITIES),
        "jobType": f"job-{_random_suffix(4)}",
        "hasDisability": random.choice([True, False]),
    }
    defaults.update(overrides)
    return defaults


def make_submission_payload(member_count: int = None, members=None, **overrides):
    """
    Build a submit-household body.

    Args:
        member_count: Number of random members (1-4 if None)
        members: Explicit member list (wins over member_count)
        **overrides: Top-level key override
    """
    if members is None:
        count = member_count if member_count is not None else random.randint(1, 4)
        members = [make_raw_member() for _ in range(count)]

    defaults = {
        "householdLocation": make_location(),
        "familyMembers": members,
    }
    defaults.update(overrides)
    return defaults


def make_single_form(**overrides):
    """Build a complete single-person form body."""
    defaults = make_raw_member()
    defaults["address"] = f"address-{_random_suffix()}"
    defaults.update(overrides)
    return defaults
