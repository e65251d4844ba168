"""
Household Location Parsing.

Parses the single "latitude,longitude" string the census form submits.

Exports:
    LOCATION_PATTERN: Compiled pattern a location must fully match
    parse_household_location: str -> HouseholdLocation
"""

import re
from typing import Any

from exceptions import InvalidHouseholdLocation
from ..models.household import HouseholdLocation


# Two signed decimals separated by a comma. ASCII digits only, no whitespace.
LOCATION_PATTERN = re.compile(r"^-?[0-9]+(\.[0-9]+)?,-?[0-9]+(\.[0-9]+)?$")


def parse_household_location(raw: Any) -> HouseholdLocation:
    """
    Parse a "lat,lon" string into a HouseholdLocation.

    Args:
        raw: Submitted householdLocation value

    Returns:
        HouseholdLocation with both components as floats

    Raises:
        InvalidHouseholdLocation: raw is missing, not a string, or does not
            match LOCATION_PATTERN

    Example:
        >>> parse_household_location("9.03,38.74")
        HouseholdLocation(latitude=9.03, longitude=38.74)
    """
    if not isinstance(raw, str) or not LOCATION_PATTERN.fullmatch(raw):
        raise InvalidHouseholdLocation(raw)

    latitude, longitude = raw.split(",")
    return HouseholdLocation(latitude=float(latitude), longitude=float(longitude))
