"""
Household location parsing tests.
"""

import pytest

from core.logic import parse_household_location
from exceptions import InvalidHouseholdLocation


class TestParseHouseholdLocation:

    def test_parses_decimal_pair(self):
        location = parse_household_location("9.03,38.74")
        assert location.latitude == 9.03
        assert location.longitude == 38.74

    def test_negative_components(self):
        location = parse_household_location("-33.9,-70.6")
        assert location.latitude == -33.9
        assert location.longitude == -70.6

    def test_integer_components(self):
        location = parse_household_location("9,38")
        assert (location.latitude, location.longitude) == (9.0, 38.0)

    @pytest.mark.parametrize("raw", [
        "9.03, 38.74",
        " 9.03,38.74",
        "9.03;38.74",
        "9.03",
        "9.03,38.74,1",
        "abc,def",
        "9.,38.74",
        "+9.03,38.74",
    ])
    def test_malformed_strings_rejected(self, raw):
        with pytest.raises(InvalidHouseholdLocation) as exc_info:
            parse_household_location(raw)
        assert exc_info.value.raw_value == raw

    @pytest.mark.parametrize("raw", [
        "٩.٠٣,٣٨.٧٤",
        "９.03,38.74",
        "9.03,38.७४",
    ])
    def test_non_ascii_digits_rejected(self, raw):
        with pytest.raises(InvalidHouseholdLocation):
            parse_household_location(raw)

    @pytest.mark.parametrize("raw", [None, "", 9.03, ["9.03", "38.74"]])
    def test_missing_or_non_string_rejected(self, raw):
        with pytest.raises(InvalidHouseholdLocation):
            parse_household_location(raw)

    def test_missing_location_message_asks_for_format(self):
        with pytest.raises(InvalidHouseholdLocation) as exc_info:
            parse_household_location(None)
        assert "latitude,longitude" in exc_info.value.message
