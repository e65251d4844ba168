"""
Pure Enumeration Types for the Census Domain.

No business logic - pure type definitions only.

Exports:
    TitheStatus: Household giving/contribution state
    Gender: The two gender encodings used by the census form
    AgeBracket: Fixed age bands used by the dashboard
    WriterState: Transactional writer lifecycle states
"""

from enum import Enum


class TitheStatus(str, Enum):
    """
    Known tithe status values.

    Stored lowercase in Households.tithe_status. Other values are allowed
    in the column but are not reported in the tithe breakdown.
    """

    PAID = "paid"
    PENDING = "pending"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Gender(str, Enum):
    """
    Gender values exactly as the (Amharic) form submits them.
    """

    MALE = "ወንድ"
    FEMALE = "ሴት"

    @property
    def label(self) -> str:
        return "Male" if self is Gender.MALE else "Female"


class AgeBracket(str, Enum):
    """
    Age bands, inclusive on both ends.

    - UNDER_13: age < 13
    - TEEN_TO_25: 13 <= age <= 25
    - ADULT: 26 <= age <= 60
    - OVER_60: age > 60
    """

    UNDER_13 = "Under 13"
    TEEN_TO_25 = "13-25"
    ADULT = "26-60"
    OVER_60 = "Over 60"


class WriterState(str, Enum):
    """
    Transactional writer lifecycle.

    State transitions:
    - IDLE -> TX_OPEN -> HOUSEHOLD_INSERTED -> MEMBERS_INSERTING -> COMMITTED
    - any non-terminal state -> ROLLED_BACK
    """

    IDLE = "idle"
    TX_OPEN = "tx_open"
    HOUSEHOLD_INSERTED = "household_inserted"
    MEMBERS_INSERTING = "members_inserting"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
