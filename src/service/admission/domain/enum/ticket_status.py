"""
Ticket Status Enum

ACTIVE -> CHECKED_IN is the only transition this service performs.
USED may be written by other systems and is read as already checked in.
"""

from enum import StrEnum
from typing import Any, Optional


class TicketStatus(StrEnum):
    ACTIVE = 'ACTIVE'
    CHECKED_IN = 'CHECKED_IN'
    USED = 'USED'

    @classmethod
    def _missing_(cls, value: Any) -> Optional['TicketStatus']:
        # Stored values are matched case-insensitively ('checked_in', ' Used ')
        if isinstance(value, str):
            normalized = value.strip().upper()
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def is_checked_in(self) -> bool:
        return self in (TicketStatus.CHECKED_IN, TicketStatus.USED)
