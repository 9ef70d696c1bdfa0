"""
Default resolution for optional request fields

Each resolver turns an absent or blank value into a concrete one, so the use
cases never thread Optional values through their logic.
"""

from decimal import Decimal
from typing import Optional

from src.platform.exception.exceptions import InvalidInputError


DEFAULT_GATE = 'Main Gate'
DEFAULT_TICKET_TYPE = 'REGULAR'
DEFAULT_PAYMENT_METHOD = 'GCASH'
MIN_QUANTITY = 1


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def resolve_gate(gate: Optional[str]) -> str:
    return DEFAULT_GATE if _blank(gate) else gate.strip()  # type: ignore[union-attr]


def resolve_ticket_type(ticket_type: Optional[str]) -> str:
    return DEFAULT_TICKET_TYPE if _blank(ticket_type) else ticket_type.strip()  # type: ignore[union-attr]


def resolve_payment_method(payment_method: Optional[str]) -> str:
    return DEFAULT_PAYMENT_METHOD if _blank(payment_method) else payment_method.strip()  # type: ignore[union-attr]


def resolve_quantity(quantity: Optional[int]) -> int:
    # Non-positive quantities are clamped, not rejected
    return max(MIN_QUANTITY, quantity or 0)


def resolve_unit_price(*, override: Optional[Decimal], event_price: Optional[Decimal]) -> Decimal:
    if override is not None:
        if override < 0:
            raise InvalidInputError('Ticket price must not be negative')
        return override
    return event_price if event_price is not None else Decimal('0')
