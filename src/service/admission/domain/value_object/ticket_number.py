"""
Ticket Number codec

Human-readable form of a ticket id for manual and bulk entry at the gate:

    encode_ticket_number(42, 'vip')   -> 'VIP-000042'
    decode_ticket_number('VIP-000042') -> 42
    decode_ticket_number('vip 42')     -> 42
    decode_ticket_number('BOGUS')      -> None

Decoding only looks at the digits of the last '-' segment, so the prefix is
informational and a mistyped prefix still resolves to the same ticket.
"""

import re
from typing import Optional


DEFAULT_PREFIX = 'TICKET'
ID_WIDTH = 6
MAX_TICKET_ID = 2**63 - 1

_WHITESPACE = re.compile(r'\s+')
_NON_DIGIT = re.compile(r'\D')


def encode_ticket_number(ticket_id: int, ticket_type: Optional[str]) -> str:
    prefix = _WHITESPACE.sub('', ticket_type or '').upper() or DEFAULT_PREFIX
    return f'{prefix}-{ticket_id:0{ID_WIDTH}d}'


def decode_ticket_number(ticket_number: Optional[str]) -> Optional[int]:
    """
    Returns:
        The ticket id, or None when the input cannot identify a ticket
        (blank, no digits, zero, or beyond the 64-bit id range)
    """
    if ticket_number is None or not ticket_number.strip():
        return None

    last_segment = ticket_number.strip().split('-')[-1]
    digits = _NON_DIGIT.sub('', last_segment)
    if not digits:
        return None

    ticket_id = int(digits)
    if ticket_id <= 0 or ticket_id > MAX_TICKET_ID:
        return None
    return ticket_id
