"""Unit tests for the ticket number codec"""

import pytest

from src.service.admission.domain.value_object.ticket_number import (
    MAX_TICKET_ID,
    decode_ticket_number,
    encode_ticket_number,
)


@pytest.mark.unit
class TestEncodeTicketNumber:
    @pytest.mark.parametrize(
        'ticket_id,ticket_type,expected',
        [
            (1, 'REGULAR', 'REGULAR-000001'),
            (42, 'vip', 'VIP-000042'),
            (7, ' early bird ', 'EARLYBIRD-000007'),
            (7, None, 'TICKET-000007'),
            (7, '', 'TICKET-000007'),
            (7, '   ', 'TICKET-000007'),
            (1_234_567, 'VIP', 'VIP-1234567'),
        ],
    )
    def test_encode(self, ticket_id: int, ticket_type: str | None, expected: str) -> None:
        assert encode_ticket_number(ticket_id, ticket_type) == expected


@pytest.mark.unit
class TestDecodeTicketNumber:
    @pytest.mark.parametrize(
        'ticket_number,expected',
        [
            ('REGULAR-000001', 1),
            ('  vip-000042  ', 42),
            ('T-000001', 1),
            ('GA-B-000015', 15),  # only the last segment counts
            ('000123', 123),
            ('VIP-00 12a3', 123),  # non-digits inside the segment are dropped
        ],
    )
    def test_decode_valid(self, ticket_number: str, expected: int) -> None:
        assert decode_ticket_number(ticket_number) == expected

    @pytest.mark.parametrize(
        'ticket_number',
        [None, '', '   ', 'BOGUS', 'VIP-', 'VIP-000000', '123-ABC', f'VIP-{MAX_TICKET_ID + 1}'],
    )
    def test_decode_unidentifiable_returns_none(self, ticket_number: str | None) -> None:
        assert decode_ticket_number(ticket_number) is None

    @pytest.mark.parametrize('ticket_type', ['REGULAR', 'vip pass', 'a-b', '', None])
    @pytest.mark.parametrize('ticket_id', [1, 99, 999_999, 1_000_000, MAX_TICKET_ID])
    def test_decode_reverses_encode(self, ticket_id: int, ticket_type: str | None) -> None:
        assert decode_ticket_number(encode_ticket_number(ticket_id, ticket_type)) == ticket_id
