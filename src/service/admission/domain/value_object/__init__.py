"""Admission value objects"""

from src.service.admission.domain.value_object.ticket_number import (
    decode_ticket_number,
    encode_ticket_number,
)

__all__ = ['decode_ticket_number', 'encode_ticket_number']
