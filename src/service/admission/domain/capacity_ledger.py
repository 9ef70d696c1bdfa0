"""
Capacity Ledger

The admission decision for one booking: compare the requested quantity with
what is left on the event and move `tickets_sold` forward. Callers must hold
the event under its per-event lock between reading it and persisting the
returned entity, otherwise two bookings can both be admitted on the same
`tickets_sold` value.
"""

import attrs

from src.platform.exception.exceptions import CapacityExceededError
from src.platform.logging.loguru_io import Logger
from src.service.admission.domain.entity.event_entity import EventEntity


class CapacityLedger:
    @staticmethod
    @Logger.io
    def admit(*, event: EventEntity, quantity: int) -> EventEntity:
        """
        Args:
            event: Event read under lock
            quantity: Already clamped booking quantity

        Returns:
            The event with `tickets_sold` advanced by `quantity`

        Raises:
            CapacityExceededError: When `tickets_sold + quantity > capacity`
        """
        sold = event.tickets_sold
        if sold + quantity > event.capacity:
            Logger.base.warning(
                f'🚫 [CAPACITY] Event {event.id} rejected {quantity} '
                f'(sold={sold}, capacity={event.capacity})'
            )
            raise CapacityExceededError(
                event_id=event.id, requested=quantity, remaining=event.remaining
            )
        return attrs.evolve(event, tickets_sold=sold + quantity)
