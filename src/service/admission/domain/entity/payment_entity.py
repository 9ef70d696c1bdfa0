from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import attrs
import uuid_utils


PAYMENT_STATUS_COMPLETED = 'COMPLETED'


@attrs.define
class PaymentEntity:
    user_id: int
    event_id: int
    amount: Decimal
    payment_method: str
    payment_status: str
    transaction_reference: str
    payment_date: datetime
    id: Optional[int] = None

    @classmethod
    def completed(
        cls, *, user_id: int, event_id: int, amount: Decimal, payment_method: str
    ) -> 'PaymentEntity':
        return cls(
            user_id=user_id,
            event_id=event_id,
            amount=amount,
            payment_method=payment_method,
            payment_status=PAYMENT_STATUS_COMPLETED,
            transaction_reference=str(uuid_utils.uuid7()),
            payment_date=datetime.now(timezone.utc),
        )
