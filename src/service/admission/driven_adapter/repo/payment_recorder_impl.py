import attrs
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_payment_recorder import IPaymentRecorder
from src.service.admission.domain.entity.payment_entity import PaymentEntity
from src.service.admission.driven_adapter.model.payment_model import PaymentModel


class PaymentRecorderImpl(IPaymentRecorder):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def save(self, *, payment: PaymentEntity) -> PaymentEntity:
        db_payment = PaymentModel(
            user_id=payment.user_id,
            event_id=payment.event_id,
            amount=payment.amount,
            payment_method=payment.payment_method,
            payment_status=payment.payment_status,
            payment_date=payment.payment_date,
            transaction_reference=payment.transaction_reference,
        )
        self.session.add(db_payment)
        await self.session.flush()
        return attrs.evolve(payment, id=db_payment.id)
