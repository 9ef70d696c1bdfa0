from abc import ABC, abstractmethod

from src.service.admission.domain.entity.payment_entity import PaymentEntity


class IPaymentRecorder(ABC):
    @abstractmethod
    async def save(self, *, payment: PaymentEntity) -> PaymentEntity:
        pass
