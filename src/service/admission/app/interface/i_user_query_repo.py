from abc import ABC, abstractmethod
from typing import Optional

from src.service.admission.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: int) -> Optional[UserEntity]:
        pass
