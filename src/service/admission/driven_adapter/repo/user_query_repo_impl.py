from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.admission.domain.entity.user_entity import UserEntity
from src.service.admission.driven_adapter.model.user_model import UserModel


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, user_id: int) -> Optional[UserEntity]:
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        user_model = result.scalar_one_or_none()
        if not user_model:
            return None
        return UserEntity(
            id=user_model.id,
            name=user_model.name,
            email=user_model.email,
            phone=user_model.phone,
        )
