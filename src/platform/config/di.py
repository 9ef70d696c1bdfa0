"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings, settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.admission.driven_adapter.memory.in_memory_database import InMemoryDatabase
from src.service.admission.driven_adapter.memory.in_memory_notification_repo import (
    InMemoryNotificationRepo,
)
from src.service.admission.driven_adapter.memory.in_memory_unit_of_work import (
    InMemoryUnitOfWork,
)
from src.service.admission.driven_adapter.notification.notification_emitter_impl import (
    NotificationEmitterImpl,
)
from src.service.admission.driven_adapter.repo.notification_repo_impl import (
    NotificationRepoImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # 'postgres' | 'memory'
    storage_backend = providers.Object(settings.STORAGE_BACKEND)

    # Storage
    database = providers.Singleton(Database)
    in_memory_database = providers.Singleton(InMemoryDatabase)

    # Unit of Work (new instance per booking / per scan)
    unit_of_work = providers.Selector(
        storage_backend,
        postgres=providers.Factory(
            SqlAlchemyUnitOfWork, session_factory=database.provided.session_maker
        ),
        memory=providers.Factory(InMemoryUnitOfWork, database=in_memory_database),
    )

    # Notification inbox (own short-lived sessions, outside the UoW)
    notification_repo = providers.Selector(
        storage_backend,
        postgres=providers.Singleton(
            NotificationRepoImpl, session_factory=database.provided.session
        ),
        memory=providers.Singleton(InMemoryNotificationRepo, database=in_memory_database),
    )
    notification_emitter = providers.Singleton(
        NotificationEmitterImpl, notification_repo=notification_repo
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
