"""
Admission Service - Main Application
Issues tickets against event capacity and checks attendees in at the gates.

    uvicorn src.service.admission.main:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, get_engine
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info(f'🚀 [Admission Service] Starting up ({settings.STORAGE_BACKEND} storage)...')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Admission Service] Dependency injection wired')

    if settings.STORAGE_BACKEND == 'postgres':
        await create_db_and_tables()
        Logger.base.info('🗄️ [Admission Service] Database tables ready')
    elif settings.SEED_DEMO_DATA:
        container.in_memory_database().seed_demo_data()

    Logger.base.info('✅ [Admission Service] Startup complete')

    yield

    Logger.base.info('🛑 [Admission Service] Shutting down...')
    if settings.STORAGE_BACKEND == 'postgres':
        await get_engine().dispose()
    container.unwire()
    cleanup()
    Logger.base.info('👋 [Admission Service] Shutdown complete')


app = create_app(lifespan=lifespan)
