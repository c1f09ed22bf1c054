"""
Ordering Service - Main Application
Handles order creation, status lifecycle and cancellation with stock restore.

Run:
    uvicorn src.service.ordering.main:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, engine_manager
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Ordering Service] Starting up...')

    tracing = TracingConfig(service_name='ordering-service')
    tracing.setup()
    tracing.instrument_sqlalchemy(engine=engine_manager.get_engine())
    Logger.base.info('📊 [Ordering Service] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Ordering Service] Dependency injection wired')

    await create_db_and_tables()
    Logger.base.info('🗄️ [Ordering Service] Database tables ready')

    Logger.base.info('✅ [Ordering Service] Startup complete')

    yield

    Logger.base.info('🛑 [Ordering Service] Shutting down...')

    await engine_manager.dispose()

    tracing.shutdown()
    Logger.base.info('📊 [Ordering Service] Tracing shutdown complete')

    container.unwire()

    Logger.base.info('👋 [Ordering Service] Shutdown complete')


app = create_app(lifespan=lifespan)
