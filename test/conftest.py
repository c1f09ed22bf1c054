"""
Test Configuration and Fixtures

This module provides:
- Environment setup that must happen before application modules are imported
- A throwaway SQLite database per test (sqlite+aiosqlite, file under tmp_path)
- Unit of work / query repo factories bound to that database
- An httpx AsyncClient over the real FastAPI app, wired to the test database

Architecture:
- Unit tests (test/**/unit/): build use cases on AsyncMock units of work, no DB
- Integration tests (test/**/integration/): real SQLAlchemy + SQLite
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# settings are read at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Never reach for a real PostgreSQL from tests
    os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'
    os.environ.setdefault('SERVICE_NAME', 'ordering-service-test')
    os.environ.setdefault('SECRET_KEY', 'test_secret_key_change_in_production')


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Callable  # noqa: E402

from dependency_injector import providers  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.platform.app_factory import create_app  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.database.db_setting import Base, Database, get_async_session  # noqa: E402
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
import src.service.ordering.driven_adapter.model  # noqa: E402,F401
from src.service.ordering.driven_adapter.repo.order_query_repo_impl import (  # noqa: E402
    OrderQueryRepoImpl,
)
from src.service.ordering.driving_adapter.http_controller.auth.jwt_auth import (  # noqa: E402
    JwtAuth,
)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        path = str(item.path)
        if '/unit/' in path and not item.get_closest_marker('unit'):
            item.add_marker(pytest.mark.unit)
        elif '/integration/' in path and not item.get_closest_marker('integration'):
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Database
# =============================================================================
@pytest.fixture
async def session_maker(tmp_path: Path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(f'sqlite+aiosqlite:///{tmp_path / "orders.db"}')
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def uow_factory(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[Callable[[], SqlAlchemyUnitOfWork], None]:
    """Each call returns a fresh unit of work on its own session (one per 'request')"""
    sessions: list[AsyncSession] = []

    def _make() -> SqlAlchemyUnitOfWork:
        session = session_maker()
        sessions.append(session)
        return SqlAlchemyUnitOfWork(session)

    yield _make

    for session in sessions:
        await session.close()


@pytest.fixture
def order_query_repo(session_maker: async_sessionmaker[AsyncSession]) -> OrderQueryRepoImpl:
    return OrderQueryRepoImpl(session_factory=Database(session_maker=session_maker).session)


# =============================================================================
# HTTP
# =============================================================================
@pytest.fixture
def jwt_auth() -> JwtAuth:
    return JwtAuth()


@pytest.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    order_query_repo: OrderQueryRepoImpl,
) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(title_suffix=' (Test)')

    async def _test_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = _test_session
    container.wire(modules=WIRE_MODULES)
    container.order_query_repo.override(providers.Object(order_query_repo))

    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as ac:
        yield ac

    container.order_query_repo.reset_override()
    container.unwire()
    app.dependency_overrides.clear()
