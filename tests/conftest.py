# tests/conftest.py
# Shared fixtures: a SQLite-backed view store per test and a hand-driven clock.

import pytest
import pytest_asyncio

from gateway.config import Settings
from gateway.db.base import build_engine, build_session_factory
from gateway.db.bootstrap import bootstrap_schemas
from gateway.repositories.view_repository import ViewRepository
from gateway.utils.logger import use_logs_path


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1000) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def app_version() -> str:
    return "2.4.0"


@pytest.fixture
def settings(tmp_path, app_version) -> Settings:
    return Settings(
        DB_URL=f"sqlite+aiosqlite:///{tmp_path / 'views.db'}",
        LOGS_PATH=str(tmp_path / "logs"),
        VERSION=app_version,
        OTEL_ENABLED=False,
    )


@pytest_asyncio.fixture
async def engine(settings):
    engine = build_engine(settings)
    await bootstrap_schemas(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def repository(engine, clock, app_version) -> ViewRepository:
    return ViewRepository(build_session_factory(engine), version=app_version, clock=clock)


@pytest.fixture(autouse=True)
def _logs_in_tmp_path(tmp_path):
    """Keep access/error log files out of the working tree."""
    use_logs_path(str(tmp_path / "logs"))
    yield
