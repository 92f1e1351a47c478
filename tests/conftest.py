"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")

import pytest  # noqa: E402
from sqlalchemy import select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.models import (  # noqa: E402
    Playlist,
    PlaylistItem,
    Schedule,
    ScheduleItem,
    Stream,
    SystemLog,
    User,
)


# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

SCHEDULE_START = datetime(2024, 1, 15, 8, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock returning aware UTC datetimes."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
async def async_engine():
    """Create async engine for testing."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine, as used by the scheduler."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for testing."""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed ten minutes after the sample schedule starts."""
    return FakeClock(SCHEDULE_START + timedelta(minutes=10))


@pytest.fixture
async def sample_user(db_session: AsyncSession) -> User:
    user = User(email="operator@example.com", name="Operator")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def sample_stream(db_session: AsyncSession) -> Stream:
    stream = Stream(name="news", stream_key="news-key")
    db_session.add(stream)
    await db_session.commit()
    return stream


@pytest.fixture
async def sample_playlist(db_session: AsyncSession) -> Playlist:
    """Playlist with Headlines (300s) followed by Weather (180s)."""
    playlist = Playlist(
        name="Morning News",
        items=[
            PlaylistItem(
                title="Headlines",
                source_url="vod/headlines.mp4",
                duration=300,
                order=1,
            ),
            PlaylistItem(
                title="Weather",
                source_url="vod/weather.mp4",
                duration=180,
                order=2,
            ),
        ],
    )
    db_session.add(playlist)
    await db_session.commit()
    return playlist


@pytest.fixture
def make_schedule(db_session: AsyncSession, sample_user, sample_stream, sample_playlist):
    """Factory creating schedules on the sample stream and playlist."""

    async def _make(**overrides) -> Schedule:
        data = {
            "name": "Morning Show",
            "start_date": SCHEDULE_START,
            "is_active": True,
            "is_recurring": False,
            "user_id": sample_user.id,
            "stream_id": sample_stream.id,
            "playlist_id": sample_playlist.id,
        }
        data.update(overrides)
        schedule = Schedule(**data)
        db_session.add(schedule)
        await db_session.commit()
        return schedule

    return _make


@pytest.fixture
def fetch_items(session_maker):
    """Read a schedule's items from a fresh session, in playback order."""

    async def _fetch(schedule_id) -> list[ScheduleItem]:
        async with session_maker() as session:
            result = await session.execute(
                select(ScheduleItem)
                .where(ScheduleItem.schedule_id == schedule_id)
                .order_by(ScheduleItem.order)
            )
            return list(result.scalars().all())

    return _fetch


@pytest.fixture
def fetch_logs(session_maker):
    """Read all system log entries from a fresh session, oldest first."""

    async def _fetch() -> list[SystemLog]:
        async with session_maker() as session:
            result = await session.execute(select(SystemLog).order_by(SystemLog.created_at))
            return list(result.scalars().all())

    return _fetch


@pytest.fixture
def mock_playout_client():
    """Mock playout command client for testing."""
    client = MagicMock()
    client.play = AsyncMock(return_value={"status": "playing"})
    return client
