import contextlib
import itertools
import os
import secrets
from collections.abc import AsyncIterator, Callable
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_maker, engine
from scheddo.email_service.base import EmailServiceBase
from scheddo.events.repository.orm_models import Event, Suggestion
from scheddo.identities.dtos import InviteeType
from scheddo.identities.repository.orm_models import Guest, User
from scheddo.invitations.notifier import InvitationNotifier
from scheddo.invitations.repository.orm_models import Invitation
from scheddo.jobs import InMemoryJobQueue
from scheddo.main import app
from scheddo.models.registry import metadata
from scheddo.yammer.client import YammerClient

_yammer_ids = itertools.count(1_000_000)


@pytest.fixture(scope="session", autouse=True)
async def test_db():
    """Create all tables in the test database once per run."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()
    if engine.url.get_backend_name() == "sqlite" and engine.url.database:
        with contextlib.suppress(FileNotFoundError):
            os.remove(engine.url.database)


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Session whose work is rolled back after the test."""
    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable:
    """Factory for persisted Yammer users."""

    async def _make_user(
        name: str = "Ralph Robot",
        email: str | None = None,
        yammer_network_id: int | None = 1,
        yammer_staging: bool = False,
        access_token: str = "organizer-token",
        **kwargs,
    ) -> User:
        yammer_user_id = kwargs.pop("yammer_user_id", next(_yammer_ids))
        user = User(
            name=name,
            email=email or f"user{yammer_user_id}@example.com",
            yammer_user_id=yammer_user_id,
            yammer_network_id=yammer_network_id,
            yammer_staging=yammer_staging,
            **kwargs,
        )
        user.access_token = access_token
        db_session.add(user)
        await db_session.flush()
        return user

    return _make_user


@pytest.fixture
def make_guest(db_session: AsyncSession) -> Callable:
    """Factory for persisted guests."""

    async def _make_guest(email: str = "guest@example.com", name: str | None = "Guest", **kwargs) -> Guest:
        guest = Guest(email=email, name=name, **kwargs)
        db_session.add(guest)
        await db_session.flush()
        return guest

    return _make_guest


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def client_factory() -> Callable:
    """Build a client with FastAPI dependency overrides applied."""

    @contextlib.asynccontextmanager
    async def _client_factory(overrides: dict | None = None) -> AsyncIterator[AsyncClient]:
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return _client_factory


@pytest.fixture
def make_event(db_session: AsyncSession) -> Callable:
    """Factory for persisted events with their owner's invitation."""

    async def _make_event(
        owner: User,
        name: str = "Team Lunch",
        suggestions: tuple[str, ...] = ("Mon 12pm", "Tue 1pm"),
    ) -> Event:
        event = Event(
            name=name,
            public_uuid=secrets.token_hex(4),
            owner=owner,
            suggestions=[
                Suggestion(primary=primary, position=position)
                for position, primary in enumerate(suggestions)
            ],
        )
        db_session.add(event)
        await db_session.flush()
        db_session.add(
            Invitation(event_id=event.uuid, invitee_type=InviteeType.USER, invitee_id=owner.uuid)
        )
        await db_session.flush()
        return event

    return _make_event


@pytest.fixture
def yammer_client() -> AsyncMock:
    return AsyncMock(spec=YammerClient)


@pytest.fixture
def email_service() -> AsyncMock:
    return AsyncMock(spec=EmailServiceBase)


@pytest.fixture
def notifier(yammer_client: AsyncMock, email_service: AsyncMock) -> InvitationNotifier:
    return InvitationNotifier(yammer_client=yammer_client, email_service=email_service)


@pytest.fixture
def job_queue() -> InMemoryJobQueue:
    return InMemoryJobQueue()
