"""Pytest fixtures for the forum backend."""

from collections.abc import AsyncIterator, Iterator, Sequence
from pathlib import Path

from alembic import command
from alembic.config import Config
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from api.deps import get_db
from app import create_app
from core.config import settings
from models import Category, GroupMembership, Member, Page


def _run_alembic_migrations(database_url: str) -> None:
    """Apply Alembic migrations to the given database URL."""
    backend_dir = Path(__file__).resolve().parents[1]
    alembic_cfg = Config(str(backend_dir / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(backend_dir / "alembic"))

    original_database_url = settings.database_url
    try:
        settings.database_url = database_url
        command.upgrade(alembic_cfg, "head")
    finally:
        settings.database_url = original_database_url


@pytest.fixture(scope="session")
def test_database_url(tmp_path_factory) -> str:
    """Create and migrate a file-backed SQLite database for tests."""
    db_dir = tmp_path_factory.mktemp("sqlite")
    db_path = db_dir / "backend-test.db"
    database_url = f"sqlite+aiosqlite:///{db_path}"
    _run_alembic_migrations(database_url)
    return database_url


@pytest_asyncio.fixture()
async def test_engine(test_database_url: str) -> AsyncIterator[AsyncEngine]:
    """Create an async engine bound to the migrated SQLite test database."""
    engine = create_async_engine(
        test_database_url,
        connect_args={"check_same_thread": False},
    )
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_maker(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to the test engine."""
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest_asyncio.fixture()
async def clean_database(session_maker) -> AsyncIterator[None]:
    """Clear tables before each database test to guarantee isolation."""
    async with session_maker() as session:
        for table in reversed(SQLModel.metadata.sorted_tables):
            await session.execute(table.delete())
        await session.commit()
    yield


@pytest.fixture()
def app(session_maker, clean_database) -> Iterator[FastAPI]:
    """Create the FastAPI app with a test database dependency override."""
    application = create_app()

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    yield application


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Return an HTTPX async client bound to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture()
async def db_session(session_maker, clean_database) -> AsyncIterator[AsyncSession]:
    """Provide a raw database session to tests."""
    async with session_maker() as session:
        yield session


class ForumFactory:
    """Creates members, groups, categories and pages for database tests."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    async def member(self, username: str | None = None, *, is_group: bool = False) -> Member:
        member = Member(
            username=username or f"member_{self._next()}",
            is_group=is_group,
        )
        self.session.add(member)
        await self.session.commit()
        await self.session.refresh(member)
        return member

    async def group(
        self,
        username: str | None = None,
        *,
        members: Sequence[Member] = (),
    ) -> Member:
        group = await self.member(username or f"group_{self._next()}", is_group=True)
        for member in members:
            self.session.add(GroupMembership(group_id=group.id, member_id=member.id))
        await self.session.commit()
        return group

    async def category(
        self,
        name: str | None = None,
        *,
        parent: Category | None = None,
        site_id: int | None = None,
    ) -> Category:
        category = Category(
            site_id=site_id or settings.site_id,
            name=name or f"Category {self._next()}",
            parent_id=parent.id if parent is not None else None,
        )
        self.session.add(category)
        await self.session.commit()
        await self.session.refresh(category)
        return category

    async def page(
        self,
        *,
        category: Category | None = None,
        page_id: str | None = None,
        site_id: int | None = None,
    ) -> Page:
        number = self._next()
        page = Page(
            id=page_id or f"pg{number}",
            site_id=site_id or settings.site_id,
            category_id=category.id if category is not None else None,
            title=f"Topic {number}",
        )
        self.session.add(page)
        await self.session.commit()
        await self.session.refresh(page)
        return page


@pytest.fixture()
def forum(db_session: AsyncSession) -> ForumFactory:
    return ForumFactory(db_session)
