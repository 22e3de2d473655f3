"""Shared pytest fixtures: per-test SQLite database, session, HTTP client, seed helpers."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from typing import NamedTuple
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

import marketplace.domain  # noqa: F401  (register all tables)
from marketplace.db.base import Base, build_engine, build_session_factory, get_db
from marketplace.domain import (
    DocumentStatus,
    Store,
    StoreDocument,
    User,
    UserRole,
    UserStatus,
)
from marketplace.main import create_app


class SeededVendor(NamedTuple):
    user: User
    store: Store | None
    documents: list[StoreDocument]


@pytest_asyncio.fixture()
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    """File-backed SQLite database, fresh for every test."""

    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'marketplace.sqlite'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine):
    return build_session_factory(engine)


@pytest_asyncio.fixture()
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to an app whose get_db uses the test database."""

    app = create_app()

    async def _get_test_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as db:
            try:
                yield db
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http


@pytest.fixture()
def make_user(session: AsyncSession):
    """Create and commit a user; extra keyword arguments become User columns."""

    async def _make(
        *,
        first_name: str = "Asha",
        last_name: str | None = "Verma",
        role: UserRole = UserRole.CUSTOMER,
        status: UserStatus = UserStatus.PENDING,
        **fields,
    ) -> User:
        fields.setdefault("email", f"{uuid4().hex[:10]}@example.com")
        fields.setdefault("mobile", f"98{uuid4().int % 10**8:08d}")
        user = User(
            first_name=first_name,
            last_name=last_name,
            role=role,
            status=status,
            **fields,
        )
        session.add(user)
        await session.commit()
        return user

    return _make


@pytest.fixture()
def make_vendor(session: AsyncSession, make_user):
    """Create a vendor with an optional store and documents in the given statuses."""

    async def _make(
        *,
        documents: Iterable[DocumentStatus | str] = (),
        with_store: bool = True,
        is_verified: bool = False,
        is_rejected: bool = False,
        store_name: str | None = None,
        role: UserRole = UserRole.VENDOR,
        status: UserStatus = UserStatus.PENDING,
        **user_fields,
    ) -> SeededVendor:
        user = await make_user(role=role, status=status, **user_fields)

        store = None
        if with_store:
            store = Store(
                vendor_id=user.id,
                store_name=store_name or f"{user.first_name}'s Store",
                user_name=f"{(user.first_name or 'user').lower()}-{user.id[:8]}",
                is_verified=is_verified,
                is_rejected=is_rejected,
            )
            session.add(store)

        docs = [
            StoreDocument(
                owner_vendor_id=user.id,
                document_type=f"DOC_{index}",
                file_url=f"https://files.example.com/{uuid4().hex}.pdf",
                status=DocumentStatus(doc_status),
            )
            for index, doc_status in enumerate(documents, start=1)
        ]
        session.add_all(docs)
        await session.commit()
        return SeededVendor(user, store, docs)

    return _make
