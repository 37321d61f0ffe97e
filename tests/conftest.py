"""Pytest configuration for all tests."""

from io import BytesIO
from typing import Any, AsyncGenerator, Callable, Sequence
from zipfile import ZipFile

import email_validator
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from openpyxl import Workbook
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fleetgrid.domain.entities import Identity, Role
from fleetgrid.domain.services import AccountService
from fleetgrid.infrastructure.persistence.database import Base
from fleetgrid.infrastructure.persistence.models import (  # noqa: F401
    AccountModel,
    TabularDocumentModel,
)

# Let email-validator accept the reserved ``.test`` domain used by test accounts.
email_validator.TEST_ENVIRONMENT = True

PASSWORD = "Password123!"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from fleetgrid.infrastructure.api.app import app
    from fleetgrid.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


async def _create_account(
    session: AsyncSession, name: str, email: str, role: Role
) -> AccountModel:
    return await AccountService(session).create_account(
        name=name, email=email, password=PASSWORD, role=role
    )


@pytest_asyncio.fixture
async def admin_account(db_session: AsyncSession) -> AccountModel:
    return await _create_account(db_session, "Ada Admin", "admin@fleet.test", Role.ADMIN)


@pytest_asyncio.fixture
async def manager_account(db_session: AsyncSession) -> AccountModel:
    return await _create_account(db_session, "Max Manager", "manager@fleet.test", Role.MANAGER)


@pytest_asyncio.fixture
async def other_manager_account(db_session: AsyncSession) -> AccountModel:
    return await _create_account(db_session, "Olive Other", "other@fleet.test", Role.MANAGER)


@pytest.fixture
def admin_identity(admin_account: AccountModel) -> Identity:
    return AccountService.to_identity(admin_account)


@pytest.fixture
def manager_identity(manager_account: AccountModel) -> Identity:
    return AccountService.to_identity(manager_account)


@pytest.fixture
def other_manager_identity(other_manager_account: AccountModel) -> Identity:
    return AccountService.to_identity(other_manager_account)


def _bearer(account: AccountModel) -> dict[str, str]:
    from fleetgrid.infrastructure.api.app import app

    token = app.state.jwt_service.create_session_token(account.id, account.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_account: AccountModel) -> dict[str, str]:
    return _bearer(admin_account)


@pytest.fixture
def manager_headers(manager_account: AccountModel) -> dict[str, str]:
    return _bearer(manager_account)


@pytest.fixture
def other_manager_headers(other_manager_account: AccountModel) -> dict[str, str]:
    return _bearer(other_manager_account)


@pytest.fixture
def workbook_bytes() -> Callable[..., bytes]:
    """Build an xlsx file in memory from a list of rows."""

    def build(rows: Sequence[Sequence[Any]], title: str = "Sheet1") -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = title
        for row in rows:
            sheet.append(list(row))
        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return build


@pytest.fixture
def malformed_workbook_bytes(workbook_bytes: Callable[..., bytes]) -> bytes:
    """A well-formed xlsx archive whose first sheet holds truncated XML."""
    source = ZipFile(BytesIO(workbook_bytes([["Name"], ["Ann"]])))
    buffer = BytesIO()
    with ZipFile(buffer, "w") as target:
        for item in source.infolist():
            data = source.read(item.filename)
            if item.filename == "xl/worksheets/sheet1.xml":
                data = b"<worksheet><sheetData><row><c"
            target.writestr(item, data)
    return buffer.getvalue()
