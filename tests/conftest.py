from decimal import Decimal

import httpx
import pytest

from transfer_bank.app import create_app
from transfer_bank.config import Settings
from transfer_bank.db import Database, crud
from transfer_bank.services import TransferService


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file, with real CHECK and FK constraints."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'bank.db'}",
        log_dir=str(tmp_path / "logs"),
        log_level="DEBUG",
    )


@pytest.fixture
async def database(settings):
    db = Database(settings.database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def service(database) -> TransferService:
    return TransferService(database)


@pytest.fixture
async def client(settings, database):
    app = create_app(settings, database)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def make_user(database):
    """Create a user directly in the store and return its id."""

    async def _make(name: str, balance) -> int:
        async with database.unit_of_work() as db:
            user = await crud.create_user(db, name, Decimal(str(balance)))
        return user.id

    return _make


@pytest.fixture
def snapshot(database):
    """Return ({user_id: balance}, ledger rows) as currently committed."""

    async def _snapshot():
        async with database.session() as db:
            users = await crud.list_users(db)
            rows = await crud.list_transfers(db)
        return {u.id: u.balance for u in users}, [tuple(r) for r in rows]

    return _snapshot
