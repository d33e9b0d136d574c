# transfer_bank/db/deps.py
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from transfer_bank.db.session import Database


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Async DB session dependency for FastAPI routes.
    """
    async with get_database(request).session() as session:
        yield session
