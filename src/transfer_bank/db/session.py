"""
Store handle for transfer-bank.

`Database` owns the async engine and the session factory. The application
creates exactly one at startup and disposes it at shutdown; request handlers
receive sessions through `transfer_bank.db.deps.get_db`.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# execution option set by Database.unit_of_work(); read by the SQLite "begin" hook
WRITE_LOCK_OPTION = "transfer_bank_write_lock"


def _configure_sqlite(engine) -> None:
    """
    Enforce foreign keys, and take the write lock up front for units of work
    so two transfers touching the same user are serialised. Plain request
    sessions and health checks begin deferred and only lock when they write.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # hand transaction control to the "begin" hook below
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get(WRITE_LOCK_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


class Database:
    def __init__(self, url: str, echo: bool = False) -> None:
        self.engine = create_async_engine(url, echo=echo, future=True)
        if make_url(url).get_backend_name() == "sqlite":
            _configure_sqlite(self.engine)

        self.sessionmaker = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.sessionmaker() as session:
            yield session

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session bound to a single transaction.

        The transaction commits when the block exits normally and rolls back
        when anything inside it raises; the exception is then re-raised.
        """
        async with self.sessionmaker() as session:
            async with session.begin():
                await session.connection(execution_options={WRITE_LOCK_OPTION: True})
                yield session

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()
