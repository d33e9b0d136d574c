import asyncio
import logging

from transfer_bank.db import crud
from transfer_bank.logging_config import LOG_FILE_NAME, SERVICE_LOGGER, setup_logging


async def test_read_sessions_do_not_take_the_write_lock(database, make_user):
    await make_user("Ana", 10)

    async with database.session() as first:
        assert len(await crud.list_users(first)) == 1
        # first still holds an open read transaction
        async with database.session() as second:
            users = await asyncio.wait_for(crud.list_users(second), timeout=2)
        await database.ping()

    assert [u.name for u in users] == ["Ana"]


async def test_unit_of_work_runs_while_a_read_session_is_idle(database, make_user, service):
    a = await make_user("Ana", 10)
    b = await make_user("Beto", 0)

    async with database.session() as reader:
        await crud.list_users(reader)
        await reader.commit()
        await asyncio.wait_for(service.execute_transfer(a, b, 5), timeout=2)


def test_setup_logging_writes_service_log(tmp_path):
    setup_logging("INFO", tmp_path / "logs")
    logger = logging.getLogger(f"{SERVICE_LOGGER}.tests")

    logger.info("hello ledger")
    for handler in logging.getLogger(SERVICE_LOGGER).handlers:
        handler.flush()

    assert "hello ledger" in (tmp_path / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8")
