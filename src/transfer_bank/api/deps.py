from fastapi import Depends

from transfer_bank.db.deps import get_database, get_db
from transfer_bank.services.transfers import TransferService


def get_transfer_service(database=Depends(get_database)) -> TransferService:
    return TransferService(database)


__all__ = ["get_db", "get_database", "get_transfer_service"]
