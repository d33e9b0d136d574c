"""
Transfer Service Business Logic
"""

from decimal import Decimal

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from transfer_bank.db import crud
from transfer_bank.db.integrity import is_balance_violation, is_foreign_key_violation
from transfer_bank.db.models import Transfer
from transfer_bank.db.session import Database
from transfer_bank.errors import (
    InsufficientFunds,
    InternalError,
    InvalidReference,
    InvalidTransfer,
    TransferError,
)
from transfer_bank.logging_config import get_logger

logger = get_logger("transfer_bank.services.transfers")

CENT = Decimal("0.01")


class TransferService:
    """
    Moves money between two users as one unit of work: lock both rows, debit
    the sender, credit the receiver, append the ledger row. Either all of it
    commits or none of it does.
    """

    def __init__(self, database: Database):
        self.database = database

    async def execute_transfer(self, sender_id: int, receiver_id: int, amount) -> Transfer:
        amount = Decimal(str(amount))
        if amount <= 0:
            raise InvalidTransfer("amount must be positive")
        if amount != amount.quantize(CENT):
            raise InvalidTransfer("amount cannot have more than two decimals")
        if sender_id == receiver_id:
            raise InvalidTransfer("sender and receiver must differ")

        logger.info("Transfer start from=%s to=%s amount=%s", sender_id, receiver_id, amount)
        try:
            async with self.database.unit_of_work() as db:
                await crud.lock_users(db, (sender_id, receiver_id))

                await crud.adjust_balance(db, sender_id, -amount)
                logger.debug("Transfer debited from=%s amount=%s", sender_id, amount)

                await crud.adjust_balance(db, receiver_id, amount)
                logger.debug("Transfer credited to=%s amount=%s", receiver_id, amount)

                transfer = await crud.append_transfer(db, sender_id, receiver_id, amount)
                logger.debug("Transfer recorded id=%s", transfer.id)
        except TransferError as e:
            logger.warning("Transfer aborted from=%s to=%s: %s", sender_id, receiver_id, e)
            raise
        except IntegrityError as e:
            if is_balance_violation(e):
                logger.warning(
                    "Transfer aborted - insufficient funds from=%s amount=%s", sender_id, amount
                )
                raise InsufficientFunds(sender_id, amount) from e
            if is_foreign_key_violation(e):
                logger.warning("Transfer aborted - unknown participant from=%s to=%s", sender_id, receiver_id)
                raise InvalidReference(f"unknown user in transfer {sender_id} -> {receiver_id}") from e
            logger.exception("Transfer aborted (integrity error): %s", e)
            raise InternalError("transfer failed") from e
        except SQLAlchemyError as e:
            logger.exception("Transfer aborted (DB error): %s", e)
            raise InternalError("transfer failed") from e

        logger.info(
            "Transfer committed id=%s from=%s to=%s amount=%s",
            transfer.id,
            sender_id,
            receiver_id,
            amount,
        )
        return transfer
