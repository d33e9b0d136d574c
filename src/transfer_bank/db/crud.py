# transfer_bank/db/crud.py
"""
Balance store and transfer ledger queries.

Every helper works on the session it is given and never commits; the caller
decides the transaction boundary (a request session for plain reads and
writes, `Database.unit_of_work()` for transfers).
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from transfer_bank.db.models import Transfer, User
from transfer_bank.errors import UserNotFound


async def list_users(db: AsyncSession) -> List[User]:
    q = select(User).order_by(User.id)
    res = await db.execute(q)
    return list(res.scalars().all())


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    q = select(User).where(User.id == user_id)
    res = await db.execute(q)
    return res.scalars().first()


async def create_user(db: AsyncSession, name: str, balance: Decimal) -> User:
    user = User(name=name, balance=balance)
    db.add(user)
    await db.flush()
    return user


async def update_user(db: AsyncSession, user_id: int, name: str, balance: Decimal) -> Optional[User]:
    user = await get_user(db, user_id)
    if user is None:
        return None
    user.name = name
    user.balance = balance
    await db.flush()
    return user


async def delete_user(db: AsyncSession, user_id: int) -> bool:
    res = await db.execute(delete(User).where(User.id == user_id))
    return res.rowcount > 0


async def lock_users(db: AsyncSession, user_ids: Iterable[int]) -> Dict[int, User]:
    """
    SELECT ... FOR UPDATE the given users, in id order so that two transfers
    between the same pair in opposite directions take the locks in the same
    order. Raises UserNotFound for the first id that has no row.
    """
    ids = sorted(set(user_ids))
    q = select(User).where(User.id.in_(ids)).order_by(User.id).with_for_update()
    res = await db.execute(q)
    found = {u.id: u for u in res.scalars().all()}
    for user_id in ids:
        if user_id not in found:
            raise UserNotFound(user_id)
    return found


async def adjust_balance(db: AsyncSession, user_id: int, delta: Decimal) -> None:
    """
    Add delta (negative to debit) to a user's balance. The store rejects the
    statement with an IntegrityError if the result would be negative.
    """
    res = await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(balance=User.balance + delta)
        .execution_options(synchronize_session=False)
    )
    if res.rowcount == 0:
        raise UserNotFound(user_id)


async def append_transfer(db: AsyncSession, sender_id: int, receiver_id: int, amount: Decimal) -> Transfer:
    transfer = Transfer(sender_id=sender_id, receiver_id=receiver_id, amount=amount)
    db.add(transfer)
    await db.flush()
    # pick up the store-assigned fecha
    await db.refresh(transfer)
    return transfer


async def list_transfers(db: AsyncSession):
    """
    Return (id, sender name, receiver name, amount, fecha) rows, oldest first.
    """
    sender = aliased(User)
    receiver = aliased(User)
    q = (
        select(
            Transfer.id,
            sender.name.label("emisor"),
            receiver.name.label("receptor"),
            Transfer.amount,
            Transfer.created_at,
        )
        .join(sender, Transfer.sender_id == sender.id)
        .join(receiver, Transfer.receiver_id == receiver.id)
        .order_by(Transfer.created_at, Transfer.id)
    )
    res = await db.execute(q)
    return res.all()
