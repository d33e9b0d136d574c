"""
Errors raised by the transfer service and the store helpers.
"""

from typing import Optional


class TransferError(Exception):
    """Base class for failed transfer attempts."""


class InvalidTransfer(TransferError):
    """The request can never succeed: non-positive amount or same sender and receiver."""


class InsufficientFunds(TransferError):
    """The sender's balance would become negative."""

    def __init__(self, sender_id: int, amount) -> None:
        super().__init__(f"user {sender_id} cannot cover {amount}")
        self.sender_id = sender_id
        self.amount = amount


class InvalidReference(TransferError):
    """A transfer participant does not exist."""


class UserNotFound(InvalidReference):
    def __init__(self, user_id: Optional[int]) -> None:
        super().__init__(f"user {user_id} not found")
        self.user_id = user_id


class InternalError(TransferError):
    """Any other store failure; the driver exception is chained as __cause__."""
