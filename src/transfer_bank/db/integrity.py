"""
Classify IntegrityErrors raised by the store.

Postgres drivers expose the SQLSTATE (23514 check_violation, 23503
foreign_key_violation); SQLite only gives a message.
"""

import re
from typing import Optional

from sqlalchemy.exc import IntegrityError

from transfer_bank.db.models import BALANCE_CONSTRAINT

CHECK_VIOLATION = "23514"
FOREIGN_KEY_VIOLATION = "23503"

# Postgres names an unnamed CHECK on usuarios.balance "usuarios_balance_check";
# SQLite reports unnamed checks by their expression ("balance >= 0").
_BALANCE_MESSAGE = re.compile(
    rf'{BALANCE_CONSTRAINT}|"usuarios"|usuarios_balance|\bbalance\s*>=', re.IGNORECASE
)


def _sqlstate(exc: IntegrityError) -> Optional[str]:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_balance_violation(exc: IntegrityError) -> bool:
    code = _sqlstate(exc)
    if code is not None and code != CHECK_VIOLATION:
        return False
    message = str(exc.orig)
    if code is None and "CHECK constraint failed" not in message:
        return False
    return _BALANCE_MESSAGE.search(message) is not None


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    code = _sqlstate(exc)
    if code is not None:
        return code == FOREIGN_KEY_VIOLATION
    return "FOREIGN KEY constraint failed" in str(exc.orig)
