from transfer_bank.db.session import Base, Database
from transfer_bank.db import models  # noqa: F401  registers the tables on Base.metadata

__all__ = ["Base", "Database"]
