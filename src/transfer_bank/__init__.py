"""Users with balances and atomic money transfers between them, over HTTP."""

__version__ = "1.0.0"
