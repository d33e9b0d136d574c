from typing import Any, Dict

from transfer_bank.db.models import Transfer, User


def serialize_user(u: User) -> Dict[str, Any]:
    return {
        "id": u.id,
        "nombre": u.name,
        "balance": float(u.balance) if u.balance is not None else 0.0,
    }


def serialize_transfer(t: Transfer) -> Dict[str, Any]:
    return {
        "id": t.id,
        "emisor": t.sender_id,
        "receptor": t.receiver_id,
        "monto": float(t.amount) if t.amount is not None else None,
        "fecha": t.created_at.isoformat() if getattr(t, "created_at", None) else None,
    }


def serialize_transfer_row(row) -> Dict[str, Any]:
    """Rows from crud.list_transfers: sender and receiver are display names."""
    return {
        "id": row.id,
        "emisor": row.emisor,
        "receptor": row.receptor,
        "monto": float(row.amount) if row.amount is not None else None,
        "fecha": row.created_at.isoformat() if row.created_at else None,
    }
