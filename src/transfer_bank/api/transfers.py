from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from transfer_bank.db import crud
from transfer_bank.errors import (
    InsufficientFunds,
    InternalError,
    InvalidReference,
    InvalidTransfer,
)
from transfer_bank.logging_config import get_logger
from .deps import get_db, get_transfer_service
from .schemas import TransferIn, TransferOut, TransferResult
from .serializers import serialize_transfer, serialize_transfer_row

logger = get_logger("transfer_bank.api.transfers")

router = APIRouter(tags=["transferencias"])

INTERNAL_ERROR = {"message": "Error interno del servidor."}


@router.get("/transferencias", response_model=List[TransferOut])
async def list_transfers(db=Depends(get_db)):
    """
    Return the whole ledger with sender and receiver names resolved at read time.
    """
    try:
        rows = await crud.list_transfers(db)
    except SQLAlchemyError as e:
        logger.exception("Listing transfers failed: %s", e)
        return JSONResponse(status_code=500, content=INTERNAL_ERROR)
    return [serialize_transfer_row(r) for r in rows]


@router.post("/transferencia", response_model=TransferResult)
async def create_transfer(payload: TransferIn, service=Depends(get_transfer_service)):
    """
    Move `monto` from `emisor` to `receptor` and record it, atomically.
    """
    try:
        transfer = await service.execute_transfer(payload.emisor, payload.receptor, payload.monto)
    except InsufficientFunds:
        return JSONResponse(
            status_code=400,
            content={"message": "La cuenta del emisor no tiene saldo suficiente"},
        )
    except InvalidTransfer as e:
        return JSONResponse(status_code=400, content={"message": f"Transferencia inválida: {e}"})
    except InvalidReference:
        return JSONResponse(status_code=404, content={"message": "Usuario no encontrado"})
    except InternalError:
        # already logged with traceback by the service
        return JSONResponse(status_code=500, content=INTERNAL_ERROR)

    return {
        "message": "Transferencia realizada con éxito",
        "transferencia": serialize_transfer(transfer),
    }
