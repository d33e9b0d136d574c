from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from transfer_bank.db import crud
from transfer_bank.logging_config import get_logger
from .deps import get_db
from .schemas import UserCreate, UserOut, UserUpdate
from .serializers import serialize_user

logger = get_logger("transfer_bank.api.users")

router = APIRouter(tags=["usuarios"])

NOT_FOUND = {"error": "Usuario no encontrado"}


@router.get("/usuarios", response_model=List[UserOut])
async def list_users(db=Depends(get_db)):
    """
    Return every registered user with their balance.
    """
    try:
        users = await crud.list_users(db)
    except SQLAlchemyError as e:
        logger.exception("Listing users failed: %s", e)
        return JSONResponse(status_code=500, content={"message": "Error interno del servidor."})
    return [serialize_user(u) for u in users]


@router.post("/usuario", response_model=UserOut, status_code=201)
async def create_user(payload: UserCreate, db=Depends(get_db)):
    logger.info("Creating user nombre=%s balance=%s", payload.nombre, payload.balance)
    try:
        async with db.begin():
            user = await crud.create_user(db, payload.nombre, payload.balance)
    except SQLAlchemyError as e:
        logger.exception("Creating user failed: %s", e)
        return JSONResponse(status_code=500, content={"error": "Error al crear el usuario"})
    return serialize_user(user)


@router.put("/usuario", response_model=UserOut)
async def update_user(id: int, payload: UserUpdate, db=Depends(get_db)):
    """
    Replace a user's name and balance. A negative balance is refused by the
    store and reported as a failed update.
    """
    logger.info("Updating user id=%s nombre=%s balance=%s", id, payload.nombre, payload.balance)
    try:
        async with db.begin():
            user = await crud.update_user(db, id, payload.nombre, payload.balance)
    except SQLAlchemyError as e:
        logger.exception("Updating user id=%s failed: %s", id, e)
        return JSONResponse(status_code=500, content={"error": "Error al actualizar el usuario"})
    if user is None:
        logger.warning("User not found id=%s", id)
        return JSONResponse(status_code=404, content=NOT_FOUND)
    return serialize_user(user)


@router.delete("/usuario")
async def delete_user(id: int, db=Depends(get_db)):
    logger.info("Deleting user id=%s", id)
    try:
        async with db.begin():
            deleted = await crud.delete_user(db, id)
    except SQLAlchemyError as e:
        # most likely the user still appears in the ledger
        logger.exception("Deleting user id=%s failed: %s", id, e)
        return JSONResponse(status_code=500, content={"error": "Error al eliminar el usuario"})
    if not deleted:
        logger.warning("User not found id=%s", id)
        return JSONResponse(status_code=404, content=NOT_FOUND)
    return {"message": "Usuario eliminado exitosamente"}
