from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class UserOut(BaseModel):
    id: int
    nombre: str
    balance: float


class UserCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=50)
    balance: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)


class UserUpdate(BaseModel):
    # browser client sends "name" on edit and "nombre" on create
    nombre: str = Field(
        ..., min_length=1, max_length=50, validation_alias=AliasChoices("nombre", "name")
    )
    balance: Decimal = Field(..., decimal_places=2)


class TransferIn(BaseModel):
    emisor: int = Field(..., examples=[1])
    receptor: int = Field(..., examples=[2])
    monto: Decimal = Field(..., gt=0, decimal_places=2, examples=[100.00])


class TransferOut(BaseModel):
    id: int
    emisor: str
    receptor: str
    monto: float
    fecha: Optional[str] = None


class TransferRecord(BaseModel):
    id: int
    emisor: int
    receptor: int
    monto: float
    fecha: Optional[str] = None


class TransferResult(BaseModel):
    message: str
    transferencia: Optional[TransferRecord] = None
