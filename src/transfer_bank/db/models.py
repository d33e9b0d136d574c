# transfer_bank/db/models.py
from sqlalchemy import CheckConstraint, Column, DECIMAL, ForeignKey, Integer, String, TIMESTAMP, func

from transfer_bank.db.session import Base

BALANCE_CONSTRAINT = "ck_usuarios_balance_non_negative"
AMOUNT_CONSTRAINT = "ck_transferencias_monto_positive"


class User(Base):
    __tablename__ = "usuarios"
    __table_args__ = (CheckConstraint("balance >= 0", name=BALANCE_CONSTRAINT),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("nombre", String(50), nullable=False)
    balance = Column(DECIMAL(15, 2), nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name!r} balance={self.balance}>"


class Transfer(Base):
    __tablename__ = "transferencias"
    __table_args__ = (CheckConstraint("monto > 0", name=AMOUNT_CONSTRAINT),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column("emisor", Integer, ForeignKey("usuarios.id"), nullable=False)
    receiver_id = Column("receptor", Integer, ForeignKey("usuarios.id"), nullable=False)
    amount = Column("monto", DECIMAL(15, 2), nullable=False)
    created_at = Column("fecha", TIMESTAMP, nullable=False, server_default=func.now())
