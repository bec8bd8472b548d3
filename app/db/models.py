"""SQLAlchemy ORM models."""
import uuid
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    TypeDecorator,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database.base import Base

CENT = Decimal("0.01")


class Cents(TypeDecorator):
    """Decimal dollars in Python, integer minor units in the store.

    Keeps ``balance + :delta`` exact on backends without a decimal type.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return (Decimal(value) / 100).quantize(CENT)


MONEY = Cents()


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), default="customer")
    name = Column(String(100))
    is_active = Column(Boolean, default=True)
    email = Column(String(100), unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    last_login_at = Column(DateTime(timezone=True))

    wallet = relationship("Wallet", back_populates="account", uselist=False)


class Wallet(Base):
    __tablename__ = "wallets"
    __table_args__ = (CheckConstraint("balance >= 0", name="ck_wallets_balance_non_negative"),)

    user_id = Column(String(36), ForeignKey("accounts.id"), primary_key=True)
    balance = Column(MONEY, nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="USD")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    account = relationship("Account", back_populates="wallet")


class Deposit(Base):
    __tablename__ = "deposits"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    amount = Column(MONEY, nullable=False)
    amount_inr = Column(Integer)
    payment_method = Column(String(20), nullable=False)  # qr, crypto
    currency = Column(String(10))
    status = Column(String(20), nullable=False, default="pending", index=True)  # pending, completed, rejected
    proof_image = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    account = relationship("Account")


class WalletTransaction(Base):
    __tablename__ = "wallet_transactions"
    __table_args__ = (UniqueConstraint("type", "reference_id", name="uq_wallet_transactions_type_reference"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # deposit, purchase
    amount = Column(MONEY, nullable=False)
    description = Column(String(255), nullable=False)
    reference_id = Column(String(36), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    account = relationship("Account")


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("accounts.id"), nullable=True, index=True)
    platform = Column(String(50), nullable=False)
    service = Column(String(100), nullable=False)
    link = Column(String(500))
    quantity = Column(Integer, nullable=False)
    total = Column(MONEY, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    payment_method = Column(String(20), nullable=False, default="external")  # wallet, external
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, index=True)
    message = Column(Text)
    screenshot = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    account = relationship("Account")


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
