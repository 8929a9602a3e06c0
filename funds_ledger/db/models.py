"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from funds_ledger.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Identity(Base):
    __tablename__ = "identities"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    account = relationship("Account", back_populates="identity", uselist=False)


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance_cents >= 0", name="ck_accounts_balance_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    identity_id = Column(String(36), ForeignKey("identities.id"), nullable=False, unique=True, index=True)
    balance_cents = Column(Integer, nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="USD")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    identity = relationship("Identity", back_populates="account")


class Transfer(Base):
    __tablename__ = "transfers"
    __table_args__ = (
        CheckConstraint("amount_cents > 0", name="ck_transfers_amount_positive"),
    )

    # insertion order breaks ties between equal timestamps
    id = Column(Integer, primary_key=True, autoincrement=True)
    reference = Column(String(64), unique=True, nullable=False, index=True)
    sender_id = Column(String(36), ForeignKey("identities.id"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("identities.id"), nullable=False, index=True)
    # identity snapshot at transfer time
    sender_username = Column(String(50), nullable=False)
    receiver_username = Column(String(50), nullable=False)
    amount_cents = Column(Integer, nullable=False)
    balance_before_cents = Column(Integer, nullable=False)
    balance_after_cents = Column(Integer, nullable=False)
    # assigned in Python so every backend keeps microseconds
    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False, index=True)

    sender = relationship("Identity", foreign_keys=[sender_id])
    receiver = relationship("Identity", foreign_keys=[receiver_id])
