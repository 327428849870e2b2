"""SQLAlchemy ORM models for ledger entries and user financial profiles"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Integer, Numeric, Text, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class UserProfileRecord(Base):
    """Per-user settings and cached running totals"""

    __tablename__ = "user_profile"

    user_id = Column(Text, primary_key=True)
    donation_percentage = Column(Float, nullable=False, default=5.0)
    currency = Column(String(3), nullable=False, default="INR")
    total_income = Column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)
    total_expenses = Column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)
    total_donated = Column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)
    giving_score = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())


class LedgerEntryRecord(Base):
    """Income, expense, or donation row; ``kind`` selects the category vocabulary"""

    __tablename__ = "ledger_entry"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    kind = Column(String(16), nullable=False)
    amount = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    currency = Column(String(3), nullable=False, default="INR")
    category = Column(String(32), nullable=False, default="other")
    date = Column(DateTime, nullable=False)
    description = Column(Text, nullable=True)
    recipient = Column(Text, nullable=True)
    purpose = Column(Text, nullable=True)
    suggested_donation = Column(Numeric(14, 2, asdecimal=False), nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (Index("ix_ledger_entry_user_kind_date", "user_id", "kind", "date"),)
