"""Data access layer implementing the ledger and profile store contracts"""

import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Query, Session
from giving_ledger.infrastructure.database.models import LedgerEntryRecord, UserProfileRecord
from giving_ledger.domain.exceptions import EntryNotFoundError, ProfileNotFoundError
from giving_ledger.domain.models import EntryKind, LedgerEntry, UserFinancialProfile

EDITABLE_ENTRY_FIELDS = {
    "amount",
    "currency",
    "category",
    "date",
    "description",
    "recipient",
    "purpose",
    "suggested_donation",
}

PROFILE_COLUMNS = {
    "donation_percentage": "donation_percentage",
    "currency": "currency",
    "cached_total_income": "total_income",
    "cached_total_expenses": "total_expenses",
    "cached_total_donated": "total_donated",
    "giving_score": "giving_score",
    "is_active": "is_active",
}


def _to_entry(record: LedgerEntryRecord) -> LedgerEntry:
    return LedgerEntry(
        id=str(record.id),
        user_id=record.user_id,
        kind=EntryKind(record.kind),
        amount=float(record.amount),
        currency=record.currency,
        category=record.category,
        date=record.date,
        description=record.description,
        recipient=record.recipient,
        purpose=record.purpose,
        suggested_donation=record.suggested_donation,
        is_deleted=record.is_deleted,
    )


def _to_profile(record: UserProfileRecord) -> UserFinancialProfile:
    return UserFinancialProfile(
        user_id=record.user_id,
        donation_percentage=record.donation_percentage,
        currency=record.currency,
        cached_total_income=float(record.total_income or 0),
        cached_total_expenses=float(record.total_expenses or 0),
        cached_total_donated=float(record.total_donated or 0),
        giving_score=record.giving_score,
        is_active=record.is_active,
    )


class SqlLedgerStore:
    """Repository for ledger entries; every query filters on the owning user"""

    def __init__(self, db: Session):
        self.db = db

    def _scoped(
        self,
        user_id: str,
        kind: EntryKind,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Query:
        query = self.db.query(LedgerEntryRecord).filter(
            LedgerEntryRecord.user_id == user_id,
            LedgerEntryRecord.kind == kind.value,
            LedgerEntryRecord.is_deleted.is_(False),
        )
        if start is not None:
            query = query.filter(LedgerEntryRecord.date >= start)
        if end is not None:
            query = query.filter(LedgerEntryRecord.date <= end)
        return query

    def _record(self, user_id: str, kind: EntryKind, entry_id: str) -> LedgerEntryRecord:
        try:
            entry_uuid = uuid.UUID(str(entry_id))
        except ValueError:
            raise EntryNotFoundError(f"Invalid entry ID: {entry_id}") from None

        record = self._scoped(user_id, kind).filter(LedgerEntryRecord.id == entry_uuid).first()
        if record is None:
            raise EntryNotFoundError(f"{kind.value.capitalize()} entry {entry_id} not found")
        return record

    def find(
        self,
        user_id: str,
        kind: EntryKind,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[LedgerEntry]:
        """Fetch non-deleted entries oldest first"""
        records = self._scoped(user_id, kind, start, end).order_by(LedgerEntryRecord.date.asc()).all()
        return [_to_entry(r) for r in records]

    def count(
        self,
        user_id: str,
        kind: EntryKind,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> int:
        return self._scoped(user_id, kind, start, end).count()

    def get(self, user_id: str, kind: EntryKind, entry_id: str) -> LedgerEntry:
        return _to_entry(self._record(user_id, kind, entry_id))

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Persist a new entry"""
        record = LedgerEntryRecord(
            user_id=entry.user_id,
            kind=entry.kind.value,
            amount=entry.amount,
            currency=entry.currency,
            category=entry.category,
            date=entry.date,
            description=entry.description,
            recipient=entry.recipient,
            purpose=entry.purpose,
            suggested_donation=entry.suggested_donation,
        )
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return _to_entry(record)

    def update(self, user_id: str, kind: EntryKind, entry_id: str, **fields) -> LedgerEntry:
        record = self._record(user_id, kind, entry_id)
        current = _to_entry(record)

        for name, value in fields.items():
            if name not in EDITABLE_ENTRY_FIELDS:
                raise ValueError(f"Field {name!r} cannot be edited")
            setattr(current, name, value)

        # Re-run model validation on the edited values before writing them
        validated = LedgerEntry(**{**current.__dict__})
        for name in fields:
            setattr(record, name, getattr(validated, name))
        self.db.flush()
        return _to_entry(record)

    def delete(self, user_id: str, kind: EntryKind, entry_id: str) -> LedgerEntry:
        """Soft-delete; the row stays but drops out of every query"""
        record = self._record(user_id, kind, entry_id)
        record.is_deleted = True
        self.db.flush()
        return _to_entry(record)

    def deactivate_user(self, user_id: str) -> List[EntryKind]:
        rows = (
            self.db.query(LedgerEntryRecord.kind, func.count(LedgerEntryRecord.id))
            .filter(LedgerEntryRecord.user_id == user_id, LedgerEntryRecord.is_deleted.is_(False))
            .group_by(LedgerEntryRecord.kind)
            .all()
        )
        (
            self.db.query(LedgerEntryRecord)
            .filter(LedgerEntryRecord.user_id == user_id, LedgerEntryRecord.is_deleted.is_(False))
            .update({LedgerEntryRecord.is_deleted: True}, synchronize_session=False)
        )
        self.db.flush()
        return [EntryKind(kind) for kind, _ in rows]


class SqlProfileStore:
    """Repository for user financial profiles"""

    def __init__(self, db: Session):
        self.db = db

    def _record(self, user_id: str) -> UserProfileRecord:
        record = self.db.get(UserProfileRecord, user_id)
        if record is None:
            raise ProfileNotFoundError(f"No financial profile for user {user_id}")
        return record

    def get(self, user_id: str) -> UserFinancialProfile:
        return _to_profile(self._record(user_id))

    def create(self, profile: UserFinancialProfile) -> UserFinancialProfile:
        record = UserProfileRecord(
            user_id=profile.user_id,
            donation_percentage=profile.donation_percentage,
            currency=profile.currency,
            total_income=profile.cached_total_income,
            total_expenses=profile.cached_total_expenses,
            total_donated=profile.cached_total_donated,
            giving_score=profile.giving_score,
            is_active=profile.is_active,
        )
        self.db.add(record)
        self.db.flush()
        return _to_profile(record)

    def update(self, user_id: str, **fields) -> UserFinancialProfile:
        record = self._record(user_id)
        # Validate the merged profile before touching the row
        merged = _to_profile(record)
        for name, value in fields.items():
            if name not in PROFILE_COLUMNS:
                raise ValueError(f"Unknown profile field {name!r}")
            setattr(merged, name, value)
        UserFinancialProfile(**merged.__dict__)

        for name, value in fields.items():
            setattr(record, PROFILE_COLUMNS[name], value)
        self.db.flush()
        return _to_profile(record)
