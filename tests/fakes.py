"""In-memory ledger and profile stores for service-level tests"""

import uuid
from datetime import datetime
from typing import Dict, List, Optional
from giving_ledger.domain.exceptions import EntryNotFoundError, ProfileNotFoundError
from giving_ledger.domain.models import EntryKind, LedgerEntry, UserFinancialProfile


class InMemoryLedgerStore:
    """Dict-backed ledger store honouring the same user scoping as the SQL store"""

    def __init__(self) -> None:
        self.entries: Dict[str, LedgerEntry] = {}

    def find(self, user_id, kind, start=None, end=None) -> List[LedgerEntry]:
        found = [
            e
            for e in self.entries.values()
            if e.user_id == user_id
            and e.kind == kind
            and not e.is_deleted
            and (start is None or e.date >= start)
            and (end is None or e.date <= end)
        ]
        return sorted(found, key=lambda e: e.date)

    def count(self, user_id, kind, start=None, end=None) -> int:
        return len(self.find(user_id, kind, start, end))

    def get(self, user_id, kind, entry_id) -> LedgerEntry:
        entry = self.entries.get(entry_id)
        if entry is None or entry.user_id != user_id or entry.kind != kind or entry.is_deleted:
            raise EntryNotFoundError(entry_id)
        return entry

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        entry.id = str(uuid.uuid4())
        self.entries[entry.id] = entry
        return entry

    def update(self, user_id, kind, entry_id, **fields) -> LedgerEntry:
        entry = self.get(user_id, kind, entry_id)
        for name, value in fields.items():
            setattr(entry, name, value)
        return entry

    def delete(self, user_id, kind, entry_id) -> LedgerEntry:
        entry = self.get(user_id, kind, entry_id)
        entry.is_deleted = True
        return entry

    def deactivate_user(self, user_id) -> List[EntryKind]:
        kinds = []
        for entry in self.entries.values():
            if entry.user_id == user_id and not entry.is_deleted:
                entry.is_deleted = True
                if entry.kind not in kinds:
                    kinds.append(entry.kind)
        return kinds


class InMemoryProfileStore:
    def __init__(self) -> None:
        self.profiles: Dict[str, UserFinancialProfile] = {}

    def get(self, user_id) -> UserFinancialProfile:
        if user_id not in self.profiles:
            raise ProfileNotFoundError(user_id)
        return self.profiles[user_id]

    def create(self, profile: UserFinancialProfile) -> UserFinancialProfile:
        self.profiles[profile.user_id] = profile
        return profile

    def update(self, user_id, **fields) -> UserFinancialProfile:
        profile = self.get(user_id)
        for name, value in fields.items():
            setattr(profile, name, value)
        return profile


def make_entry(
    kind: EntryKind,
    amount: float,
    date: datetime,
    category: Optional[str] = None,
    user_id: str = "user_1",
) -> LedgerEntry:
    return LedgerEntry(user_id=user_id, kind=kind, amount=amount, category=category, date=date)
