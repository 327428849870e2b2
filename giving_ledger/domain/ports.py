"""Collaborator contracts consumed by the analytics core"""

from datetime import datetime
from typing import List, Optional, Protocol

from giving_ledger.domain.models import EntryKind, LedgerEntry, UserFinancialProfile


class LedgerStore(Protocol):
    """CRUD and range queries over ledger entries; every call is scoped to one user"""

    def find(
        self,
        user_id: str,
        kind: EntryKind,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[LedgerEntry]:
        """Return the user's non-deleted entries of ``kind``, oldest first, optionally within [start, end]."""

    def count(
        self,
        user_id: str,
        kind: EntryKind,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> int:
        """Return how many entries ``find`` would return."""

    def get(self, user_id: str, kind: EntryKind, entry_id: str) -> LedgerEntry:
        """Return one entry, raising EntryNotFoundError when missing or owned by another user."""

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Persist a new entry and return it with its id."""

    def update(self, user_id: str, kind: EntryKind, entry_id: str, **fields) -> LedgerEntry:
        """Apply field changes to an entry and return the updated entry."""

    def delete(self, user_id: str, kind: EntryKind, entry_id: str) -> LedgerEntry:
        """Soft-delete an entry and return it."""

    def deactivate_user(self, user_id: str) -> List[EntryKind]:
        """Soft-delete every entry of the user; return the kinds that had entries."""


class ProfileStore(Protocol):
    """Settings and cached totals per user"""

    def get(self, user_id: str) -> UserFinancialProfile:
        """Return the profile, raising ProfileNotFoundError when missing."""

    def create(self, profile: UserFinancialProfile) -> UserFinancialProfile:
        """Persist a new profile."""

    def update(self, user_id: str, **fields) -> UserFinancialProfile:
        """Write the given fields and return the refreshed profile."""


class AdviceProvider(Protocol):
    """Optional text generator; failures surface as ProviderUnavailable"""

    async def generate(self, prompt: str) -> str:
        """Return generated text for the prompt."""


__all__ = ["LedgerStore", "ProfileStore", "AdviceProvider"]
