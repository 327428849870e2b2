"""Running-totals maintenance triggered by ledger mutations"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List

from giving_ledger.domain.models import EntryKind, LedgerEntry, UserFinancialProfile
from giving_ledger.domain.ports import LedgerStore, ProfileStore
from giving_ledger.domain.scoring import score_profile
from giving_ledger.infrastructure.observability.logging import log_totals_recomputed
from giving_ledger.infrastructure.observability.metrics import record_recompute

TOTAL_FIELDS = {
    EntryKind.INCOME: "cached_total_income",
    EntryKind.EXPENSE: "cached_total_expenses",
    EntryKind.DONATION: "cached_total_donated",
}

# Kinds whose totals feed the giving score (rate and goal use income)
SCORED_KINDS = (EntryKind.INCOME, EntryKind.DONATION)


class UserLanes:
    """
    One re-entrant lock per user so mutations for a user recompute one at a time.

    A lock lives only while someone holds or waits on it; the last one out
    drops it, so the map stays as small as the set of users mid-mutation.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}
        self._holders: Dict[str, int] = {}

    def active(self) -> int:
        """Number of users with a lock currently held or awaited"""
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, user_id: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(user_id, threading.RLock())
            self._holders[user_id] = self._holders.get(user_id, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[user_id] -= 1
                if not self._holders[user_id]:
                    del self._holders[user_id]
                    del self._locks[user_id]


# Shared by every maintainer in the process; stores are per-request
default_lanes = UserLanes()


class RunningTotalsMaintainer:
    """
    Keep a user's cached totals and giving score in line with their ledger.

    Every mutation re-reads the full set of non-deleted entries for the
    affected kind and writes the fresh sum (read-aggregate-write), so
    deletions and edits can never drift the way increment/decrement would.

    Mutations for one user are serialized through a per-user lane; callers
    that commit a unit of work should do so while still holding
    ``lane(user_id)`` so the next recomputation sees the write. Different
    users never block each other. Writers in other processes can still race;
    the last recomputed sum wins.
    """

    def __init__(self, ledger: LedgerStore, profiles: ProfileStore, lanes: UserLanes | None = None):
        self.ledger = ledger
        self.profiles = profiles
        self.lanes = lanes if lanes is not None else default_lanes

    def lane(self, user_id: str):
        return self.lanes.hold(user_id)

    def commit(self, entry: LedgerEntry) -> LedgerEntry:
        """Create an entry and refresh the totals it affects"""
        with self.lane(entry.user_id):
            if entry.kind == EntryKind.INCOME:
                profile = self.profiles.get(entry.user_id)
                entry.suggested_donation = suggested_donation(entry.amount, profile)

            created = self.ledger.create(entry)
            self.on_entry_committed(created.kind, created.user_id)
            return created

    def update(self, user_id: str, kind: EntryKind, entry_id: str, **fields) -> LedgerEntry:
        """Edit an entry; income edits that change the amount re-snapshot the suggested donation"""
        with self.lane(user_id):
            if kind == EntryKind.INCOME and "amount" in fields:
                profile = self.profiles.get(user_id)
                fields["suggested_donation"] = suggested_donation(fields["amount"], profile)

            updated = self.ledger.update(user_id, kind, entry_id, **fields)
            self.recompute(user_id, kind, event="updated")
            return updated

    def remove(self, user_id: str, kind: EntryKind, entry_id: str) -> LedgerEntry:
        with self.lane(user_id):
            removed = self.ledger.delete(user_id, kind, entry_id)
            self.on_entry_removed(kind, user_id)
            return removed

    def deactivate(self, user_id: str) -> UserFinancialProfile:
        """Soft-delete all of a user's entries and zero out the affected totals"""
        with self.lane(user_id):
            kinds: List[EntryKind] = self.ledger.deactivate_user(user_id)
            for kind in kinds:
                self.recompute(user_id, kind, event="deactivated")
            return self.profiles.update(user_id, is_active=False)

    def update_settings(self, user_id: str, **fields) -> UserFinancialProfile:
        """
        Change profile settings.

        A new donation percentage moves the goal, so the giving score is
        re-derived. Suggested donations already snapshotted on income
        entries are left alone.
        """
        with self.lane(user_id):
            profile = self.profiles.update(user_id, **fields)
            if "donation_percentage" in fields:
                donations = self.ledger.find(user_id, EntryKind.DONATION)
                profile = self.profiles.update(user_id, giving_score=score_profile(profile, donations).total)
            return profile

    def on_entry_committed(self, kind: EntryKind, user_id: str) -> UserFinancialProfile:
        return self.recompute(user_id, kind, event="committed")

    def on_entry_removed(self, kind: EntryKind, user_id: str) -> UserFinancialProfile:
        return self.recompute(user_id, kind, event="removed")

    def recompute(self, user_id: str, kind: EntryKind, event: str = "committed") -> UserFinancialProfile:
        """Re-derive one cached total from the ledger, then the giving score when it depends on it"""
        with self.lane(user_id):
            entries = self.ledger.find(user_id, kind)
            total = sum(e.amount for e in entries)
            profile = self.profiles.update(user_id, **{TOTAL_FIELDS[kind]: total})

            score = None
            if kind in SCORED_KINDS:
                donations = entries if kind == EntryKind.DONATION else self.ledger.find(user_id, EntryKind.DONATION)
                score = score_profile(profile, donations).total
                profile = self.profiles.update(user_id, giving_score=score)

        record_recompute(kind.value, event, score)
        log_totals_recomputed(user_id, kind.value, total, score)
        return profile


def suggested_donation(amount: float, profile: UserFinancialProfile) -> float:
    """Share of an income entry to set aside, fixed at commit time"""
    return amount * profile.donation_percentage / 100
