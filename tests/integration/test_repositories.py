"""Integration tests for the SQL ledger and profile stores"""

import pytest
from datetime import datetime
from sqlalchemy.orm import Session
from giving_ledger.domain.exceptions import EntryNotFoundError, InvalidInputError, ProfileNotFoundError
from giving_ledger.domain.models import EntryKind, LedgerEntry, UserFinancialProfile
from giving_ledger.infrastructure.database.repositories import SqlLedgerStore, SqlProfileStore
from giving_ledger.services.running_totals import RunningTotalsMaintainer, UserLanes

pytestmark = pytest.mark.integration


@pytest.fixture
def stores(db: Session):
    profiles = SqlProfileStore(db)
    profiles.create(UserFinancialProfile(user_id="user_1", donation_percentage=5))
    return SqlLedgerStore(db), profiles


def _entry(kind, amount, day, category=None, user_id="user_1"):
    return LedgerEntry(user_id=user_id, kind=kind, amount=amount, category=category, date=datetime(2026, 5, day))


def test_find_is_scoped_and_ordered(stores):
    ledger, profiles = stores
    profiles.create(UserFinancialProfile(user_id="user_2"))
    ledger.create(_entry(EntryKind.EXPENSE, 30, 9, "food"))
    ledger.create(_entry(EntryKind.EXPENSE, 10, 2, "bills"))
    ledger.create(_entry(EntryKind.EXPENSE, 99, 5, "food", user_id="user_2"))
    ledger.create(_entry(EntryKind.DONATION, 5, 3))

    found = ledger.find("user_1", EntryKind.EXPENSE)

    assert [e.amount for e in found] == [10, 30]
    assert ledger.count("user_1", EntryKind.EXPENSE, start=datetime(2026, 5, 5)) == 1


def test_soft_delete_hides_entry(stores):
    ledger, _ = stores
    entry = ledger.create(_entry(EntryKind.DONATION, 50, 1, "zakat"))

    deleted = ledger.delete("user_1", EntryKind.DONATION, entry.id)

    assert deleted.is_deleted is True
    assert ledger.find("user_1", EntryKind.DONATION) == []
    with pytest.raises(EntryNotFoundError):
        ledger.get("user_1", EntryKind.DONATION, entry.id)


def test_get_with_bad_id(stores):
    ledger, _ = stores
    with pytest.raises(EntryNotFoundError):
        ledger.get("user_1", EntryKind.INCOME, "not-a-uuid")


def test_update_revalidates(stores):
    ledger, _ = stores
    entry = ledger.create(_entry(EntryKind.EXPENSE, 50, 1, "food"))

    updated = ledger.update("user_1", EntryKind.EXPENSE, entry.id, amount=75, category="bills")
    assert updated.amount == 75
    assert updated.category == "bills"

    with pytest.raises(InvalidInputError):
        ledger.update("user_1", EntryKind.EXPENSE, entry.id, category="zakat")
    with pytest.raises(ValueError):
        ledger.update("user_1", EntryKind.EXPENSE, entry.id, user_id="user_2")


def test_profile_store(stores):
    _, profiles = stores

    profile = profiles.update("user_1", donation_percentage=10, cached_total_income=2_000)
    assert profile.current_donation_goal == 200

    with pytest.raises(InvalidInputError):
        profiles.update("user_1", donation_percentage=150)
    with pytest.raises(ProfileNotFoundError):
        profiles.get("ghost")


def test_maintainer_against_sql_stores(stores, db: Session):
    """Test running totals round trip through the database"""
    ledger, profiles = stores
    maintainer = RunningTotalsMaintainer(ledger, profiles, lanes=UserLanes())

    maintainer.commit(_entry(EntryKind.INCOME, 10_000, 1, "salary"))
    donation = maintainer.commit(_entry(EntryKind.DONATION, 500, 3, "education"))
    maintainer.commit(_entry(EntryKind.DONATION, 250, 10, "education"))
    maintainer.remove("user_1", EntryKind.DONATION, donation.id)
    db.commit()

    profile = profiles.get("user_1")
    assert profile.cached_total_income == 10_000
    assert profile.cached_total_donated == 250
    # 2.5% rate -> 10, single donation -> 6, half the goal -> 15
    assert profile.giving_score == 31


def test_deactivate_user(stores, db: Session):
    ledger, profiles = stores
    maintainer = RunningTotalsMaintainer(ledger, profiles, lanes=UserLanes())
    maintainer.commit(_entry(EntryKind.INCOME, 1_000, 1))
    maintainer.commit(_entry(EntryKind.EXPENSE, 400, 2))

    profile = maintainer.deactivate("user_1")
    db.commit()

    assert profile.is_active is False
    assert profile.cached_total_income == 0
    assert profile.cached_total_expenses == 0
    assert ledger.count("user_1", EntryKind.INCOME) == 0
