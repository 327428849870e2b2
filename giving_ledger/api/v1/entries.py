"""/v1/entries/{kind} - income, expense, and donation records"""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from giving_ledger.api.dependencies import get_ledger_store, get_maintainer, get_profile_store, mutation_failed
from giving_ledger.api.v1.schemas import EntryCreateRequest, EntryListResponse, EntryResponse, EntryUpdateRequest
from giving_ledger.domain.exceptions import DomainException
from giving_ledger.domain.models import LedgerEntry, parse_kind
from giving_ledger.infrastructure.database.repositories import SqlLedgerStore, SqlProfileStore
from giving_ledger.infrastructure.database.session import get_db
from giving_ledger.services.running_totals import RunningTotalsMaintainer

router = APIRouter()


@router.post("/entries/{kind}", response_model=EntryResponse, status_code=201)
def create_entry(
    kind: str,
    request_body: EntryCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    profiles: SqlProfileStore = Depends(get_profile_store),
    maintainer: RunningTotalsMaintainer = Depends(get_maintainer),
):
    """
    Record a ledger entry and refresh the user's running totals.

    Flow:
    1. Validate kind, category, and currency against the domain model
    2. Snapshot the suggested donation for income entries
    3. Persist the entry and re-derive the matching cached total
    4. Refresh the giving score when income or donations changed
    5. Commit while still holding the user's lane
    """
    entry_kind = parse_kind(kind)
    profile = profiles.get(request_body.user_id)
    if not profile.is_active:
        raise HTTPException(status_code=409, detail="Profile is deactivated")

    entry = LedgerEntry(
        user_id=request_body.user_id,
        kind=entry_kind,
        amount=request_body.amount,
        category=request_body.category,
        date=request_body.date or datetime.utcnow(),
        currency=request_body.currency,
        description=request_body.description,
        recipient=request_body.recipient,
        purpose=request_body.purpose,
    )

    try:
        with maintainer.lane(entry.user_id):
            created = maintainer.commit(entry)
            db.commit()
    except DomainException:
        db.rollback()
        raise
    except Exception as e:
        raise mutation_failed(db, request, e)

    return EntryResponse.model_validate(created)


@router.get("/entries/{kind}", response_model=EntryListResponse)
def list_entries(
    kind: str,
    user_id: str = Query(..., description="User identifier"),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    ledger: SqlLedgerStore = Depends(get_ledger_store),
):
    entry_kind = parse_kind(kind)
    entries = ledger.find(user_id, entry_kind, start_date, end_date)
    return EntryListResponse(
        user_id=user_id,
        kind=entry_kind.value,
        count=len(entries),
        entries=[EntryResponse.model_validate(e) for e in entries],
    )


@router.patch("/entries/{kind}/{entry_id}", response_model=EntryResponse)
def update_entry(
    kind: str,
    entry_id: str,
    request_body: EntryUpdateRequest,
    request: Request,
    user_id: str = Query(..., description="Owning user"),
    db: Session = Depends(get_db),
    maintainer: RunningTotalsMaintainer = Depends(get_maintainer),
):
    """Edit amount, category, or date; totals are re-derived from the full entry set"""
    entry_kind = parse_kind(kind)
    fields = request_body.model_dump(exclude_none=True)

    try:
        with maintainer.lane(user_id):
            updated = maintainer.update(user_id, entry_kind, entry_id, **fields)
            db.commit()
    except DomainException:
        db.rollback()
        raise
    except Exception as e:
        raise mutation_failed(db, request, e)

    return EntryResponse.model_validate(updated)


@router.delete("/entries/{kind}/{entry_id}", response_model=EntryResponse)
def delete_entry(
    kind: str,
    entry_id: str,
    request: Request,
    user_id: str = Query(..., description="Owning user"),
    db: Session = Depends(get_db),
    maintainer: RunningTotalsMaintainer = Depends(get_maintainer),
):
    entry_kind = parse_kind(kind)

    try:
        with maintainer.lane(user_id):
            removed = maintainer.remove(user_id, entry_kind, entry_id)
            db.commit()
    except DomainException:
        db.rollback()
        raise
    except Exception as e:
        raise mutation_failed(db, request, e)

    return EntryResponse.model_validate(removed)
