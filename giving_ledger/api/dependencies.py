"""Dependency injection for FastAPI endpoints"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from giving_ledger.config import settings
from giving_ledger.domain.ports import AdviceProvider
from giving_ledger.infrastructure.clients.advice import HttpAdviceProvider
from giving_ledger.infrastructure.database.repositories import SqlLedgerStore, SqlProfileStore
from giving_ledger.infrastructure.database.session import get_db
from giving_ledger.services.advisor import Advisor
from giving_ledger.services.analytics import AnalyticsService
from giving_ledger.services.running_totals import RunningTotalsMaintainer


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def mutation_failed(db: Session, request: Request, error: Exception) -> HTTPException:
    """Roll back the unit of work and log an unexpected mutation failure as a 500"""
    db.rollback()
    logging.error(f"Unexpected error: {error}", extra={"request_id": get_request_id(request)})
    return HTTPException(status_code=500, detail="Internal server error")


def get_ledger_store(db: Session = Depends(get_db)) -> SqlLedgerStore:
    return SqlLedgerStore(db)


def get_profile_store(db: Session = Depends(get_db)) -> SqlProfileStore:
    return SqlProfileStore(db)


def get_maintainer(
    ledger: SqlLedgerStore = Depends(get_ledger_store),
    profiles: SqlProfileStore = Depends(get_profile_store),
) -> RunningTotalsMaintainer:
    """Maintainer bound to this request's stores; per-user lanes are process-wide"""
    return RunningTotalsMaintainer(ledger, profiles)


def get_analytics(
    ledger: SqlLedgerStore = Depends(get_ledger_store),
    profiles: SqlProfileStore = Depends(get_profile_store),
) -> AnalyticsService:
    return AnalyticsService(ledger, profiles)


def get_advice_provider() -> Optional[AdviceProvider]:
    """Provide the advice client, or None when text generation is switched off"""
    if not settings.advice_enabled:
        return None
    return HttpAdviceProvider()


def get_advisor(
    ledger: SqlLedgerStore = Depends(get_ledger_store),
    profiles: SqlProfileStore = Depends(get_profile_store),
    provider: Optional[AdviceProvider] = Depends(get_advice_provider),
) -> Advisor:
    return Advisor(ledger, profiles, provider)
