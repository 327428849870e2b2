"""/v1/profiles - user financial settings and cached totals"""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from giving_ledger.api.dependencies import get_maintainer, get_profile_store, mutation_failed
from giving_ledger.api.v1.schemas import ProfileCreateRequest, ProfileResponse, ProfileUpdateRequest
from giving_ledger.domain.exceptions import DomainException, ProfileNotFoundError
from giving_ledger.domain.models import UserFinancialProfile
from giving_ledger.infrastructure.database.repositories import SqlProfileStore
from giving_ledger.infrastructure.database.session import get_db
from giving_ledger.services.running_totals import RunningTotalsMaintainer

router = APIRouter()


@router.post("/profiles", response_model=ProfileResponse, status_code=201)
def create_profile(
    request_body: ProfileCreateRequest,
    db: Session = Depends(get_db),
    profiles: SqlProfileStore = Depends(get_profile_store),
):
    """Create an empty profile with zeroed running totals"""
    try:
        profiles.get(request_body.user_id)
    except ProfileNotFoundError:
        pass
    else:
        raise HTTPException(status_code=409, detail="Profile already exists")

    profile = profiles.create(
        UserFinancialProfile(
            user_id=request_body.user_id,
            donation_percentage=request_body.donation_percentage,
            currency=request_body.currency,
        )
    )
    db.commit()
    return ProfileResponse.model_validate(profile)


@router.get("/profiles/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str, profiles: SqlProfileStore = Depends(get_profile_store)):
    """Cached totals plus the donation goal derived from them"""
    return ProfileResponse.model_validate(profiles.get(user_id))


@router.patch("/profiles/{user_id}", response_model=ProfileResponse)
def update_profile(
    user_id: str,
    request_body: ProfileUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
    maintainer: RunningTotalsMaintainer = Depends(get_maintainer),
):
    """Change the donation percentage or currency tag; the giving score follows the new goal"""
    fields = request_body.model_dump(exclude_none=True)
    try:
        with maintainer.lane(user_id):
            profile = maintainer.update_settings(user_id, **fields)
            db.commit()
    except DomainException:
        db.rollback()
        raise
    except Exception as e:
        raise mutation_failed(db, request, e)

    return ProfileResponse.model_validate(profile)


@router.post("/profiles/{user_id}/deactivate", response_model=ProfileResponse)
def deactivate_profile(
    user_id: str,
    request: Request,
    db: Session = Depends(get_db),
    maintainer: RunningTotalsMaintainer = Depends(get_maintainer),
):
    """Soft-delete every ledger entry of the user and zero the running totals"""
    try:
        with maintainer.lane(user_id):
            profile = maintainer.deactivate(user_id)
            db.commit()
    except DomainException:
        db.rollback()
        raise
    except Exception as e:
        raise mutation_failed(db, request, e)

    return ProfileResponse.model_validate(profile)
