"""Progress tracking routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, require_user
from api.responses import success_response
from domain.enums import ProgressPeriod
from domain.mappers import UserMapper
from domain.models import User
from domain.schemas.progress_schemas import WeightLogCreate
from services.progress_service import ProgressService

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get("")
def progress_overview(user: User = Depends(require_user), db: Session = Depends(get_db)):
    return success_response(ProgressService.overview(db, user))


@router.get("/weight")
def weight_progress(user: User = Depends(require_user), db: Session = Depends(get_db)):
    return success_response(ProgressService.weight(db, user))


@router.post("/weight", status_code=status.HTTP_201_CREATED)
def log_weight(
    body: WeightLogCreate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    log = ProgressService.log_weight(db, user, body)
    return success_response(UserMapper.weight_log_to_dict(log), "Weight logged successfully")


@router.get("/nutrition")
def nutrition_progress(
    period: ProgressPeriod = Query(ProgressPeriod.WEEK),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    return success_response(ProgressService.nutrition(db, user, period))


@router.get("/achievements")
def achievements(user: User = Depends(require_user), db: Session = Depends(get_db)):
    return success_response(ProgressService.achievements(db, user))


@router.get("/streak")
def streak(user: User = Depends(require_user), db: Session = Depends(get_db)):
    return success_response(ProgressService.streak(db, user))
