"""Public portal endpoints: release status and result search."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ErrorResponse
from app.schemas.portal import PortalStatus
from app.schemas.result import StudentResult
from app.services.portal import PortalService
from app.services.result import ResultService

router = APIRouter()


@router.get("/status", response_model=PortalStatus)
def get_portal_status(db: Annotated[Session, Depends(get_db)]):
    """Whether results are released, plus the announcement and countdown."""
    return PortalService(db).get_status()


@router.get(
    "/results/{subscription_number}",
    response_model=StudentResult,
    responses={
        403: {"model": ErrorResponse, "description": "Results not released yet"},
        404: {"model": ErrorResponse, "description": "Unknown subscription number"},
    },
)
def search_result(
    subscription_number: str,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Look up a student's evaluated result by subscription number.

    - Arabic-Indic digits are accepted
    - Returns 403 RESULTS_NOT_AVAILABLE while results are withheld
    - Returns 404 when no student has the number
    """
    return ResultService(db).get_student_result(subscription_number)
