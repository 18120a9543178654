"""Single grade endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import CurrentAdmin
from app.schemas.common import MessageResponse
from app.schemas.result import ResultResponse, ResultUpdate
from app.services.result import ResultService

router = APIRouter()


@router.patch("/{result_id}", response_model=ResultResponse)
def update_result(
    result_id: int,
    request: ResultUpdate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Change a recorded grade."""
    return ResultService(db).update_result(result_id, request)


@router.delete("/{result_id}", response_model=MessageResponse)
def delete_result(
    result_id: int,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a recorded grade."""
    ResultService(db).delete_result(result_id)
    return MessageResponse(message="Result deleted successfully")
