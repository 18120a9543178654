"""Upload endpoints for result spreadsheet processing."""

import logging
import os
from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.dependencies import CurrentAdmin
from app.core.exceptions import UploadError
from app.schemas.upload import UploadResult
from app.services.upload import UploadService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/results", response_model=UploadResult)
def upload_results(
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
    file: UploadFile = File(...),
):
    """
    Import students and grades from an Excel or CSV file.

    - Allows partial success (failed rows and grades are reported, not fatal)
    - Re-importing the same file only overwrites grades
    - Unknown subject columns and non-numeric grades are ignored

    Required columns: رقم الاكتتاب, الاسم الكامل, القسم. Every other column is a subject.
    """
    # Validate file
    if not file.filename:
        raise UploadError("No file provided")

    extension = os.path.splitext(file.filename)[1].lower()
    if extension not in settings.ALLOWED_EXTENSIONS:
        raise UploadError(
            f"Only {', '.join(settings.ALLOWED_EXTENSIONS)} files are allowed",
            details={"file_name": file.filename},
        )

    content = file.file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024:
        raise UploadError(f"File size exceeds {settings.MAX_UPLOAD_SIZE_MB}MB limit")

    logger.info(f"[UPLOAD] {admin.username} uploaded {file.filename} ({len(content)} bytes)")

    service = UploadService(db)
    return service.process_results_upload(file_content=content, file_name=file.filename)


@router.get("/template")
def download_results_template(
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Download an Excel template for the result import."""
    service = UploadService(db)
    content = service.generate_template()

    return StreamingResponse(
        BytesIO(content),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=results_template.xlsx"},
    )
