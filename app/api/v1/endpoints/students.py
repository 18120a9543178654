"""Student management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import CurrentAdmin
from app.schemas.common import MessageResponse
from app.schemas.result import ResultResponse, ResultUpsert, StudentResult
from app.schemas.student import (
    PaginatedStudentResponse,
    StudentCreate,
    StudentFilter,
    StudentResponse,
    StudentUpdate,
)
from app.services.result import ResultService
from app.services.student import StudentService

router = APIRouter()


@router.post("", response_model=StudentResponse)
def create_student(
    request: StudentCreate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new student."""
    service = StudentService(db)
    return service.create_student(request)


@router.get("", response_model=PaginatedStudentResponse)
def list_students(
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    section_id: int | None = None,
    search: str | None = None,
):
    """List students with filtering and pagination."""
    service = StudentService(db)
    filters = StudentFilter(section_id=section_id, search=search)
    return service.list_students(filters, page, page_size)


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(
    student_id: int,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a student by ID."""
    service = StudentService(db)
    return service.get_student_response(student_id)


@router.patch("/{student_id}", response_model=StudentResponse)
def update_student(
    student_id: int,
    request: StudentUpdate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a student, including the manual fail flag."""
    service = StudentService(db)
    return service.update_student(student_id, request)


@router.delete("/{student_id}", response_model=MessageResponse)
def delete_student(
    student_id: int,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a student and their grades."""
    service = StudentService(db)
    service.delete_student(student_id)
    return MessageResponse(message="Student deleted successfully")


# ==========================================
# Grades
# ==========================================

@router.get("/{student_id}/results", response_model=list[ResultResponse])
def list_student_results(
    student_id: int,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """List recorded grades of a student."""
    return ResultService(db).list_for_student(student_id)


@router.put("/{student_id}/results", response_model=ResultResponse)
def upsert_student_result(
    student_id: int,
    request: ResultUpsert,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Set a student's grade in one subject of their section."""
    return ResultService(db).upsert_result(student_id, request)


@router.get("/{student_id}/result", response_model=StudentResult)
def evaluate_student(
    student_id: int,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Evaluated result of a student, regardless of the release gate."""
    student = StudentService(db).get_student(student_id)
    return ResultService(db).evaluate_student(student)
