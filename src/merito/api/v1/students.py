"""Student registration and profile endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import StudentCreate, StudentRead, StudentUpdate
from ...services import student_service
from ...services.errors import ServiceError

router = APIRouter(prefix="/students", tags=["students"])


@router.post(
    "",
    response_model=StudentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a student",
    responses={
        201: {
            "description": "Student registered",
            "content": {
                "application/json": {
                    "example": {
                        "id": 7,
                        "user_id": 12,
                        "name": "Ana Souza",
                        "email": "ana.souza@example.edu",
                        "cpf": "52998224725",
                        "rg": "MG-12.345.678",
                        "address": "Rua das Flores, 100",
                        "institution_id": 1,
                        "institution_name": "PUC Minas",
                        "course": "Software Engineering",
                        "created_at": "2025-03-01T09:00:00",
                    }
                }
            },
        },
        400: {"description": "Invalid CPF, or email/CPF already registered"},
        404: {"description": "Institution not found"},
    },
)
def register_student(
    payload: StudentCreate,
    db: Session = Depends(get_db),
) -> StudentRead:
    """Create a student account and profile.

    Example request body::

        {
            "name": "Ana Souza",
            "email": "ana.souza@example.edu",
            "password": "s3cret-pass",
            "cpf": "529.982.247-25",
            "institution_id": 1,
            "course": "Software Engineering"
        }
    """

    try:
        student = student_service.register_student(db, **payload.model_dump())
        db.commit()
        db.refresh(student)
        return student
    except ServiceError as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("", response_model=List[StudentRead], summary="List students")
def list_students(db: Session = Depends(get_db)) -> List[StudentRead]:
    return list(student_service.list_students(db))


@router.get("/cpf/{cpf}", response_model=StudentRead, summary="Find a student by CPF")
def get_student_by_cpf(cpf: str, db: Session = Depends(get_db)) -> StudentRead:
    try:
        return student_service.get_student_by_cpf(db, cpf=cpf)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get(
    "/institution/{institution_id}",
    response_model=List[StudentRead],
    summary="List students of an institution",
)
def list_students_by_institution(institution_id: int, db: Session = Depends(get_db)) -> List[StudentRead]:
    return list(student_service.list_students_by_institution(db, institution_id=institution_id))


@router.get("/{student_id}", response_model=StudentRead, summary="Get a student")
def get_student(student_id: int, db: Session = Depends(get_db)) -> StudentRead:
    try:
        return student_service.get_student(db, student_id=student_id)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.put("/{student_id}", response_model=StudentRead, summary="Update a student")
def update_student(
    student_id: int,
    payload: StudentUpdate,
    db: Session = Depends(get_db),
) -> StudentRead:
    """Update profile fields present in the request body."""

    try:
        student = student_service.update_student(
            db,
            student_id=student_id,
            changes=payload.model_dump(exclude_unset=True),
        )
        db.commit()
        db.refresh(student)
        return student
    except ServiceError as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.delete("/{student_id}", summary="Deactivate a student")
def delete_student(student_id: int, db: Session = Depends(get_db)) -> dict[str, str]:
    try:
        student_service.delete_student(db, student_id=student_id)
        db.commit()
    except ServiceError as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return {"message": "Student deleted successfully"}
