"""Student registration and profile management."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional, Sequence

import bcrypt
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload
from validate_docbr import CPF

from ..core.config import get_settings
from ..models import Student, User, UserRole
from . import directory
from .errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "cpf", "rg", "address", "institution_id", "course")

_cpf_validator = CPF()


def normalize_cpf(cpf: str) -> str:
    """Strip punctuation from a CPF, keeping its digits only."""

    return re.sub(r"\D", "", cpf or "")


def _validated_cpf(cpf: str) -> str:
    digits = normalize_cpf(cpf)
    if len(digits) != 11 or not _cpf_validator.validate(digits):
        raise ValidationError("Invalid CPF.")
    return digits


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _hash_password(password: str) -> str:
    rounds = get_settings().password_hash_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _ensure_institution(session: Session, institution_id: int) -> None:
    if directory.find_institution(session, institution_id) is None:
        raise NotFound(f"Institution {institution_id} not found")


def _ensure_student(session: Session, student_id: int) -> Student:
    student = directory.find_student(session, student_id)
    if student is None or not student.user.is_active:
        raise NotFound(f"Student {student_id} not found")
    return student


def _active_students():
    return (
        select(Student)
        .join(Student.user)
        .options(joinedload(Student.user), joinedload(Student.institution))
        .where(User.is_active.is_(True))
        .order_by(Student.name.asc(), Student.id.asc())
    )


def register_student(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    cpf: str,
    institution_id: int,
    rg: Optional[str] = None,
    address: Optional[str] = None,
    course: Optional[str] = None,
) -> Student:
    """Create the student user and profile after validating uniqueness."""

    digits = _validated_cpf(cpf)
    email = email.strip().lower()

    if directory.find_user_by_email(session, email) is not None:
        raise ValidationError("Email already registered.")
    if directory.find_student_by_cpf(session, digits) is not None:
        raise ValidationError("CPF already registered.")
    _ensure_institution(session, institution_id)

    user = User(
        email=email,
        password_hash=_hash_password(password),
        role=UserRole.STUDENT,
        is_active=True,
    )
    session.add(user)
    session.flush()

    student = Student(
        user=user,
        name=name,
        cpf=digits,
        rg=rg,
        address=address,
        institution_id=institution_id,
        course=course,
    )
    session.add(student)
    session.flush()
    session.refresh(student)

    logger.info("registered student %s (user %s)", student.id, user.id)
    return student


def list_students(session: Session) -> Sequence[Student]:
    return session.execute(_active_students()).unique().scalars().all()


def list_students_by_institution(session: Session, *, institution_id: int) -> Sequence[Student]:
    stmt = _active_students().where(Student.institution_id == institution_id)
    return session.execute(stmt).unique().scalars().all()


def get_student(session: Session, *, student_id: int) -> Student:
    return _ensure_student(session, student_id)


def get_student_by_cpf(session: Session, *, cpf: str) -> Student:
    digits = _validated_cpf(cpf)
    student = directory.find_student_by_cpf(session, digits)
    if student is None or not student.user.is_active:
        raise NotFound("Student not found")
    return student


def update_student(session: Session, *, student_id: int, changes: Mapping[str, Any]) -> Student:
    """Apply profile changes; only ``UPDATABLE_FIELDS`` are accepted."""

    updates = {field: value for field, value in changes.items() if field in UPDATABLE_FIELDS}
    if not updates:
        raise ValidationError("No updatable fields supplied.")
    for field in ("name", "cpf", "institution_id"):
        if field in updates and _is_missing(updates[field]):
            raise ValidationError(f"Field '{field}' cannot be empty.")

    student = _ensure_student(session, student_id)

    if "cpf" in updates:
        updates["cpf"] = _validated_cpf(updates["cpf"])
        if updates["cpf"] != student.cpf:
            if directory.find_student_by_cpf(session, updates["cpf"]) is not None:
                raise ValidationError("CPF already registered.")

    if "institution_id" in updates and updates["institution_id"] != student.institution_id:
        _ensure_institution(session, updates["institution_id"])

    for field, value in updates.items():
        setattr(student, field, value)
    session.flush()
    session.refresh(student)
    return student


def delete_student(session: Session, *, student_id: int) -> None:
    """Deactivate the student's user; ledger history stays intact."""

    student = _ensure_student(session, student_id)
    student.user.is_active = False
    session.flush()
    logger.info("deactivated student %s", student_id)
