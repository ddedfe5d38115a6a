"""Directory store: lookups for users, profiles, and reward catalog rows."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from ..models import Advantage, Company, Institution, Redemption, Student, User


def find_user(session: Session, user_id: int) -> Optional[User]:
    return session.get(User, user_id)


def find_user_by_email(session: Session, email: str) -> Optional[User]:
    stmt = select(User).where(func.lower(User.email) == email.strip().lower())
    return session.execute(stmt).scalar_one_or_none()


def find_users(session: Session, user_ids: Iterable[int]) -> dict[int, User]:
    ids = set(user_ids)
    if not ids:
        return {}
    users = session.execute(select(User).where(User.id.in_(ids))).scalars().all()
    return {user.id: user for user in users}


def find_student(session: Session, student_id: int) -> Optional[Student]:
    stmt = (
        select(Student)
        .options(joinedload(Student.user), joinedload(Student.institution))
        .where(Student.id == student_id)
    )
    return session.execute(stmt).scalar_one_or_none()


def find_student_by_cpf(session: Session, cpf: str) -> Optional[Student]:
    stmt = (
        select(Student)
        .options(joinedload(Student.user), joinedload(Student.institution))
        .where(Student.cpf == cpf)
    )
    return session.execute(stmt).scalar_one_or_none()


def find_students_by_user_ids(session: Session, user_ids: Iterable[int]) -> dict[int, Student]:
    """Return student profiles keyed by their user id."""

    ids = set(user_ids)
    if not ids:
        return {}
    stmt = select(Student).options(joinedload(Student.institution)).where(Student.user_id.in_(ids))
    return {student.user_id: student for student in session.execute(stmt).scalars().all()}


def find_institution(session: Session, institution_id: int) -> Optional[Institution]:
    return session.get(Institution, institution_id)


def find_redemptions_by_student_ids(
    session: Session, student_ids: Iterable[int]
) -> dict[int, list[Redemption]]:
    """Return redemptions grouped by student id, newest first."""

    ids = set(student_ids)
    grouped: dict[int, list[Redemption]] = defaultdict(list)
    if not ids:
        return grouped
    stmt = (
        select(Redemption)
        .where(Redemption.student_id.in_(ids))
        .order_by(Redemption.created_at.desc(), Redemption.id.desc())
    )
    for redemption in session.execute(stmt).scalars().all():
        grouped[redemption.student_id].append(redemption)
    return grouped


def find_advantages(session: Session, advantage_ids: Iterable[int]) -> dict[int, Advantage]:
    ids = set(advantage_ids)
    if not ids:
        return {}
    advantages = session.execute(select(Advantage).where(Advantage.id.in_(ids))).scalars().all()
    return {advantage.id: advantage for advantage in advantages}


def find_companies(session: Session, company_ids: Iterable[int]) -> dict[int, Company]:
    ids = {company_id for company_id in company_ids if company_id is not None}
    if not ids:
        return {}
    companies = session.execute(select(Company).where(Company.id.in_(ids))).scalars().all()
    return {company.id: company for company in companies}
