"""Professor-facing report of rewarded students and their redemptions."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from sqlalchemy.orm import Session

from ..models import Advantage, Company, Redemption, Student, Transaction, User, UserRole
from . import directory, ledger
from .errors import Forbidden

logger = logging.getLogger(__name__)


def _transaction_summary(transaction: Transaction) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "amount": transaction.amount,
        "reason": transaction.reason,
        "created_at": transaction.created_at,
    }


def _redemption_entry(
    redemption: Redemption,
    advantages: dict[int, Advantage],
    companies: dict[int, Company],
) -> Optional[dict[str, Any]]:
    advantage = advantages.get(redemption.advantage_id)
    if advantage is None:
        return None

    company = companies.get(advantage.company_id)
    return {
        "id": redemption.id,
        "redemption_code": redemption.redemption_code,
        "status": redemption.status,
        "created_at": redemption.created_at,
        "advantage": {
            "id": advantage.id,
            "title": advantage.title,
            "cost_coins": advantage.cost_coins,
        },
        "company": {"id": company.id, "name": company.name} if company is not None else None,
    }


def _build_entry(
    user: Optional[User],
    student: Optional[Student],
    transactions: Sequence[Transaction],
    redemptions: Sequence[Redemption],
    advantages: dict[int, Advantage],
    companies: dict[int, Company],
) -> Optional[dict[str, Any]]:
    if user is None or not user.is_active or user.role != UserRole.STUDENT or student is None:
        return None

    enriched = []
    for redemption in redemptions:
        entry = _redemption_entry(redemption, advantages, companies)
        if entry is not None:
            enriched.append(entry)

    return {
        "student": {
            "id": student.id,
            "name": student.name,
            "email": user.email,
            "course": student.course,
            "institution_name": student.institution_name,
        },
        "transactions": [_transaction_summary(tx) for tx in transactions],
        "redemptions": enriched,
        "total_received": sum(tx.amount for tx in transactions),
    }


def students_with_redemptions(session: Session, *, professor_id: int) -> list[dict[str, Any]]:
    """Join a professor's transfers with each recipient's profile and redemptions.

    Recipients are reported in order of first appearance in the professor's
    transfer history. Recipients without an active student user or a profile
    are left out. Redemptions of missing advantages are dropped and a missing
    company is reported as ``None``.
    """

    professor = directory.find_user(session, professor_id)
    if professor is None or professor.role != UserRole.PROFESSOR:
        raise Forbidden("Only professors can view this information.")

    sent = ledger.list_sent_transfers(session, professor.id)

    by_recipient: dict[int, list[Transaction]] = {}
    for transaction in sent:
        by_recipient.setdefault(transaction.to_user_id, []).append(transaction)
    recipient_ids = list(by_recipient)

    users = directory.find_users(session, recipient_ids)
    students = directory.find_students_by_user_ids(session, recipient_ids)
    redemptions = directory.find_redemptions_by_student_ids(
        session, [student.id for student in students.values()]
    )
    advantages = directory.find_advantages(
        session,
        [redemption.advantage_id for group in redemptions.values() for redemption in group],
    )
    companies = directory.find_companies(
        session, [advantage.company_id for advantage in advantages.values()]
    )

    report = []
    for user_id in recipient_ids:
        student = students.get(user_id)
        try:
            entry = _build_entry(
                users.get(user_id),
                student,
                by_recipient[user_id],
                redemptions.get(student.id, []) if student is not None else [],
                advantages,
                companies,
            )
        except Exception:
            logger.exception("omitting recipient %s from redemption report", user_id)
            continue
        if entry is not None:
            report.append(entry)
    return report
