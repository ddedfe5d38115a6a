"""Semester coin allowance for professors."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..models import Transaction, TransactionType, User, UserRole
from ..utils.datetime import semester_bucket
from . import ledger


def run_semester_allocation(
    session: Session,
    *,
    current_time: datetime | None = None,
    allowance: int | None = None,
) -> dict[str, int]:
    """Credit the semester allowance to every active professor once.

    Unspent coins from earlier semesters are kept. Returns summary statistics
    useful for logging/testing.
    """

    now_utc = current_time.astimezone(timezone.utc) if current_time else datetime.now(timezone.utc)
    bucket = semester_bucket(now_utc)
    amount = allowance if allowance is not None else get_settings().semester_allowance

    summary = {
        "professors_processed": 0,
        "professors_credited": 0,
        "coins_issued": 0,
    }

    professor_ids = session.execute(
        select(User.id).where(User.role == UserRole.PROFESSOR, User.is_active.is_(True)).order_by(User.id)
    ).scalars().all()

    for professor_id in professor_ids:
        summary["professors_processed"] += 1

        already_credited_stmt = (
            select(Transaction.id)
            .where(
                Transaction.to_user_id == professor_id,
                Transaction.transaction_type == TransactionType.ALLOCATION,
                Transaction.semester_bucket == bucket,
            )
            .limit(1)
        )
        if session.execute(already_credited_stmt).scalar_one_or_none() is not None:
            continue

        ledger.create(
            session,
            from_user_id=None,
            to_user_id=professor_id,
            amount=amount,
            reason=f"Semester allowance {bucket.isoformat()}",
            transaction_type=TransactionType.ALLOCATION,
            semester_bucket=bucket,
        )
        summary["professors_credited"] += 1
        summary["coins_issued"] += amount

    return summary
