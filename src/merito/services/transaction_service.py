"""Domain logic for coin balances and transfers."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from sqlalchemy.orm import Session

from ..models import Transaction, User, UserRole
from . import directory, ledger
from .errors import Forbidden, NotFound, ValidationError
from .notifications import Notification

logger = logging.getLogger(__name__)

Dispatch = Callable[[Notification], None]

MAX_REASON_LENGTH = 500


def _ensure_user(session: Session, user_id: int) -> User:
    user = directory.find_user(session, user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")
    return user


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def get_balance(session: Session, *, user_id: int) -> int:
    """Return the caller's current coin balance."""

    return ledger.get_balance(session, user_id)


def list_transactions(session: Session, *, user_id: int) -> Sequence[Transaction]:
    """Return every transaction the caller sent or received."""

    return ledger.list_by_user(session, user_id)


def transfer(
    session: Session,
    *,
    sender_id: int,
    recipient_email: Optional[str],
    amount: Optional[int],
    reason: Optional[str],
    dispatch: Optional[Dispatch] = None,
) -> Transaction:
    """Move coins from a professor to a student.

    The balance check, insert and commit run while the sender is locked, so
    concurrent transfers from one professor can never overdraw. The recipient
    notification is handed to ``dispatch`` after the commit and its failures
    are only logged.
    """

    if _is_blank(recipient_email) or amount is None or _is_blank(reason):
        raise ValidationError("Recipient email, amount and reason are required.")
    if len(reason.strip()) > MAX_REASON_LENGTH:
        raise ValidationError(f"Reason must be at most {MAX_REASON_LENGTH} characters.")

    if amount <= 0:
        raise ValidationError("Amount must be positive.")

    sender = _ensure_user(session, sender_id)
    if sender.role != UserRole.PROFESSOR:
        raise Forbidden("Only professors can send coins.")

    recipient = directory.find_user_by_email(session, recipient_email)
    if recipient is None or not recipient.is_active:
        raise NotFound("Recipient user not found.")
    if recipient.role != UserRole.STUDENT:
        raise ValidationError("Coins can only be sent to students.")

    with ledger.sender_lock(sender.id):
        try:
            transaction = ledger.debit_if_sufficient(
                session,
                sender_id=sender.id,
                receiver_id=recipient.id,
                amount=amount,
                reason=reason.strip(),
            )
            session.commit()
        except Exception:
            session.rollback()
            raise

    logger.info(
        "transfer %s: %s coins from user %s to user %s",
        transaction.id,
        amount,
        sender.id,
        recipient.id,
    )

    if dispatch is not None:
        notification = Notification(
            to=recipient.email,
            subject="You received coins in the Academic Merit System",
            body=f"You received {amount} coins from professor {sender.email}.\n\nReason: {reason.strip()}",
        )
        try:
            dispatch(notification)
        except Exception:
            logger.exception("could not schedule notification for transfer %s", transaction.id)

    return transaction
