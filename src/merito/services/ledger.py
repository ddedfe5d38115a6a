"""Ledger store: append-only coin transactions and balances."""

from __future__ import annotations

import threading
import weakref
from contextlib import contextmanager
from typing import Iterator, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..models import Transaction, TransactionType, User
from .errors import InsufficientFunds

_locks_guard = threading.Lock()
# Entries vanish once no thread holds or waits on the lock
_sender_locks: weakref.WeakValueDictionary[int, threading.Lock] = weakref.WeakValueDictionary()


@contextmanager
def sender_lock(user_id: int) -> Iterator[None]:
    """Serialize debits of one sender within this process."""

    with _locks_guard:
        lock = _sender_locks.get(user_id)
        if lock is None:
            lock = _sender_locks[user_id] = threading.Lock()
    with lock:
        yield


def get_balance(session: Session, user_id: int) -> int:
    """Return coins received minus coins sent for the user."""

    received_stmt = select(func.coalesce(func.sum(Transaction.amount), 0)).where(
        Transaction.to_user_id == user_id
    )
    sent_stmt = select(func.coalesce(func.sum(Transaction.amount), 0)).where(
        Transaction.from_user_id == user_id
    )
    received = session.execute(received_stmt).scalar_one()
    sent = session.execute(sent_stmt).scalar_one()
    return int(received) - int(sent)


def list_by_user(session: Session, user_id: int) -> Sequence[Transaction]:
    """Transactions the user sent or received, newest first."""

    stmt = (
        select(Transaction)
        .where(or_(Transaction.from_user_id == user_id, Transaction.to_user_id == user_id))
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    return session.execute(stmt).scalars().all()


def list_sent_transfers(session: Session, sender_id: int) -> Sequence[Transaction]:
    """Transfers issued by the sender, in the same order as ``list_by_user``."""

    stmt = (
        select(Transaction)
        .where(
            Transaction.from_user_id == sender_id,
            Transaction.transaction_type == TransactionType.TRANSFER,
        )
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    return session.execute(stmt).scalars().all()


def create(session: Session, **fields) -> Transaction:
    transaction = Transaction(**fields)
    session.add(transaction)
    session.flush()  # Assigns id and created_at
    return transaction


def debit_if_sufficient(
    session: Session,
    *,
    sender_id: int,
    receiver_id: int,
    amount: int,
    reason: str,
) -> Transaction:
    """Record a transfer only if the sender can cover it.

    The sender's user row is locked for the rest of the database transaction,
    so callers must commit or roll back before releasing ``sender_lock``.
    """

    session.execute(select(User.id).where(User.id == sender_id).with_for_update()).scalar_one()

    balance = get_balance(session, sender_id)
    if balance < amount:
        raise InsufficientFunds(f"Insufficient balance ({balance} coins available).")

    return create(
        session,
        from_user_id=sender_id,
        to_user_id=receiver_id,
        amount=amount,
        reason=reason,
        transaction_type=TransactionType.TRANSFER,
    )
