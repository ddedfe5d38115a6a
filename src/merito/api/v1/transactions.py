"""Coin balance, history and transfer endpoints."""

from __future__ import annotations

from functools import partial
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...models import User
from ...schemas import (
    BalanceRead,
    StudentRedemptionReport,
    TransactionRead,
    TransactionSummary,
    TransferCreate,
    TransferReceipt,
)
from ...services import notifications, report_service, transaction_service
from ...services.errors import ServiceError
from ..deps import get_current_user, get_notifier

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("/balance", response_model=BalanceRead, summary="Current coin balance")
def get_balance(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> BalanceRead:
    """Return the caller's balance: coins received minus coins sent."""

    balance = transaction_service.get_balance(db, user_id=current_user.id)
    return BalanceRead(user_id=current_user.id, balance=balance)


@router.get("", response_model=List[TransactionRead], summary="Transaction history")
def list_transactions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> List[TransactionRead]:
    """Return every transaction the caller sent or received, newest first."""

    return list(transaction_service.list_transactions(db, user_id=current_user.id))


@router.post(
    "/transfer",
    response_model=TransferReceipt,
    status_code=status.HTTP_201_CREATED,
    summary="Send coins to a student",
    responses={
        201: {
            "description": "Coins sent",
            "content": {
                "application/json": {
                    "example": {
                        "message": "Coins sent successfully",
                        "transaction": {
                            "id": 42,
                            "amount": 30,
                            "reason": "Great participation in the algorithms seminar",
                            "created_at": "2025-03-12T10:15:30",
                        },
                    }
                }
            },
        },
        400: {"description": "Invalid input or insufficient balance"},
        403: {"description": "Caller is not a professor"},
        404: {"description": "Sender or recipient not found"},
    },
)
def transfer_coins(
    payload: TransferCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    notifier: notifications.Notifier = Depends(get_notifier),
    db: Session = Depends(get_db),
) -> TransferReceipt:
    """Transfer coins from the calling professor to a student.

    Example request body::

        {
            "to_email": "ana.souza@example.edu",
            "amount": 30,
            "reason": "Great participation in the algorithms seminar"
        }
    """

    try:
        transaction = transaction_service.transfer(
            db,
            sender_id=current_user.id,
            recipient_email=payload.to_email,
            amount=payload.amount,
            reason=payload.reason,
            dispatch=partial(background_tasks.add_task, notifications.deliver, notifier),
        )
    except ServiceError as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc

    return TransferReceipt(
        message="Coins sent successfully",
        transaction=TransactionSummary.model_validate(transaction),
    )


@router.get(
    "/students-redemptions",
    response_model=List[StudentRedemptionReport],
    response_model_by_alias=True,
    summary="Students rewarded by the calling professor",
    responses={403: {"description": "Caller is not a professor"}},
)
def students_with_redemptions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> List[StudentRedemptionReport]:
    """List students the professor sent coins to, with what they redeemed."""

    try:
        return report_service.students_with_redemptions(db, professor_id=current_user.id)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
