"""Pydantic schemas for balance and transfer endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from ..models import TransactionType


class BalanceRead(BaseModel):
    """Current coin balance of the caller."""

    user_id: int
    balance: int


class TransferCreate(BaseModel):
    """Request body for sending coins to a student.

    Fields are optional here so the service can report missing values with
    its own validation error.
    """

    to_email: Optional[str] = Field(None, description="Email of the receiving student.")
    amount: Optional[StrictInt] = Field(None, description="Coins to transfer.")
    reason: Optional[str] = None


class TransactionSummary(BaseModel):
    id: int
    amount: int
    reason: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionRead(BaseModel):
    """Ledger entry as seen by one of its parties."""

    id: int
    from_user_id: Optional[int]
    to_user_id: Optional[int]
    amount: int
    reason: str
    transaction_type: TransactionType
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransferReceipt(BaseModel):
    """Response returned after a successful transfer."""

    message: str
    transaction: TransactionSummary
