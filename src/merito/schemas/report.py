"""Schemas for the professor redemption report."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models import RedemptionStatus
from .transaction import TransactionSummary


class StudentProfileSummary(BaseModel):
    id: int
    name: str
    email: str
    course: Optional[str]
    institution_name: Optional[str]


class AdvantageSummary(BaseModel):
    id: int
    title: str
    cost_coins: int


class CompanySummary(BaseModel):
    id: int
    name: str


class RedemptionReport(BaseModel):
    """A redemption enriched with its advantage and company."""

    id: int
    redemption_code: str
    status: RedemptionStatus
    created_at: datetime
    advantage: AdvantageSummary
    company: Optional[CompanySummary]


class StudentRedemptionReport(BaseModel):
    """One rewarded student with the coins received and what they redeemed."""

    student: StudentProfileSummary
    transactions: List[TransactionSummary]
    redemptions: List[RedemptionReport]
    total_received: int = Field(serialization_alias="totalReceived")
