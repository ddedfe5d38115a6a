"""Coin transaction model: the append-only ledger."""

import enum

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum as SAEnum, ForeignKey, Integer, String

from ..core.database import Base
from ..utils.datetime import utcnow


class TransactionType(str, enum.Enum):
    """Ledger entry classification."""

    TRANSFER = "transfer"
    REDEMPTION = "redemption"
    ALLOCATION = "allocation"


class Transaction(Base):
    """Immutable coin movement between users.

    The amount is always positive; direction comes from the user columns. A
    user's balance is what they received minus what they sent.
    """

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="transactions_amount_positive"),
        CheckConstraint(
            "transaction_type <> 'transfer' OR (from_user_id IS NOT NULL AND to_user_id IS NOT NULL)",
            name="transactions_transfer_parties",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    from_user_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), index=True)
    to_user_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), index=True)
    amount = Column(Integer, nullable=False)
    reason = Column(String(500), nullable=False)
    transaction_type = Column(
        SAEnum(
            TransactionType,
            name="transaction_type",
            values_callable=lambda types: [kind.value for kind in types],
        ),
        nullable=False,
    )
    # Set on allocation entries only
    semester_bucket = Column(Date)
    created_at = Column(DateTime, default=utcnow, nullable=False)
