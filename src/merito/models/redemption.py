"""Redemption domain model."""

import enum

from sqlalchemy import Column, DateTime, Enum as SAEnum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class RedemptionStatus(str, enum.Enum):
    """Possible redemption states."""

    PENDING = "pending"
    USED = "used"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class Redemption(Base):
    """A student's claim on an advantage, identified by a redemption code."""

    __tablename__ = "redemptions"
    __table_args__ = (UniqueConstraint("redemption_code", name="redemptions_code_unique"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="RESTRICT"), nullable=False, index=True)
    advantage_id = Column(Integer, ForeignKey("advantages.id", ondelete="RESTRICT"), nullable=False)
    redemption_code = Column(String(64), nullable=False)
    status = Column(
        SAEnum(
            RedemptionStatus,
            name="redemption_status",
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
        default=RedemptionStatus.PENDING,
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)
    used_at = Column(DateTime)

    student = relationship("Student", back_populates="redemptions")
    advantage = relationship("Advantage", back_populates="redemptions")
