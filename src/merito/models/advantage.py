"""Advantage (reward) model."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Advantage(Base):
    """Reward a company offers in exchange for coins."""

    __tablename__ = "advantages"
    __table_args__ = (CheckConstraint("cost_coins > 0", name="advantages_cost_positive"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="SET NULL"))
    title = Column(String(255), nullable=False)
    description = Column(Text)
    cost_coins = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    company = relationship("Company", back_populates="advantages")
    redemptions = relationship("Redemption", back_populates="advantage")
