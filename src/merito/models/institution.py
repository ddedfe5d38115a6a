"""Institution model."""

from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.database import Base


class Institution(Base):
    """Teaching institution a student is enrolled at."""

    __tablename__ = "institutions"
    __table_args__ = (UniqueConstraint("name", name="institutions_name_unique"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    students = relationship("Student", back_populates="institution")
