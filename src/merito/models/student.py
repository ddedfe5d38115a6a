"""Student profile model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Student(Base):
    """Profile attached one-to-one to a user holding the student role."""

    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint("user_id", name="students_user_id_unique"),
        UniqueConstraint("cpf", name="students_cpf_unique"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    cpf = Column(String(11), nullable=False)
    rg = Column(String(32))
    address = Column(String(255))
    institution_id = Column(Integer, ForeignKey("institutions.id", ondelete="RESTRICT"), nullable=False)
    course = Column(String(255))
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="student")
    institution = relationship("Institution", back_populates="students")
    redemptions = relationship("Redemption", back_populates="student")

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def institution_name(self):
        return self.institution.name if self.institution is not None else None
