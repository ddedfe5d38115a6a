"""SQLAlchemy models for Merito."""

from .advantage import Advantage
from .company import Company
from .institution import Institution
from .redemption import Redemption, RedemptionStatus
from .student import Student
from .transaction import Transaction, TransactionType
from .user import User, UserRole

__all__ = [
    "Advantage",
    "Company",
    "Institution",
    "Redemption",
    "RedemptionStatus",
    "Student",
    "Transaction",
    "TransactionType",
    "User",
    "UserRole",
]
