"""Public schema exports."""

from .report import (
	AdvantageSummary,
	CompanySummary,
	RedemptionReport,
	StudentProfileSummary,
	StudentRedemptionReport,
)
from .student import StudentCreate, StudentRead, StudentUpdate
from .transaction import BalanceRead, TransactionRead, TransactionSummary, TransferCreate, TransferReceipt

__all__ = [
	"AdvantageSummary",
	"BalanceRead",
	"CompanySummary",
	"RedemptionReport",
	"StudentCreate",
	"StudentProfileSummary",
	"StudentRead",
	"StudentRedemptionReport",
	"StudentUpdate",
	"TransactionRead",
	"TransactionSummary",
	"TransferCreate",
	"TransferReceipt",
]
