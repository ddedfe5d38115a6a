"""Service layer exports."""

from . import (
	allocation_service,
	directory,
	ledger,
	notifications,
	report_service,
	student_service,
	transaction_service,
)

__all__ = [
	"allocation_service",
	"directory",
	"ledger",
	"notifications",
	"report_service",
	"student_service",
	"transaction_service",
]
