"""Tests for the semester allowance."""

from datetime import datetime, timezone

from merito.core.database import SessionLocal
from merito.jobs import run_allocation_once
from merito.models import Transaction, TransactionType, UserRole
from merito.services import allocation_service, ledger

from conftest import VALID_CPFS


def _allocations(session):
    return session.query(Transaction).filter(Transaction.transaction_type == TransactionType.ALLOCATION).all()


class TestSemesterAllocation:
    def test_credits_each_active_professor(self, session, factory):
        first = factory.professor("first@example.edu")
        second = factory.professor("second@example.edu")
        factory.student("ana@example.edu", VALID_CPFS[0])
        now = datetime(2025, 3, 10, tzinfo=timezone.utc)

        summary = allocation_service.run_semester_allocation(session, current_time=now, allowance=1000)
        session.commit()

        assert summary == {"professors_processed": 2, "professors_credited": 2, "coins_issued": 2000}
        assert ledger.get_balance(session, first.id) == 1000
        assert ledger.get_balance(session, second.id) == 1000
        assert {tx.semester_bucket.isoformat() for tx in _allocations(session)} == {"2025-01-01"}

    def test_rerun_in_same_semester_is_a_noop(self, session, factory):
        professor = factory.professor()
        march = datetime(2025, 3, 10, tzinfo=timezone.utc)
        june = datetime(2025, 6, 30, tzinfo=timezone.utc)

        allocation_service.run_semester_allocation(session, current_time=march, allowance=1000)
        session.commit()
        summary = allocation_service.run_semester_allocation(session, current_time=june, allowance=1000)
        session.commit()

        assert summary["professors_credited"] == 0
        assert ledger.get_balance(session, professor.id) == 1000

    def test_balance_accumulates_across_semesters(self, session, factory):
        professor = factory.professor()

        allocation_service.run_semester_allocation(
            session, current_time=datetime(2025, 3, 1, tzinfo=timezone.utc), allowance=1000
        )
        allocation_service.run_semester_allocation(
            session, current_time=datetime(2025, 8, 1, tzinfo=timezone.utc), allowance=1000
        )
        session.commit()

        assert ledger.get_balance(session, professor.id) == 2000
        assert len(_allocations(session)) == 2

    def test_inactive_professors_are_skipped(self, session, factory):
        factory.user("retired@example.edu", role=UserRole.PROFESSOR, is_active=False)

        summary = allocation_service.run_semester_allocation(session, allowance=1000)

        assert summary["professors_processed"] == 0
        assert _allocations(session) == []

    def test_run_allocation_once_commits_in_its_own_session(self, session, factory):
        professor = factory.professor()
        when = datetime(2025, 9, 1, tzinfo=timezone.utc)

        summary = run_allocation_once(current_time=when)

        assert summary["professors_credited"] == 1
        check = SessionLocal()
        try:
            assert ledger.get_balance(check, professor.id) == summary["coins_issued"]
            (allocation,) = _allocations(check)
            assert allocation.semester_bucket.isoformat() == "2025-07-01"
        finally:
            check.close()
