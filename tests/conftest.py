"""Shared fixtures: a throwaway SQLite database and row factories."""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="merito-tests-")
os.environ["MERITO_DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'merito.db')}"
os.environ["MERITO_SCHEDULER_ENABLED"] = "false"
os.environ["MERITO_PASSWORD_HASH_ROUNDS"] = "4"
os.environ["MERITO_SMTP_HOST"] = ""

import pytest

from merito import models
from merito.core.database import Base, SessionLocal, engine
from merito.models import TransactionType, UserRole
from merito.services import ledger

VALID_CPFS = ("52998224725", "11144477735", "39053344705")


class Factory:
    """Creates committed rows for tests."""

    def __init__(self, session):
        self.session = session

    def _save(self, obj):
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def user(self, email, role=UserRole.STUDENT, is_active=True):
        return self._save(models.User(email=email, password_hash="x", role=role, is_active=is_active))

    def professor(self, email="prof@example.edu", coins=0):
        professor = self.user(email, role=UserRole.PROFESSOR)
        if coins:
            self.fund(professor, coins)
        return professor

    def institution(self, name="PUC Minas"):
        return self._save(models.Institution(name=name))

    def student(self, email, cpf, name="Ana Souza", institution=None, course="Software Engineering"):
        institution = institution or self.institution(name=f"Institution for {email}")
        user = self.user(email, role=UserRole.STUDENT)
        return self._save(
            models.Student(
                user=user,
                name=name,
                cpf=cpf,
                institution_id=institution.id,
                course=course,
            )
        )

    def company(self, name="Livraria Central"):
        return self._save(models.Company(name=name))

    def advantage(self, company=None, title="Book voucher", cost_coins=50, company_id=None):
        return self._save(
            models.Advantage(
                company_id=company.id if company is not None else company_id,
                title=title,
                cost_coins=cost_coins,
            )
        )

    def redemption(self, student, advantage_id, code):
        return self._save(
            models.Redemption(student_id=student.id, advantage_id=advantage_id, redemption_code=code)
        )

    def fund(self, user, amount):
        transaction = ledger.create(
            self.session,
            from_user_id=None,
            to_user_id=user.id,
            amount=amount,
            reason="initial allowance",
            transaction_type=TransactionType.ALLOCATION,
        )
        self.session.commit()
        return transaction


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def session(database):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def factory(session):
    return Factory(session)
