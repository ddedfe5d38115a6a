"""
Tests for student registration and profile management.

Tests cover:
1. Registration with CPF validation and uniqueness checks
2. Lookups by id, CPF and institution
3. Profile updates
4. Logical deletion
"""

import bcrypt
import pytest

from merito.models import User, UserRole
from merito.services import student_service
from merito.services.errors import NotFound, ValidationError

from conftest import VALID_CPFS


def _register(session, institution, email="ana@example.edu", cpf="529.982.247-25", **overrides):
    data = dict(
        name="Ana Souza",
        email=email,
        password="s3cret-pass",
        cpf=cpf,
        institution_id=institution.id,
        course="Software Engineering",
    )
    data.update(overrides)
    return student_service.register_student(session, **data)


class TestRegistration:
    def test_register_creates_user_and_profile(self, session, factory):
        institution = factory.institution()

        student = _register(session, institution, email="Ana@Example.edu")
        session.commit()

        assert student.cpf == "52998224725"
        assert student.email == "ana@example.edu"
        assert student.institution_name == "PUC Minas"
        user = session.get(User, student.user_id)
        assert user.role == UserRole.STUDENT
        assert user.is_active is True
        assert bcrypt.checkpw(b"s3cret-pass", user.password_hash.encode("utf-8"))

    @pytest.mark.parametrize("cpf", ["123.456.789-00", "11111111111", "1234"])
    def test_invalid_cpf_rejected(self, session, factory, cpf):
        institution = factory.institution()

        with pytest.raises(ValidationError):
            _register(session, institution, cpf=cpf)

    def test_duplicate_email_rejected(self, session, factory):
        institution = factory.institution()
        _register(session, institution)
        session.commit()

        with pytest.raises(ValidationError, match="Email"):
            _register(session, institution, cpf=VALID_CPFS[1])

    def test_duplicate_cpf_rejected(self, session, factory):
        institution = factory.institution()
        _register(session, institution)
        session.commit()

        with pytest.raises(ValidationError, match="CPF"):
            _register(session, institution, email="other@example.edu", cpf="52998224725")

    def test_unknown_institution(self, session, factory):
        institution = factory.institution()

        with pytest.raises(NotFound):
            _register(session, institution, institution_id=institution.id + 100)


class TestLookups:
    def test_get_by_id_and_cpf(self, session, factory):
        student = factory.student("ana@example.edu", VALID_CPFS[0])

        assert student_service.get_student(session, student_id=student.id).id == student.id
        assert student_service.get_student_by_cpf(session, cpf="529.982.247-25").id == student.id

    def test_get_by_cpf_validates_format(self, session):
        with pytest.raises(ValidationError):
            student_service.get_student_by_cpf(session, cpf="000")

    def test_missing_student(self, session):
        with pytest.raises(NotFound):
            student_service.get_student(session, student_id=1)
        with pytest.raises(NotFound):
            student_service.get_student_by_cpf(session, cpf=VALID_CPFS[2])

    def test_list_by_institution(self, session, factory):
        puc = factory.institution("PUC Minas")
        ufmg = factory.institution("UFMG")
        factory.student("ana@example.edu", VALID_CPFS[0], name="Ana", institution=puc)
        factory.student("bruno@example.edu", VALID_CPFS[1], name="Bruno", institution=ufmg)
        factory.student("carla@example.edu", VALID_CPFS[2], name="Carla", institution=puc)

        students = student_service.list_students_by_institution(session, institution_id=puc.id)

        assert [student.name for student in students] == ["Ana", "Carla"]
        assert len(student_service.list_students(session)) == 3


class TestUpdateAndDelete:
    def test_update_profile_fields(self, session, factory):
        student = factory.student("ana@example.edu", VALID_CPFS[0])

        updated = student_service.update_student(
            session,
            student_id=student.id,
            changes={"course": "Computer Science", "address": "Rua A, 1", "email": "ignored@example.edu"},
        )

        assert updated.course == "Computer Science"
        assert updated.address == "Rua A, 1"
        assert updated.email == "ana@example.edu"

    def test_update_with_no_fields(self, session, factory):
        student = factory.student("ana@example.edu", VALID_CPFS[0])

        with pytest.raises(ValidationError):
            student_service.update_student(session, student_id=student.id, changes={})

    def test_update_rejects_cpf_of_another_student(self, session, factory):
        factory.student("ana@example.edu", VALID_CPFS[0])
        bruno = factory.student("bruno@example.edu", VALID_CPFS[1])

        with pytest.raises(ValidationError, match="CPF"):
            student_service.update_student(session, student_id=bruno.id, changes={"cpf": VALID_CPFS[0]})

    def test_update_keeps_own_cpf(self, session, factory):
        ana = factory.student("ana@example.edu", VALID_CPFS[0])

        updated = student_service.update_student(
            session, student_id=ana.id, changes={"cpf": "529.982.247-25", "name": "Ana S."}
        )

        assert updated.cpf == VALID_CPFS[0]
        assert updated.name == "Ana S."

    def test_update_rejects_empty_name(self, session, factory):
        ana = factory.student("ana@example.edu", VALID_CPFS[0])

        with pytest.raises(ValidationError):
            student_service.update_student(session, student_id=ana.id, changes={"name": " "})

    def test_delete_is_logical(self, session, factory):
        ana = factory.student("ana@example.edu", VALID_CPFS[0])

        student_service.delete_student(session, student_id=ana.id)
        session.commit()

        with pytest.raises(NotFound):
            student_service.get_student(session, student_id=ana.id)
        assert student_service.list_students(session) == []
        assert session.get(User, ana.user_id).is_active is False
