"""
Tests unitaires pour les repositories SQLAlchemy (session mockée).
"""

import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from coursehub.errors import ConflictError, NotFoundError, StoreError
from coursehub.models.student import Student
from coursehub.repositories.course_repository import CourseRepository
from coursehub.repositories.enrollment_repository import EnrollmentRepository
from coursehub.repositories.student_repository import StudentRepository


# --- Helpers ---

def make_db_mock(entity=None, scalar_value=None, rows=None):
    db = MagicMock()
    db.get.return_value = entity
    db.execute.return_value.scalar.return_value = scalar_value
    db.execute.return_value.scalars.return_value.all.return_value = rows or []
    return db


def make_integrity_error(constraint_name):
    orig = MagicMock()
    orig.diag.constraint_name = constraint_name
    return IntegrityError("INSERT ...", {}, orig)


# --- Lecture ---

def test_find_by_id_retourne_none_si_absent():
    db = make_db_mock(entity=None)
    assert StudentRepository(db).find_by_id(uuid.uuid4()) is None


def test_find_all_retourne_une_liste():
    s1, s2 = MagicMock(), MagicMock()
    db = make_db_mock(rows=[s1, s2])
    assert StudentRepository(db).find_all() == [s1, s2]


def test_find_by_email():
    student = MagicMock()
    db = make_db_mock(scalar_value=student)
    assert StudentRepository(db).find_by_email("a@b.co") is student
    db.execute.assert_called_once()


def test_count_by_course_id_zero_si_null():
    db = make_db_mock(scalar_value=None)
    assert EnrollmentRepository(db).count_by_course_id(uuid.uuid4()) == 0


def test_count_by_course_id():
    db = make_db_mock(scalar_value=4)
    assert EnrollmentRepository(db).count_by_course_id(uuid.uuid4()) == 4


def test_course_find_by_id_verrouille_la_ligne():
    course = MagicMock()
    db = make_db_mock(scalar_value=course)
    assert CourseRepository(db).find_by_id(uuid.uuid4(), for_update=True) is course
    stmt = db.execute.call_args[0][0]
    assert stmt._for_update_arg is not None
    db.get.assert_not_called()


def test_lecture_erreur_bdd_devient_store_error():
    db = MagicMock()
    db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
    with pytest.raises(StoreError, match="connection refused"):
        StudentRepository(db).find_by_email("a@b.co")


# --- Écriture ---

def test_create_ajoute_commit_et_refresh():
    db = make_db_mock()
    student = StudentRepository(db).create({
        "first_name": "Alice",
        "last_name": "Bernard",
        "email": "alice@uni.be",
        "student_number": "S1",
    })
    assert isinstance(student, Student)
    db.add.assert_called_once_with(student)
    db.commit.assert_called_once()
    db.refresh.assert_called_once_with(student)


def test_create_violation_unicite_devient_conflict():
    db = make_db_mock()
    db.commit.side_effect = make_integrity_error("students_email_key")

    with pytest.raises(ConflictError, match="email existe déjà") as exc:
        StudentRepository(db).create({"first_name": "A", "last_name": "B", "email": "a@b.co", "student_number": "1"})

    assert exc.value.constraint == "students_email_key"
    db.rollback.assert_called_once()


def test_create_inscription_doublon_concurrent_devient_conflict():
    db = make_db_mock()
    db.commit.side_effect = make_integrity_error("uq_enrollments_student_course")

    with pytest.raises(ConflictError, match="déjà inscrit"):
        EnrollmentRepository(db).create({"student_id": uuid.uuid4(), "course_id": uuid.uuid4()})


def test_commit_erreur_bdd_devient_store_error():
    db = make_db_mock()
    db.commit.side_effect = OperationalError("INSERT", {}, Exception("server closed the connection"))

    with pytest.raises(StoreError, match="server closed the connection"):
        StudentRepository(db).create({"first_name": "A", "last_name": "B", "email": "a@b.co", "student_number": "1"})
    db.rollback.assert_called_once()


def test_update_fusion_partielle():
    student = MagicMock()
    student.first_name = "Alice"
    student.email = "alice@uni.be"
    db = make_db_mock(entity=student)

    result = StudentRepository(db).update(uuid.uuid4(), {"first_name": "Alicia"})

    assert result is student
    assert student.first_name == "Alicia"
    assert student.email == "alice@uni.be"
    db.commit.assert_called_once()


def test_update_inexistant():
    db = make_db_mock(entity=None)
    with pytest.raises(NotFoundError):
        StudentRepository(db).update(uuid.uuid4(), {"first_name": "X"})
    db.commit.assert_not_called()


def test_delete():
    student = MagicMock()
    db = make_db_mock(entity=student)
    StudentRepository(db).delete(uuid.uuid4())
    db.delete.assert_called_once_with(student)
    db.commit.assert_called_once()


def test_delete_inexistant():
    db = make_db_mock(entity=None)
    with pytest.raises(NotFoundError):
        StudentRepository(db).delete(uuid.uuid4())
    db.delete.assert_not_called()
