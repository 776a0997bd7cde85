"""
Configuration partagée pour tous les tests.

- `client` : client HTTP de test avec la BDD et les services mockés
  (aucune connexion réelle à PostgreSQL).
- `store` + fixtures de services : repositories en mémoire ayant la même
  interface que les repositories SQLAlchemy. Ils reproduisent les contraintes
  d'unicité et les ON DELETE CASCADE de la BDD.
"""

import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from coursehub.database import get_db
from coursehub.dependencies import Services, get_services
from coursehub.errors import ConflictError, NotFoundError
from coursehub.main import app
from coursehub.services.course_service import CourseService
from coursehub.services.enrollment_service import EnrollmentService
from coursehub.services.lecturer_service import LecturerService
from coursehub.services.student_service import StudentService


# ----------------------------------------------------------------
# Client HTTP
# ----------------------------------------------------------------

@pytest.fixture
def mock_services():
    return Services(
        students=MagicMock(),
        lecturers=MagicMock(),
        courses=MagicMock(),
        enrollments=MagicMock(),
    )


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def client(mock_services, mock_db):
    """Client HTTP de test avec la BDD et les services mockés."""
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_services] = lambda: mock_services
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ----------------------------------------------------------------
# Repositories en mémoire
# ----------------------------------------------------------------

class FakeStore:
    """Tables en mémoire partagées par les repositories d'un même test."""

    def __init__(self):
        self.tables = {"students": {}, "lecturers": {}, "courses": {}, "enrollments": {}}


class FakeRepository:
    table = ""
    entity_name = ""
    unique = {}  # nom de contrainte → champs

    def __init__(self, store: FakeStore):
        self.store = store

    @property
    def rows(self) -> dict:
        return self.store.tables[self.table]

    def find_all(self):
        return sorted(self.rows.values(), key=lambda r: r.created_at, reverse=True)

    def find_by_id(self, entity_id):
        return self.rows.get(entity_id)

    def create(self, values: dict):
        self._check_unique(values)
        now = datetime.now(timezone.utc)
        row = SimpleNamespace(id=uuid.uuid4(), created_at=now, updated_at=now, **values)
        self.rows[row.id] = row
        return row

    def update(self, entity_id, changes: dict):
        row = self.rows.get(entity_id)
        if row is None:
            raise NotFoundError(self.entity_name, entity_id)
        self._check_unique({**vars(row), **changes}, exclude=entity_id)
        for field, value in changes.items():
            setattr(row, field, value)
        row.updated_at = datetime.now(timezone.utc)
        return row

    def delete(self, entity_id):
        if self.rows.pop(entity_id, None) is None:
            raise NotFoundError(self.entity_name, entity_id)

    def _where(self, **criteria):
        return [r for r in self.find_all() if all(getattr(r, k) == v for k, v in criteria.items())]

    def _check_unique(self, values: dict, exclude=None):
        for constraint, fields in self.unique.items():
            for row in self.rows.values():
                if row.id != exclude and all(getattr(row, f) == values.get(f) for f in fields):
                    raise ConflictError("Contrainte d'unicité violée.", entity=self.entity_name, constraint=constraint)


class FakeStudentRepository(FakeRepository):
    table = "students"
    entity_name = "Élève"
    unique = {"students_email_key": ("email",), "students_student_number_key": ("student_number",)}

    def find_by_email(self, email):
        return next(iter(self._where(email=email)), None)

    def find_by_student_number(self, student_number):
        return next(iter(self._where(student_number=student_number)), None)

    def delete(self, entity_id):
        super().delete(entity_id)
        _cascade(self.store, student_id=entity_id)


class FakeLecturerRepository(FakeRepository):
    table = "lecturers"
    entity_name = "Enseignant"
    unique = {"lecturers_email_key": ("email",)}

    def find_by_email(self, email):
        return next(iter(self._where(email=email)), None)

    def find_by_department(self, department):
        return self._where(department=department)


class FakeCourseRepository(FakeRepository):
    table = "courses"
    entity_name = "Cours"

    def find_by_id(self, entity_id, for_update=False):
        return self.rows.get(entity_id)

    def find_by_lecturer_id(self, lecturer_id):
        return self._where(lecturer_id=lecturer_id)

    def find_available(self):
        enrollments = self.store.tables["enrollments"].values()
        return [
            c for c in self.find_all()
            if sum(1 for e in enrollments if e.course_id == c.id) < c.max_participants
        ]

    def delete(self, entity_id):
        super().delete(entity_id)
        _cascade(self.store, course_id=entity_id)


class FakeEnrollmentRepository(FakeRepository):
    table = "enrollments"
    entity_name = "Inscription"
    unique = {"uq_enrollments_student_course": ("student_id", "course_id")}

    def find_by_student_id(self, student_id):
        return self._where(student_id=student_id)

    def find_by_course_id(self, course_id):
        return self._where(course_id=course_id)

    def find_by_student_and_course(self, student_id, course_id):
        return next(iter(self._where(student_id=student_id, course_id=course_id)), None)

    def count_by_course_id(self, course_id):
        return len(self._where(course_id=course_id))

    def count_by_student_id(self, student_id):
        return len(self._where(student_id=student_id))


def _cascade(store: FakeStore, **criteria):
    """Reproduit ON DELETE CASCADE sur enrollments."""
    table = store.tables["enrollments"]
    for key in [k for k, e in table.items() if all(getattr(e, f) == v for f, v in criteria.items())]:
        del table[key]


# ----------------------------------------------------------------
# Fixtures de services
# ----------------------------------------------------------------

@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def repos(store):
    return SimpleNamespace(
        students=FakeStudentRepository(store),
        lecturers=FakeLecturerRepository(store),
        courses=FakeCourseRepository(store),
        enrollments=FakeEnrollmentRepository(store),
    )


@pytest.fixture
def student_service(repos):
    return StudentService(repos.students, repos.enrollments)


@pytest.fixture
def lecturer_service(repos):
    return LecturerService(repos.lecturers, repos.courses)


@pytest.fixture
def course_service(repos):
    return CourseService(repos.courses, repos.lecturers, repos.enrollments)


@pytest.fixture
def enrollment_service(repos):
    """Service sans délai minimum de désinscription."""
    return EnrollmentService(repos.enrollments, repos.students, repos.courses, unenroll_lead_days=0)


# --- Données insérées directement dans le store (sans passer par les règles métier) ---

@pytest.fixture
def add_student(repos):
    counter = iter(range(1, 10_000))

    def _add(**kwargs):
        n = next(counter)
        values = {
            "first_name": "Alice",
            "last_name": f"Martin{n}",
            "email": f"alice{n}@uni.be",
            "student_number": f"S{n:05d}",
        }
        values.update(kwargs)
        return repos.students.create(values)

    return _add


@pytest.fixture
def add_lecturer(repos):
    counter = iter(range(1, 10_000))

    def _add(**kwargs):
        n = next(counter)
        values = {
            "first_name": "Paul",
            "last_name": f"Leroy{n}",
            "email": f"paul{n}@uni.be",
            "department": "Informatique",
        }
        values.update(kwargs)
        return repos.lecturers.create(values)

    return _add


@pytest.fixture
def add_course(repos, add_lecturer):
    def _add(**kwargs):
        start = datetime.now(timezone.utc) + timedelta(days=30)
        values = {
            "title": "Bases de données",
            "description": None,
            "max_participants": 20,
            "start_date": start,
            "end_date": start + timedelta(days=90),
        }
        values.update(kwargs)
        if "lecturer_id" not in values:
            values["lecturer_id"] = add_lecturer().id
        return repos.courses.create(values)

    return _add
