"""
Service métier pour la gestion des enseignants.
"""

import uuid
import logging
from typing import Optional

from coursehub.errors import ConflictError, NotFoundError
from coursehub.models.lecturer import Lecturer
from coursehub.repositories.course_repository import CourseRepository
from coursehub.repositories.lecturer_repository import LecturerRepository
from coursehub.schemas.lecturer import LecturerCreate, LecturerUpdate
from coursehub.services.rules import require_fields, validate_email

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name", "email", "department")


class LecturerService:
    def __init__(self, lecturers: LecturerRepository, courses: CourseRepository) -> None:
        self.lecturers = lecturers
        self.courses = courses

    def get_all_lecturers(self) -> list[Lecturer]:
        return self.lecturers.find_all()

    def get_lecturer_by_id(self, lecturer_id: uuid.UUID) -> Optional[Lecturer]:
        return self.lecturers.find_by_id(lecturer_id)

    def get_lecturers_by_department(self, department: str) -> list[Lecturer]:
        return self.lecturers.find_by_department(department)

    def create_lecturer(self, data: LecturerCreate) -> Lecturer:
        values = data.model_dump()
        require_fields(values, REQUIRED_FIELDS)
        validate_email(values["email"])

        if self.lecturers.find_by_email(values["email"]) is not None:
            raise _duplicate_email()

        lecturer = self.lecturers.create(values)
        logger.info("Enseignant créé : %s %s (%s)", lecturer.first_name, lecturer.last_name, lecturer.id)
        return lecturer

    def update_lecturer(self, lecturer_id: uuid.UUID, data: LecturerUpdate) -> Lecturer:
        existing = self.lecturers.find_by_id(lecturer_id)
        if existing is None:
            raise NotFoundError("Enseignant", lecturer_id)

        changes = data.model_dump(exclude_unset=True)
        require_fields(changes, [f for f in REQUIRED_FIELDS if f in changes])

        if "email" in changes:
            validate_email(changes["email"])
            if changes["email"] != existing.email:
                other = self.lecturers.find_by_email(changes["email"])
                if other is not None and other.id != lecturer_id:
                    raise _duplicate_email()

        return self.lecturers.update(lecturer_id, changes)

    def delete_lecturer(self, lecturer_id: uuid.UUID) -> None:
        """
        Supprime un enseignant.
        Bloqué tant qu'au moins un cours le référence : la vérification est faite ici,
        sans compter sur la contrainte de clé étrangère.
        """
        existing = self.lecturers.find_by_id(lecturer_id)
        if existing is None:
            raise NotFoundError("Enseignant", lecturer_id)

        courses = self.courses.find_by_lecturer_id(lecturer_id)
        if courses:
            raise ConflictError(
                f"Impossible de supprimer cet enseignant : il est responsable de {len(courses)} cours.",
                entity="Enseignant",
                entity_id=lecturer_id,
                constraint="courses_lecturer_id_fkey",
            )

        self.lecturers.delete(lecturer_id)
        logger.info("Enseignant supprimé : %s", lecturer_id)


def _duplicate_email() -> ConflictError:
    return ConflictError(
        "Un enseignant avec cet email existe déjà.", entity="Enseignant", constraint="lecturers_email_key"
    )
