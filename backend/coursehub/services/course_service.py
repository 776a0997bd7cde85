"""
Service métier pour la gestion des cours.
"""

import uuid
import logging
from typing import Optional

from coursehub.config import DeletePolicy
from coursehub.errors import ConflictError, NotFoundError, ValidationError
from coursehub.models.course import Course
from coursehub.repositories.course_repository import CourseRepository
from coursehub.repositories.enrollment_repository import EnrollmentRepository
from coursehub.repositories.lecturer_repository import LecturerRepository
from coursehub.schemas.course import CourseCreate, CourseUpdate
from coursehub.services.rules import (
    as_utc,
    require_fields,
    utcnow,
    validate_date_window,
    validate_not_in_past,
    validate_positive,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "lecturer_id", "max_participants", "start_date", "end_date")


class CourseService:
    def __init__(
        self,
        courses: CourseRepository,
        lecturers: LecturerRepository,
        enrollments: EnrollmentRepository,
        delete_policy: DeletePolicy = DeletePolicy.CASCADE,
    ) -> None:
        self.courses = courses
        self.lecturers = lecturers
        self.enrollments = enrollments
        self.delete_policy = delete_policy

    def get_all_courses(self) -> list[Course]:
        return self.courses.find_all()

    def get_course_by_id(self, course_id: uuid.UUID) -> Optional[Course]:
        return self.courses.find_by_id(course_id)

    def create_course(self, data: CourseCreate) -> Course:
        """
        Crée un cours.

        Validations :
        1. Champs obligatoires présents
        2. max_participants > 0
        3. end_date > start_date
        4. start_date pas dans le passé
        5. L'enseignant existe
        """
        values = data.model_dump()
        require_fields(values, REQUIRED_FIELDS)
        validate_positive(values["max_participants"])

        values["start_date"] = as_utc(values["start_date"])
        values["end_date"] = as_utc(values["end_date"])
        validate_date_window(values["start_date"], values["end_date"])
        validate_not_in_past(values["start_date"], utcnow())

        self._check_lecturer(values["lecturer_id"])

        course = self.courses.create(values)
        logger.info("Cours créé : %s (%s), %d places", course.title, course.id, course.max_participants)
        return course

    def update_course(self, course_id: uuid.UUID, data: CourseUpdate) -> Course:
        """
        Met à jour les champs fournis d'un cours.
        Les dates sont revalidées sur les valeurs fusionnées (nouvelle valeur ou valeur existante).
        """
        existing = self.courses.find_by_id(course_id)
        if existing is None:
            raise NotFoundError("Cours", course_id)

        changes = data.model_dump(exclude_unset=True)
        require_fields(changes, [f for f in REQUIRED_FIELDS if f in changes])

        if "max_participants" in changes:
            validate_positive(changes["max_participants"])

        if "start_date" in changes or "end_date" in changes:
            start = as_utc(changes.get("start_date") or existing.start_date)
            end = as_utc(changes.get("end_date") or existing.end_date)
            validate_date_window(start, end)
            if "start_date" in changes:
                changes["start_date"] = start
            if "end_date" in changes:
                changes["end_date"] = end

        if "lecturer_id" in changes:
            self._check_lecturer(changes["lecturer_id"])

        return self.courses.update(course_id, changes)

    def delete_course(self, course_id: uuid.UUID) -> None:
        """
        Supprime un cours.
        Selon ENROLLMENT_DELETE_POLICY, les inscriptions sont supprimées en cascade
        par la BDD ou la suppression est refusée tant qu'il en reste.
        """
        existing = self.courses.find_by_id(course_id)
        if existing is None:
            raise NotFoundError("Cours", course_id)

        nb_enrollments = self.enrollments.count_by_course_id(course_id)
        if nb_enrollments and self.delete_policy == DeletePolicy.BLOCK:
            raise ConflictError(
                f"Impossible de supprimer ce cours : {nb_enrollments} élève(s) y sont inscrits.",
                entity="Cours",
                entity_id=course_id,
                constraint="enrollments_course_id_fkey",
            )

        self.courses.delete(course_id)
        logger.info("Cours supprimé : %s (%d inscription(s) retirée(s))", course_id, nb_enrollments)

    def get_courses_by_lecturer(self, lecturer_id: uuid.UUID) -> list[Course]:
        if self.lecturers.find_by_id(lecturer_id) is None:
            raise NotFoundError("Enseignant", lecturer_id)
        return self.courses.find_by_lecturer_id(lecturer_id)

    def get_available_courses(self) -> list[Course]:
        """Cours ayant encore au moins une place (comptage des inscriptions par la BDD)."""
        return self.courses.find_available()

    def _check_lecturer(self, lecturer_id: uuid.UUID) -> None:
        if self.lecturers.find_by_id(lecturer_id) is None:
            raise ValidationError(
                "Enseignant introuvable.",
                entity="Enseignant",
                entity_id=lecturer_id,
                constraint="lecturer_id",
            )
