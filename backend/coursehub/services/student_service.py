"""
Service métier pour la gestion des élèves.
"""

import uuid
import logging
from typing import Optional

from coursehub.config import DeletePolicy
from coursehub.errors import ConflictError, NotFoundError
from coursehub.models.student import Student
from coursehub.repositories.enrollment_repository import EnrollmentRepository
from coursehub.repositories.student_repository import StudentRepository
from coursehub.schemas.student import StudentCreate, StudentUpdate
from coursehub.services.rules import require_fields, validate_email

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name", "email", "student_number")


class StudentService:
    def __init__(
        self,
        students: StudentRepository,
        enrollments: EnrollmentRepository,
        delete_policy: DeletePolicy = DeletePolicy.CASCADE,
    ) -> None:
        self.students = students
        self.enrollments = enrollments
        self.delete_policy = delete_policy

    def get_all_students(self) -> list[Student]:
        return self.students.find_all()

    def get_student_by_id(self, student_id: uuid.UUID) -> Optional[Student]:
        return self.students.find_by_id(student_id)

    def create_student(self, data: StudentCreate) -> Student:
        """
        Crée un élève.
        Lève ValidationError si un champ manque ou si l'email est invalide,
        ConflictError si l'email ou le matricule existe déjà.
        """
        values = data.model_dump()
        require_fields(values, REQUIRED_FIELDS)
        validate_email(values["email"])

        if self.students.find_by_email(values["email"]) is not None:
            raise _duplicate_email()
        if self.students.find_by_student_number(values["student_number"]) is not None:
            raise _duplicate_number()

        student = self.students.create(values)
        logger.info("Élève créé : %s %s (%s)", student.first_name, student.last_name, student.id)
        return student

    def update_student(self, student_id: uuid.UUID, data: StudentUpdate) -> Student:
        """Met à jour les champs fournis. L'unicité n'est revérifiée que pour les valeurs modifiées."""
        existing = self.students.find_by_id(student_id)
        if existing is None:
            raise NotFoundError("Élève", student_id)

        changes = data.model_dump(exclude_unset=True)
        require_fields(changes, [f for f in REQUIRED_FIELDS if f in changes])

        if "email" in changes:
            validate_email(changes["email"])
            if changes["email"] != existing.email:
                other = self.students.find_by_email(changes["email"])
                if other is not None and other.id != student_id:
                    raise _duplicate_email()

        if "student_number" in changes and changes["student_number"] != existing.student_number:
            other = self.students.find_by_student_number(changes["student_number"])
            if other is not None and other.id != student_id:
                raise _duplicate_number()

        return self.students.update(student_id, changes)

    def delete_student(self, student_id: uuid.UUID) -> None:
        """
        Supprime un élève.
        Selon ENROLLMENT_DELETE_POLICY, ses inscriptions sont supprimées en cascade
        par la BDD ou la suppression est refusée tant qu'il en reste.
        """
        existing = self.students.find_by_id(student_id)
        if existing is None:
            raise NotFoundError("Élève", student_id)

        nb_enrollments = self.enrollments.count_by_student_id(student_id)
        if nb_enrollments and self.delete_policy == DeletePolicy.BLOCK:
            raise ConflictError(
                f"Impossible de supprimer cet élève : il est inscrit à {nb_enrollments} cours.",
                entity="Élève",
                entity_id=student_id,
                constraint="enrollments_student_id_fkey",
            )

        self.students.delete(student_id)
        logger.info("Élève supprimé : %s (%d inscription(s) retirée(s))", student_id, nb_enrollments)

    def get_student_by_email(self, email: str) -> Optional[Student]:
        validate_email(email)
        return self.students.find_by_email(email)


def _duplicate_email() -> ConflictError:
    return ConflictError("Un élève avec cet email existe déjà.", entity="Élève", constraint="students_email_key")


def _duplicate_number() -> ConflictError:
    return ConflictError(
        "Un élève avec ce matricule existe déjà.", entity="Élève", constraint="students_student_number_key"
    )
