"""
Service métier pour les inscriptions des élèves aux cours.

Une inscription n'existe que sous deux états pour un couple (élève, cours) :
absente ou inscrite. La capacité n'est jamais stockée : elle est recalculée
à chaque appel à partir des lignes de la table enrollments.
"""

import uuid
import logging

from coursehub.errors import ConflictError, NotFoundError
from coursehub.models.enrollment import Enrollment
from coursehub.repositories.course_repository import CourseRepository
from coursehub.repositories.enrollment_repository import EnrollmentRepository
from coursehub.repositories.student_repository import StudentRepository
from coursehub.schemas.enrollment import CourseCapacity
from coursehub.services.rules import as_utc, days_until, utcnow

logger = logging.getLogger(__name__)


class EnrollmentService:
    def __init__(
        self,
        enrollments: EnrollmentRepository,
        students: StudentRepository,
        courses: CourseRepository,
        unenroll_lead_days: int = 7,
    ) -> None:
        self.enrollments = enrollments
        self.students = students
        self.courses = courses
        self.unenroll_lead_days = unenroll_lead_days

    def enroll_student(self, student_id: uuid.UUID, course_id: uuid.UUID) -> Enrollment:
        """
        Inscrit un élève à un cours.

        Validations (dans cet ordre) :
        1. L'élève existe
        2. Le cours existe (ligne verrouillée jusqu'au commit de l'inscription)
        3. L'élève n'est pas déjà inscrit : un second appel est une erreur, pas un no-op
        4. Le cours n'est pas complet
        5. Le cours n'a pas encore commencé
        """
        if self.students.find_by_id(student_id) is None:
            raise NotFoundError("Élève", student_id)

        course = self.courses.find_by_id(course_id, for_update=True)
        if course is None:
            raise NotFoundError("Cours", course_id)

        if self.enrollments.find_by_student_and_course(student_id, course_id) is not None:
            raise ConflictError(
                "Cet élève est déjà inscrit à ce cours.",
                entity="Inscription",
                constraint="uq_enrollments_student_course",
            )

        enrolled = self.enrollments.count_by_course_id(course_id)
        if enrolled >= course.max_participants:
            logger.warning("Cours %s complet (%d/%d), inscription refusée", course_id, enrolled, course.max_participants)
            raise ConflictError(
                "Le cours est complet.",
                entity="Cours",
                entity_id=course_id,
                constraint="max_participants",
            )

        now = utcnow()
        if as_utc(course.start_date) < now:
            raise ConflictError(
                "Impossible de s'inscrire à un cours déjà commencé.",
                entity="Cours",
                entity_id=course_id,
                constraint="start_date",
            )

        enrollment = self.enrollments.create({
            "student_id": student_id,
            "course_id": course_id,
            "enrollment_date": now,
        })
        logger.info("Élève %s inscrit au cours %s (%d/%d)", student_id, course_id, enrolled + 1, course.max_participants)
        return enrollment

    def unenroll_student(self, student_id: uuid.UUID, course_id: uuid.UUID) -> None:
        enrollment = self.enrollments.find_by_student_and_course(student_id, course_id)
        if enrollment is None:
            raise NotFoundError("Inscription", f"{student_id}-{course_id}")
        self._remove(enrollment)

    def unenroll_by_id(self, enrollment_id: uuid.UUID) -> None:
        enrollment = self.enrollments.find_by_id(enrollment_id)
        if enrollment is None:
            raise NotFoundError("Inscription", enrollment_id)
        self._remove(enrollment)

    def is_student_enrolled(self, student_id: uuid.UUID, course_id: uuid.UUID) -> bool:
        return self.enrollments.find_by_student_and_course(student_id, course_id) is not None

    def can_enroll_in_course(self, course_id: uuid.UUID) -> bool:
        course = self.courses.find_by_id(course_id)
        if course is None:
            return False
        return self.enrollments.count_by_course_id(course_id) < course.max_participants

    def get_course_capacity(self, course_id: uuid.UUID) -> CourseCapacity:
        course = self.courses.find_by_id(course_id)
        if course is None:
            raise NotFoundError("Cours", course_id)

        enrolled = self.enrollments.count_by_course_id(course_id)
        return CourseCapacity(
            course_id=course_id,
            max_participants=course.max_participants,
            enrolled=enrolled,
            available=max(course.max_participants - enrolled, 0),
            can_enroll=enrolled < course.max_participants,
        )

    def get_all_enrollments(self) -> list[Enrollment]:
        return self.enrollments.find_all()

    def get_student_enrollments(self, student_id: uuid.UUID) -> list[Enrollment]:
        if self.students.find_by_id(student_id) is None:
            raise NotFoundError("Élève", student_id)
        return self.enrollments.find_by_student_id(student_id)

    def get_course_enrollments(self, course_id: uuid.UUID) -> list[Enrollment]:
        if self.courses.find_by_id(course_id) is None:
            raise NotFoundError("Cours", course_id)
        return self.enrollments.find_by_course_id(course_id)

    def _remove(self, enrollment: Enrollment) -> None:
        """Supprime l'inscription après contrôle du délai minimum avant le début du cours."""
        if self.unenroll_lead_days > 0:
            course = self.courses.find_by_id(enrollment.course_id)
            if course is not None and days_until(course.start_date, utcnow()) < self.unenroll_lead_days:
                raise ConflictError(
                    f"Désinscription impossible moins de {self.unenroll_lead_days} jours avant le début du cours.",
                    entity="Inscription",
                    entity_id=enrollment.id,
                    constraint="unenroll_lead_days",
                )

        self.enrollments.delete(enrollment.id)
        logger.info("Élève %s désinscrit du cours %s", enrollment.student_id, enrollment.course_id)
