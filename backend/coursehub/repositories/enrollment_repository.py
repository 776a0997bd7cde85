"""
Repository des inscriptions élève ↔ cours.
"""

import uuid
from typing import Optional

from sqlalchemy import func, select

from coursehub.models.enrollment import Enrollment
from coursehub.repositories.base import SqlRepository


class EnrollmentRepository(SqlRepository):
    model = Enrollment
    entity_name = "Inscription"
    constraint_messages = {
        "uq_enrollments_student_course": "Cet élève est déjà inscrit à ce cours.",
    }

    def find_by_student_id(self, student_id: uuid.UUID) -> list[Enrollment]:
        return self._scalars(
            select(Enrollment)
            .where(Enrollment.student_id == student_id)
            .order_by(Enrollment.created_at.desc())
        )

    def find_by_course_id(self, course_id: uuid.UUID) -> list[Enrollment]:
        return self._scalars(
            select(Enrollment)
            .where(Enrollment.course_id == course_id)
            .order_by(Enrollment.created_at.desc())
        )

    def find_by_student_and_course(self, student_id: uuid.UUID, course_id: uuid.UUID) -> Optional[Enrollment]:
        return self._scalar(
            select(Enrollment).where(
                Enrollment.student_id == student_id,
                Enrollment.course_id == course_id,
            )
        )

    def count_by_course_id(self, course_id: uuid.UUID) -> int:
        return self._scalar(
            select(func.count())
            .select_from(Enrollment)
            .where(Enrollment.course_id == course_id)
        ) or 0

    def count_by_student_id(self, student_id: uuid.UUID) -> int:
        return self._scalar(
            select(func.count())
            .select_from(Enrollment)
            .where(Enrollment.student_id == student_id)
        ) or 0
