"""
Repository des cours.
"""

import uuid
from typing import Optional

from sqlalchemy import func, select

from coursehub.models.course import Course
from coursehub.models.enrollment import Enrollment
from coursehub.repositories.base import SqlRepository


class CourseRepository(SqlRepository):
    model = Course
    entity_name = "Cours"

    def find_by_id(self, entity_id: uuid.UUID, for_update: bool = False) -> Optional[Course]:
        """
        Avec for_update=True, la ligne du cours est verrouillée (SELECT ... FOR UPDATE)
        jusqu'au prochain commit : les inscriptions concurrentes au même cours
        attendent que le comptage + l'insertion en cours soient terminés.
        """
        if not for_update:
            return super().find_by_id(entity_id)
        return self._scalar(select(Course).where(Course.id == entity_id).with_for_update())

    def find_by_lecturer_id(self, lecturer_id: uuid.UUID) -> list[Course]:
        return self._scalars(
            select(Course)
            .where(Course.lecturer_id == lecturer_id)
            .order_by(Course.created_at.desc())
        )

    def find_available(self) -> list[Course]:
        """Cours dont le nombre d'inscriptions est strictement inférieur à max_participants."""
        enrolled = (
            select(Enrollment.course_id, func.count(Enrollment.id).label("enrolled"))
            .group_by(Enrollment.course_id)
            .subquery()
        )
        return self._scalars(
            select(Course)
            .outerjoin(enrolled, enrolled.c.course_id == Course.id)
            .where(func.coalesce(enrolled.c.enrolled, 0) < Course.max_participants)
            .order_by(Course.created_at.desc())
        )
