"""
Repository des enseignants.
"""

from typing import Optional

from sqlalchemy import select

from coursehub.models.lecturer import Lecturer
from coursehub.repositories.base import SqlRepository


class LecturerRepository(SqlRepository):
    model = Lecturer
    entity_name = "Enseignant"
    constraint_messages = {
        "lecturers_email_key": "Un enseignant avec cet email existe déjà.",
    }

    def find_by_email(self, email: str) -> Optional[Lecturer]:
        return self._scalar(select(Lecturer).where(Lecturer.email == email))

    def find_by_department(self, department: str) -> list[Lecturer]:
        return self._scalars(
            select(Lecturer)
            .where(Lecturer.department == department)
            .order_by(Lecturer.created_at.desc())
        )
