"""
Repository des élèves.
"""

from typing import Optional

from sqlalchemy import select

from coursehub.models.student import Student
from coursehub.repositories.base import SqlRepository


class StudentRepository(SqlRepository):
    model = Student
    entity_name = "Élève"
    constraint_messages = {
        "students_email_key": "Un élève avec cet email existe déjà.",
        "students_student_number_key": "Un élève avec ce matricule existe déjà.",
    }

    def find_by_email(self, email: str) -> Optional[Student]:
        return self._scalar(select(Student).where(Student.email == email))

    def find_by_student_number(self, student_number: str) -> Optional[Student]:
        return self._scalar(select(Student).where(Student.student_number == student_number))
