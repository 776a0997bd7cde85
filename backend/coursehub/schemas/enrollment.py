"""
Schémas Pydantic pour les inscriptions.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel


class EnrollmentCreate(BaseModel):
    """Corps de requête pour inscrire un élève à un cours."""
    student_id: uuid.UUID
    course_id: uuid.UUID


class EnrollmentResponse(BaseModel):
    id: uuid.UUID
    student_id: uuid.UUID
    course_id: uuid.UUID
    enrollment_date: datetime
    created_at: datetime

    model_config = {"from_attributes": True}


class EnrollmentStatus(BaseModel):
    """Réponse de GET /enrollments/status."""
    student_id: uuid.UUID
    course_id: uuid.UUID
    enrolled: bool


class CourseCapacity(BaseModel):
    """Remplissage d'un cours, calculé à partir des inscriptions existantes."""
    course_id: uuid.UUID
    max_participants: int
    enrolled: int
    available: int
    can_enroll: bool
