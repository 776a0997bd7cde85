"""
Schémas Pydantic pour les élèves.

Les champs texte sont seulement nettoyés ici (strip) : la présence et le format
sont vérifiés par StudentService pour que l'API et les appels directs suivent
les mêmes règles.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class StudentCreate(BaseModel):
    """Schéma de création d'un élève (POST /students)."""
    first_name: str
    last_name: str
    email: str
    student_number: str

    @field_validator("first_name", "last_name", "email", "student_number")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class StudentUpdate(BaseModel):
    """Schéma de mise à jour partielle d'un élève (PUT /students/{id})."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    student_number: Optional[str] = None

    @field_validator("first_name", "last_name", "email", "student_number")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v


class StudentResponse(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    student_number: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
