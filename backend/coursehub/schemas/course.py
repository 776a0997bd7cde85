"""
Schémas Pydantic pour les cours.

Les dates sont des datetime ; une date sans fuseau horaire est interprétée en UTC
par le service.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class CourseCreate(BaseModel):
    title: str
    description: Optional[str] = None
    lecturer_id: uuid.UUID
    max_participants: int
    start_date: datetime
    end_date: datetime

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip()


class CourseUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    lecturer_id: Optional[uuid.UUID] = None
    max_participants: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v


class CourseResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: Optional[str]
    lecturer_id: uuid.UUID
    max_participants: int
    start_date: datetime
    end_date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
