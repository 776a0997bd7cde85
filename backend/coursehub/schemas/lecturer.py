"""
Schémas Pydantic pour les enseignants.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class LecturerCreate(BaseModel):
    first_name: str
    last_name: str
    email: str
    department: str

    @field_validator("first_name", "last_name", "email", "department")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class LecturerUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None

    @field_validator("first_name", "last_name", "email", "department")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v


class LecturerResponse(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    department: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
