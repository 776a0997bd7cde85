"""
Modèle SQLAlchemy pour la table courses.
Les contraintes CHECK doublent côté BDD les validations du service.
"""

import uuid
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID

from coursehub.database import Base


class Course(Base):
    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("max_participants > 0", name="ck_courses_max_participants_positive"),
        CheckConstraint("end_date > start_date", name="ck_courses_dates_ordered"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # RESTRICT : un enseignant référencé par un cours ne peut pas être supprimé
    lecturer_id = Column(
        UUID(as_uuid=True), ForeignKey("lecturers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    max_participants = Column(Integer, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
