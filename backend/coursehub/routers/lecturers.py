"""
Router pour les enseignants.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from coursehub.dependencies import get_course_service, get_lecturer_service
from coursehub.schemas.course import CourseResponse
from coursehub.schemas.lecturer import LecturerCreate, LecturerResponse, LecturerUpdate
from coursehub.services.course_service import CourseService
from coursehub.services.lecturer_service import LecturerService

router = APIRouter(prefix="/api/v1/lecturers", tags=["Enseignants"])


@router.get("", response_model=List[LecturerResponse], summary="Lister les enseignants")
def list_lecturers(
    department: Optional[str] = Query(None),
    service: LecturerService = Depends(get_lecturer_service),
):
    """Retourne tous les enseignants, ou ceux d'un département si `department` est fourni."""
    if department:
        return service.get_lecturers_by_department(department)
    return service.get_all_lecturers()


@router.post("", response_model=LecturerResponse, status_code=201, summary="Créer un enseignant")
def create_lecturer(data: LecturerCreate, service: LecturerService = Depends(get_lecturer_service)):
    return service.create_lecturer(data)


@router.get("/{lecturer_id}", response_model=LecturerResponse, summary="Détail d'un enseignant")
def get_lecturer(lecturer_id: uuid.UUID, service: LecturerService = Depends(get_lecturer_service)):
    lecturer = service.get_lecturer_by_id(lecturer_id)
    if lecturer is None:
        raise HTTPException(status_code=404, detail="Enseignant introuvable.")
    return lecturer


@router.put("/{lecturer_id}", response_model=LecturerResponse, summary="Modifier un enseignant")
def update_lecturer(
    lecturer_id: uuid.UUID,
    data: LecturerUpdate,
    service: LecturerService = Depends(get_lecturer_service),
):
    return service.update_lecturer(lecturer_id, data)


@router.delete("/{lecturer_id}", status_code=204, summary="Supprimer un enseignant")
def delete_lecturer(lecturer_id: uuid.UUID, service: LecturerService = Depends(get_lecturer_service)):
    """Bloqué (409) tant que l'enseignant est responsable d'au moins un cours."""
    service.delete_lecturer(lecturer_id)


@router.get("/{lecturer_id}/courses", response_model=List[CourseResponse], summary="Cours d'un enseignant")
def list_lecturer_courses(lecturer_id: uuid.UUID, service: CourseService = Depends(get_course_service)):
    return service.get_courses_by_lecturer(lecturer_id)
