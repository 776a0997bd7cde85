"""
Router pour les cours.
CRUD complet, cours disponibles, inscrits et remplissage d'un cours.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from coursehub.dependencies import get_course_service, get_enrollment_service
from coursehub.schemas.course import CourseCreate, CourseResponse, CourseUpdate
from coursehub.schemas.enrollment import CourseCapacity, EnrollmentResponse
from coursehub.services.course_service import CourseService
from coursehub.services.enrollment_service import EnrollmentService

router = APIRouter(prefix="/api/v1/courses", tags=["Cours"])


@router.get("", response_model=List[CourseResponse], summary="Lister les cours")
def list_courses(service: CourseService = Depends(get_course_service)):
    return service.get_all_courses()


@router.get("/available", response_model=List[CourseResponse], summary="Cours avec des places libres")
def list_available_courses(service: CourseService = Depends(get_course_service)):
    """Retourne les cours dont le nombre d'inscrits est inférieur à max_participants."""
    return service.get_available_courses()


@router.post("", response_model=CourseResponse, status_code=201, summary="Créer un cours")
def create_course(data: CourseCreate, service: CourseService = Depends(get_course_service)):
    """
    Crée un cours.
    La date de début ne peut pas être dans le passé et doit précéder la date de fin ;
    l'enseignant doit exister.
    """
    return service.create_course(data)


@router.get("/{course_id}", response_model=CourseResponse, summary="Détail d'un cours")
def get_course(course_id: uuid.UUID, service: CourseService = Depends(get_course_service)):
    course = service.get_course_by_id(course_id)
    if course is None:
        raise HTTPException(status_code=404, detail="Cours introuvable.")
    return course


@router.put("/{course_id}", response_model=CourseResponse, summary="Modifier un cours")
def update_course(
    course_id: uuid.UUID,
    data: CourseUpdate,
    service: CourseService = Depends(get_course_service),
):
    return service.update_course(course_id, data)


@router.delete("/{course_id}", status_code=204, summary="Supprimer un cours")
def delete_course(course_id: uuid.UUID, service: CourseService = Depends(get_course_service)):
    service.delete_course(course_id)


@router.get(
    "/{course_id}/enrollments",
    response_model=List[EnrollmentResponse],
    summary="Inscriptions d'un cours",
)
def list_course_enrollments(
    course_id: uuid.UUID,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    return service.get_course_enrollments(course_id)


@router.get("/{course_id}/capacity", response_model=CourseCapacity, summary="Remplissage d'un cours")
def get_course_capacity(
    course_id: uuid.UUID,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    return service.get_course_capacity(course_id)
