"""
Router pour les élèves.
CRUD complet + recherche par email + inscriptions d'un élève.
Les erreurs métier (ServiceError) sont converties en codes HTTP dans main.py.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from coursehub.dependencies import get_enrollment_service, get_student_service
from coursehub.schemas.enrollment import EnrollmentResponse
from coursehub.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from coursehub.services.enrollment_service import EnrollmentService
from coursehub.services.student_service import StudentService

router = APIRouter(prefix="/api/v1/students", tags=["Élèves"])


@router.get("", response_model=List[StudentResponse], summary="Lister tous les élèves")
def list_students(service: StudentService = Depends(get_student_service)):
    """Retourne tous les élèves, du plus récent au plus ancien."""
    return service.get_all_students()


@router.post("", response_model=StudentResponse, status_code=201, summary="Créer un élève")
def create_student(data: StudentCreate, service: StudentService = Depends(get_student_service)):
    """Crée un élève. Email et matricule doivent être uniques (409 sinon)."""
    return service.create_student(data)


@router.get("/by-email", response_model=StudentResponse, summary="Rechercher un élève par email")
def get_student_by_email(
    email: str = Query(...),
    service: StudentService = Depends(get_student_service),
):
    student = service.get_student_by_email(email)
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.get("/{student_id}", response_model=StudentResponse, summary="Détail d'un élève")
def get_student(student_id: uuid.UUID, service: StudentService = Depends(get_student_service)):
    student = service.get_student_by_id(student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.put("/{student_id}", response_model=StudentResponse, summary="Modifier un élève")
def update_student(
    student_id: uuid.UUID,
    data: StudentUpdate,
    service: StudentService = Depends(get_student_service),
):
    """Met à jour les champs fournis d'un élève. Les champs absents ne sont pas modifiés."""
    return service.update_student(student_id, data)


@router.delete("/{student_id}", status_code=204, summary="Supprimer un élève")
def delete_student(student_id: uuid.UUID, service: StudentService = Depends(get_student_service)):
    """Supprime définitivement un élève (inscriptions : voir ENROLLMENT_DELETE_POLICY)."""
    service.delete_student(student_id)


@router.get(
    "/{student_id}/enrollments",
    response_model=List[EnrollmentResponse],
    summary="Inscriptions d'un élève",
)
def list_student_enrollments(
    student_id: uuid.UUID,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    return service.get_student_enrollments(student_id)
