"""
Router pour les inscriptions élève ↔ cours.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, Query

from coursehub.dependencies import get_enrollment_service
from coursehub.schemas.enrollment import EnrollmentCreate, EnrollmentResponse, EnrollmentStatus
from coursehub.services.enrollment_service import EnrollmentService

router = APIRouter(prefix="/api/v1/enrollments", tags=["Inscriptions"])


@router.get("", response_model=List[EnrollmentResponse], summary="Lister les inscriptions")
def list_enrollments(service: EnrollmentService = Depends(get_enrollment_service)):
    return service.get_all_enrollments()


@router.post("", response_model=EnrollmentResponse, status_code=201, summary="Inscrire un élève à un cours")
def enroll_student(data: EnrollmentCreate, service: EnrollmentService = Depends(get_enrollment_service)):
    """
    Inscrit un élève à un cours.
    - 404 si l'élève ou le cours est introuvable
    - 409 si l'élève est déjà inscrit, si le cours est complet ou déjà commencé
    """
    return service.enroll_student(data.student_id, data.course_id)


@router.get("/status", response_model=EnrollmentStatus, summary="Vérifier une inscription")
def get_enrollment_status(
    student_id: uuid.UUID = Query(...),
    course_id: uuid.UUID = Query(...),
    service: EnrollmentService = Depends(get_enrollment_service),
):
    return EnrollmentStatus(
        student_id=student_id,
        course_id=course_id,
        enrolled=service.is_student_enrolled(student_id, course_id),
    )


@router.delete("", status_code=204, summary="Désinscrire un élève d'un cours")
def unenroll_student(
    student_id: uuid.UUID = Query(...),
    course_id: uuid.UUID = Query(...),
    service: EnrollmentService = Depends(get_enrollment_service),
):
    """409 si le délai minimum avant le début du cours (UNENROLL_LEAD_DAYS) est dépassé."""
    service.unenroll_student(student_id, course_id)


@router.delete("/{enrollment_id}", status_code=204, summary="Supprimer une inscription")
def delete_enrollment(enrollment_id: uuid.UUID, service: EnrollmentService = Depends(get_enrollment_service)):
    service.unenroll_by_id(enrollment_id)
