"""
Construction explicite des services.

Le moteur et la fabrique de sessions sont créés une fois par processus
(database.py). Pour chaque requête, les repositories sont liés à la session
de la requête puis injectés dans les services ; aucun service n'est gardé
en variable globale.
"""

from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy.orm import Session

from coursehub.config import Settings, settings
from coursehub.database import get_db
from coursehub.repositories.course_repository import CourseRepository
from coursehub.repositories.enrollment_repository import EnrollmentRepository
from coursehub.repositories.lecturer_repository import LecturerRepository
from coursehub.repositories.student_repository import StudentRepository
from coursehub.services.course_service import CourseService
from coursehub.services.enrollment_service import EnrollmentService
from coursehub.services.lecturer_service import LecturerService
from coursehub.services.student_service import StudentService


@dataclass
class Services:
    students: StudentService
    lecturers: LecturerService
    courses: CourseService
    enrollments: EnrollmentService


def build_services(db: Session, config: Settings = settings) -> Services:
    """Relie les quatre services à une même session (et donc à une même transaction)."""
    student_repo = StudentRepository(db)
    lecturer_repo = LecturerRepository(db)
    course_repo = CourseRepository(db)
    enrollment_repo = EnrollmentRepository(db)

    return Services(
        students=StudentService(student_repo, enrollment_repo, config.ENROLLMENT_DELETE_POLICY),
        lecturers=LecturerService(lecturer_repo, course_repo),
        courses=CourseService(course_repo, lecturer_repo, enrollment_repo, config.ENROLLMENT_DELETE_POLICY),
        enrollments=EnrollmentService(enrollment_repo, student_repo, course_repo, config.UNENROLL_LEAD_DAYS),
    )


def get_services(db: Session = Depends(get_db)) -> Services:
    return build_services(db)


def get_student_service(services: Services = Depends(get_services)) -> StudentService:
    return services.students


def get_lecturer_service(services: Services = Depends(get_services)) -> LecturerService:
    return services.lecturers


def get_course_service(services: Services = Depends(get_services)) -> CourseService:
    return services.courses


def get_enrollment_service(services: Services = Depends(get_services)) -> EnrollmentService:
    return services.enrollments
