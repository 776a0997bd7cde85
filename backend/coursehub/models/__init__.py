# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.
# courses.lecturer_id → lecturers.id et enrollments → students/courses
# échouent avec NoReferencedTableError si le modèle cible n'est pas chargé.

from coursehub.models.student import Student  # noqa: F401
from coursehub.models.lecturer import Lecturer  # noqa: F401  — doit précéder course
from coursehub.models.course import Course  # noqa: F401
from coursehub.models.enrollment import Enrollment  # noqa: F401
