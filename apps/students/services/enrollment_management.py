"""
Enrollment management service.

Enforces class capacity and one enrollment per student and class.
"""

from datetime import date
from typing import Optional

from django.db import transaction, IntegrityError

from apps.students.models import Student, DanceClass, Enrollment, EnrollmentStatus

from .exceptions import CrossSchoolReferenceError, ClassFullError, AlreadyEnrolledError


@transaction.atomic
def enroll_student(
    *,
    student: Student,
    dance_class: DanceClass,
    start_date: date,
    end_date: Optional[date] = None,
    status: str = EnrollmentStatus.ACTIVE
) -> Enrollment:
    """
    Enroll a student in a class.

    Uses row-level locking on the class so capacity checks are not raced.

    Raises:
        CrossSchoolReferenceError: If student and class are from different schools
        ClassFullError: If the class has no free places
        AlreadyEnrolledError: If an enrollment already exists
    """
    if student.school_id != dance_class.school_id:
        raise CrossSchoolReferenceError("Aluno e turma pertencem a escolas diferentes")

    dance_class = DanceClass.objects.select_for_update().get(id=dance_class.id)

    if status == EnrollmentStatus.ACTIVE and dance_class.active_enrollment_count() >= dance_class.max_students:
        raise ClassFullError(f"Turma {dance_class.name} está lotada")

    try:
        with transaction.atomic():
            return Enrollment.objects.create(
                student=student,
                dance_class=dance_class,
                start_date=start_date,
                end_date=end_date,
                status=status,
            )
    except IntegrityError:
        raise AlreadyEnrolledError(f"{student.full_name} já está matriculado(a) em {dance_class.name}")


@transaction.atomic
def update_enrollment(*, enrollment: Enrollment, **changes) -> Enrollment:
    """
    Apply changes to an enrollment.

    Reactivating an enrollment (e.g. on_hold -> active) takes a place in
    the class, so capacity is checked under the same class lock as
    enroll_student.

    Raises:
        ClassFullError: If the enrollment becomes active in a full class
    """
    dance_class = DanceClass.objects.select_for_update().get(id=enrollment.dance_class_id)

    becomes_active = (
        changes.get('status') == EnrollmentStatus.ACTIVE
        and enrollment.status != EnrollmentStatus.ACTIVE
    )
    if becomes_active and dance_class.active_enrollment_count() >= dance_class.max_students:
        raise ClassFullError(f"Turma {dance_class.name} está lotada")

    for field, value in changes.items():
        setattr(enrollment, field, value)
    enrollment.save()
    return enrollment
