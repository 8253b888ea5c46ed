"""
Student management service.

Student creation is gated by the school's plan limit.
"""

from typing import Optional

from django.db import transaction

from apps.schools.models import School, Unit
from apps.schools.services import ensure_can_add_student
from apps.students.models import Student

from .exceptions import CrossSchoolReferenceError


@transaction.atomic
def create_student(*, school: School, unit: Optional[Unit] = None, **fields) -> Student:
    """
    Create a student after checking the plan limit.

    Args:
        school: Owning school
        unit: Optional branch; must belong to the school
        **fields: Remaining Student fields (already validated)

    Raises:
        StudentLimitReachedError: If the plan limit is reached
        CrossSchoolReferenceError: If unit belongs to another school
    """
    # Lock the school row so concurrent creations count consistently
    School.objects.select_for_update().filter(id=school.id).first()

    if unit is not None and unit.school_id != school.id:
        raise CrossSchoolReferenceError("Unidade não pertence a esta escola")

    ensure_can_add_student(school)
    return Student.objects.create(school=school, unit=unit, **fields)
