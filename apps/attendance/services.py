"""
Attendance Services Module
==========================

Business logic for QR check-in and manual attendance.

Classes:
    CheckInService: Issues class tokens and validates student check-ins.
    AttendanceService: Manual marking and weekly summaries for staff.

Example:
    Teacher shows a QR, student scans it::

        from apps.attendance.services import CheckInService

        issued = CheckInService.generate_class_token(class_id=cls.id, user=teacher)
        # issued['qr_code'] is a data URL for an <img> tag

        attendance, points = CheckInService.check_in(token=issued['token'], user=student_user)
"""

import logging
import secrets
from datetime import timedelta

from django.db import transaction, IntegrityError
from django.db.models import Count
from django.utils import timezone

from apps.students.models import DanceClass, Student, EnrollmentStatus
from apps.gamification.services import award_points, ATTENDANCE_POINTS
from .models import QRToken, Attendance
from .qr import QRCodeRenderer
from .exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    NoLinkedStudentError,
    NotEnrolledError,
    AlreadyCheckedInError,
    NotClassStaffError,
)

logger = logging.getLogger(__name__)

TOKEN_VALID_BEFORE = timedelta(minutes=10)
TOKEN_VALID_AFTER = timedelta(minutes=15)


class CheckInService:
    """
    QR check-in flow.

    A token is valid from 10 minutes before it was issued until 15 minutes
    after, so a teacher can put it on screen shortly before class starts.

    Methods:
        generate_class_token: Issue a token plus its QR image for a class.
        check_in: Register today's attendance for the scanning student.
    """

    @staticmethod
    def generate_class_token(class_id, user, now=None):
        """
        Issue a check-in token for a class.

        Args:
            class_id (UUID): Class receiving the token.
            user (User): Teacher or admin of the class's school.
            now (datetime, optional): Issue time, defaults to timezone.now().

        Returns:
            dict: token, valid_from, valid_until and qr_code (PNG data URL).

        Raises:
            DanceClass.DoesNotExist: If class doesn't exist.
            NotClassStaffError: If user is not staff of the school.
        """
        dance_class = DanceClass.objects.select_related('school').get(id=class_id)
        if not dance_class.school.is_staff_member(user):
            raise NotClassStaffError("Only teachers and admins can generate check-in codes.")

        now = now or timezone.now()
        token = f"{dance_class.id}-{int(now.timestamp() * 1000)}-{secrets.token_urlsafe(6)}"

        qr_token = QRToken.objects.create(
            dance_class=dance_class,
            token=token,
            valid_from=now - TOKEN_VALID_BEFORE,
            valid_until=now + TOKEN_VALID_AFTER,
            created_by=user,
        )

        return {
            'token': qr_token.token,
            'class_id': dance_class.id,
            'valid_from': qr_token.valid_from,
            'valid_until': qr_token.valid_until,
            'qr_code': QRCodeRenderer.to_data_url(qr_token.token),
        }

    @staticmethod
    def check_in(*, token, user, now=None):
        """
        Register attendance for the student linked to ``user``.

        Checks run in order: token exists, time window, linked student,
        active enrollment, then the one-per-day rule.

        Returns:
            tuple: (Attendance, int points awarded)

        Raises:
            InvalidTokenError, TokenExpiredError, NoLinkedStudentError,
            NotEnrolledError, AlreadyCheckedInError
        """
        try:
            qr_token = QRToken.objects.select_related('dance_class').get(token=token)
        except QRToken.DoesNotExist:
            raise InvalidTokenError("Token inválido")

        now = now or timezone.now()
        if not qr_token.is_valid_at(now):
            raise TokenExpiredError("Token expirado ou ainda não válido")

        students = Student.objects.filter(account=user)
        if not students.exists():
            raise NoLinkedStudentError("Nenhum aluno vinculado a esta conta")

        student = students.filter(
            enrollments__dance_class=qr_token.dance_class,
            enrollments__status=EnrollmentStatus.ACTIVE,
        ).first()
        if student is None:
            raise NotEnrolledError("Você não está matriculado nesta turma")

        with transaction.atomic():
            try:
                with transaction.atomic():
                    attendance = Attendance.objects.create(
                        student=student,
                        dance_class=qr_token.dance_class,
                        attendance_date=timezone.localdate(now),
                        marked_by=user,
                    )
            except IntegrityError:
                raise AlreadyCheckedInError("Presença já registrada para hoje")

            award_points(student=student, points=ATTENDANCE_POINTS, reason="Presença em aula")
        logger.info("Check-in: student %s in class %s", student.id, qr_token.dance_class_id)

        return attendance, ATTENDANCE_POINTS


class AttendanceService:
    """Staff-side attendance operations."""

    @staticmethod
    @transaction.atomic
    def mark_attendance(*, dance_class, student_ids, marked_by, attendance_date, notes=''):
        """
        Mark several students present in one go.

        Students without an active enrollment in the class are ignored,
        as are students already marked for that date. Points are awarded
        for each new record.

        Returns:
            list[Attendance]: Newly created records.
        """
        enrolled = Student.objects.filter(
            id__in=student_ids,
            enrollments__dance_class=dance_class,
            enrollments__status=EnrollmentStatus.ACTIVE,
        ).distinct()
        already = set(
            Attendance.objects.filter(
                dance_class=dance_class,
                attendance_date=attendance_date,
            ).values_list('student_id', flat=True)
        )

        created = []
        for student in enrolled:
            if student.id in already:
                continue
            created.append(Attendance.objects.create(
                student=student,
                dance_class=dance_class,
                attendance_date=attendance_date,
                marked_by=marked_by,
                notes=notes,
            ))
            award_points(student=student, points=ATTENDANCE_POINTS, reason="Presença em aula")

        return created

    @staticmethod
    def weekly_summary(*, school, today=None):
        """
        Attendance per day for the 7 days ending ``today``.

        Returns:
            dict: start, end, total and a ``days`` list of {date, count}.
        """
        today = today or timezone.localdate()
        start = today - timedelta(days=6)

        counts = dict(
            Attendance.objects.filter(
                dance_class__school=school,
                attendance_date__range=(start, today),
            )
            .values_list('attendance_date')
            .annotate(total=Count('id'))
        )
        days = [
            {'date': start + timedelta(days=i), 'count': counts.get(start + timedelta(days=i), 0)}
            for i in range(7)
        ]
        return {
            'start': start,
            'end': today,
            'total': sum(d['count'] for d in days),
            'days': days,
        }
