from django.db import models
import uuid


class QRToken(models.Model):
    """Short-lived check-in token shown as a QR code in class."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    dance_class = models.ForeignKey('students.DanceClass', on_delete=models.CASCADE, related_name='qr_tokens')
    token = models.CharField(max_length=100, unique=True, db_index=True)
    valid_from = models.DateTimeField()
    valid_until = models.DateTimeField()
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='generated_qr_tokens'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'qr_tokens'
        indexes = [
            models.Index(fields=['dance_class', 'valid_until']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.token

    def is_valid_at(self, moment):
        return self.valid_from <= moment <= self.valid_until


class Attendance(models.Model):
    """One presence of a student in a class on a given day."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey('students.Student', on_delete=models.CASCADE, related_name='attendances')
    dance_class = models.ForeignKey('students.DanceClass', on_delete=models.CASCADE, related_name='attendances')
    attendance_date = models.DateField()
    marked_at = models.DateTimeField(auto_now_add=True)
    marked_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='marked_attendances'
    )
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'attendances'
        unique_together = [['student', 'dance_class', 'attendance_date']]
        indexes = [
            models.Index(fields=['dance_class', 'attendance_date']),
            models.Index(fields=['student', 'attendance_date']),
        ]
        ordering = ['-attendance_date', '-marked_at']

    def __str__(self):
        return f"{self.student.full_name} @ {self.dance_class.name} on {self.attendance_date}"
