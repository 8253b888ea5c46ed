from django.core.validators import MinValueValidator, MaxValueValidator, RegexValidator
from django.db import models
import uuid


TIME_OF_DAY_VALIDATOR = RegexValidator(
    regex=r'^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$',
    message='Horário inválido',
)


class Student(models.Model):
    """Dance student enrolled at a school."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    school = models.ForeignKey('schools.School', on_delete=models.CASCADE, related_name='students')
    unit = models.ForeignKey(
        'schools.Unit',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='students'
    )
    full_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=255, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    birth_date = models.DateField(null=True, blank=True)
    emergency_contact = models.CharField(max_length=100, blank=True)
    emergency_phone = models.CharField(max_length=20, blank=True)
    photo_url = models.URLField(blank=True)
    active = models.BooleanField(default=True)

    # Login used for QR check-in (the student or a parent)
    account = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='students'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'students'
        indexes = [
            models.Index(fields=['school', 'active']),
            models.Index(fields=['account']),
        ]
        ordering = ['full_name']

    def __str__(self):
        return self.full_name


class Guardian(models.Model):
    """Parent or legal guardian with a login."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField('accounts.User', on_delete=models.CASCADE, related_name='guardian_profile')
    phone = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'guardians'

    def __str__(self):
        return self.user.get_display_name()


class StudentGuardian(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='guardian_links')
    guardian = models.ForeignKey(Guardian, on_delete=models.CASCADE, related_name='student_links')
    relationship = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'student_guardians'
        unique_together = [['student', 'guardian']]


class GuardianInviteStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    EXPIRED = 'expired', 'Expired'


class GuardianInvite(models.Model):
    """E-mailed invitation for a guardian to follow a student."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='guardian_invites')
    invited_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sent_guardian_invites'
    )
    guardian_email = models.EmailField(max_length=255)
    token = models.CharField(max_length=100, unique=True)
    status = models.CharField(
        max_length=10,
        choices=GuardianInviteStatus.choices,
        default=GuardianInviteStatus.PENDING
    )
    expires_at = models.DateTimeField()
    accepted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'guardian_invites'
        indexes = [
            models.Index(fields=['guardian_email', 'student', 'status']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.guardian_email} -> {self.student}"

    def is_open_at(self, moment):
        return self.status == GuardianInviteStatus.PENDING and moment <= self.expires_at


class DanceClass(models.Model):
    """A recurring class (turma) taught at a school."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    school = models.ForeignKey('schools.School', on_delete=models.CASCADE, related_name='classes')
    unit = models.ForeignKey(
        'schools.Unit',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='classes'
    )
    teacher = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='taught_classes'
    )
    name = models.CharField(max_length=100)
    description = models.TextField(max_length=500, blank=True)
    schedule_day = models.CharField(max_length=20)
    schedule_time = models.CharField(max_length=5)
    duration_minutes = models.PositiveIntegerField(
        default=60,
        validators=[MinValueValidator(15), MaxValueValidator(240)]
    )
    max_students = models.PositiveIntegerField(
        default=30,
        validators=[MinValueValidator(1), MaxValueValidator(100)]
    )
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'classes'
        indexes = [
            models.Index(fields=['school', 'active']),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    def active_enrollment_count(self):
        return self.enrollments.filter(status=EnrollmentStatus.ACTIVE).count()


class ClassSchedule(models.Model):
    """Weekly time slot of a class. day_of_week: 0 = Sunday ... 6 = Saturday."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    dance_class = models.ForeignKey(DanceClass, on_delete=models.CASCADE, related_name='schedules')
    day_of_week = models.PositiveSmallIntegerField(validators=[MaxValueValidator(6)])
    start_time = models.CharField(max_length=5, validators=[TIME_OF_DAY_VALIDATOR])
    end_time = models.CharField(max_length=5, validators=[TIME_OF_DAY_VALIDATOR])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'class_schedules'
        indexes = [
            models.Index(fields=['day_of_week', 'start_time']),
        ]
        ordering = ['day_of_week', 'start_time']

    def __str__(self):
        return f"{self.dance_class.name} ({self.day_of_week} {self.start_time})"


class EnrollmentStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    ON_HOLD = 'on_hold', 'On hold'
    COMPLETED = 'completed', 'Completed'


class Enrollment(models.Model):
    """Student membership in a class."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='enrollments')
    dance_class = models.ForeignKey(DanceClass, on_delete=models.CASCADE, related_name='enrollments')
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=EnrollmentStatus.choices, default=EnrollmentStatus.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'enrollments'
        unique_together = [['student', 'dance_class']]
        indexes = [
            models.Index(fields=['dance_class', 'status']),
        ]
        ordering = ['-start_date']

    def __str__(self):
        return f"{self.student.full_name} in {self.dance_class.name} ({self.status})"
