from django.db import models
import uuid


class Achievement(models.Model):
    """Badge unlocked once a student's point total reaches a threshold."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    school = models.ForeignKey('schools.School', on_delete=models.CASCADE, related_name='achievements')
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    icon = models.CharField(max_length=50, blank=True)
    points_required = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'achievements'
        ordering = ['points_required']

    def __str__(self):
        return f"{self.name} ({self.points_required} pts)"


class PointEntry(models.Model):
    """Ledger row; a student's score is the sum of their entries."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey('students.Student', on_delete=models.CASCADE, related_name='point_entries')
    points = models.IntegerField()
    reason = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'student_points'
        indexes = [
            models.Index(fields=['student', 'created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.student.full_name}: {self.points:+d} ({self.reason})"


class StudentAchievement(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey('students.Student', on_delete=models.CASCADE, related_name='achievements')
    achievement = models.ForeignKey(Achievement, on_delete=models.CASCADE, related_name='unlocks')
    unlocked_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'student_achievements'
        unique_together = [['student', 'achievement']]
        ordering = ['-unlocked_at']
