# ==========================================
# apps/schools/models.py
# ==========================================

import math
import uuid

from django.db import models
from django.utils import timezone


class SchoolRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    TEACHER = 'teacher', 'Teacher'
    PARENT = 'parent', 'Parent'
    STUDENT = 'student', 'Student'


STAFF_ROLES = (SchoolRole.ADMIN, SchoolRole.TEACHER)


class School(models.Model):
    """Tenant: a dance school owned by one admin account."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    city = models.CharField(max_length=100, blank=True)
    contact_email = models.EmailField(blank=True)
    contact_phone = models.CharField(max_length=20, blank=True)
    logo_url = models.URLField(blank=True)
    primary_color = models.CharField(max_length=7, default='#6324b2')
    admin = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='owned_schools')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'schools'
        indexes = [
            models.Index(fields=['admin', 'created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()

    def get_user_role(self, user):
        if not user or not user.is_authenticated:
            return None
        if self.admin_id == user.id:
            return SchoolRole.ADMIN
        try:
            return self.memberships.get(user=user).role
        except SchoolMembership.DoesNotExist:
            return None

    def is_admin(self, user):
        return self.get_user_role(user) == SchoolRole.ADMIN

    def is_staff_member(self, user):
        return self.get_user_role(user) in STAFF_ROLES


class SchoolMembership(models.Model):
    """User role inside a school."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='school_memberships')
    school = models.ForeignKey(School, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=SchoolRole.choices, default=SchoolRole.STUDENT)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'school_memberships'
        unique_together = [['user', 'school']]
        indexes = [
            models.Index(fields=['school', 'role']),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.school.name} ({self.role})"

    def save(self, *args, **kwargs):
        if self.school.admin_id == self.user_id:
            self.role = SchoolRole.ADMIN
        super().save(*args, **kwargs)


class Unit(models.Model):
    """Physical location (branch) of a school."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    school = models.ForeignKey(School, on_delete=models.CASCADE, related_name='units')
    name = models.CharField(max_length=100)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'school_units'
        ordering = ['name']

    def __str__(self):
        return f"{self.school.name} - {self.name}"


class Plan(models.Model):
    """Commercial plan sold to schools."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    monthly_price = models.DecimalField(max_digits=10, decimal_places=2)
    # Null means unlimited
    student_limit = models.PositiveIntegerField(null=True, blank=True)
    features = models.JSONField(default=list, blank=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'plans'
        ordering = ['monthly_price']

    def __str__(self):
        return self.name


class SubscriptionStatus(models.TextChoices):
    TRIAL = 'trial', 'Trial'
    ACTIVE = 'active', 'Active'
    PAST_DUE = 'past_due', 'Past due'
    CANCELLED = 'cancelled', 'Cancelled'


class Subscription(models.Model):
    """A school's subscription to a plan."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    school = models.OneToOneField(School, on_delete=models.CASCADE, related_name='subscription')
    plan = models.ForeignKey(Plan, on_delete=models.SET_NULL, null=True, blank=True, related_name='subscriptions')
    status = models.CharField(max_length=20, choices=SubscriptionStatus.choices, default=SubscriptionStatus.TRIAL)
    renew_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'subscriptions'

    def __str__(self):
        return f"{self.school.name} ({self.status})"

    def can_add_student(self, current_count):
        if self.plan is None or not self.plan.student_limit:
            return True
        return current_count < self.plan.student_limit

    def is_active(self):
        return self.status in (SubscriptionStatus.ACTIVE, SubscriptionStatus.TRIAL)

    def days_remaining(self, now=None):
        """Whole days until renewal, rounded up; negative once expired."""
        if not self.renew_at:
            return 0
        now = now or timezone.now()
        return math.ceil((self.renew_at - now).total_seconds() / 86400)


class LeadStatus(models.TextChoices):
    NEW = 'new', 'Novo'
    CONTACTED = 'contacted', 'Contato'
    CONVERTED = 'converted', 'Convertido'
    DISCARDED = 'discarded', 'Descartado'


class LeadSource(models.TextChoices):
    WEBSITE = 'website', 'Website'
    REFERRAL = 'referral', 'Referral'
    SOCIAL = 'social', 'Social'
    ADS = 'ads', 'Ads'
    OTHER = 'other', 'Other'


class Lead(models.Model):
    """A prospective school that asked for a demo on the landing page."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    school_name = models.CharField(max_length=100)
    city = models.CharField(max_length=100)
    email = models.EmailField(max_length=255)
    whatsapp = models.CharField(max_length=20)
    notes = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=LeadStatus.choices, default=LeadStatus.NEW)
    source = models.CharField(max_length=20, choices=LeadSource.choices, default=LeadSource.WEBSITE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'leads'
        indexes = [
            models.Index(fields=['status', 'created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.school_name} ({self.city})"
