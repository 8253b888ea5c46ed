from django.contrib import admin
from .models import Student, Guardian, StudentGuardian, GuardianInvite, DanceClass, ClassSchedule, Enrollment


class EnrollmentInline(admin.TabularInline):
    model = Enrollment
    extra = 0
    raw_id_fields = ['student']


class ClassScheduleInline(admin.TabularInline):
    model = ClassSchedule
    extra = 0


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ['full_name', 'school', 'unit', 'email', 'phone', 'active']
    list_filter = ['active', 'school']
    search_fields = ['full_name', 'email', 'phone']
    raw_id_fields = ['account']


@admin.register(DanceClass)
class DanceClassAdmin(admin.ModelAdmin):
    list_display = ['name', 'school', 'teacher', 'schedule_day', 'schedule_time', 'max_students', 'active']
    list_filter = ['active', 'school']
    search_fields = ['name']
    inlines = [ClassScheduleInline, EnrollmentInline]


@admin.register(Guardian)
class GuardianAdmin(admin.ModelAdmin):
    list_display = ['user', 'phone', 'created_at']
    search_fields = ['user__email', 'user__display_name']


admin.site.register(StudentGuardian)


@admin.register(GuardianInvite)
class GuardianInviteAdmin(admin.ModelAdmin):
    list_display = ['guardian_email', 'student', 'status', 'expires_at', 'created_at']
    list_filter = ['status']
    search_fields = ['guardian_email', 'student__full_name']
    raw_id_fields = ['student', 'invited_by']
    readonly_fields = ['token']
