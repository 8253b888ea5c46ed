from django.contrib import admin
from .models import Achievement, PointEntry, StudentAchievement


@admin.register(Achievement)
class AchievementAdmin(admin.ModelAdmin):
    list_display = ['name', 'school', 'points_required']
    list_filter = ['school']


@admin.register(PointEntry)
class PointEntryAdmin(admin.ModelAdmin):
    list_display = ['student', 'points', 'reason', 'created_at']
    search_fields = ['student__full_name', 'reason']
    raw_id_fields = ['student']


admin.site.register(StudentAchievement)
