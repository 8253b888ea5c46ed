from rest_framework import serializers
from apps.schools.models import School
from .models import Achievement, PointEntry


class AchievementSerializer(serializers.ModelSerializer):
    school = serializers.PrimaryKeyRelatedField(queryset=School.objects.all())

    class Meta:
        model = Achievement
        fields = ['id', 'school', 'name', 'description', 'icon', 'points_required', 'created_at']
        read_only_fields = ['id', 'created_at']


class PointEntrySerializer(serializers.ModelSerializer):

    class Meta:
        model = PointEntry
        fields = ['id', 'student', 'points', 'reason', 'created_at']
        read_only_fields = fields


class AwardPointsSerializer(serializers.Serializer):
    points = serializers.IntegerField(min_value=-1000, max_value=1000)
    reason = serializers.CharField(max_length=200)

    def validate_points(self, value):
        if value == 0:
            raise serializers.ValidationError('Points must be non-zero')
        return value


class PointsSummarySerializer(serializers.Serializer):
    student_id = serializers.UUIDField()
    total_points = serializers.IntegerField()
    achievements_count = serializers.IntegerField()
    next_achievement_points = serializers.IntegerField(allow_null=True)


class LeaderboardEntrySerializer(serializers.Serializer):
    student_id = serializers.UUIDField()
    name = serializers.CharField()
    total_points = serializers.IntegerField()
