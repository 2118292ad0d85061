from rest_framework import serializers

from apps.users.serializers import UserSummarySerializer
from .models import Attendance, Leave


class AttendanceSerializer(serializers.ModelSerializer):
    student = UserSummarySerializer(read_only=True)
    marked_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = Attendance
        fields = [
            'id', 'student', 'date', 'status', 'check_in_time',
            'check_out_time', 'marked_by', 'remarks'
        ]


class LeaveSerializer(serializers.ModelSerializer):
    student = UserSummarySerializer(read_only=True)
    approved_by = UserSummarySerializer(read_only=True)
    total_days = serializers.ReadOnlyField()

    class Meta:
        model = Leave
        fields = [
            'id', 'student', 'from_date', 'to_date', 'total_days', 'reason', 'status',
            'approved_by', 'approved_date', 'remarks', 'created_at'
        ]
