from rest_framework import serializers

from apps.hostels.serializers import RoomSerializer
from apps.users.serializers import UserSerializer, UserSummarySerializer
from .models import AcademicSession, Enrollment, Suspension


class AcademicSessionSerializer(serializers.ModelSerializer):
    progress_percentage = serializers.ReadOnlyField()

    class Meta:
        model = AcademicSession
        fields = ['id', 'name', 'start_date', 'end_date', 'is_active', 'progress_percentage', 'created_at']


class EnrollmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Enrollment
        fields = ['id', 'student', 'hostel', 'session', 'enrollment_date', 'is_active']


class StudentSerializer(UserSerializer):
    """Student with the room of their active allotment, if any."""
    room = serializers.SerializerMethodField()

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['room']
        read_only_fields = UserSerializer.Meta.fields

    def get_room(self, obj):
        allotments = getattr(obj, 'active_allotments', None)
        if allotments is None:
            allotments = list(obj.room_allotments.filter(is_active=True).select_related('room__room_type'))
        if not allotments:
            return None
        return RoomSerializer(allotments[0].room).data


class SuspensionSerializer(serializers.ModelSerializer):
    student = UserSummarySerializer(read_only=True)
    issued_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = Suspension
        fields = [
            'id', 'student', 'reason', 'start_date', 'end_date',
            'status', 'issued_by', 'remarks', 'created_at'
        ]
