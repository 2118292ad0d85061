from rest_framework import serializers

from apps.users.serializers import UserSummarySerializer
from .models import Hostel, RoomType, Room, RoomAllotment, Holiday


class HostelSerializer(serializers.ModelSerializer):
    full_address = serializers.ReadOnlyField()
    total_rooms = serializers.ReadOnlyField()
    occupied_rooms = serializers.ReadOnlyField()

    class Meta:
        model = Hostel
        fields = [
            'id', 'name', 'code', 'description', 'full_address', 'phone', 'email',
            'is_active', 'total_rooms', 'occupied_rooms', 'created_at'
        ]


class RoomTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = RoomType
        fields = ['id', 'name', 'capacity', 'description']


class RoomSerializer(serializers.ModelSerializer):
    room_type = RoomTypeSerializer(read_only=True)

    class Meta:
        model = Room
        fields = ['id', 'hostel', 'room_number', 'floor', 'room_type', 'is_occupied', 'is_active']


class RoomAllotmentSerializer(serializers.ModelSerializer):
    student = UserSummarySerializer(read_only=True)
    room = RoomSerializer(read_only=True)
    allotted_by = UserSummarySerializer(read_only=True)
    duration_days = serializers.ReadOnlyField()

    class Meta:
        model = RoomAllotment
        fields = [
            'id', 'student', 'room', 'allotment_date', 'vacated_date',
            'is_active', 'allotted_by', 'remarks', 'duration_days'
        ]


class HolidaySerializer(serializers.ModelSerializer):
    type = serializers.CharField(source='holiday_type', read_only=True)

    class Meta:
        model = Holiday
        fields = ['id', 'hostel', 'name', 'date', 'type', 'description']
