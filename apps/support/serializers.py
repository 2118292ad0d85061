from rest_framework import serializers

from apps.users.serializers import UserSummarySerializer
from .models import Complaint


class ComplaintSerializer(serializers.ModelSerializer):
    student = UserSummarySerializer(read_only=True)
    assigned_to = UserSummarySerializer(read_only=True)

    class Meta:
        model = Complaint
        fields = [
            'id', 'student', 'title', 'description', 'category', 'priority', 'status',
            'assigned_to', 'resolution', 'resolved_date', 'created_at', 'updated_at'
        ]
