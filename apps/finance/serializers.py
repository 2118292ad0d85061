from rest_framework import serializers

from apps.users.serializers import UserSummarySerializer
from .models import AdditionalCollectionType, AdditionalCollection, MessBill, MessMenu


class AdditionalCollectionTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdditionalCollectionType
        fields = ['id', 'name', 'description', 'default_amount', 'is_active']


class AdditionalCollectionSerializer(serializers.ModelSerializer):
    student = UserSummarySerializer(read_only=True)
    collected_by = UserSummarySerializer(read_only=True)
    collection_type = serializers.SerializerMethodField()

    class Meta:
        model = AdditionalCollection
        fields = ['id', 'student', 'collection_type', 'amount', 'reason', 'collection_date', 'collected_by']

    def get_collection_type(self, obj):
        return {'id': obj.collection_type_id, 'name': obj.collection_type.name}


class MessBillSerializer(serializers.ModelSerializer):
    student = UserSummarySerializer(read_only=True)

    class Meta:
        model = MessBill
        fields = [
            'id', 'student', 'hostel', 'month', 'year', 'amount',
            'status', 'due_date', 'paid_date', 'created_at'
        ]


class MessMenuSerializer(serializers.ModelSerializer):
    day = serializers.CharField(source='get_day_of_week_display', read_only=True)

    class Meta:
        model = MessMenu
        fields = ['id', 'hostel', 'day_of_week', 'day', 'meal_type', 'items', 'updated_at']
