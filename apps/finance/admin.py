# apps/finance/admin.py

from django.contrib import admin, messages
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .models import AdditionalCollectionType, AdditionalCollection, MessBill, MessMenu


@admin.register(AdditionalCollectionType)
class AdditionalCollectionTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'default_amount', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name']


@admin.register(AdditionalCollection)
class AdditionalCollectionAdmin(admin.ModelAdmin):
    list_display = ['student', 'collection_type', 'amount', 'collection_date', 'collected_by']
    list_filter = ['collection_type', 'collection_date']
    search_fields = ['student__username', 'reason']
    raw_id_fields = ['student', 'collected_by']
    date_hierarchy = 'collection_date'


@admin.register(MessBill)
class MessBillAdmin(admin.ModelAdmin):
    list_display = ['student', 'hostel', 'month', 'year', 'amount', 'status', 'due_date', 'paid_date']
    list_filter = ['status', 'hostel', 'year', 'month']
    search_fields = ['student__username']
    raw_id_fields = ['student', 'generated_by']
    readonly_fields = ['paid_date', 'created_at', 'updated_at']
    actions = ['mark_selected_paid']

    def mark_selected_paid(self, request, queryset):
        """Admin action to mark selected bills as paid."""
        updated = queryset.exclude(status=MessBill.Status.PAID).update(
            status=MessBill.Status.PAID, paid_date=timezone.now()
        )
        self.message_user(request, f'{updated} mess bills marked as paid.', messages.SUCCESS)
    mark_selected_paid.short_description = _('Mark selected bills as paid')


@admin.register(MessMenu)
class MessMenuAdmin(admin.ModelAdmin):
    list_display = ['hostel', 'day_of_week', 'meal_type', 'items']
    list_filter = ['hostel', 'day_of_week', 'meal_type']
