# apps/support/admin.py

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from .models import Complaint


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ['title', 'student', 'category', 'priority', 'status', 'assigned_to', 'created_at']
    list_filter = ['status', 'priority', 'category', 'student__hostel']
    search_fields = ['title', 'description', 'student__username']
    raw_id_fields = ['student', 'assigned_to']
    readonly_fields = ['resolved_date', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    actions = ['close_complaints']

    fieldsets = (
        (_('Complaint'), {
            'fields': ('student', 'title', 'description', 'category', 'priority')
        }),
        (_('Handling'), {
            'fields': ('status', 'assigned_to', 'resolution', 'resolved_date')
        }),
        (_('Timestamps'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def close_complaints(self, request, queryset):
        """Admin action to close selected complaints."""
        updated = queryset.update(status=Complaint.Status.CLOSED)
        self.message_user(request, f'{updated} complaints closed.', messages.SUCCESS)
    close_complaints.short_description = _('Close selected complaints')
