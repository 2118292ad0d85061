# apps/attendance/admin.py

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Attendance, Leave


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ['student', 'date', 'status', 'check_in_time', 'check_out_time', 'marked_by']
    list_filter = ['status', 'date', 'student__hostel']
    search_fields = ['student__username']
    raw_id_fields = ['student', 'marked_by']
    date_hierarchy = 'date'


@admin.register(Leave)
class LeaveAdmin(admin.ModelAdmin):
    list_display = ['student', 'from_date', 'to_date', 'status', 'approved_by', 'approved_date']
    list_filter = ['status', 'from_date', 'student__hostel']
    search_fields = ['student__username', 'reason']
    raw_id_fields = ['student', 'approved_by']
    readonly_fields = ['approved_date', 'created_at', 'updated_at']

    fieldsets = (
        (_('Leave Request'), {
            'fields': ('student', 'from_date', 'to_date', 'reason')
        }),
        (_('Review'), {
            'fields': ('status', 'approved_by', 'approved_date', 'remarks')
        }),
        (_('Timestamps'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
