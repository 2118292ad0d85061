# apps/academics/admin.py

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import AcademicSession, Enrollment, Suspension


@admin.register(AcademicSession)
class AcademicSessionAdmin(admin.ModelAdmin):
    list_display = ['name', 'start_date', 'end_date', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name']
    list_editable = ['is_active']


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ['student', 'hostel', 'session', 'enrollment_date', 'is_active']
    list_filter = ['hostel', 'session', 'is_active']
    search_fields = ['student__username', 'student__email']
    list_select_related = ['student', 'hostel', 'session']
    raw_id_fields = ['student']


@admin.register(Suspension)
class SuspensionAdmin(admin.ModelAdmin):
    list_display = ['student', 'start_date', 'end_date', 'status', 'issued_by']
    list_filter = ['status', 'start_date']
    search_fields = ['student__username', 'reason']
    raw_id_fields = ['student', 'issued_by']
    date_hierarchy = 'start_date'

    fieldsets = (
        (_('Suspension'), {
            'fields': ('student', 'reason', 'start_date', 'end_date', 'status')
        }),
        (_('Administration'), {
            'fields': ('issued_by', 'remarks')
        }),
    )
