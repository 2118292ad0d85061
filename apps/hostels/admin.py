# apps/hostels/admin.py

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from apps.core.exceptions import ServiceError
from apps.users.context import ActingContext
from .models import Hostel, RoomType, Room, RoomAllotment, Holiday
from .services import AllotmentService


class RoomInline(admin.TabularInline):
    model = Room
    extra = 1
    fields = ['room_number', 'floor', 'room_type', 'is_occupied', 'is_active']
    readonly_fields = ['is_occupied']


@admin.register(Hostel)
class HostelAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'city', 'total_rooms', 'occupied_rooms', 'is_active']
    list_filter = ['is_active', 'city']
    search_fields = ['name', 'code']
    list_editable = ['is_active']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [RoomInline]

    fieldsets = (
        (_('Basic Information'), {
            'fields': ('name', 'code', 'description', 'is_active')
        }),
        (_('Address'), {
            'fields': (
                'address_line_1', 'address_line_2', 'city',
                'state', 'postal_code', 'country'
            )
        }),
        (_('Contact'), {
            'fields': ('phone', 'email')
        }),
        (_('Timestamps'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(RoomType)
class RoomTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'capacity']
    search_fields = ['name']


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['room_number', 'hostel', 'floor', 'room_type', 'is_occupied', 'is_active']
    list_filter = ['hostel', 'room_type', 'floor', 'is_occupied', 'is_active']
    search_fields = ['room_number', 'hostel__name', 'hostel__code']
    list_select_related = ['hostel', 'room_type']
    # Occupancy is owned by the allotment ledger
    readonly_fields = ['is_occupied', 'created_at', 'updated_at']

    def get_readonly_fields(self, request, obj=None):
        readonly = list(super().get_readonly_fields(request, obj))
        # An occupied room cannot move to another hostel
        if obj is not None and obj.allotments.filter(is_active=True).exists():
            readonly.append('hostel')
        return readonly


@admin.register(RoomAllotment)
class RoomAllotmentAdmin(admin.ModelAdmin):
    list_display = [
        'student', 'room', 'allotment_date', 'vacated_date',
        'is_active', 'allotted_by', 'duration_days'
    ]
    list_filter = ['is_active', 'room__hostel', 'allotment_date']
    search_fields = ['student__username', 'room__room_number', 'room__hostel__name']
    list_select_related = ['student', 'room__hostel', 'allotted_by']
    date_hierarchy = 'allotment_date'
    readonly_fields = [
        'student', 'room', 'allotment_date', 'vacated_date', 'is_active',
        'allotted_by', 'duration_days', 'created_at', 'updated_at'
    ]
    actions = ['vacate_selected']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def vacate_selected(self, request, queryset):
        """Vacate the selected allotments through the allotment service."""
        vacated = 0
        for allotment in queryset.filter(is_active=True).select_related('room'):
            ctx = ActingContext(
                user_id=request.user.pk,
                hostel_id=allotment.room.hostel_id,
                role=request.user.role
            )
            try:
                AllotmentService.vacate_room(allotment.pk, ctx)
            except ServiceError as e:
                self.message_user(request, f'{allotment}: {e.message}', messages.ERROR)
                continue
            vacated += 1
        self.message_user(request, f'{vacated} allotments vacated.', messages.SUCCESS)
    vacate_selected.short_description = _('Vacate selected allotments')


@admin.register(Holiday)
class HolidayAdmin(admin.ModelAdmin):
    list_display = ['name', 'date', 'holiday_type', 'hostel']
    list_filter = ['holiday_type', 'hostel']
    search_fields = ['name']
    date_hierarchy = 'date'
