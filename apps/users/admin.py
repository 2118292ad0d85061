# apps/users/admin.py

from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from apps.academics.services import StudentService
from apps.core.exceptions import ServiceError
from .context import ActingContext
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for User model.
    """
    list_display = ('username', 'email', 'role', 'hostel', 'is_active', 'last_login', 'date_joined')
    list_filter = ('role', 'hostel', 'is_active', 'is_staff', 'is_superuser')
    search_fields = ('username', 'email', 'first_name', 'last_name', 'phone')
    ordering = ('username',)
    list_select_related = ('hostel',)

    fieldsets = (
        (None, {
            'fields': ('username', 'password')
        }),
        (_('Personal Info'), {
            'fields': ('first_name', 'last_name', 'email', 'phone')
        }),
        (_('Hostel Access'), {
            'fields': ('role', 'hostel')
        }),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',)
        }),
        (_('Important Dates'), {
            'fields': ('last_login', 'date_joined'),
            'classes': ('collapse',)
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'email', 'password1', 'password2', 'role', 'hostel'),
        }),
    )

    actions = ['deactivate_users']

    def get_readonly_fields(self, request, obj=None):
        readonly = list(super().get_readonly_fields(request, obj))
        # Role and hostel are pinned while the student holds a room
        if obj is not None and obj.room_allotments.filter(is_active=True).exists():
            readonly += ['role', 'hostel']
        return readonly

    def deactivate_users(self, request, queryset):
        """
        Admin action to deactivate selected users. Students go through the
        student service so their room is vacated with the account.
        """
        deactivated = 0
        for user in queryset.filter(is_active=True):
            if user.role == User.Role.STUDENT and user.hostel_id is not None:
                ctx = ActingContext(user_id=request.user.pk, hostel_id=user.hostel_id, role=request.user.role)
                try:
                    StudentService.deactivate_student(ctx, user.pk)
                except ServiceError as e:
                    self.message_user(request, f'{user}: {e.message}', messages.ERROR)
                    continue
            else:
                user.is_active = False
                user.save(update_fields=['is_active'])
            deactivated += 1
        self.message_user(request, f'{deactivated} users deactivated.', messages.WARNING)
    deactivate_users.short_description = _('Deactivate selected users')
