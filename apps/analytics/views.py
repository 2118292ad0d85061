# apps/analytics/views.py

from django.views.decorators.http import require_http_methods

from apps.core.api import api_endpoint, api_success
from apps.users.decorators import role_required
from apps.users.models import User
from .services import warden_dashboard_stats, admin_dashboard_stats


@require_http_methods(["GET"])
@api_endpoint
@role_required(User.Role.WARDEN, hostel_scoped=True)
def warden_dashboard(request, ctx):
    return api_success(warden_dashboard_stats(ctx))


@require_http_methods(["GET"])
@api_endpoint
@role_required(User.Role.ADMIN)
def admin_dashboard(request, ctx):
    return api_success(admin_dashboard_stats())
