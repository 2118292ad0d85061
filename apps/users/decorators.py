# apps/users/decorators.py

from functools import wraps

from django.utils.translation import gettext_lazy as _

from apps.core.api import api_error
from .context import ActingContext


def role_required(*roles, hostel_scoped=False):
    """
    Restrict an API view to authenticated users holding one of ``roles``.

    The wrapped view receives the caller's ActingContext as its second
    argument. With ``hostel_scoped`` the caller must be assigned to a hostel.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            user = request.user
            if not user.is_authenticated:
                return api_error(_('Authentication required'), status=401)

            if roles and user.role not in roles:
                return api_error(_('You do not have permission to perform this action'), status=403)

            ctx = ActingContext.from_user(user)
            if hostel_scoped and ctx.hostel_id is None:
                return api_error(_('No hostel is assigned to this account'), status=403)

            return view_func(request, ctx, *args, **kwargs)

        return wrapper

    return decorator
