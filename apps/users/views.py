# apps/users/views.py

from django.views.decorators.http import require_http_methods

from apps.core.api import api_endpoint, api_success
from apps.hostels.models import RoomAllotment
from apps.hostels.serializers import RoomAllotmentSerializer
from .decorators import role_required
from .models import User
from .serializers import UserSerializer


@require_http_methods(["GET"])
@api_endpoint
@role_required()
def profile(request, ctx):
    """
    Current user's account. Students also get their active room allotment.
    """
    user = User.objects.select_related('hostel').get(pk=ctx.user_id)
    data = UserSerializer(user).data

    if user.is_student:
        allotment = RoomAllotment.objects.active().filter(
            student_id=user.pk
        ).select_related('student', 'allotted_by', 'room__room_type').first()
        data['room_allotment'] = RoomAllotmentSerializer(allotment).data if allotment else None

    return api_success(data)
