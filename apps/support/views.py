# apps/support/views.py

import logging

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.api import api_endpoint, api_success, parse_json_body, validate_form
from apps.core.exceptions import NotFoundError
from apps.users.decorators import role_required
from apps.users.models import User
from .filters import ComplaintFilter
from .forms import ComplaintForm, ComplaintUpdateForm, ComplaintSearchForm
from .models import Complaint
from .serializers import ComplaintSerializer

logger = logging.getLogger(__name__)

WARDEN = User.Role.WARDEN
STUDENT = User.Role.STUDENT

STAFF_ROLES = [User.Role.WARDEN, User.Role.MESS_MANAGER]


def _hostel_complaints(ctx):
    return Complaint.objects.for_hostel(ctx.hostel_id).select_related('student', 'assigned_to')


@require_http_methods(["GET"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def complaint_list(request, ctx):
    """Complaints of the hostel, urgent first and then newest."""
    form = validate_form(ComplaintSearchForm, request.GET)
    complaints = ComplaintFilter.from_cleaned_data(form.cleaned_data).apply(_hostel_complaints(ctx))
    complaints = complaints.with_priority_rank().order_by('priority_rank', '-created_at')
    return api_success(ComplaintSerializer(complaints, many=True).data)


@require_http_methods(["GET"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def pending_complaints(request, ctx):
    """Open complaints, urgent first and then oldest."""
    complaints = _hostel_complaints(ctx).open().with_priority_rank().order_by('priority_rank', 'created_at')
    return api_success(ComplaintSerializer(complaints, many=True).data)


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def complaint_update(request, ctx, pk):
    """
    Update a complaint's status and assignee. Resolving with a resolution
    stamps the resolved date.
    """
    complaint = _hostel_complaints(ctx).filter(pk=pk).first()
    if complaint is None:
        raise NotFoundError('Complaint not found')

    form = validate_form(ComplaintUpdateForm, parse_json_body(request))
    data = form.cleaned_data

    if data['assigned_to_id']:
        assignee = User.objects.filter(
            pk=data['assigned_to_id'],
            role__in=STAFF_ROLES,
            hostel_id=ctx.hostel_id,
            is_active=True
        ).first()
        if assignee is None:
            raise NotFoundError('Assignee not found in this hostel')
        complaint.assigned_to = assignee

    if data['status'] == Complaint.Status.RESOLVED and data['resolution']:
        complaint.resolve(data['resolution'])
    else:
        complaint.status = data['status']

    complaint.save()
    logger.info(f"Complaint {complaint.pk} set to {complaint.status} by user {ctx.user_id}")
    return api_success(ComplaintSerializer(complaint).data, message='Complaint updated successfully')


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(STUDENT)
def my_complaints(request, ctx):
    if request.method == 'POST':
        form = validate_form(ComplaintForm, parse_json_body(request))
        complaint = form.save(commit=False)
        complaint.student_id = ctx.user_id
        complaint.save()
        logger.info(f"Complaint {complaint.pk} submitted by student {ctx.user_id}")
        return api_success(ComplaintSerializer(complaint).data, message='Complaint submitted successfully', status=201)

    complaints = Complaint.objects.filter(student_id=ctx.user_id).select_related('student', 'assigned_to')
    return api_success(ComplaintSerializer(complaints, many=True).data)
