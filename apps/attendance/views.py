# apps/attendance/views.py

import logging

from django.db import transaction
from django.db.models import Case, When, IntegerField
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.academics.services import StudentService
from apps.core.api import api_endpoint, api_success, parse_json_body, validate_form
from apps.core.exceptions import ConflictError, NotFoundError
from apps.users.decorators import role_required
from apps.users.models import User
from .filters import AttendanceFilter, LeaveFilter
from .forms import (
    AttendanceForm, AttendanceSearchForm, LeaveSearchForm,
    LeaveReviewForm, LeaveApplicationForm
)
from .models import Attendance, Leave
from .serializers import AttendanceSerializer, LeaveSerializer

logger = logging.getLogger(__name__)

WARDEN = User.Role.WARDEN
STUDENT = User.Role.STUDENT


def _hostel_leaves(ctx):
    return Leave.objects.filter(student__hostel_id=ctx.hostel_id).select_related('student', 'approved_by')


# =============================================================================
# ATTENDANCE
# =============================================================================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def attendance_records(request, ctx):
    """
    POST marks a student's attendance for a date, replacing any existing
    record for that day. GET lists records of the hostel, newest first.
    """
    if request.method == 'POST':
        form = validate_form(AttendanceForm, parse_json_body(request))
        data = form.cleaned_data
        student = StudentService.get_student(ctx, data['student_id'])

        with transaction.atomic():
            attendance, created = Attendance.objects.update_or_create(
                student=student,
                date=data['date'],
                defaults={
                    'status': data['status'],
                    'check_in_time': data['check_in_time'],
                    'check_out_time': data['check_out_time'],
                    'remarks': data['remarks'],
                    'marked_by_id': ctx.user_id,
                }
            )

        action = 'marked' if created else 'updated'
        logger.info(f"Attendance {action} for student {student.pk} on {data['date']} by user {ctx.user_id}")
        return api_success(AttendanceSerializer(attendance).data, message='Attendance marked successfully')

    form = validate_form(AttendanceSearchForm, request.GET)
    records = AttendanceFilter.from_cleaned_data(form.cleaned_data).apply(
        Attendance.objects.filter(student__hostel_id=ctx.hostel_id)
    ).select_related('student', 'marked_by').order_by('-date', '-created_at')
    return api_success(AttendanceSerializer(records, many=True).data)


# =============================================================================
# LEAVE MANAGEMENT
# =============================================================================

@require_http_methods(["GET"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def leave_list(request, ctx):
    """Leave requests of the hostel, pending first and then newest."""
    form = validate_form(LeaveSearchForm, request.GET)
    leaves = LeaveFilter.from_cleaned_data(form.cleaned_data).apply(_hostel_leaves(ctx))
    leaves = leaves.annotate(
        pending_rank=Case(
            When(status=Leave.LeaveStatus.PENDING, then=0),
            default=1,
            output_field=IntegerField()
        )
    ).order_by('pending_rank', '-created_at')
    return api_success(LeaveSerializer(leaves, many=True).data)


@require_http_methods(["GET"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def pending_leaves(request, ctx):
    leaves = _hostel_leaves(ctx).filter(status=Leave.LeaveStatus.PENDING).order_by('created_at')
    return api_success(LeaveSerializer(leaves, many=True).data)


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def review_leave(request, ctx, pk):
    """
    Approve or reject a pending leave request.
    """
    form = validate_form(LeaveReviewForm, parse_json_body(request))
    status = form.cleaned_data['status']

    with transaction.atomic():
        leave = _hostel_leaves(ctx).select_for_update(of=('self',)).filter(pk=pk).first()
        if leave is None:
            raise NotFoundError('Leave request not found')

        if not leave.is_pending:
            raise ConflictError('Leave request has already been processed')

        leave.status = status
        leave.approved_by_id = ctx.user_id
        leave.approved_date = timezone.now()
        leave.remarks = form.cleaned_data['remarks']
        leave.save(update_fields=['status', 'approved_by', 'approved_date', 'remarks', 'updated_at'])

    logger.info(f"Leave {leave.pk} {status} by user {ctx.user_id}")
    leave = _hostel_leaves(ctx).get(pk=leave.pk)
    return api_success(LeaveSerializer(leave).data, message=f'Leave request {status} successfully')


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(STUDENT)
def my_leaves(request, ctx):
    """
    Student's own leave requests; POST applies for a new one.
    """
    if request.method == 'POST':
        form = validate_form(LeaveApplicationForm, parse_json_body(request))
        leave = Leave.objects.create(student_id=ctx.user_id, **form.cleaned_data)
        logger.info(f"Leave {leave.pk} requested by student {ctx.user_id}")
        return api_success(LeaveSerializer(leave).data, message='Leave request submitted successfully', status=201)

    leaves = Leave.objects.filter(student_id=ctx.user_id).select_related('student', 'approved_by')
    return api_success(LeaveSerializer(leaves, many=True).data)
