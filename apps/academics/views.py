# apps/academics/views.py

import logging

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.api import api_endpoint, api_success, parse_json_body, validate_form
from apps.core.exceptions import NotFoundError, PermissionDeniedError
from apps.users.decorators import role_required
from apps.users.models import User
from .filters import SuspensionFilter
from .forms import (
    AcademicSessionForm, EnrollStudentForm, SuspensionForm,
    SuspensionUpdateForm, SuspensionSearchForm
)
from .models import AcademicSession, Suspension
from .serializers import (
    AcademicSessionSerializer, EnrollmentSerializer, StudentSerializer, SuspensionSerializer
)
from .services import StudentService

logger = logging.getLogger(__name__)

ADMIN = User.Role.ADMIN
WARDEN = User.Role.WARDEN


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(ADMIN, WARDEN)
def session_list(request, ctx):
    """
    Active academic sessions, newest first. Admins may create sessions.
    """
    if request.method == 'POST':
        if not ctx.is_admin:
            raise PermissionDeniedError()
        form = validate_form(AcademicSessionForm, parse_json_body(request))
        session = form.save()
        logger.info(f"Academic session {session.name} created by user {ctx.user_id}")
        return api_success(
            AcademicSessionSerializer(session).data,
            message='Academic session created successfully',
            status=201
        )

    sessions = AcademicSession.objects.filter(is_active=True).order_by('-created_at')
    return api_success(AcademicSessionSerializer(sessions, many=True).data)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def student_list(request, ctx):
    """
    GET lists the hostel's active students with their rooms; POST enrolls one.
    """
    if request.method == 'POST':
        form = validate_form(EnrollStudentForm, parse_json_body(request))
        student, enrollment = StudentService.enroll_student(ctx, **form.cleaned_data)
        return api_success(
            {
                'student': StudentSerializer(student).data,
                'enrollment': EnrollmentSerializer(enrollment).data,
            },
            message='Student enrolled successfully',
            status=201
        )

    students = StudentService.list_students(ctx)
    return api_success(StudentSerializer(students, many=True).data)


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def student_deactivate(request, ctx, pk):
    student = StudentService.deactivate_student(ctx, pk)
    return api_success(StudentSerializer(student).data, message='Student deactivated successfully')


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def suspension_list(request, ctx):
    if request.method == 'POST':
        form = validate_form(SuspensionForm, parse_json_body(request))
        data = form.cleaned_data
        student = StudentService.get_student(ctx, data['student_id'])

        suspension = Suspension.objects.create(
            student=student,
            reason=data['reason'],
            start_date=data['start_date'],
            end_date=data['end_date'],
            remarks=data['remarks'],
            issued_by_id=ctx.user_id
        )
        logger.info(f"Suspension {suspension.pk} issued to student {student.pk} by user {ctx.user_id}")
        return api_success(
            SuspensionSerializer(suspension).data,
            message='Suspension created successfully',
            status=201
        )

    form = validate_form(SuspensionSearchForm, request.GET)
    suspensions = SuspensionFilter.from_cleaned_data(form.cleaned_data).apply(
        Suspension.objects.filter(student__hostel_id=ctx.hostel_id)
    ).select_related('student', 'issued_by').order_by('-created_at')
    return api_success(SuspensionSerializer(suspensions, many=True).data)


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def suspension_update(request, ctx, pk):
    suspension = Suspension.objects.select_related('student', 'issued_by').filter(
        pk=pk, student__hostel_id=ctx.hostel_id
    ).first()
    if suspension is None:
        raise NotFoundError('Suspension not found')

    form = validate_form(SuspensionUpdateForm, parse_json_body(request))
    suspension.status = form.cleaned_data['status']
    suspension.remarks = form.cleaned_data['remarks']
    suspension.save(update_fields=['status', 'remarks', 'updated_at'])
    return api_success(SuspensionSerializer(suspension).data, message='Suspension updated successfully')
