# apps/hostels/views.py

import logging

from django.db import transaction
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.api import api_endpoint, api_success, parse_json_body, validate_form
from apps.core.exceptions import NotFoundError, PermissionDeniedError
from apps.users.decorators import role_required
from apps.users.models import User
from .filters import RoomFilter, AllotmentFilter, HolidayFilter
from .forms import (
    AllotmentForm, TransferForm, RoomSearchForm, AllotmentSearchForm,
    HolidaySearchForm, HostelForm, RoomTypeForm, RoomForm, HolidayForm
)
from .models import Hostel, RoomType, Holiday
from .serializers import (
    HostelSerializer, RoomTypeSerializer, RoomSerializer,
    RoomAllotmentSerializer, HolidaySerializer
)
from .services import AllotmentService, RoomService

logger = logging.getLogger(__name__)

ADMIN = User.Role.ADMIN
WARDEN = User.Role.WARDEN


# =============================================================================
# ADMINISTRATION
# =============================================================================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(ADMIN)
def hostel_list(request, ctx):
    """
    List all hostels or create a new one.
    """
    if request.method == 'POST':
        form = validate_form(HostelForm, parse_json_body(request))
        hostel = form.save()
        logger.info(f"Hostel {hostel.code} created by user {ctx.user_id}")
        return api_success(HostelSerializer(hostel).data, message='Hostel created successfully', status=201)

    hostels = Hostel.objects.all()
    return api_success(HostelSerializer(hostels, many=True).data)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(ADMIN, WARDEN)
def room_type_list(request, ctx):
    """
    List room types (admins and wardens) or create one (admins only).
    """
    if request.method == 'POST':
        if not ctx.is_admin:
            raise PermissionDeniedError()
        form = validate_form(RoomTypeForm, parse_json_body(request))
        room_type = form.save()
        logger.info(f"Room type {room_type.name} created by user {ctx.user_id}")
        return api_success(RoomTypeSerializer(room_type).data, message='Room type created successfully', status=201)

    return api_success(RoomTypeSerializer(RoomType.objects.all(), many=True).data)


# =============================================================================
# ROOMS
# =============================================================================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(ADMIN, WARDEN)
def room_list(request, ctx):
    """
    GET lists the rooms of the caller's hostel (``?available=true`` for free
    rooms only); POST creates a room.
    """
    if request.method == 'POST':
        form = validate_form(RoomForm, parse_json_body(request))
        room = RoomService.create_room(ctx, **form.cleaned_data)
        return api_success(RoomSerializer(room).data, message='Room created successfully', status=201)

    if ctx.hostel_id is None:
        return api_success([])

    form = validate_form(RoomSearchForm, request.GET)
    rooms = AllotmentService.list_rooms(ctx, RoomFilter.from_cleaned_data(form.cleaned_data))
    return api_success(RoomSerializer(rooms, many=True).data)


@require_http_methods(["GET"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def available_rooms(request, ctx):
    rooms = AllotmentService.list_available_rooms(ctx)
    return api_success(RoomSerializer(rooms, many=True).data)


# =============================================================================
# ALLOTMENTS
# =============================================================================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def allotment_list(request, ctx):
    """
    GET lists allotments of the caller's hostel; POST allots a room.
    """
    if request.method == 'POST':
        form = validate_form(AllotmentForm, parse_json_body(request))
        allotment = AllotmentService.allot_room(
            form.cleaned_data['student_id'],
            form.cleaned_data['room_id'],
            ctx,
            remarks=form.cleaned_data['remarks']
        )
        return api_success(
            RoomAllotmentSerializer(allotment).data,
            message='Room allotted successfully',
            status=201
        )

    form = validate_form(AllotmentSearchForm, request.GET)
    allotments = AllotmentService.list_allotments(ctx, AllotmentFilter.from_cleaned_data(form.cleaned_data))
    return api_success(RoomAllotmentSerializer(allotments, many=True).data)


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def vacate_allotment(request, ctx, pk):
    allotment = AllotmentService.vacate_room(pk, ctx)
    return api_success(RoomAllotmentSerializer(allotment).data, message='Room vacated successfully')


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def transfer_allotment(request, ctx, pk):
    form = validate_form(TransferForm, parse_json_body(request))
    allotment = AllotmentService.transfer_room(
        pk,
        form.cleaned_data['room_id'],
        ctx,
        remarks=form.cleaned_data['remarks']
    )
    return api_success(RoomAllotmentSerializer(allotment).data, message='Room transferred successfully')


# =============================================================================
# HOLIDAYS
# =============================================================================

def _get_holiday(ctx, pk):
    holiday = Holiday.objects.filter(pk=pk, hostel_id=ctx.hostel_id).first()
    if holiday is None:
        raise NotFoundError('Holiday not found')
    return holiday


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def holiday_list(request, ctx):
    if request.method == 'POST':
        form = validate_form(HolidayForm, parse_json_body(request))
        data = form.cleaned_data
        holiday = Holiday.objects.create(
            hostel_id=ctx.hostel_id,
            name=data['name'],
            date=data['date'],
            holiday_type=data['type'],
            description=data['description']
        )
        logger.info(f"Holiday {holiday.pk} added to hostel {ctx.hostel_id}")
        return api_success(HolidaySerializer(holiday).data, message='Holiday added successfully', status=201)

    form = validate_form(HolidaySearchForm, request.GET)
    holidays = HolidayFilter.from_cleaned_data(form.cleaned_data).apply(
        Holiday.objects.filter(hostel_id=ctx.hostel_id)
    )
    return api_success(HolidaySerializer(holidays, many=True).data)


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def holiday_update(request, ctx, pk):
    holiday = _get_holiday(ctx, pk)
    form = validate_form(HolidayForm, parse_json_body(request))
    data = form.cleaned_data

    holiday.name = data['name']
    holiday.date = data['date']
    holiday.holiday_type = data['type']
    holiday.description = data['description']
    holiday.save()
    return api_success(HolidaySerializer(holiday).data, message='Holiday updated successfully')


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def holiday_delete(request, ctx, pk):
    holiday = _get_holiday(ctx, pk)
    with transaction.atomic():
        holiday.delete()
    logger.info(f"Holiday {pk} deleted from hostel {ctx.hostel_id}")
    return api_success(message='Holiday deleted successfully')
