# apps/finance/views.py

import logging

from django.db import transaction
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.academics.services import StudentService
from apps.core.api import api_endpoint, api_success, parse_json_body, validate_form
from apps.core.exceptions import PermissionDeniedError
from apps.users.decorators import role_required
from apps.users.models import User
from .filters import MessBillFilter
from .forms import (
    CollectionTypeForm, CollectionForm, GenerateMessBillsForm,
    MessBillSearchForm, MessMenuForm
)
from .models import AdditionalCollectionType, AdditionalCollection, MessBill, MessMenu
from .serializers import (
    AdditionalCollectionTypeSerializer, AdditionalCollectionSerializer,
    MessBillSerializer, MessMenuSerializer
)
from .services import MessBillService, CollectionService

logger = logging.getLogger(__name__)

ADMIN = User.Role.ADMIN
WARDEN = User.Role.WARDEN
MESS_MANAGER = User.Role.MESS_MANAGER
STUDENT = User.Role.STUDENT


# =============================================================================
# ADDITIONAL COLLECTIONS
# =============================================================================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(ADMIN, WARDEN, MESS_MANAGER)
def collection_type_list(request, ctx):
    """
    Collection types; only admins may create them.
    """
    if request.method == 'POST':
        if not ctx.is_admin:
            raise PermissionDeniedError()
        form = validate_form(CollectionTypeForm, parse_json_body(request))
        collection_type = form.save()
        logger.info(f"Collection type {collection_type.name} created by user {ctx.user_id}")
        return api_success(
            AdditionalCollectionTypeSerializer(collection_type).data,
            message='Collection type created successfully',
            status=201
        )

    types = AdditionalCollectionType.objects.filter(is_active=True)
    return api_success(AdditionalCollectionTypeSerializer(types, many=True).data)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(WARDEN, hostel_scoped=True)
def collection_list(request, ctx):
    if request.method == 'POST':
        form = validate_form(CollectionForm, parse_json_body(request))
        data = form.cleaned_data
        student = StudentService.get_student(ctx, data['student_id'])
        collection = CollectionService.record_collection(
            ctx,
            student,
            data['collection_type_id'],
            data['amount'],
            reason=data['reason']
        )
        return api_success(
            AdditionalCollectionSerializer(collection).data,
            message='Additional collection created successfully',
            status=201
        )

    collections = AdditionalCollection.objects.filter(
        student__hostel_id=ctx.hostel_id
    ).select_related('student', 'collection_type', 'collected_by').order_by('-collection_date')
    return api_success(AdditionalCollectionSerializer(collections, many=True).data)


# =============================================================================
# MESS BILLS
# =============================================================================

@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
@role_required(MESS_MANAGER, WARDEN, hostel_scoped=True)
def generate_mess_bills(request, ctx):
    form = validate_form(GenerateMessBillsForm, parse_json_body(request))
    data = form.cleaned_data
    created, skipped = MessBillService.generate_bills(
        ctx, data['month'], data['year'], data['amount_per_student']
    )
    return api_success(
        {'created': created, 'skipped': skipped},
        message=f'{created} mess bills generated successfully',
        status=201
    )


@require_http_methods(["GET"])
@api_endpoint
@role_required(MESS_MANAGER, WARDEN, hostel_scoped=True)
def mess_bill_list(request, ctx):
    form = validate_form(MessBillSearchForm, request.GET)
    bills = MessBill.objects.for_hostel(ctx.hostel_id)
    MessBillService.mark_overdue(bills)

    bills = MessBillFilter.from_cleaned_data(form.cleaned_data).apply(bills).select_related('student')
    return api_success(MessBillSerializer(bills, many=True).data)


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
@role_required(MESS_MANAGER, WARDEN, hostel_scoped=True)
def pay_mess_bill(request, ctx, pk):
    bill = MessBillService.mark_paid(ctx, pk)
    return api_success(MessBillSerializer(bill).data, message='Mess bill marked as paid')


@require_http_methods(["GET"])
@api_endpoint
@role_required(STUDENT)
def my_mess_bills(request, ctx):
    bills = MessBill.objects.filter(student_id=ctx.user_id)
    MessBillService.mark_overdue(bills)
    return api_success(MessBillSerializer(bills.select_related('student'), many=True).data)


# =============================================================================
# MESS MENU
# =============================================================================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
@role_required(MESS_MANAGER, WARDEN, STUDENT, hostel_scoped=True)
def mess_menu_list(request, ctx):
    """
    Weekly menu of the caller's hostel. POST sets the items for one meal,
    replacing any existing entry.
    """
    if request.method == 'POST':
        if ctx.role == STUDENT:
            raise PermissionDeniedError()
        form = validate_form(MessMenuForm, parse_json_body(request))
        data = form.cleaned_data
        with transaction.atomic():
            menu, created = MessMenu.objects.update_or_create(
                hostel_id=ctx.hostel_id,
                day_of_week=data['day_of_week'],
                meal_type=data['meal_type'],
                defaults={'items': data['items'], 'created_by_id': ctx.user_id}
            )
        return api_success(
            MessMenuSerializer(menu).data,
            message='Menu saved successfully',
            status=201 if created else 200
        )

    menus = MessMenu.objects.filter(hostel_id=ctx.hostel_id)
    return api_success(MessMenuSerializer(menus, many=True).data)
