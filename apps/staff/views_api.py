"""
JSON route handlers for staff, departments and the sales team

All handlers answer {"error": ...} with a 4xx/5xx status on failure and
only let non-admin users reach records of their own client.
"""
import json
import logging
import math
import smtplib

from django.conf import settings
from django.core.mail import BadHeaderError, send_mail
from django.db import transaction
from django.db.models import Avg, Count, Q
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.accounts.decorators import api_login_required
from apps.core.models import ClientType
from apps.core.utils import get_user_client, user_can_access_client
from apps.gateway.client import GatewayError
from apps.gateway.users import create_users_api
from .models import (
    CommunicationStatus,
    CommunicationType,
    Department,
    Staff,
    StaffCommunication,
    StaffRole,
    StaffStatus,
)
from .serializers import DepartmentSerializer, StaffCommunicationSerializer, StaffSerializer
from .utils import app_user_exists, grant_app_access

logger = logging.getLogger(__name__)


# HELPER FUNCTIONS
class BadRequest(Exception):
    pass


def parse_json(request):
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise BadRequest('Invalid JSON body')
    if not isinstance(data, dict):
        raise BadRequest('Expected a JSON object')
    return data


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def paginate(request, queryset, serializer_class):
    """{items, total, page, limit, total_pages} for a queryset."""
    page = _positive_int(request.GET.get('page'), 1)
    limit = _positive_int(request.GET.get('limit'), settings.PAGINATION_SIZE)
    total = queryset.count()
    offset = (page - 1) * limit

    return {
        'items': serializer_class(queryset[offset:offset + limit], many=True).data,
        'total': total,
        'page': page,
        'limit': limit,
        'total_pages': math.ceil(total / limit),
    }


def _forbidden():
    return JsonResponse({'error': 'Access denied'}, status=403)


def _require_client_param(request, source=None):
    """
    Returns (client_id, error_response) for handlers scoped by ?client_id=.
    """
    client_id = (source if source is not None else request.GET).get('client_id')
    if not client_id:
        return None, JsonResponse({'error': 'Client ID required'}, status=400)
    if not str(client_id).isdigit():
        return None, JsonResponse({'error': 'Invalid client ID'}, status=400)
    if not user_can_access_client(request.user, client_id):
        return None, _forbidden()
    return client_id, None


def _filter_choice(value, choices):
    return value if value and value != 'all' and value in choices else None


# STAFF
@api_login_required
@require_http_methods(['GET', 'POST'])
def staff_collection_view(request):
    if request.method == 'POST':
        return _create_staff(request)

    client_id, error = _require_client_param(request)
    if error:
        return error

    staff_qs = Staff.objects.filter(client_id=client_id).select_related('department')

    search = request.GET.get('search', '').strip()
    if search:
        staff_qs = staff_qs.filter(
            Q(first_name__icontains=search) |
            Q(last_name__icontains=search) |
            Q(email__icontains=search) |
            Q(employee_id__icontains=search)
        )

    department_id = request.GET.get('department_id')
    if department_id:
        if not department_id.isdigit():
            return JsonResponse({'error': 'Invalid department ID'}, status=400)
        staff_qs = staff_qs.filter(department_id=department_id)

    role = _filter_choice(request.GET.get('role'), StaffRole.values)
    if role:
        staff_qs = staff_qs.filter(role=role)

    status = _filter_choice(request.GET.get('status'), StaffStatus.values)
    if status:
        staff_qs = staff_qs.filter(status=status)

    return JsonResponse(paginate(request, staff_qs.order_by('-created_at'), StaffSerializer))


def _create_staff(request):
    try:
        data = parse_json(request)
    except BadRequest as e:
        return JsonResponse({'error': str(e)}, status=400)

    client_id, error = _require_client_param(request, source=data)
    if error:
        return error

    serializer = StaffSerializer(data=data)
    if not serializer.is_valid():
        return JsonResponse({'error': 'Invalid staff data', 'details': serializer.errors}, status=400)

    password = serializer.validated_data.pop('password', '')
    can_access_app = serializer.validated_data.get('can_access_app', False)
    extra = {'sub_role': settings.STAFF_APP_SUB_ROLE} if can_access_app else {}

    if can_access_app and password and app_user_exists(serializer.validated_data['email']):
        return JsonResponse({'error': 'A user with this email already exists'}, status=400)

    with transaction.atomic():
        staff = serializer.save(**extra)

        if can_access_app and password:
            grant_app_access(staff, password)

    logger.info(f"Staff {staff.employee_id} created for client {staff.client_id} by {request.user.email}")
    return JsonResponse(StaffSerializer(staff).data, status=201)


@api_login_required
@require_http_methods(['GET', 'PUT', 'DELETE'])
def staff_detail_view(request, pk):
    try:
        staff = Staff.objects.select_related('department').get(pk=pk)
    except Staff.DoesNotExist:
        return JsonResponse({'error': 'Staff member not found'}, status=404)

    if not user_can_access_client(request.user, staff.client_id):
        return _forbidden()

    if request.method == 'GET':
        return JsonResponse(StaffSerializer(staff).data)

    if request.method == 'DELETE':
        staff.status = StaffStatus.INACTIVE
        staff.save(update_fields=['status', 'updated_at'])
        logger.info(f"Staff {staff.employee_id} deactivated by {request.user.email}")
        return JsonResponse({'message': 'Staff member deactivated successfully'})

    try:
        data = parse_json(request)
    except BadRequest as e:
        return JsonResponse({'error': str(e)}, status=400)

    data.pop('password', None)
    serializer = StaffSerializer(staff, data=data, partial=True)
    if not serializer.is_valid():
        return JsonResponse({'error': 'Invalid staff data', 'details': serializer.errors}, status=400)

    staff = serializer.save()
    return JsonResponse(StaffSerializer(staff).data)


# COMMUNICATIONS
@api_login_required
@require_http_methods(['GET', 'POST'])
def staff_communications_view(request, pk):
    """
    Communications log of a staff member (BOOKING clients only)

    GET lists newest first; POST records a NOTE or sends an EMAIL/SMS to a
    staff member that opted in to that channel.
    """
    client = get_user_client(request)
    if client is None or client.type != ClientType.BOOKING:
        return _forbidden()

    try:
        staff = Staff.objects.get(pk=pk)
    except Staff.DoesNotExist:
        return JsonResponse({'error': 'Staff member not found'}, status=404)

    if staff.client_id != client.id:
        return _forbidden()

    if request.method == 'GET':
        communications = staff.communications.order_by('-sent_at')
        return JsonResponse(StaffCommunicationSerializer(communications, many=True).data, safe=False)

    try:
        data = parse_json(request)
    except BadRequest as e:
        return JsonResponse({'error': str(e)}, status=400)

    communication_type = data.get('type')
    subject = str(data.get('subject') or '').strip()
    message = str(data.get('message') or '').strip()

    if not communication_type or not message:
        return JsonResponse({'error': 'Type and message are required'}, status=400)

    if communication_type not in CommunicationType.values:
        return JsonResponse({'error': 'Invalid communication type'}, status=400)

    if communication_type in (CommunicationType.EMAIL, CommunicationType.SMS) and not subject:
        return JsonResponse({'error': 'Subject is required for communications'}, status=400)

    if communication_type != CommunicationType.NOTE:
        if not staff.communication_preferences:
            return JsonResponse({'error': 'Staff member has no communication preferences set'}, status=400)
        if not staff.accepts(communication_type):
            channel = 'email' if communication_type == CommunicationType.EMAIL else 'SMS'
            return JsonResponse(
                {'error': f'Staff member has not opted in for {channel} communications'}, status=400
            )

    default_subject = 'Staff Note' if communication_type == CommunicationType.NOTE else 'No Subject'
    communication = StaffCommunication.objects.create(
        staff=staff,
        sent_by=request.user,
        type=communication_type,
        subject=subject or default_subject,
        message=message,
        status=CommunicationStatus.SENT,
        sent_at=timezone.now(),
    )

    if communication_type == CommunicationType.EMAIL:
        try:
            send_mail(communication.subject, message, settings.DEFAULT_FROM_EMAIL, [staff.email])
        except (smtplib.SMTPException, BadHeaderError, OSError) as e:
            logger.error(f"Email to staff {staff.employee_id} failed: {e}")
            communication.status = CommunicationStatus.FAILED
            communication.save(update_fields=['status'])

    return JsonResponse(StaffCommunicationSerializer(communication).data, status=201)


# STORE CONNECTIONS
def _load_store_request(request):
    """(data, staff, error_response) for the store connection handlers."""
    try:
        data = parse_json(request)
    except BadRequest as e:
        return None, None, JsonResponse({'error': str(e)}, status=400)

    staff_id = data.get('staff_id')
    store_id = data.get('store_id')
    if not staff_id or not store_id:
        return None, None, JsonResponse({'error': 'staff_id and store_id are required'}, status=400)

    staff = Staff.objects.select_related('client').filter(pk=staff_id).first() if str(staff_id).isdigit() else None
    if staff is None:
        return None, None, JsonResponse({'error': 'Staff not found'}, status=404)

    if not user_can_access_client(request.user, staff.client_id):
        return None, None, _forbidden()

    return data, staff, None


@api_login_required
@require_http_methods(['POST'])
def store_connection_view(request):
    data, staff, error = _load_store_request(request)
    if error:
        return error

    action = data.get('action')
    if action == 'connect':
        staff.connect_store(data['store_id'])
    elif action == 'disconnect':
        staff.disconnect_store(data['store_id'])
    else:
        return JsonResponse({'error': 'action must be "connect" or "disconnect"'}, status=400)

    return JsonResponse({'success': True, 'store_connections': staff.get_store_connections()})


@api_login_required
@require_http_methods(['POST'])
def connect_store_view(request):
    """Connect a staff member to a store on the OmniStack gateway."""
    data, staff, error = _load_store_request(request)
    if error:
        return error

    if not staff.client.omni_gateway_api_key:
        return JsonResponse({'error': 'Client API key not found'}, status=404)

    try:
        create_users_api(staff.client.omni_gateway_api_key).connect_store(staff.id, data['store_id'])
    except GatewayError as e:
        logger.error(f"Failed to connect staff {staff.employee_id} to store {data['store_id']}: {e}")
        return JsonResponse({'error': 'Failed to connect store'}, status=502)

    return JsonResponse({'success': True})


# DEPARTMENTS
@api_login_required
@require_http_methods(['GET', 'POST'])
def department_collection_view(request):
    if request.method == 'GET':
        client_id, error = _require_client_param(request)
        if error:
            return error

        departments = (
            Department.objects.filter(client_id=client_id, is_active=True)
            .annotate(staff_count=Count('staff'))
            .order_by('name')
        )
        return JsonResponse(DepartmentSerializer(departments, many=True).data, safe=False)

    try:
        data = parse_json(request)
    except BadRequest as e:
        return JsonResponse({'error': str(e)}, status=400)

    client_id, error = _require_client_param(request, source=data)
    if error:
        return error

    serializer = DepartmentSerializer(data=data)
    if not serializer.is_valid():
        return JsonResponse({'error': 'Invalid department data', 'details': serializer.errors}, status=400)

    department = serializer.save()
    logger.info(f"Department {department.name} created for client {department.client_id}")
    return JsonResponse(DepartmentSerializer(department).data, status=201)


# SALES TEAM
@api_login_required
@require_http_methods(['GET'])
def sales_team_view(request):
    client_id, error = _require_client_param(request)
    if error:
        return error

    staff_qs = Staff.objects.filter(client_id=client_id, role=StaffRole.SALES).select_related('department')

    search = request.GET.get('search', '').strip()
    if search:
        staff_qs = staff_qs.filter(
            Q(first_name__icontains=search) |
            Q(last_name__icontains=search) |
            Q(email__icontains=search) |
            Q(phone__icontains=search)
        )

    position = request.GET.get('position')
    if position and position != 'all':
        staff_qs = staff_qs.filter(sub_role=position)

    status = request.GET.get('status')
    if status and status != 'all':
        staff_qs = staff_qs.filter(status=status)

    return JsonResponse(paginate(request, staff_qs.order_by('-created_at'), StaffSerializer))


@api_login_required
@require_http_methods(['GET'])
def sales_team_stats_view(request):
    client_id, error = _require_client_param(request)
    if error:
        return error

    stats = Staff.objects.filter(
        client_id=client_id, role=StaffRole.SALES, status=StaffStatus.ACTIVE
    ).aggregate(active=Count('id'), avg_performance=Avg('performance_score'))

    # Order figures live outside this service
    return JsonResponse({
        'total_sales': 0,
        'sales_growth': 0,
        'conversion_rate': 0,
        'conversion_growth': 0,
        'active_associates': stats['active'],
        'team_growth': 0,
        'avg_performance': stats['avg_performance'] or 0,
        'performance_growth': 0,
    })


# SERVICE-TO-SERVICE
@csrf_exempt
@require_http_methods(['POST'])
def verify_access_view(request):
    """
    POST /api/verify-access/ (x-api-key: INTERNAL_API_KEY)

    Body {"external_ids": [staff ids]}; answers whether one of them is an
    ACTIVE staff member with app access.
    """
    api_key = request.headers.get('x-api-key')
    if not api_key or not settings.INTERNAL_API_KEY or api_key != settings.INTERNAL_API_KEY:
        return JsonResponse({'error': 'Unauthorized', 'message': 'Invalid or missing API key'}, status=401)

    try:
        data = parse_json(request)
    except BadRequest as e:
        return JsonResponse({'has_access': False, 'message': str(e)}, status=400)

    external_ids = data.get('external_ids')
    if not isinstance(external_ids, list):
        return JsonResponse({'has_access': False, 'message': 'Invalid external_ids'}, status=400)

    staff_ids = [str(value) for value in external_ids if str(value).isdigit()]
    staff = (
        Staff.objects.filter(pk__in=staff_ids, status=StaffStatus.ACTIVE, can_access_app=True)
        .order_by('pk')
        .first()
    )

    if staff is None:
        return JsonResponse({'has_access': False, 'message': 'Staff member not found or inactive'})

    return JsonResponse({
        'has_access': True,
        'permissions': {
            'can_use_app': True,
        },
        'staff': {
            'id': staff.id,
            'name': staff.get_full_name(),
            'email': staff.email,
            'role': staff.role,
            'sub_role': staff.sub_role,
            'client_id': staff.client_id,
        },
    })
