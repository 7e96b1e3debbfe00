import logging

from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.db.models import Count
from django.http import JsonResponse
from django.views.decorators.http import require_GET
from django.utils import timezone
from datetime import timedelta

from apps.accounts.decorators import admin_required, role_required
from apps.accounts.models import Role
from apps.accounts.utils import TYPE_DASHBOARDS
from apps.staff.models import Department, Staff, StaffStatus
from .forms import ClientSettingsForm
from .models import Client, ClientStatus
from .utils import get_user_client, set_selected_client, clear_selected_client, user_can_access_client

logger = logging.getLogger(__name__)


@login_required
@admin_required
def client_selector_view(request):
    """
    Client selector for platform admins
    Simple page to choose which client to manage
    """
    # Handle client selection via GET parameter
    client_id = request.GET.get('client_id')
    if client_id:
        if set_selected_client(request, client_id):
            client = get_user_client(request)
            messages.success(request, f'Now managing {client.name}.')
            return redirect('core:dashboard')
        messages.error(request, 'Client not found.')

    clients = Client.objects.all().order_by('name')
    selected_client = get_user_client(request)

    context = {
        'clients': clients,
        'selected_client': selected_client,
        'active_page': 'client_selector',
    }

    return render(request, 'core/client_selector.html', context)


@login_required
@admin_required
def clear_client_view(request):
    clear_selected_client(request)
    messages.info(request, 'Client selection cleared.')
    return redirect('core:client_selector')


@login_required
def no_client_view(request):
    """Shown to users that are neither platform admins nor assigned to a client."""
    if request.user.is_admin() or request.user.client_id:
        return redirect('home')
    return render(request, 'core/no_client.html', {'page_title': 'No client assigned'})


@login_required
def dashboard_view(request):
    """
    Platform dashboard
    - Client users whose type has a dedicated dashboard are sent there
    - Admins see platform-wide counts (scoped to the selected client when set)
    - Other client users see their client's counts
    """
    user = request.user

    if not user.is_admin():
        if not user.client_id:
            return redirect('core:no_client')
        dedicated = TYPE_DASHBOARDS.get(user.client_type)
        if dedicated:
            return redirect(dedicated)

    client = get_user_client(request)

    staff_qs = Staff.objects.all()
    department_qs = Department.objects.filter(is_active=True)
    if client:
        staff_qs = staff_qs.filter(client=client)
        department_qs = department_qs.filter(client=client)

    # 1. Key Metrics
    total_staff = staff_qs.count()
    active_staff = staff_qs.filter(status=StaffStatus.ACTIVE).count()
    total_departments = department_qs.count()

    # 2. Clients by type (platform view only)
    clients_by_type = []
    recent_clients = []
    total_clients = active_clients = 0
    if user.is_admin():
        clients = Client.objects.all()
        total_clients = clients.count()
        active_clients = clients.filter(status=ClientStatus.ACTIVE).count()
        type_counts = clients.values('type').annotate(count=Count('id')).order_by('-count')
        clients_by_type = [
            {
                'type': item['type'],
                'count': item['count'],
                'percentage': (item['count'] / total_clients * 100) if total_clients > 0 else 0,
            }
            for item in type_counts
        ]
        thirty_days_ago = timezone.now() - timedelta(days=30)
        recent_clients = clients.filter(created_at__gte=thirty_days_ago).order_by('-created_at')[:10]

    # 3. Staff by department
    staff_by_department = department_qs.annotate(staff_count=Count('staff')).order_by('-staff_count')[:10]

    # 4. Recent staff
    recent_staff = staff_qs.select_related('department').order_by('-created_at')[:10]

    context = {
        'client': client,
        'total_clients': total_clients,
        'active_clients': active_clients,
        'clients_by_type': clients_by_type,
        'recent_clients': recent_clients,
        'total_staff': total_staff,
        'active_staff': active_staff,
        'total_departments': total_departments,
        'staff_by_department': staff_by_department,
        'recent_staff': recent_staff,
        'active_page': 'dashboard',
    }

    return render(request, 'core/dashboard.html', context)


@login_required
@role_required(Role.ADMIN)
def client_settings_view(request):
    client = get_user_client(request)
    if client is None:
        messages.info(request, 'Select a client to edit its settings.')
        return redirect('core:client_selector')

    if request.method == 'POST':
        form = ClientSettingsForm(request.POST, request.FILES, instance=client)
        if form.is_valid():
            form.save()
            logger.info(f"Client settings updated for {client.name} by {request.user.email}")
            messages.success(request, 'Client settings updated successfully.')
            return redirect('core:client_settings')
    else:
        form = ClientSettingsForm(instance=client)

    context = {
        'client': client,
        'form': form,
        'active_page': 'settings',
    }

    return render(request, 'core/client_settings.html', context)


def _no_store(response):
    response['Cache-Control'] = 'no-store, no-cache, must-revalidate, proxy-revalidate'
    response['Pragma'] = 'no-cache'
    response['Expires'] = '0'
    return response


@require_GET
def gateway_api_key_view(request):
    """
    GET /api/client/gateway-api-key/?client_id=

    Returns the gateway API key of a client the caller belongs to.
    """
    if not request.user.is_authenticated:
        return _no_store(JsonResponse({'error': 'Unauthorized'}, status=401))

    client_id = request.GET.get('client_id')
    if not client_id:
        return _no_store(JsonResponse({'error': 'Client ID is required'}, status=400))

    if not user_can_access_client(request.user, client_id):
        logger.warning(f"User {request.user.email} denied gateway key for client {client_id}")
        return _no_store(JsonResponse({'error': 'Forbidden'}, status=403))

    client = Client.objects.filter(pk=client_id).first() if client_id.isdigit() else None
    if client is None or not client.omni_gateway_api_key:
        return _no_store(JsonResponse({'error': 'API key not found'}, status=404))

    return _no_store(JsonResponse({'api_key': client.omni_gateway_api_key}))
