"""
Dashboards of the client types that have their own

Each dashboard combines the client's local counts (staff, departments)
with the gateway summary relevant to its vertical. A client without a
gateway API key still gets its local counts.
"""
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import Count
from django.shortcuts import render

from apps.accounts.decorators import client_type_required
from apps.core.models import ClientType
from apps.core.utils import get_gateway_api_key, get_user_client
from apps.gateway.bookings import create_bookings_api
from apps.gateway.campaigns import create_campaigns_api
from apps.gateway.dashboards import create_qytetaret_dashboard_api, create_staffluent_dashboard_api
from apps.gateway.feedback import create_feedback_api
from apps.gateway.guests import create_guests_api
from apps.gateway.members import create_members_api
from apps.gateway.sync_history import create_sync_history_api
from apps.gateway.tickets import create_tickets_api
from apps.staff.models import Department, Staff, StaffStatus
from .utils import extract_items, gateway_page_call

RECENT_LIMIT = 5
ANALYTICS_PERIODS = ('week', 'month', 'quarter', 'year')


def local_counts(client):
    staff = Staff.objects.filter(client=client)
    departments = (
        Department.objects.filter(client=client, is_active=True)
        .annotate(staff_count=Count('staff'))
        .order_by('-staff_count')
    )
    return {
        'total_staff': staff.count(),
        'active_staff': staff.filter(status=StaffStatus.ACTIVE).count(),
        'total_departments': departments.count(),
        'staff_by_department': departments[:RECENT_LIMIT],
        'recent_staff': staff.select_related('department').order_by('-created_at')[:RECENT_LIMIT],
    }


def _render_dashboard(request, template, gateway_loader, **extra):
    client = get_user_client(request)
    api_key = get_gateway_api_key(request)

    context = {
        'client': client,
        'gateway_connected': bool(api_key),
        'active_page': 'dashboard',
        **local_counts(client),
        **extra,
    }

    if api_key:
        context.update(gateway_loader(request, api_key))
    else:
        messages.warning(request, 'This client is not connected to the OmniStack gateway yet.')

    return render(request, template, context)


def _total(result, items):
    if isinstance(result, dict) and result.get('total') is not None:
        return result['total']
    return len(items)


# STAFFLUENT (SAAS)
def _staffluent_data(request, api_key):
    period = request.GET.get('period', 'month')
    if period not in ANALYTICS_PERIODS:
        period = 'month'

    api = create_staffluent_dashboard_api(api_key)
    sync_api = create_sync_history_api(api_key)
    return {
        'period': period,
        'summary': gateway_page_call(request, 'Loading dashboard summary', api.get_dashboard_summary, default={}),
        'business_analytics': gateway_page_call(request, 'Loading business analytics',
                                                api.get_business_analytics, period=period, default={}),
        'user_analytics': gateway_page_call(request, 'Loading user analytics',
                                            api.get_user_analytics, period=period, default={}),
        'task_stats': gateway_page_call(request, 'Loading task stats', sync_api.get_task_stats, default={}),
    }


@login_required
@client_type_required(ClientType.SAAS)
def staffluent_dashboard_view(request):
    return _render_dashboard(request, 'crm/dashboards/staffluent.html', _staffluent_data,
                             periods=ANALYTICS_PERIODS)


# BOOKING
def _booking_data(request, api_key):
    bookings = gateway_page_call(request, 'Loading bookings', create_bookings_api(api_key).get_bookings,
                                 page=1, limit=RECENT_LIMIT)
    guests = gateway_page_call(request, 'Loading guests', create_guests_api(api_key).get_guests,
                               page=1, limit=RECENT_LIMIT)
    recent_bookings = extract_items(bookings, 'bookings')
    recent_guests = extract_items(guests, 'guests')
    return {
        'recent_bookings': recent_bookings,
        'total_bookings': _total(bookings, recent_bookings),
        'recent_guests': recent_guests,
        'total_guests': _total(guests, recent_guests),
    }


@login_required
@client_type_required(ClientType.BOOKING)
def booking_dashboard_view(request):
    return _render_dashboard(request, 'crm/dashboards/booking.html', _booking_data)


# STUDIO
def _campaign_data(request, api_key):
    campaigns = gateway_page_call(request, 'Loading campaigns', create_campaigns_api(api_key).get_campaigns,
                                  page=1, limit=RECENT_LIMIT)
    recent_campaigns = extract_items(campaigns, 'campaigns')
    return {
        'recent_campaigns': recent_campaigns,
        'total_campaigns': _total(campaigns, recent_campaigns),
    }


@login_required
@client_type_required(ClientType.STUDIO)
def studio_dashboard_view(request):
    return _render_dashboard(request, 'crm/dashboards/studio.html', _campaign_data)


# VENUEBOOST
def _venueboost_data(request, api_key):
    members = gateway_page_call(request, 'Loading members', create_members_api(api_key).get_members,
                                page=1, limit=RECENT_LIMIT)
    recent_members = extract_items(members, 'members')
    return {
        'feedback_stats': gateway_page_call(request, 'Loading feedback stats',
                                            create_feedback_api(api_key).get_feedback_stats, default={}),
        'recent_members': recent_members,
        'total_members': _total(members, recent_members),
    }


@login_required
@client_type_required(ClientType.VENUEBOOST)
def venueboost_dashboard_view(request):
    return _render_dashboard(request, 'crm/dashboards/venueboost.html', _venueboost_data)


# PIXELBREEZE
def _pixelbreeze_data(request, api_key):
    data = _campaign_data(request, api_key)
    data['ticket_stats'] = gateway_page_call(request, 'Loading ticket stats',
                                             create_tickets_api(api_key).get_ticket_stats, default={})
    return data


@login_required
@client_type_required(ClientType.PIXELBREEZE)
def pixelbreeze_dashboard_view(request):
    return _render_dashboard(request, 'crm/dashboards/pixelbreeze.html', _pixelbreeze_data)


# QYTETARET
def _qytetaret_data(request, api_key):
    api = create_qytetaret_dashboard_api(api_key)
    return {
        'stats': gateway_page_call(request, 'Loading report stats', api.get_dashboard_stats, default={}),
        'by_category': gateway_page_call(request, 'Loading reports by category',
                                         api.get_reports_by_category, default=[]),
        'by_status': gateway_page_call(request, 'Loading reports by status', api.get_reports_by_status, default=[]),
        'monthly_trends': gateway_page_call(request, 'Loading monthly trends',
                                            api.get_monthly_report_trends, default=[]),
        'top_locations': gateway_page_call(request, 'Loading top locations',
                                           api.get_top_report_locations, limit=RECENT_LIMIT, default=[]),
        'recent_reports': gateway_page_call(request, 'Loading recent reports',
                                            api.get_recent_reports, limit=RECENT_LIMIT, default=[]),
        'engagement': gateway_page_call(request, 'Loading engagement metrics',
                                        api.get_citizen_engagement_metrics, default={}),
    }


@login_required
@client_type_required(ClientType.QYTETARET)
def qytetaret_dashboard_view(request):
    return _render_dashboard(request, 'crm/dashboards/qytetaret.html', _qytetaret_data)
