import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import render, redirect
from django.views.decorators.http import require_POST

from apps.accounts.decorators import admin_required, gateway_key_required
from apps.core.utils import get_user_client
from apps.gateway.admin_subscription import create_admin_subscription_api
from apps.gateway.agents import create_agents_api
from apps.gateway.bookings import create_bookings_api
from apps.gateway.business import create_business_api
from apps.gateway.campaigns import create_campaigns_api
from apps.gateway.client import GatewayError
from apps.gateway.clients import create_clients_api
from apps.gateway.features import create_features_api
from apps.gateway.feedback import create_feedback_api
from apps.gateway.guests import create_guests_api
from apps.gateway.loyalty import create_loyalty_api
from apps.gateway.members import create_members_api
from apps.gateway.reports import create_reports_api
from apps.gateway.subscriptions import create_subscriptions_api
from apps.gateway.sync_history import create_sync_history_api
from apps.gateway.tickets import create_tickets_api
from .forms import (
    BusinessRegisterForm,
    LoyaltyProgramForm,
    ReportStatusForm,
    TicketReplyForm,
    TicketStatusForm,
    REPORT_STATUSES,
    TICKET_STATUSES,
)
from .utils import (
    as_bool,
    extract_items,
    gateway_action,
    gateway_page_call,
    list_params,
    pagination_context,
    request_data,
)

logger = logging.getLogger(__name__)


def _list_page(request, template, result, items, page, limit, **extra):
    context = {
        'items': items,
        'search_query': request.GET.get('search', ''),
        **pagination_context(result, items, page, limit),
        **extra,
    }
    return render(request, template, context)


# BUSINESSES
@login_required
@gateway_key_required
def business_list_view(request):
    page, limit, search = list_params(request)
    status = request.GET.get('status') or None
    is_test_account = request.GET.get('is_test_account')

    api = create_business_api(request.gateway_api_key)
    result = gateway_page_call(
        request, 'Loading businesses', api.get_businesses,
        page=page, limit=limit, search=search, status=status,
        is_test_account=as_bool(is_test_account) if is_test_account else None,
    )
    items = extract_items(result, 'businesses')

    return _list_page(request, 'crm/business_list.html', result, items, page, limit,
                      page_title='Businesses', status=status or '', active_page='businesses')


@login_required
@gateway_key_required
def business_trials_view(request):
    page, limit, search = list_params(request)

    api = create_business_api(request.gateway_api_key)
    result = gateway_page_call(
        request, 'Loading trial businesses', api.get_trial_businesses,
        page=page, limit=limit, search=search, sort=request.GET.get('sort') or None,
    )
    items = extract_items(result, 'businesses')

    return _list_page(request, 'crm/business_list.html', result, items, page, limit,
                      page_title='Trial Businesses', trials=True, active_page='businesses')


@login_required
@gateway_key_required
def business_detail_view(request, business_id):
    business_api = create_business_api(request.gateway_api_key)
    business = gateway_page_call(request, 'Loading business', business_api.get_business_details, business_id)
    if business is None:
        return redirect('crm:business_list')

    features = gateway_page_call(
        request, 'Loading business features',
        create_features_api(request.gateway_api_key).get_business_features, business_id, default={},
    )
    agents = gateway_page_call(
        request, 'Loading business agents',
        create_agents_api(request.gateway_api_key).get_business_agents, business_id, default=[],
    )

    context = {
        'business': business.get('business', business) if isinstance(business, dict) else business,
        'business_id': business_id,
        'features': features,
        'agents': extract_items(agents, 'agents'),
        'active_page': 'businesses',
    }

    return render(request, 'crm/business_detail.html', context)


BUSINESS_ACTIONS = {
    'activate': ('Activating business', 'activate_business', 'Business activated'),
    'deactivate': ('Deactivating business', 'deactivate_business', 'Business deactivated'),
    'delete': ('Deleting business', 'soft_delete_business', 'Business deleted'),
}


@login_required
@gateway_key_required
@require_POST
def business_action_view(request, business_id, action):
    if action == 'test-account':
        data = request_data(request)
        api = create_business_api(request.gateway_api_key)
        return gateway_action('Updating test account status', api.update_test_account_status,
                              business_id, as_bool(data.get('is_test_account'), default=True))

    if action == 'magic-link':
        email = request_data(request).get('email')
        if not email:
            return JsonResponse({'success': False, 'error': 'Email is required'}, status=400)
        api = create_business_api(request.gateway_api_key)
        return gateway_action('Sending magic link', api.send_magic_link, email,
                              success_message=f'Magic link sent to {email}')

    if action not in BUSINESS_ACTIONS:
        return JsonResponse({'success': False, 'error': 'Unknown action'}, status=400)

    label, method_name, success_message = BUSINESS_ACTIONS[action]
    api = create_business_api(request.gateway_api_key)
    logger.info(f"{request.user.email} requested {action} on business {business_id}")
    return gateway_action(label, getattr(api, method_name), business_id, success_message=success_message)


@login_required
@gateway_key_required
@require_POST
def business_features_view(request, business_id):
    """
    Custom feature/limit overrides of a business

    Body: {"action": "add"|"remove", "feature_key"} or
    {"action": "set_limit"|"remove_limit", "limit_key", "value"}.
    """
    data = request_data(request)
    action = data.get('action')
    api = create_features_api(request.gateway_api_key)

    if action in ('add', 'remove'):
        feature_key = data.get('feature_key')
        if not feature_key:
            return JsonResponse({'success': False, 'error': 'feature_key is required'}, status=400)
        if action == 'add':
            return gateway_action('Adding custom feature', api.add_custom_feature, business_id, feature_key)
        return gateway_action('Removing custom feature', api.remove_custom_feature, business_id, feature_key)

    if action in ('set_limit', 'remove_limit'):
        limit_key = data.get('limit_key')
        if not limit_key:
            return JsonResponse({'success': False, 'error': 'limit_key is required'}, status=400)
        if action == 'remove_limit':
            return gateway_action('Removing custom limit', api.remove_custom_limit, business_id, limit_key)
        try:
            value = int(data.get('value'))
        except (TypeError, ValueError):
            return JsonResponse({'success': False, 'error': 'value must be a number'}, status=400)
        return gateway_action('Setting custom limit', api.set_custom_limit, business_id, limit_key, value)

    return JsonResponse({'success': False, 'error': 'Unknown action'}, status=400)


@login_required
@gateway_key_required
@require_POST
def business_agent_view(request, business_id, agent_type, action):
    api = create_agents_api(request.gateway_api_key)

    if action == 'enable':
        client = get_user_client(request)
        gateway_client_id = client.omni_gateway_id if client else ''
        if not gateway_client_id:
            return JsonResponse({'success': False, 'error': 'Client is not linked to the gateway'}, status=400)
        return gateway_action(f'Enabling agent {agent_type}', api.enable_agent,
                              gateway_client_id, business_id, agent_type)

    if action == 'disable':
        return gateway_action(f'Disabling agent {agent_type}', api.disable_agent, business_id, agent_type)

    return JsonResponse({'success': False, 'error': 'Unknown action'}, status=400)


@login_required
@gateway_key_required
def business_register_view(request):
    if request.method == 'POST':
        form = BusinessRegisterForm(request.POST)
        if form.is_valid():
            api = create_admin_subscription_api(request.gateway_api_key)
            try:
                result = api.register_and_subscribe_business(form.to_payload())
            except GatewayError as e:
                logger.error(f"Business registration failed: {e}")
                messages.error(request, f'Registration failed: {e.message}')
            else:
                logger.info(f"Business {form.cleaned_data['business_name']} registered by {request.user.email}")
                messages.success(request, (result or {}).get('message') or 'Business registered successfully.')
                business_id = (result or {}).get('businessId')
                if business_id:
                    return redirect('crm:business_detail', business_id=business_id)
                return redirect('crm:business_list')
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = BusinessRegisterForm()

    return render(request, 'crm/business_register.html', {'form': form, 'active_page': 'businesses'})


@login_required
@gateway_key_required
def feature_config_view(request):
    config = gateway_page_call(
        request, 'Loading feature configuration',
        create_features_api(request.gateway_api_key).get_feature_config, default={},
    )

    context = {
        'config': config,
        'active_page': 'features',
    }

    return render(request, 'crm/feature_config.html', context)


# SUBSCRIPTIONS
SUBSCRIPTION_VIEWS = {
    'all': ('All Subscriptions', 'get_subscriptions'),
    'active': ('Active Subscriptions', 'get_active_subscriptions'),
    'past_due': ('Past Due Subscriptions', 'get_past_due_subscriptions'),
    'canceled': ('Canceled Subscriptions', 'get_canceled_subscriptions'),
}


@login_required
@gateway_key_required
def subscription_list_view(request, status='all'):
    page, limit, search = list_params(request)
    title, method_name = SUBSCRIPTION_VIEWS[status]

    api = create_subscriptions_api(request.gateway_api_key)
    result = gateway_page_call(request, 'Loading subscriptions', getattr(api, method_name),
                               page=page, limit=limit, search=search)
    items = extract_items(result, 'subscriptions')

    return _list_page(request, 'crm/subscription_list.html', result, items, page, limit,
                      page_title=title, status=status, active_page='subscriptions')


@login_required
@gateway_key_required
@require_POST
def subscription_cancel_view(request, subscription_id):
    data = request_data(request)
    api = create_subscriptions_api(request.gateway_api_key)
    logger.info(f"{request.user.email} requested cancel of subscription {subscription_id}")
    return gateway_action(
        'Canceling subscription', api.cancel_subscription, subscription_id,
        cancel_at_period_end=as_bool(data.get('cancel_at_period_end'), default=True),
        reason=data.get('reason') or None,
        success_message='Subscription canceled',
    )


# CAMPAIGNS
@login_required
@gateway_key_required
def campaign_list_view(request):
    page, limit, search = list_params(request)

    api = create_campaigns_api(request.gateway_api_key)
    result = gateway_page_call(
        request, 'Loading campaigns', api.get_campaigns,
        page=page, limit=limit, search=search,
        status=request.GET.get('status') or None, type=request.GET.get('type') or None,
    )
    items = extract_items(result, 'campaigns')

    return _list_page(request, 'crm/campaign_list.html', result, items, page, limit,
                      active_page='campaigns')


@login_required
@gateway_key_required
@require_POST
def campaign_sync_view(request):
    api = create_campaigns_api(request.gateway_api_key)
    return gateway_action('Syncing campaigns', api.sync_campaigns, success_message='Campaigns synced')


@login_required
@gateway_key_required
@require_POST
def campaign_delete_view(request, campaign_id):
    api = create_campaigns_api(request.gateway_api_key)
    return gateway_action('Deleting campaign', api.delete_campaign, campaign_id,
                          success_message='Campaign deleted')


# FEEDBACK & MEMBERS (VenueBoost)
@login_required
@gateway_key_required
def feedback_list_view(request):
    page, limit, search = list_params(request)

    api = create_feedback_api(request.gateway_api_key)
    result = gateway_page_call(request, 'Loading feedback', api.get_feedback,
                               page=page, limit=limit, search=search)
    stats = gateway_page_call(request, 'Loading feedback stats', api.get_feedback_stats, default={})
    items = extract_items(result, 'feedback')

    return _list_page(request, 'crm/feedback_list.html', result, items, page, limit,
                      stats=stats, active_page='feedback')


@login_required
@gateway_key_required
def member_list_view(request):
    page, limit, search = list_params(request)
    status = request.GET.get('status') or None

    api = create_members_api(request.gateway_api_key)
    result = gateway_page_call(
        request, 'Loading members', api.get_members,
        page=page, limit=limit, search=search, status=status,
        registration_source=request.GET.get('source') or None,
    )
    items = extract_items(result, 'members')

    return _list_page(request, 'crm/member_list.html', result, items, page, limit,
                      status=status or '', active_page='members')


@login_required
@gateway_key_required
@require_POST
def member_action_view(request, member_id, action):
    api = create_members_api(request.gateway_api_key)

    if action == 'approve':
        return gateway_action('Approving member', api.approve_member, member_id,
                              success_message='Member approved')
    if action == 'reject':
        reason = request_data(request).get('reason') or None
        return gateway_action('Rejecting member', api.reject_member, member_id, reason=reason,
                              success_message='Member rejected')

    return JsonResponse({'success': False, 'error': 'Unknown action'}, status=400)


# LOYALTY
@login_required
@gateway_key_required
def loyalty_program_view(request):
    api = create_loyalty_api(request.gateway_api_key)

    if request.method == 'POST':
        form = LoyaltyProgramForm(request.POST)
        if form.is_valid():
            try:
                api.update_loyalty_program(form.to_payload())
            except GatewayError as e:
                logger.error(f"Loyalty program update failed: {e}")
                messages.error(request, f'Saving the loyalty program failed: {e.message}')
            else:
                messages.success(request, 'Loyalty program updated successfully.')
                return redirect('crm:loyalty_program')
        program = None
    else:
        program = gateway_page_call(request, 'Loading loyalty program', api.get_loyalty_program)
        form = LoyaltyProgramForm(initial=LoyaltyProgramForm.initial_from_program(program))

    context = {
        'form': form,
        'program': program,
        'active_page': 'loyalty',
    }

    return render(request, 'crm/loyalty_program.html', context)


@login_required
@gateway_key_required
@require_POST
def loyalty_disable_view(request):
    api = create_loyalty_api(request.gateway_api_key)
    logger.info(f"{request.user.email} disabled the loyalty program")
    return gateway_action('Disabling loyalty program', api.disable_loyalty_program,
                          success_message='Loyalty program disabled')


# GUESTS & BOOKINGS
@login_required
@gateway_key_required
def guest_list_view(request):
    page, limit, search = list_params(request)

    api = create_guests_api(request.gateway_api_key)
    query = request.GET.get('query', '').strip()
    if query:
        result = gateway_page_call(request, 'Searching guests', api.search_guests, query)
    else:
        result = gateway_page_call(request, 'Loading guests', api.get_guests,
                                   page=page, limit=limit, search=search,
                                   status=request.GET.get('status') or None)
    items = extract_items(result, 'guests')

    return _list_page(request, 'crm/guest_list.html', result, items, page, limit,
                      query=query, active_page='guests')


@login_required
@gateway_key_required
@require_POST
def guest_delete_view(request, guest_id):
    data = request_data(request)
    api = create_guests_api(request.gateway_api_key)
    return gateway_action(
        'Deleting guest', api.delete_guest, guest_id,
        force_delete=as_bool(data.get('force_delete')),
        delete_user=as_bool(data.get('delete_user')),
        success_message='Guest deleted',
    )


@login_required
@gateway_key_required
def booking_list_view(request):
    page, limit, search = list_params(request)

    api = create_bookings_api(request.gateway_api_key)
    result = gateway_page_call(
        request, 'Loading bookings', api.get_bookings,
        page=page, limit=limit, search=search, status=request.GET.get('status') or None,
    )
    items = extract_items(result, 'bookings')

    return _list_page(request, 'crm/booking_list.html', result, items, page, limit,
                      active_page='bookings')


@login_required
@gateway_key_required
@require_POST
def booking_sync_view(request):
    api = create_bookings_api(request.gateway_api_key)
    return gateway_action('Syncing bookings', api.sync_bookings, success_message='Bookings synced')


# REPORTS
@login_required
@gateway_key_required
def report_list_view(request):
    page, limit, search = list_params(request)
    status = request.GET.get('status') or None

    api = create_reports_api(request.gateway_api_key)
    result = gateway_page_call(request, 'Loading reports', api.get_reports,
                               page=page, limit=limit, search=search, status=status)
    summary = gateway_page_call(request, 'Loading report summary', api.get_reports_summary, default={})
    items = extract_items(result, 'reports')

    return _list_page(request, 'crm/report_list.html', result, items, page, limit,
                      summary=summary, status=status or '', statuses=REPORT_STATUSES,
                      active_page='reports')


@login_required
@gateway_key_required
def report_detail_view(request, report_id):
    report = gateway_page_call(request, 'Loading report',
                               create_reports_api(request.gateway_api_key).get_report, report_id)
    if report is None:
        return redirect('crm:report_list')

    context = {
        'report': report,
        'report_id': report_id,
        'statuses': REPORT_STATUSES,
        'active_page': 'reports',
    }

    return render(request, 'crm/report_detail.html', context)


@login_required
@gateway_key_required
@require_POST
def report_status_view(request, report_id):
    form = ReportStatusForm(request_data(request))
    if not form.is_valid():
        return JsonResponse({'success': False, 'error': 'Invalid status'}, status=400)

    api = create_reports_api(request.gateway_api_key)
    return gateway_action('Updating report status', api.update_report_status, report_id,
                          form.cleaned_data['status'], success_message='Report status updated')


# TICKETS
@login_required
@gateway_key_required
def ticket_list_view(request):
    page, limit, search = list_params(request)
    status = request.GET.get('status') or None
    priority = request.GET.get('priority') or None

    api = create_tickets_api(request.gateway_api_key)
    result = gateway_page_call(request, 'Loading tickets', api.get_tickets,
                               page=page, limit=limit, search=search, status=status, priority=priority)
    stats = gateway_page_call(request, 'Loading ticket stats', api.get_ticket_stats, default={})
    items = extract_items(result, 'tickets')

    return _list_page(request, 'crm/ticket_list.html', result, items, page, limit,
                      stats=stats, status=status or '', statuses=TICKET_STATUSES, active_page='tickets')


@login_required
@gateway_key_required
def ticket_detail_view(request, ticket_id):
    api = create_tickets_api(request.gateway_api_key)

    if request.method == 'POST':
        form = TicketReplyForm(request.POST)
        if form.is_valid():
            message_data = {
                'message': form.cleaned_data['message'],
                'senderName': request.user.get_full_name(),
                'senderEmail': request.user.email,
            }
            try:
                api.add_message(ticket_id, message_data)
            except GatewayError as e:
                logger.error(f"Reply to ticket {ticket_id} failed: {e}")
                messages.error(request, f'Sending the reply failed: {e.message}')
            else:
                messages.success(request, 'Reply sent.')
                return redirect('crm:ticket_detail', ticket_id=ticket_id)
    else:
        form = TicketReplyForm()

    ticket = gateway_page_call(request, 'Loading ticket', api.get_ticket, ticket_id)
    if ticket is None:
        return redirect('crm:ticket_list')

    context = {
        'ticket': ticket,
        'ticket_id': ticket_id,
        'reply_form': form,
        'statuses': TICKET_STATUSES,
        'active_page': 'tickets',
    }

    return render(request, 'crm/ticket_detail.html', context)


@login_required
@gateway_key_required
@require_POST
def ticket_status_view(request, ticket_id):
    form = TicketStatusForm(request_data(request))
    if not form.is_valid():
        return JsonResponse({'success': False, 'error': 'Invalid status'}, status=400)

    api = create_tickets_api(request.gateway_api_key)
    return gateway_action('Updating ticket', api.update_ticket, ticket_id, form.to_payload(),
                          success_message='Ticket updated')


# SYNC HISTORY
@login_required
@gateway_key_required
def sync_history_view(request):
    page, limit, _search = list_params(request)
    status = request.GET.get('status') or None
    days = request.GET.get('days') or None

    api = create_sync_history_api(request.gateway_api_key)
    result = gateway_page_call(
        request, 'Loading sync history', api.get_cron_job_history,
        page=page, limit=limit, status=status, job_name=request.GET.get('job_name') or None,
    )
    stats = gateway_page_call(request, 'Loading sync stats', api.get_cron_job_stats, days=days, default={})
    items = extract_items(result, 'jobs', 'history')

    return _list_page(request, 'crm/sync_history.html', result, items, page, limit,
                      stats=stats, status=status or '', active_page='sync_history')


# GATEWAY CLIENTS (platform admins)
@login_required
@admin_required
@gateway_key_required
def gateway_client_list_view(request):
    page, limit, search = list_params(request)

    api = create_clients_api(request.gateway_api_key)
    result = gateway_page_call(request, 'Loading clients', api.get_clients,
                               page=page, limit=limit, search=search,
                               status=request.GET.get('status') or None)
    items = extract_items(result)
    metrics = result.get('metrics', {}) if isinstance(result, dict) else {}

    return _list_page(request, 'crm/gateway_client_list.html', result, items, page, limit,
                      metrics=metrics, active_page='gateway_clients')
