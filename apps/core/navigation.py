"""
Sidebar navigation keyed by client type

Every section is a dict {key, title, items}; every item is a dict
{id, title, url, icon, children}. Icons are Bootstrap Icons class names.
"""
from django.urls import reverse

from .models import ClientType


# Path fragments that pin the client type when the user has none
PATH_CLIENT_TYPES = [
    (('/booking-dashboard', '/bookings', '/rental-units', '/guests'), ClientType.BOOKING),
    (('/staffluent-dashboard',), ClientType.SAAS),
    (('/venueboost-dashboard',), ClientType.VENUEBOOST),
    (('/pixelbreeze-dashboard',), ClientType.PIXELBREEZE),
]


def resolve_client_type(user, path):
    """
    Client type used to build the sidebar.

    The logged-in user's client type wins; otherwise it is derived from the
    request path, falling back to the path segment right after `crm`.
    """
    if user is not None and user.is_authenticated and user.client_type:
        return user.client_type

    path = path or ''
    for fragments, client_type in PATH_CLIENT_TYPES:
        if any(fragment in path for fragment in fragments):
            return client_type

    parts = path.split('/')
    if 'crm' in parts:
        index = parts.index('crm') + 1
        if index < len(parts) and parts[index]:
            return parts[index].upper()
    return None


def _item(item_id, title, url_name, icon, children=None, **kwargs):
    return {
        'id': item_id,
        'title': title,
        'url': reverse(url_name, kwargs=kwargs or None),
        'icon': icon,
        'children': children or [],
    }


def _section(key, title, items):
    return {'key': key, 'title': title, 'items': items}


def _subscription_items(parent_id):
    return [
        _item(f'{parent_id}-1', 'All Subscriptions', 'crm:subscription_list', 'bi-list-ul'),
        _item(f'{parent_id}-2', 'Active', 'crm:subscription_active', 'bi-check-circle'),
        _item(f'{parent_id}-3', 'Past Due', 'crm:subscription_past_due', 'bi-exclamation-triangle'),
        _item(f'{parent_id}-4', 'Canceled', 'crm:subscription_canceled', 'bi-x-circle'),
    ]


def _business_items(parent_id):
    return [
        _item(f'{parent_id}-1', 'All Businesses', 'crm:business_list', 'bi-building'),
        _item(f'{parent_id}-2', 'Trials', 'crm:business_trials', 'bi-hourglass-split'),
        _item(f'{parent_id}-3', 'Register Business', 'crm:business_register', 'bi-plus-circle'),
    ]


def _hr_section():
    return _section('hr', 'HR', [
        _item(30, 'Staff', 'staff:staff_list', 'bi-people'),
        _item(31, 'Departments', 'staff:department_list', 'bi-diagram-3'),
    ])


def _settings_section():
    return _section('settings', 'Settings', [
        _item(40, 'Client Settings', 'core:client_settings', 'bi-gear'),
    ])


def admin_sections():
    """Platform sections shown to ADMIN users and superusers."""
    return [
        _section('main', 'Main Menu', [
            _item(1, 'Dashboard', 'core:dashboard', 'bi-speedometer2'),
            _item(2, 'Sync History', 'crm:sync_history', 'bi-clock-history'),
        ]),
        _section('businesses', 'Businesses', [
            _item(3, 'Businesses', 'crm:business_list', 'bi-building', children=_business_items(3)),
            _item(4, 'Features', 'crm:feature_config', 'bi-toggles'),
        ]),
        _section('subscriptions', 'Subscriptions', [
            _item(5, 'Subscriptions', 'crm:subscription_list', 'bi-credit-card',
                  children=_subscription_items(5)),
        ]),
        _section('clients', 'Clients', [
            _item(6, 'OmniStack Clients', 'crm:gateway_client_list', 'bi-hdd-network'),
            _item(7, 'Select Client', 'core:client_selector', 'bi-arrow-left-right'),
        ]),
        _section('support', 'Support', [
            _item(8, 'Tickets', 'crm:ticket_list', 'bi-life-preserver'),
            _item(9, 'Reports', 'crm:report_list', 'bi-flag'),
        ]),
        _section('system', 'System', [
            _item(10, 'Staff', 'staff:staff_list', 'bi-people'),
            _item(11, 'Admin Panel', 'admin:index', 'bi-shield-lock'),
        ]),
    ]


def saas_sections():
    return [
        _section('main', 'Main Menu', [
            _item(1, 'Dashboard', 'crm:staffluent_dashboard', 'bi-speedometer2'),
            _item(2, 'Sync History', 'crm:sync_history', 'bi-clock-history'),
        ]),
        _section('business', 'Business', [
            _item(3, 'Businesses', 'crm:business_list', 'bi-building', children=_business_items(3)),
        ]),
        _section('products', 'Products', [
            _item(4, 'Features', 'crm:feature_config', 'bi-toggles'),
        ]),
        _section('users', 'Users', [
            _item(5, 'Staff', 'staff:staff_list', 'bi-people'),
            _item(6, 'Departments', 'staff:department_list', 'bi-diagram-3'),
        ]),
        _section('support', 'Support', [
            _item(7, 'Tickets', 'crm:ticket_list', 'bi-life-preserver'),
        ]),
        _section('finance', 'Finance', [
            _item(8, 'Subscriptions', 'crm:subscription_list', 'bi-credit-card',
                  children=_subscription_items(8)),
        ]),
        _settings_section(),
    ]


def booking_sections(dashboard_url_name='crm:booking_dashboard'):
    """Sections of BOOKING clients; also the default for generic client types."""
    return [
        _section('main', 'Main Menu', [
            _item(1, 'Dashboard', dashboard_url_name, 'bi-speedometer2'),
        ]),
        _section('sales', 'Sales', [
            _item(2, 'Sales Team', 'staff:sales_team', 'bi-person-badge'),
            _item(3, 'Bookings', 'crm:booking_list', 'bi-calendar-check'),
        ]),
        _section('crm', 'CRM', [
            _item(4, 'Guests', 'crm:guest_list', 'bi-person-lines-fill'),
            _item(5, 'Feedback', 'crm:feedback_list', 'bi-chat-square-text'),
        ]),
        _section('marketing', 'Marketing', [
            _item(6, 'Campaigns', 'crm:campaign_list', 'bi-megaphone'),
        ]),
        _section('loyalty', 'Loyalty', [
            _item(7, 'Loyalty Program', 'crm:loyalty_program', 'bi-gift'),
        ]),
        _section('communication', 'Communication', [
            _item(8, 'Support Tickets', 'crm:ticket_list', 'bi-envelope'),
        ]),
        _section('finance', 'Finance', [
            _item(9, 'Subscriptions', 'crm:subscription_list', 'bi-credit-card'),
        ]),
        _hr_section(),
    ]


def studio_sections():
    return [
        _section('main', 'Main Menu', [
            _item(1, 'Dashboard', 'crm:studio_dashboard', 'bi-speedometer2'),
        ]),
        _section('marketing', 'Marketing', [
            _item(2, 'Campaigns', 'crm:campaign_list', 'bi-megaphone'),
        ]),
        _hr_section(),
        _settings_section(),
    ]


def venueboost_sections():
    return [
        _section('main', 'Main Menu', [
            _item(1, 'Dashboard', 'crm:venueboost_dashboard', 'bi-speedometer2'),
        ]),
        _section('crm', 'CRM', [
            _item(2, 'Members', 'crm:member_list', 'bi-person-vcard'),
            _item(3, 'Feedback', 'crm:feedback_list', 'bi-chat-square-text'),
            _item(4, 'Guests', 'crm:guest_list', 'bi-person-lines-fill'),
        ]),
        _section('marketing', 'Marketing', [
            _item(5, 'Campaigns', 'crm:campaign_list', 'bi-megaphone'),
        ]),
        _section('loyalty', 'Loyalty', [
            _item(6, 'Loyalty Program', 'crm:loyalty_program', 'bi-gift'),
        ]),
        _hr_section(),
    ]


def pixelbreeze_sections():
    return [
        _section('main', 'Main Menu', [
            _item(1, 'Dashboard', 'crm:pixelbreeze_dashboard', 'bi-speedometer2'),
        ]),
        _section('marketing', 'Marketing', [
            _item(2, 'Campaigns', 'crm:campaign_list', 'bi-megaphone'),
        ]),
        _section('support', 'Support', [
            _item(3, 'Tickets', 'crm:ticket_list', 'bi-life-preserver'),
        ]),
        _settings_section(),
    ]


def qytetaret_sections():
    return [
        _section('main', 'Main Menu', [
            _item(1, 'Dashboard', 'crm:qytetaret_dashboard', 'bi-speedometer2'),
        ]),
        _section('reports', 'Community Reports', [
            _item(2, 'Reports', 'crm:report_list', 'bi-flag'),
        ]),
        _section('users', 'Users', [
            _item(3, 'Staff', 'staff:staff_list', 'bi-people'),
        ]),
        _settings_section(),
    ]


SECTION_BUILDERS = {
    ClientType.SAAS: saas_sections,
    ClientType.BOOKING: booking_sections,
    ClientType.STUDIO: studio_sections,
    ClientType.VENUEBOOST: venueboost_sections,
    ClientType.PIXELBREEZE: pixelbreeze_sections,
    ClientType.QYTETARET: qytetaret_sections,
}


def get_sidebar_for_client_type(client_type):
    if not client_type:
        return []

    builder = SECTION_BUILDERS.get(str(client_type).upper())
    if builder is None:
        return booking_sections(dashboard_url_name='core:dashboard')
    return builder()


def is_active_url(path, url):
    base = url.rstrip('/')
    current = path.rstrip('/')
    return current == base or current.startswith(base + '/')


def mark_active(sections, path):
    """
    Flag the items matching the current path.

    An item is active when the path equals its URL or lies below it; a
    parent with an active child is marked open.
    """
    for section in sections:
        for item in section['items']:
            for child in item['children']:
                child['active'] = is_active_url(path, child['url'])
            item['active'] = is_active_url(path, item['url'])
            item['open'] = any(child['active'] for child in item['children'])
    return sections


def build_navigation(user, path):
    if user.is_authenticated and user.is_admin():
        sections = admin_sections()
    else:
        sections = get_sidebar_for_client_type(resolve_client_type(user, path))
    return mark_active(sections, path)
