from django.apps import AppConfig


class CrmConfig(AppConfig):
    """
    Gateway-backed admin screens: businesses, subscriptions, campaigns,
    guests, bookings, reports, tickets and the per-type dashboards
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.crm'
    verbose_name = 'CRM'
