from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - Client model (multi-tenancy)
        - Client selection for platform admins
        - Sidebar navigation keyed by client type
        - Platform and per-type dashboards
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'
