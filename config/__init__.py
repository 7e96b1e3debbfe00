# ==============================================================================
# OMNISTACK CRM - CONFIG PACKAGE INITIALIZER
# ==============================================================================

# Load the Celery app when Django starts so tasks are discovered
from .celery import app as celery_app

__all__ = ('celery_app',)
