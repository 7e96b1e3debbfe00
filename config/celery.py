# Celery runs the periodic gateway sync jobs (apps/crm/tasks.py)
#
# Start worker: celery -A config worker -l info
# Start beat: celery -A config beat -l info
# ==============================================================================

import os
from celery import Celery
from celery.schedules import crontab

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('omnicrm')

# All settings prefixed with 'CELERY_' are used (CELERY_BROKER_URL, ...)
app.config_from_object('django.conf:settings', namespace='CELERY')

# Looks for tasks.py in each installed app
app.autodiscover_tasks()


# CELERY BEAT SCHEDULE (Periodic Tasks)
app.conf.beat_schedule = {
    # Pull campaigns from the gateway for every client every night at 2 AM
    'sync-gateway-campaigns': {
        'task': 'apps.crm.tasks.sync_all_clients',
        'schedule': crontab(hour=2, minute=0),
        'kwargs': {'resource': 'campaigns'},
    },

    # Booking clients: bookings change often, sync every 30 minutes
    'sync-gateway-bookings': {
        'task': 'apps.crm.tasks.sync_all_clients',
        'schedule': crontab(minute='*/30'),
        'kwargs': {'resource': 'bookings'},
    },
}


app.conf.task_annotations = {
    # Don't hammer the gateway
    'apps.crm.tasks.sync_client_resource': {
        'rate_limit': '30/m',
    },
}


@app.task(bind=True, ignore_result=True)
def debug_task(self):
    """
    Debug task to test Celery is working

    Usage:
        from config.celery import debug_task
        debug_task.delay()
    """
    print(f'Request: {self.request!r}')
