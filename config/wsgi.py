# WSGI (Web Server Gateway Interface) configuration for production deployment
#
# Used by production servers like Gunicorn or uWSGI
# ==============================================================================

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()


# GUNICORN
# ========
# Run: gunicorn config.wsgi:application --bind 0.0.0.0:8000 --workers 4
#
# Set environment variables in production:
#    - DEBUG=False
#    - SECRET_KEY=<random-value>
#    - ALLOWED_HOSTS=admin.omnistackhub.xyz
#    - DB_ENGINE=django.db.backends.postgresql
#    - OMNI_GATEWAY_URL=https://api.omnistackhub.xyz
#    - INTERNAL_API_KEY=<shared secret for /api/verify-access/>
