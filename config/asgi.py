# ASGI (Asynchronous Server Gateway Interface) configuration
#
# Production servers:
# - Daphne (Django Channels official server)
# - Uvicorn
# ==============================================================================

import os
from django.core.asgi import get_asgi_application
from channels.routing import ProtocolTypeRouter

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# Initialize Django ASGI application early
# This ensures the AppRegistry is populated before importing code that may import ORM models
django_asgi_app = get_asgi_application()


# ProtocolTypeRouter dispatches connections based on protocol type
# - 'http': Regular HTTP requests -> Django views
application = ProtocolTypeRouter({
    'http': django_asgi_app,
})

# ==============================================================================
# PRODUCTION DEPLOYMENT WITH DAPHNE
# ==============================================================================
#
# Run: daphne config.asgi:application --bind 0.0.0.0 --port 8000
#
# Docker command:
# docker compose exec web daphne config.asgi:application --bind 0.0.0.0 --port 8000
