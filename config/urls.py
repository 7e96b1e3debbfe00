from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from apps.accounts import views as account_views

# Main URL Configuration
# Routes all requests to appropriate apps

urlpatterns = [

    path('admin/', admin.site.urls),
    path('', account_views.home_view, name='home'),
    path('auth/', include('apps.accounts.urls')),

    # Admin screens
    path('crm/platform/', include('apps.core.urls')),
    path('crm/platform/', include('apps.crm.urls')),
    path('crm/platform/', include('apps.staff.urls')),

    # JSON route handlers
    path('api/', include('apps.core.urls_api')),
    path('api/', include('apps.staff.urls_api')),

]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
