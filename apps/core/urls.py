from django.urls import path
from . import views


app_name = 'core'

urlpatterns = [
    path('dashboard/', views.dashboard_view, name='dashboard'),
    path('no-client/', views.no_client_view, name='no_client'),
    path('select-client/', views.client_selector_view, name='client_selector'),
    path('select-client/clear/', views.clear_client_view, name='client_clear'),
    path('settings/client/', views.client_settings_view, name='client_settings'),
]
