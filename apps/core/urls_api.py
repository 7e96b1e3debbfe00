from django.urls import path
from . import views


app_name = 'core_api'

urlpatterns = [
    path('client/gateway-api-key/', views.gateway_api_key_view, name='gateway_api_key'),
]
