from django.urls import path
from . import views_api

app_name = 'staff_api'

urlpatterns = [
    path('staff/', views_api.staff_collection_view, name='staff_collection'),
    path('staff/store-connection/', views_api.store_connection_view, name='store_connection'),
    path('staff/connect-store/', views_api.connect_store_view, name='connect_store'),
    path('staff/<int:pk>/', views_api.staff_detail_view, name='staff_detail'),
    path('staff/<int:pk>/communications/', views_api.staff_communications_view, name='staff_communications'),
    path('departments/', views_api.department_collection_view, name='department_collection'),
    path('sales-team/', views_api.sales_team_view, name='sales_team'),
    path('sales-team/stats/', views_api.sales_team_stats_view, name='sales_team_stats'),
    path('verify-access/', views_api.verify_access_view, name='verify_access'),
]
