from django.urls import path
from . import views

app_name = 'staff'

urlpatterns = [
    path('staff/', views.staff_list_view, name='staff_list'),
    path('staff/create/', views.staff_create_view, name='staff_create'),
    path('staff/export/', views.staff_export_view, name='staff_export'),
    path('sales-team/', views.sales_team_view, name='sales_team'),
    path('departments/', views.department_list_view, name='department_list'),
]
