from django.urls import path
from . import views, views_dashboards

app_name = 'crm'

urlpatterns = [
    # Dashboards
    path('staffluent-dashboard/', views_dashboards.staffluent_dashboard_view, name='staffluent_dashboard'),
    path('booking-dashboard/', views_dashboards.booking_dashboard_view, name='booking_dashboard'),
    path('studio-dashboard/', views_dashboards.studio_dashboard_view, name='studio_dashboard'),
    path('venueboost-dashboard/', views_dashboards.venueboost_dashboard_view, name='venueboost_dashboard'),
    path('pixelbreeze-dashboard/', views_dashboards.pixelbreeze_dashboard_view, name='pixelbreeze_dashboard'),
    path('qytetaret-dashboard/', views_dashboards.qytetaret_dashboard_view, name='qytetaret_dashboard'),

    # Businesses
    path('businesses/', views.business_list_view, name='business_list'),
    path('businesses/trials/', views.business_trials_view, name='business_trials'),
    path('businesses/new/', views.business_register_view, name='business_register'),
    path('businesses/<str:business_id>/', views.business_detail_view, name='business_detail'),
    path('businesses/<str:business_id>/features/', views.business_features_view, name='business_features'),
    path('businesses/<str:business_id>/agents/<str:agent_type>/<str:action>/', views.business_agent_view,
         name='business_agent'),
    path('businesses/<str:business_id>/<str:action>/', views.business_action_view, name='business_action'),
    path('features/', views.feature_config_view, name='feature_config'),

    # Subscriptions
    path('subscriptions/', views.subscription_list_view, name='subscription_list'),
    path('subscriptions/active/', views.subscription_list_view, {'status': 'active'}, name='subscription_active'),
    path('subscriptions/past-due/', views.subscription_list_view, {'status': 'past_due'},
         name='subscription_past_due'),
    path('subscriptions/canceled/', views.subscription_list_view, {'status': 'canceled'},
         name='subscription_canceled'),
    path('subscriptions/<str:subscription_id>/cancel/', views.subscription_cancel_view, name='subscription_cancel'),

    # Marketing
    path('campaigns/', views.campaign_list_view, name='campaign_list'),
    path('campaigns/sync/', views.campaign_sync_view, name='campaign_sync'),
    path('campaigns/<str:campaign_id>/delete/', views.campaign_delete_view, name='campaign_delete'),

    # VenueBoost
    path('feedback/', views.feedback_list_view, name='feedback_list'),
    path('members/', views.member_list_view, name='member_list'),
    path('members/<str:member_id>/<str:action>/', views.member_action_view, name='member_action'),

    # Loyalty
    path('loyalty/', views.loyalty_program_view, name='loyalty_program'),
    path('loyalty/disable/', views.loyalty_disable_view, name='loyalty_disable'),

    # Guests & bookings
    path('guests/', views.guest_list_view, name='guest_list'),
    path('guests/<str:guest_id>/delete/', views.guest_delete_view, name='guest_delete'),
    path('bookings/', views.booking_list_view, name='booking_list'),
    path('bookings/sync/', views.booking_sync_view, name='booking_sync'),

    # Reports
    path('reports/', views.report_list_view, name='report_list'),
    path('reports/<str:report_id>/', views.report_detail_view, name='report_detail'),
    path('reports/<str:report_id>/status/', views.report_status_view, name='report_status'),

    # Support
    path('tickets/', views.ticket_list_view, name='ticket_list'),
    path('tickets/<str:ticket_id>/', views.ticket_detail_view, name='ticket_detail'),
    path('tickets/<str:ticket_id>/status/', views.ticket_status_view, name='ticket_status'),

    # System
    path('sync-history/', views.sync_history_view, name='sync_history'),
    path('clients/', views.gateway_client_list_view, name='gateway_client_list'),
]
