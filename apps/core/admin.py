from django.contrib import admin
from django.utils.html import format_html
from .models import Client, ClientStatus


STATUS_COLORS = {
    ClientStatus.ACTIVE: '#28a745',
    ClientStatus.INACTIVE: '#6c757d',
    ClientStatus.SUSPENDED: '#dc3545',
}


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'type',
        'status_badge',
        'gateway_badge',
        'users_count',
        'staff_count',
        'created_at'
    ]
    list_filter = ['type', 'status', 'created_at']
    search_fields = ['name', 'industry', 'omni_gateway_id']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug', 'type', 'logo', 'industry', 'website', 'description')
        }),
        ('OmniStack Gateway', {
            'fields': ('omni_gateway_id', 'omni_gateway_api_key'),
            'description': 'The API key authorizes every gateway call made for this client'
        }),
        ('Status', {
            'fields': ('status',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):

        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )

    status_badge.short_description = 'Status'

    def gateway_badge(self, obj):

        if obj.has_gateway_access():
            return format_html('<span style="color: #28a745; font-weight: bold;">● Connected</span>')
        return format_html('<span style="color: #dc3545; font-weight: bold;">● No API key</span>')

    gateway_badge.short_description = 'Gateway'

    def users_count(self, obj):

        count = obj.get_active_users_count()
        return format_html(
            '<span style="color: #667eea; font-weight: bold;">{} users</span>',
            count
        )

    users_count.short_description = 'Users'

    def staff_count(self, obj):
        return obj.get_active_staff_count()

    staff_count.short_description = 'Active staff'
