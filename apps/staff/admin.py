from django.contrib import admin
from django.utils.html import format_html
from .models import Department, Staff, StaffCommunication, StaffStatus


STATUS_COLORS = {
    StaffStatus.ACTIVE: '#28a745',
    StaffStatus.ON_LEAVE: '#ffc107',
    StaffStatus.INACTIVE: '#6c757d',
    StaffStatus.SUSPENDED: '#dc3545',
}


class StaffCommunicationInline(admin.TabularInline):

    model = StaffCommunication
    extra = 0
    readonly_fields = ['type', 'subject', 'status', 'sent_by', 'sent_at']
    fields = ['sent_at', 'type', 'subject', 'status', 'sent_by']
    classes = ['collapse']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):

    list_display = ['name', 'code', 'client', 'is_active', 'created_at']
    list_filter = ['is_active', 'client__type']
    search_fields = ['name', 'code', 'client__name']
    list_select_related = ['client']


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):

    list_display = [
        'employee_id',
        'get_full_name',
        'email',
        'client',
        'department',
        'role',
        'status_badge',
        'can_access_app',
        'date_of_join',
    ]
    list_filter = ['status', 'role', 'can_access_app', 'client__type']
    search_fields = ['first_name', 'last_name', 'email', 'employee_id', 'client__name']
    list_select_related = ['client', 'department']
    readonly_fields = ['employee_id', 'created_at', 'updated_at']
    raw_id_fields = ['user']
    inlines = [StaffCommunicationInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('client', 'first_name', 'last_name', 'email', 'phone', 'avatar',
                       'address', 'emergency_contact')
        }),
        ('Employment', {
            'fields': ('employee_id', 'department', 'role', 'sub_role', 'status', 'date_of_join',
                       'performance_score')
        }),
        ('App Access', {
            'fields': ('can_access_app', 'user'),
        }),
        ('Preferences & Documents', {
            'fields': ('communication_preferences', 'documents', 'notes'),
            'classes': ('collapse',)
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
