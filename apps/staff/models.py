import secrets
import string

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


EMPLOYEE_ID_PREFIX = 'EMP-'
EMPLOYEE_ID_ALPHABET = string.ascii_uppercase + string.digits


def generate_employee_id():
    """EMP- followed by 6 uppercase alphanumerics, e.g. EMP-4K9QZ2"""
    return EMPLOYEE_ID_PREFIX + ''.join(secrets.choice(EMPLOYEE_ID_ALPHABET) for _ in range(6))


def default_communication_preferences():
    return {'email': True, 'sms': False}


class StaffRole(models.TextChoices):
    ADMIN = 'ADMIN', _('Admin')
    MANAGER = 'MANAGER', _('Manager')
    SUPERVISOR = 'SUPERVISOR', _('Supervisor')
    CONTRACTOR = 'CONTRACTOR', _('Contractor')
    SALES = 'SALES', _('Sales')
    STAFF = 'STAFF', _('Staff')
    SUPPORT = 'SUPPORT', _('Support')


class StaffStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', _('Active')
    ON_LEAVE = 'ON_LEAVE', _('On leave')
    INACTIVE = 'INACTIVE', _('Inactive')
    SUSPENDED = 'SUSPENDED', _('Suspended')


class CommunicationType(models.TextChoices):
    EMAIL = 'EMAIL', _('Email')
    SMS = 'SMS', _('SMS')
    NOTE = 'NOTE', _('Note')


class CommunicationStatus(models.TextChoices):
    PENDING = 'PENDING', _('Pending')
    SENT = 'SENT', _('Sent')
    FAILED = 'FAILED', _('Failed')


class Department(models.Model):
    client = models.ForeignKey('core.Client', on_delete=models.CASCADE, related_name='departments')
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=20, blank=True, help_text="Short code, e.g. FO for Front Office")
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Department"
        verbose_name_plural = "Departments"
        ordering = ['name']
        unique_together = [['client', 'name']]

    def __str__(self):
        return f"{self.name} ({self.client.name})"


class Staff(models.Model):
    """
    A staff member of a client

    Staff members exist independently of app users; `can_access_app` marks
    the ones that also got a User account (role SALES) to log in with.
    """

    client = models.ForeignKey('core.Client', on_delete=models.CASCADE, related_name='staff')
    department = models.ForeignKey(Department, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='staff')

    # Basic Information
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(db_index=True)
    phone = models.CharField(max_length=30, blank=True)
    avatar = models.ImageField(upload_to='staff/avatars/', null=True, blank=True)
    address = models.TextField(blank=True)
    emergency_contact = models.CharField(max_length=200, blank=True)

    # Employment
    employee_id = models.CharField(max_length=20, unique=True, default=generate_employee_id, editable=False)
    role = models.CharField(max_length=20, choices=StaffRole.choices, default=StaffRole.STAFF, db_index=True)
    sub_role = models.CharField(max_length=100, blank=True, help_text="Position, e.g. Sales Associate")
    status = models.CharField(max_length=20, choices=StaffStatus.choices, default=StaffStatus.ACTIVE,
                              db_index=True)
    date_of_join = models.DateField(default=timezone.localdate)
    performance_score = models.FloatField(default=0)

    # App access
    can_access_app = models.BooleanField(default=False)
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                related_name='staff_profile')

    # Preferences & documents
    communication_preferences = models.JSONField(default=default_communication_preferences, blank=True)
    documents = models.JSONField(default=dict, blank=True, help_text="Free-form documents, store connections")
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Staff member"
        verbose_name_plural = "Staff"
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_full_name()} ({self.employee_id})"

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def accepts(self, communication_type):
        """Whether the staff member opted in to a communication channel."""
        if communication_type == CommunicationType.NOTE:
            return True
        preferences = self.communication_preferences or {}
        return bool(preferences.get(communication_type.lower()))

    # STORE CONNECTIONS
    def get_store_connections(self):
        return list((self.documents or {}).get('store_connections', []))

    def connect_store(self, store_id):
        documents = dict(self.documents or {})
        connections = self.get_store_connections()
        connections.append({
            'store_id': store_id,
            'connected_at': timezone.now().isoformat(),
        })
        documents['store_connections'] = connections
        self.documents = documents
        self.save(update_fields=['documents', 'updated_at'])

    def disconnect_store(self, store_id):
        documents = dict(self.documents or {})
        connections = self.get_store_connections()
        for index, connection in enumerate(connections):
            if connection.get('store_id') == store_id:
                del connections[index]
                break
        documents['store_connections'] = connections
        self.documents = documents
        self.save(update_fields=['documents', 'updated_at'])


class StaffCommunication(models.Model):
    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, related_name='communications')
    sent_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                related_name='staff_communications')
    type = models.CharField(max_length=10, choices=CommunicationType.choices)
    subject = models.CharField(max_length=255)
    message = models.TextField()
    status = models.CharField(max_length=10, choices=CommunicationStatus.choices,
                              default=CommunicationStatus.PENDING)
    sent_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = "Staff communication"
        verbose_name_plural = "Staff communications"
        ordering = ['-sent_at']

    def __str__(self):
        return f"{self.get_type_display()} to {self.staff.get_full_name()}: {self.subject}"
