from django.db import models
from django.utils.text import slugify
from django.core.validators import URLValidator
from django.utils.translation import gettext_lazy as _


class ClientType(models.TextChoices):
    """Vertical a client belongs to; selects its dashboard and sidebar."""

    ECOMMERCE = 'ECOMMERCE', _('E-commerce')
    SAAS = 'SAAS', _('SaaS (Staffluent)')
    FOOD_DELIVERY = 'FOOD_DELIVERY', _('Food delivery')
    RETAIL = 'RETAIL', _('Retail')
    SERVICES = 'SERVICES', _('Services')
    OTHER = 'OTHER', _('Other')
    BOOKING = 'BOOKING', _('Booking (MetroSuites)')
    PIXELBREEZE = 'PIXELBREEZE', _('PixelBreeze')
    VENUEBOOST = 'VENUEBOOST', _('VenueBoost')
    QYTETARET = 'QYTETARET', _('Qytetaret')
    STUDIO = 'STUDIO', _('Studio')


class ClientStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', _('Active')
    INACTIVE = 'INACTIVE', _('Inactive')
    SUSPENDED = 'SUSPENDED', _('Suspended')


class Client(models.Model):
    """
    A tenant of the CRM

    Every user (except platform admins), staff member and department belongs
    to exactly one client. The client's gateway API key authorizes all calls
    made to the OmniStack gateway on its behalf.
    """

    # Basic Information
    name = models.CharField(max_length=200, unique=True, help_text="Client/business name")
    slug = models.SlugField(max_length=200, unique=True, help_text="URL-friendly name (auto-generated)")
    type = models.CharField(max_length=20, choices=ClientType.choices, default=ClientType.ECOMMERCE,
                            db_index=True, help_text="Vertical: selects dashboard and navigation")
    industry = models.CharField(max_length=100, blank=True, help_text="e.g. Hospitality, SAAS, Retail")
    website = models.URLField(blank=True, validators=[URLValidator()], help_text="Client website")
    description = models.TextField(blank=True, help_text="Brief description about the client")
    logo = models.ImageField(upload_to='clients/logos/', null=True, blank=True, help_text="Client logo")

    # Status
    status = models.CharField(max_length=20, choices=ClientStatus.choices, default=ClientStatus.ACTIVE,
                              db_index=True)

    # OmniStack gateway
    omni_gateway_id = models.CharField(max_length=100, blank=True, help_text="Client id on the OmniStack gateway")
    omni_gateway_api_key = models.CharField(max_length=255, blank=True,
                                            help_text="API key sent to the OmniStack gateway")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Client"
        verbose_name_plural = "Clients"
        ordering = ['name']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):

        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def has_gateway_access(self):
        return bool(self.omni_gateway_api_key)

    def get_active_users_count(self):

        return self.users.filter(is_active=True).count()

    def get_active_staff_count(self):
        return self.staff.filter(status='ACTIVE').count()
