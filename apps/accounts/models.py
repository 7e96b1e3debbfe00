# Models:
# 1. User - Custom user model (replaces Django's default)


from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.core.validators import RegexValidator
from django.utils.translation import gettext_lazy as _


class Role(models.TextChoices):
    ADMIN = 'ADMIN', _('Administrator')
    SALES = 'SALES', _('Sales')
    MARKETING = 'MARKETING', _('Marketing')


# USER MANAGER (handles user creation)
class UserManager(BaseUserManager):
    """
    Custom user manager for User model

    Provides methods to:
    - Create regular users
    - Create superusers (platform admins)
    - Handle email-based authentication
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user

        Args:
            email (str): User's email address (required)
            password (str): User's password
            **extra_fields: Additional fields (first_name, client, role, etc.)

        Returns:
            User: The created user object

        Raises:
            ValueError: If email is not provided

        Example:
            user = User.objects.create_user(
                email='sales@metrosuites.al',
                password='securepass123',
                client=client,
                role=Role.SALES
            )
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        email = self.normalize_email(email)

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser (platform admin)

        Superusers have no client; they pick one from the client selector.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', Role.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True'))

        return self.create_user(email, password, **extra_fields)


# USER MODEL
class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model for the CRM

    Features:
    - Email-based authentication (no username)
    - Multi-tenancy support (client field)
    - Role-based access (ADMIN, SALES, MARKETING)
    - Activity tracking (login count, last login IP)
    """

    email = models.EmailField(_('email address'), unique=True, max_length=255, db_index=True, help_text=_('Required. Used for login.'))
    first_name = models.CharField(_('first name'), max_length=50, blank=True)
    last_name = models.CharField(_('last name'), max_length=50, blank=True)

    phone_validator = RegexValidator(regex=r'^\+?1?\d{9,15}$', message=_('Phone number must be entered in the format: +999999999. Up to 15 digits allowed.'))
    phone = models.CharField(_('phone number'), validators=[phone_validator], max_length=17, blank=True, null=True)

    # CLIENT & ROLE (Multi-tenancy)
    client = models.ForeignKey('core.Client', on_delete=models.CASCADE, related_name='users',
                               null=True, blank=True, verbose_name=_('client'), help_text=_('The client this user belongs to'))

    role = models.CharField(_('role'), max_length=20, choices=Role.choices, default=Role.SALES, db_index=True,
                            help_text=_('ADMIN sees the whole platform; SALES/MARKETING see their client'))

    login_count = models.PositiveIntegerField(_('login count'), default=0)
    last_login_ip = models.GenericIPAddressField(_('last login IP'), blank=True, null=True)
    is_active = models.BooleanField(_('active'), default=True, help_text=_('Unselect this instead of deleting accounts.'))
    is_staff = models.BooleanField(_('staff status'), default=False, help_text=_('Designates whether the user can log into admin site.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']

    def __str__(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name} ({self.email})"
        return self.email

    def get_full_name(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        elif self.first_name:
            return self.first_name
        return self.email

    def get_short_name(self):

        return self.first_name if self.first_name else self.email

    # ROLE CHECKS
    def is_admin(self):

        return self.role == Role.ADMIN or self.is_superuser

    @property
    def client_type(self):
        """Client type of the user's client, or None for users without one."""
        return self.client.type if self.client_id else None

    def increment_login_count(self, ip_address=None):
        """
        Increment login count and update last login IP

        Called when user logs in successfully
        """
        self.login_count += 1
        if ip_address:
            self.last_login_ip = ip_address
        self.save(update_fields=['login_count', 'last_login_ip'])
