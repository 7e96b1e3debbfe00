import logging

from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.accounts.models import Role

logger = logging.getLogger(__name__)


def grant_app_access(staff, password):
    """
    Create the SALES app user of a staff member and link it

    The user belongs to the staff member's client and logs in with the
    staff email. The grant is noted on the staff record.
    """
    User = get_user_model()

    user = User.objects.create_user(
        email=staff.email,
        password=password,
        first_name=staff.first_name,
        last_name=staff.last_name,
        client=staff.client,
        role=Role.SALES,
    )
    staff.user = user
    staff.notes = f"Sales associate app access granted. User account created on {timezone.now().isoformat()}"
    staff.save(update_fields=['user', 'notes', 'updated_at'])

    logger.info(f"App user {user.email} created for staff {staff.employee_id}")
    return user


def app_user_exists(email):
    return get_user_model().objects.filter(email__iexact=email).exists()
