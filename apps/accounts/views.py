import logging

from django.shortcuts import render, redirect
from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.utils.http import url_has_allowed_host_and_scheme
from django.utils.translation import gettext_lazy as _
from django.views.decorators.cache import never_cache

from .forms import LoginForm
from .utils import get_client_ip, get_default_route

logger = logging.getLogger(__name__)

REMEMBER_ME_SECONDS = 30 * 24 * 60 * 60


@never_cache
def home_view(request):
    """Send every visitor to the route their role and client type call for."""
    return redirect(get_default_route(request.user))


# AUTHENTICATION VIEWS
@never_cache
def login_view(request):
    if request.user.is_authenticated:
        return redirect('home')

    if request.method == 'POST':
        form = LoginForm(request.POST)

        if form.is_valid():
            email = form.cleaned_data['email']
            password = form.cleaned_data['password']
            remember = form.cleaned_data.get('remember', False)

            # Returns User object if valid, None if invalid (or inactive)
            user = authenticate(request, username=email, password=password)

            if user is not None:
                login(request, user)

                if remember:
                    request.session.set_expiry(REMEMBER_ME_SECONDS)
                else:
                    # Session expires when browser closes
                    request.session.set_expiry(0)

                ip_address = get_client_ip(request)
                user.increment_login_count(ip_address=ip_address)
                logger.info(f"User {user.email} logged in from {ip_address}")

                messages.success(
                    request,
                    _('Welcome back, {}!').format(user.get_full_name())
                )

                next_url = request.GET.get('next')
                if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                    return redirect(next_url)
                return redirect(get_default_route(user))

            logger.warning(f"Failed login attempt for {email}")
            messages.error(
                request,
                _('Invalid email or password. Please try again.')
            )
        else:
            messages.error(request, _('Please correct the errors below.'))

    else:
        form = LoginForm()

    context = {
        'form': form,
        'page_title': _('Login'),
    }

    return render(request, 'accounts/login.html', context)


@login_required
def logout_view(request):
    user_name = request.user.get_full_name()

    logout(request)

    messages.success(
        request,
        _('You have been logged out successfully. See you soon, {}!').format(user_name)
    )

    return redirect('accounts:login')
