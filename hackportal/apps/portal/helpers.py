from django.contrib import messages
from django.shortcuts import redirect
from django.urls import reverse

from hackportal.apps.portal.models import Profile


def profile_for(user):
    """The user's Profile, created on the fly for accounts made before it."""
    if not user or not user.is_authenticated:
        return None
    profile = getattr(user, "profile", None)
    if profile is None:
        role = Profile.ADMIN if user.is_superuser else Profile.PARTICIPANT
        profile, _ = Profile.objects.get_or_create(user=user,
                                                   defaults={"role": role})
    return profile


def is_portal_admin(user):
    profile = profile_for(user)
    return bool(profile and profile.is_admin)


def home_path_for(user):
    """Where a signed in user lands: admin panel, dashboard or registration."""
    profile = profile_for(user)
    if profile is None:
        return reverse("login")
    if profile.is_admin:
        return reverse("admin_panel")
    if profile.is_registered:
        return reverse("team_dashboard")
    return reverse("team_registration")


def redirect_and_flash_success(request, message, **kwargs):
    return redirect_and_flash(request, message, messages.SUCCESS, **kwargs)


def redirect_and_flash_error(request, message, **kwargs):
    return redirect_and_flash(request, message, messages.ERROR, **kwargs)


def redirect_and_flash(request, message, message_level, path=None):
    messages.add_message(request, message_level, message)
    return redirect(path or request.headers.get("referer", "/"))
