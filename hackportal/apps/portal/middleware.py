from django.shortcuts import redirect
from django.urls import reverse

from hackportal.apps.portal.helpers import home_path_for, profile_for

PUBLIC_PATHS = ("/", "/login/", "/signup/", "/rulebook/", "/403/",
                "/favicon.ico")
PUBLIC_PREFIXES = ("/static/", "/admin/")
PARTICIPANT_PATHS = ("/team-registration/", "/team-dashboard/", "/submission/")
REGISTRATION_PREFIX = "/team-registration/"
ADMIN_PREFIX = "/admin-panel/"


def is_public_path(path):
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


class PortalAccess:
    """
    Routes every request according to who is asking: anonymous users to the
    login page, admins to the admin panel and participants without a team
    to the registration form.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path
        public = is_public_path(path)

        if request.user.is_anonymous:
            if public:
                return self.get_response(request)
            return redirect(f"{reverse('login')}?next={path}")

        if path == reverse("login"):
            return redirect(home_path_for(request.user))
        if public:
            return self.get_response(request)

        profile = profile_for(request.user)
        if path.startswith(ADMIN_PREFIX):
            if not profile.is_admin:
                return redirect("team_dashboard" if profile.is_registered
                                else "team_registration")
            return self.get_response(request)

        if profile.is_admin:
            if (path.startswith(PARTICIPANT_PATHS)
                    and path != reverse("validate_roster_field")):
                return redirect("admin_panel")
            return self.get_response(request)

        if not profile.is_registered and not path.startswith(REGISTRATION_PREFIX):
            if path in ("/home/", "/logout/"):
                return self.get_response(request)
            return redirect("team_registration")
        return self.get_response(request)
