import logging
from functools import wraps

from django.contrib.auth import login
from django.contrib.auth.views import LoginView
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.http import Http404, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils import timezone
from django.views.decorators.http import require_http_methods, require_POST

from hackportal.apps.portal.forms import (
    PortalSettingsForm,
    SignupForm,
    SubmissionForm,
    TeamRegistrationForm,
    allowed_years,
)
from hackportal.apps.portal.helpers import (
    home_path_for,
    is_portal_admin,
    profile_for,
    redirect_and_flash_error,
    redirect_and_flash_success,
)
from hackportal.apps.portal.models import (
    PortalConfig,
    Submission,
    Team,
    TeamMember,
)
from hackportal.libs import roster
from hackportal.libs.errors import (
    AlreadyRegisteredError,
    RegistrationClosedError,
    SubmissionClosedError,
    emit_current_exception,
)
from hackportal.libs.team_export import write_teams_csv

logger = logging.getLogger(__name__)

ADMIN_TABS = ("teams", "submissions", "verification")
ROSTER_FIELDS = ("name", "student_id", "phone", "nationality")

TIMELINE = (
    ("Competition Opens", "Registration and team formation"),
    ("Submission Deadline", "Deliverables due through the portal"),
    ("Final Review", "Judges review approved projects"),
    ("Results Announcement", "Winners announced"),
)


def admin_required(view):
    @wraps(view)
    def wrapped(request, *args, **kwargs):
        if not is_portal_admin(request.user):
            return redirect("403")
        return view(request, *args, **kwargs)
    return wrapped


def index(request):
    config = PortalConfig.get_or_create_active()
    return render(request, "public/index.html", {
        "config": config,
        "timeline": TIMELINE,
        "team_count": Team.objects.count(),
    })


def rulebook(request):
    config = PortalConfig.get_or_create_active()
    return render(request, "public/rulebook.html", {
        "config": config,
        "max_team_size": roster.MAX_MEMBERS + 1,
    })


def render_403(request, *args, **kwargs):
    return render(request, "403.html", status=403)


class PortalLoginView(LoginView):
    template_name = "public/login.html"

    def get_success_url(self):
        redirect_to = self.get_redirect_url()
        return redirect_to or home_path_for(self.request.user)


@require_http_methods(["GET", "POST"])
def signup(request):
    form = SignupForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        user = form.save()
        login(request, user, backend="django.contrib.auth.backends.ModelBackend")
        logger.info("New participant account %s", user.get_username())
        return redirect("team_registration")
    return render(request, "public/signup.html", {"form": form})


def home(request):
    return redirect(home_path_for(request.user))


def save_registration(form, user):
    config = PortalConfig.get_or_create_active()
    if not config.can_register():
        raise RegistrationClosedError()
    profile = profile_for(user)
    if profile.is_registered:
        raise AlreadyRegisteredError()

    payload = form.get_payload()
    team = Team.objects.create(
        name=payload["name"],
        transaction_id=payload["transaction_id"],
        leader=user,
        email=user.email,
    )
    TeamMember.objects.bulk_create(
        [TeamMember(team=team, **member) for member in payload["members"]]
    )
    profile.team = team
    if not profile.full_name:
        profile.full_name = payload["members"][0]["name"]
    profile.save()
    return team


@require_http_methods(["GET", "POST"])
def team_registration(request):
    config = PortalConfig.get_or_create_active()
    profile = profile_for(request.user)
    if profile.is_registered:
        return redirect("team_dashboard")

    initial = {"leader_name": profile.full_name}
    form = TeamRegistrationForm(request.POST or None, initial=initial)
    lock_message = None
    if not config.can_register():
        lock_message = "New registrations are currently closed."

    if request.method == "POST":
        if form.is_valid():
            try:
                with transaction.atomic():
                    team = save_registration(form, request.user)
            except (RegistrationClosedError, AlreadyRegisteredError) as error:
                form.add_error(None, str(error))
            except IntegrityError:
                emit_current_exception()
                form.add_error(None, "That team name or transaction ID was just "
                                     "taken. Please try again.")
            else:
                logger.info("Registered team %s (%s) with %d member(s)",
                            team.name, team.team_code, len(form.get_members()) + 1)
                return redirect_and_flash_success(
                    request,
                    f"Team {team.name} registered! Your team code is {team.team_code}.",
                    path=reverse("team_dashboard"),
                )
        elif form.report is not None and not form.report.is_valid:
            logger.debug("Roster rejected for %s: %s",
                         request.user.get_username(),
                         sorted(form.report.messages()))

    return render(request, "portal/registration.html", {
        "form": form,
        "config": config,
        "member_rows": [
            [form[f"{prefix}_{field}"] for field in ROSTER_FIELDS]
            for prefix in ("member_one", "member_two")
        ],
        "registration_lock_message": lock_message,
    })


@require_http_methods(["GET", "POST"])
def validate_roster_field(request):
    """Single-field check used for inline feedback while filling the form."""
    params = request.POST if request.method == "POST" else request.GET
    field = params.get("field", "")
    if field not in ROSTER_FIELDS:
        return JsonResponse({"error": f"Unknown field '{field}'"}, status=400)
    error = roster.validate_field(field, params.get("value", ""), allowed_years())
    if error:
        return JsonResponse({"valid": False, "code": error.code,
                             "message": error.message})
    body = {"valid": True}
    if field == "student_id":
        body["department"] = roster.validate_student_id(
            params.get("value", ""), allowed_years()
        ).department
    return JsonResponse(body)


def get_user_team(request):
    profile = profile_for(request.user)
    if not profile or not profile.is_registered:
        raise Http404()
    return Team.objects.prefetch_related("members").get(pk=profile.team_id)


def team_dashboard(request):
    team = get_user_team(request)
    config = PortalConfig.get_or_create_active()
    return render(request, "portal/dashboard.html", {
        "team": team,
        "members": team.members.all(),
        "submission": team.submission_or_none(),
        "config": config,
        "timeline": TIMELINE,
    })


def save_submission(form, team, config):
    if not config.allow_submissions:
        raise SubmissionClosedError()
    if config.deadline_passed():
        raise SubmissionClosedError("The submission deadline has passed.")
    if team.payment_status == Team.REJECTED:
        raise SubmissionClosedError(
            "Your payment was rejected. Contact the organizers before submitting."
        )
    submission = form.save(commit=False)
    submission.team = team
    submission.status = Submission.PENDING
    submission.submitted_at = timezone.now()
    submission.reviewed_at = None
    submission.save()
    if team.status != Team.APPROVED:
        team.status = Team.SUBMITTED
        team.save(update_fields=["status", "updated_at"])
    return submission


@require_http_methods(["GET", "POST"])
def submission(request):
    team = get_user_team(request)
    config = PortalConfig.get_or_create_active()
    existing = team.submission_or_none()
    form = SubmissionForm(request.POST or None, instance=existing)
    if request.method == "POST" and form.is_valid():
        try:
            with transaction.atomic():
                save_submission(form, team, config)
        except SubmissionClosedError as error:
            form.add_error(None, str(error))
        else:
            logger.info("Team %s submitted deliverables", team.name)
            return redirect_and_flash_success(
                request,
                "Project submitted! The organizers will review it shortly.",
                path=reverse("team_dashboard"),
            )
    return render(request, "portal/submission.html", {
        "form": form,
        "team": team,
        "config": config,
        "submission": existing,
        "can_submit": config.can_submit(),
    })


def _filter_by_query(queryset, query, fields):
    if not query:
        return queryset
    condition = Q()
    for field in fields:
        condition |= Q(**{f"{field}__icontains": query})
    return queryset.filter(condition).distinct()


@admin_required
@require_http_methods(["GET", "POST"])
def admin_panel(request):
    config = PortalConfig.get_or_create_active()
    form = PortalSettingsForm(request.POST or None, instance=config)
    if request.method == "POST" and form.is_valid():
        form.save()
        logger.info("Portal settings updated by %s", request.user.get_username())
        return redirect_and_flash_success(
            request,
            "Portal settings updated!",
            path=reverse("admin_panel"),
        )

    tab = request.GET.get("tab", "teams")
    if tab not in ADMIN_TABS:
        tab = "teams"
    query = request.GET.get("q", "").strip()
    status = request.GET.get("status", "all")

    teams = Team.objects.prefetch_related("members")
    submissions = Submission.objects.select_related("team")
    verification = Team.objects.all()
    if tab == "teams":
        teams = _filter_by_query(
            teams, query, ("name", "team_code", "email", "members__name")
        )
        if status != "all":
            teams = teams.filter(status=status)
    elif tab == "submissions":
        submissions = _filter_by_query(
            submissions, query, ("team__name", "team__team_code", "github_link")
        )
        if status != "all":
            submissions = submissions.filter(status=status)
    else:
        verification = _filter_by_query(
            verification, query, ("name", "team_code", "transaction_id")
        )
        if status != "all":
            verification = verification.filter(payment_status=status)

    stats = {
        "total_teams": Team.objects.count(),
        "pending_submissions": Submission.objects.filter(
            status=Submission.PENDING
        ).count(),
        "pending_verifications": Team.objects.filter(
            payment_status=Team.PENDING
        ).count(),
    }
    return render(request, "portal/admin_panel.html", {
        "form": form,
        "config": config,
        "tab": tab,
        "tabs": ADMIN_TABS,
        "query": query,
        "status": status,
        "teams": teams,
        "submissions": submissions,
        "verification": verification,
        "stats": stats,
    })


def _review_decision(request):
    decision = request.POST.get("decision")
    if decision not in ("approve", "reject"):
        return None
    return decision


@admin_required
@require_POST
def verify_payment(request, team_id):
    team = Team.objects.filter(pk=team_id).first()
    if not team:
        raise Http404()
    decision = _review_decision(request)
    if decision is None:
        return redirect_and_flash_error(
            request,
            "Choose approve or reject.",
            path=reverse("admin_panel") + "?tab=verification",
        )
    team.payment_status = Team.APPROVED if decision == "approve" else Team.REJECTED
    team.save(update_fields=["payment_status", "updated_at"])
    logger.info("Payment for team %s %sd by %s (transaction %s)",
                team.name, decision, request.user.get_username(),
                team.transaction_id)
    return redirect_and_flash_success(
        request,
        f"Payment for {team.name} marked {team.get_payment_status_display().lower()}.",
        path=reverse("admin_panel") + "?tab=verification",
    )


@admin_required
@require_POST
def review_submission(request, submission_id):
    entry = Submission.objects.select_related("team").filter(pk=submission_id).first()
    if not entry:
        raise Http404()
    decision = _review_decision(request)
    if decision is None:
        return redirect_and_flash_error(
            request,
            "Choose approve or reject.",
            path=reverse("admin_panel") + "?tab=submissions",
        )
    with transaction.atomic():
        entry.status = (Submission.APPROVED if decision == "approve"
                        else Submission.REJECTED)
        entry.reviewed_at = timezone.now()
        entry.save(update_fields=["status", "reviewed_at"])
        team = entry.team
        team.status = Team.APPROVED if decision == "approve" else Team.SUBMITTED
        team.save(update_fields=["status", "updated_at"])
    logger.info("Submission of team %s %sd by %s",
                team.name, decision, request.user.get_username())
    return redirect_and_flash_success(
        request,
        f"Submission from {team.name} {entry.get_status_display().lower()}.",
        path=reverse("admin_panel") + "?tab=submissions",
    )


@admin_required
def export_teams_csv(request):
    response = HttpResponse(content_type="text/csv")
    response["Content-Disposition"] = "attachment; filename=hackathon-teams.csv"
    count = write_teams_csv(response, Team.objects.prefetch_related("members"))
    logger.info("Exported %d teams to CSV for %s",
                count, request.user.get_username())
    return response
