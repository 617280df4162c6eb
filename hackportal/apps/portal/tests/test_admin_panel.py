import csv
import io

import pytest
from django.urls import reverse

from hackportal.apps.portal.models import PortalConfig, Submission, Team

from .conftest import make_team


@pytest.fixture
def teams(django_user_model):
    first = django_user_model.objects.create_user(
        username="first", email="first@example.com", password="password"
    )
    second = django_user_model.objects.create_user(
        username="second", email="second@example.com", password="password"
    )
    return (
        make_team(first, name="Code Warriors", transaction_id="TRX-A", members=[
            ("John Doe", "240042101", "01712345678", "CSE"),
            ("Jane Smith", "230033201", "01812345678", "EEE"),
        ]),
        make_team(second, name="Tech Titans", transaction_id="TRX-B", members=[
            ("Sarah Smith", "220011101", "01912345678", "MPE"),
        ]),
    )


@pytest.mark.django_db
def test_admin_panel_lists_teams(admin_client, teams):
    response = admin_client.get(reverse("admin_panel"))

    assert response.status_code == 200
    content = response.content.decode()
    assert "Code Warriors" in content
    assert "Tech Titans" in content
    assert "John Doe" in content
    assert response.context["stats"] == {
        "total_teams": 2,
        "pending_submissions": 0,
        "pending_verifications": 2,
    }


@pytest.mark.django_db
def test_admin_panel_search_and_filter(admin_client, teams):
    teams[1].status = Team.SUBMITTED
    teams[1].save()

    by_member = admin_client.get(reverse("admin_panel"), {"q": "jane"})
    by_status = admin_client.get(reverse("admin_panel"), {"status": "submitted"})

    assert list(by_member.context["teams"]) == [teams[0]]
    assert list(by_status.context["teams"]) == [teams[1]]


@pytest.mark.django_db
def test_admin_can_verify_payment(admin_client, teams):
    url = reverse("verify_payment", args=[teams[0].pk])

    response = admin_client.post(url, {"decision": "approve"}, follow=True)
    admin_client.post(reverse("verify_payment", args=[teams[1].pk]),
                      {"decision": "reject"})

    assert response.status_code == 200
    teams[0].refresh_from_db()
    teams[1].refresh_from_db()
    assert teams[0].payment_status == Team.APPROVED
    assert teams[1].payment_status == Team.REJECTED
    pending = admin_client.get(reverse("admin_panel"),
                               {"tab": "verification", "status": "pending"})
    assert list(pending.context["verification"]) == []


@pytest.mark.django_db
def test_verify_payment_requires_decision(admin_client, teams):
    admin_client.post(reverse("verify_payment", args=[teams[0].pk]), {})

    teams[0].refresh_from_db()
    assert teams[0].payment_status == Team.PENDING


@pytest.mark.django_db
def test_verify_unknown_team_is_404(admin_client, config):
    response = admin_client.post(reverse("verify_payment", args=[999]),
                                 {"decision": "approve"})

    assert response.status_code == 404


@pytest.mark.django_db
def test_admin_can_review_submission(admin_client, teams):
    entry = Submission.objects.create(
        team=teams[0], github_link="https://github.com/code-warriors/project"
    )
    teams[0].status = Team.SUBMITTED
    teams[0].save()

    response = admin_client.post(
        reverse("review_submission", args=[entry.pk]),
        {"decision": "approve"},
        follow=True,
    )

    assert response.status_code == 200
    entry.refresh_from_db()
    teams[0].refresh_from_db()
    assert entry.status == Submission.APPROVED
    assert entry.reviewed_at is not None
    assert teams[0].status == Team.APPROVED


@pytest.mark.django_db
def test_rejecting_submission_keeps_team_submitted(admin_client, teams):
    entry = Submission.objects.create(
        team=teams[1], github_link="https://github.com/tech-titans/solution"
    )

    admin_client.post(reverse("review_submission", args=[entry.pk]),
                      {"decision": "reject"})

    entry.refresh_from_db()
    teams[1].refresh_from_db()
    assert entry.status == Submission.REJECTED
    assert teams[1].status == Team.SUBMITTED


@pytest.mark.django_db
def test_admin_can_update_settings(admin_client, config):
    response = admin_client.post(
        reverse("admin_panel"),
        {
            "allow_submissions": "on",
            "submission_deadline": "2026-02-28 23:59",
            "registration_fee": "500",
            "payment_number": "01700000000",
        },
        follow=True,
    )

    assert response.status_code == 200
    config.refresh_from_db()
    assert config.allow_new_registrations is False
    assert config.allow_submissions is True
    assert config.registration_fee == 500
    assert config.submission_deadline is not None
    assert PortalConfig.objects.count() == 1


@pytest.mark.django_db
def test_export_teams_csv(admin_client, teams):
    response = admin_client.get(reverse("export_teams_csv"))

    assert response.status_code == 200
    assert response["Content-Type"] == "text/csv"
    rows = list(csv.reader(io.StringIO(response.content.decode())))
    assert rows[0][:3] == ["Team Code", "Team Name", "Email"]
    assert len(rows) == 3
    by_name = {row[1]: row for row in rows[1:]}
    assert by_name["Code Warriors"][7] == "John Doe"
    assert "Jane Smith" in by_name["Code Warriors"]
    assert by_name["Tech Titans"][4] == "Pending"


@pytest.mark.django_db
def test_participants_cannot_reach_admin_panel(participant_client, registered_team):
    response = participant_client.get(reverse("admin_panel"))
    export = participant_client.get(reverse("export_teams_csv"))

    assert response.status_code == 302
    assert response.url == reverse("team_dashboard")
    assert export.status_code == 302
