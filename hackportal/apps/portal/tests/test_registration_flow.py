import pytest
from django.db import IntegrityError
from django.urls import reverse

from hackportal.apps.portal import views
from hackportal.apps.portal.models import PortalConfig, Profile, Team
from hackportal.apps.portal.forms import MEMBER_PREFIXES

from .conftest import make_team


def member_entry(prefix, name, student_id, phone, nationality="Bangladeshi"):
    return {
        f"{prefix}_name": name,
        f"{prefix}_student_id": student_id,
        f"{prefix}_phone": phone,
        f"{prefix}_nationality": nationality,
    }


def registration_payload(members=(), **overrides):
    data = {
        "team_name": "Null Pointers",
        "leader_name": "Team Leader",
        "leader_student_id": "240042101",
        "leader_phone": "+880 1712-345678",
        "leader_nationality": "Bangladeshi",
        "transaction_id": "TRX1234567890",
    }
    for prefix in MEMBER_PREFIXES:
        data.update(member_entry(prefix, "", "", "", ""))
    for prefix, details in zip(MEMBER_PREFIXES, members):
        data.update(member_entry(prefix, *details))
    data.update(overrides)
    return data


@pytest.mark.django_db
def test_registration_flow_creates_team(participant_client, participant, config):
    data = registration_payload(members=[
        ("Second Member", "230033201", "01812345678"),
        ("Third Member", "2400-11102", "8801912345678"),
    ])

    response = participant_client.post(reverse("team_registration"), data, follow=True)

    assert response.status_code == 200
    assert response.request["PATH_INFO"] == reverse("team_dashboard")
    team = Team.objects.get()
    assert team.name == "Null Pointers"
    assert team.leader == participant
    assert team.email == "leader@example.com"
    assert team.transaction_id == "TRX1234567890"
    assert team.payment_status == Team.PENDING
    assert team.status == Team.REGISTERED
    assert team.team_code
    members = list(team.members.all())
    assert [m.name for m in members] == ["Team Leader", "Second Member", "Third Member"]
    assert [m.department for m in members] == ["CSE", "EEE", "MPE"]
    assert members[0].is_leader
    assert members[2].student_id == "2400-11102"
    participant.profile.refresh_from_db()
    assert participant.profile.team == team
    assert team.team_code in response.content.decode()


@pytest.mark.django_db
def test_solo_registration_ignores_blank_member_rows(participant_client, config):
    response = participant_client.post(
        reverse("team_registration"), registration_payload(), follow=True
    )

    assert response.status_code == 200
    team = Team.objects.get()
    assert team.size == 1


@pytest.mark.django_db
def test_duplicate_student_id_flags_leader_and_member(participant_client, config):
    data = registration_payload(members=[
        ("Copy Cat", "24004 2101", "01812345678"),
    ])

    response = participant_client.post(reverse("team_registration"), data)

    assert response.status_code == 200
    assert Team.objects.count() == 0
    form = response.context["form"]
    assert "already used by another team member" in form.errors["leader_student_id"][0]
    assert "same as the team leader" in form.errors["member_one_student_id"][0]


@pytest.mark.django_db
def test_invalid_identifiers_are_reported_per_field(participant_client, config):
    data = registration_payload(
        leader_student_id="240052101",
        leader_phone="01212345678",
        members=[("No Details", "", "", "")],
    )

    response = participant_client.post(reverse("team_registration"), data)

    form = response.context["form"]
    assert set(form.errors) == {
        "leader_student_id",
        "leader_phone",
        "member_one_student_id",
        "member_one_phone",
        "member_one_nationality",
    }
    assert "TVE" in form.errors["leader_student_id"][0]
    assert form.errors["member_one_nationality"] == ["Nationality is required"]
    assert Team.objects.count() == 0


@pytest.mark.django_db
def test_team_name_and_transaction_must_be_unique(participant_client, config,
                                                  django_user_model):
    other = django_user_model.objects.create_user(
        username="other", email="other@example.com", password="password"
    )
    make_team(other, name="Null Pointers", transaction_id="TRX1234567890",
              members=[("Other Leader", "230011101", "01512345678", "MPE")])

    response = participant_client.post(
        reverse("team_registration"), registration_payload(team_name="null pointers")
    )

    form = response.context["form"]
    assert "team_name" in form.errors
    assert "transaction_id" in form.errors
    assert Team.objects.count() == 1


@pytest.mark.django_db
def test_registration_closed_blocks_submission(participant_client, config):
    config.allow_new_registrations = False
    config.save()

    response = participant_client.post(
        reverse("team_registration"), registration_payload()
    )

    assert response.status_code == 200
    assert b"New registrations are currently closed." in response.content
    assert Team.objects.count() == 0


@pytest.mark.django_db
def test_registered_participant_is_sent_to_dashboard(participant_client, registered_team):
    response = participant_client.get(reverse("team_registration"))

    assert response.status_code == 302
    assert response.url == reverse("team_dashboard")


@pytest.mark.django_db
def test_validate_endpoint_checks_single_field(participant_client, config):
    url = reverse("validate_roster_field")

    ok = participant_client.post(url, {"field": "student_id", "value": "240042101"})
    bad = participant_client.post(url, {"field": "phone", "value": "+8801212345678"})
    unknown = participant_client.get(url, {"field": "team", "value": "x"})

    assert ok.json() == {"valid": True, "department": "CSE"}
    assert bad.json()["valid"] is False
    assert bad.json()["code"] == "unrecognized_phone_format"
    assert unknown.status_code == 400


@pytest.mark.django_db
def test_signup_creates_participant_profile(client, config):
    response = client.post(reverse("signup"), {
        "username": "newleader",
        "email": "new@example.com",
        "full_name": "New Leader",
        "password1": "s3cure-Passw0rd",
        "password2": "s3cure-Passw0rd",
    })

    assert response.status_code == 302
    assert response.url == reverse("team_registration")
    profile = Profile.objects.get(user__username="newleader")
    assert profile.full_name == "New Leader"
    assert profile.role == Profile.PARTICIPANT
    assert not profile.is_registered


@pytest.mark.django_db
def test_registration_form_prefills_leader_name(participant_client, participant):
    participant.profile.full_name = "Prefilled Name"
    participant.profile.save()

    response = participant_client.get(reverse("team_registration"))

    assert response.status_code == 200
    assert response.context["form"].initial["leader_name"] == "Prefilled Name"
    assert PortalConfig.objects.count() == 1


@pytest.mark.django_db
def test_registration_race_is_reported(participant_client, config, monkeypatch):
    reported = []

    def taken(form, user):
        raise IntegrityError("duplicate key")

    monkeypatch.setattr(views, "save_registration", taken)
    monkeypatch.setattr(views, "emit_current_exception",
                        lambda: reported.append(True))

    response = participant_client.post(
        reverse("team_registration"), registration_payload()
    )

    assert response.status_code == 200
    assert reported == [True]
    assert "just taken" in response.context["form"].non_field_errors()[0]
