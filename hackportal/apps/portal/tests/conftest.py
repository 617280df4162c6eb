import pytest

from hackportal.apps.portal.models import PortalConfig, Team, TeamMember


def make_team(user, name="Code Warriors", transaction_id="TRX1000", members=None):
    team = Team.objects.create(
        name=name,
        leader=user,
        email=user.email,
        transaction_id=transaction_id,
    )
    members = members or [
        ("Team Leader", "240042101", "01712345678", "CSE"),
    ]
    for position, (member_name, student_id, phone, department) in enumerate(members):
        TeamMember.objects.create(
            team=team,
            position=position,
            name=member_name,
            student_id=student_id,
            phone=phone,
            nationality="Bangladeshi",
            department=department,
        )
    user.profile.team = team
    user.profile.save()
    return team


@pytest.fixture
def config(db):
    return PortalConfig.get_or_create_active()


@pytest.fixture
def participant(django_user_model):
    return django_user_model.objects.create_user(
        username="leader",
        email="leader@example.com",
        password="password",
    )


@pytest.fixture
def participant_client(client, participant):
    client.force_login(participant)
    return client


@pytest.fixture
def registered_team(participant):
    return make_team(participant)


@pytest.fixture
def admin_user(django_user_model):
    return django_user_model.objects.create_superuser(
        username="admin",
        email="admin@example.com",
        password="password",
    )


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client
