from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PortalConfig",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("allow_new_registrations", models.BooleanField(default=True)),
                ("allow_submissions", models.BooleanField(default=True)),
                ("submission_deadline", models.DateTimeField(blank=True, null=True)),
                ("registration_fee", models.PositiveIntegerField(default=300)),
                ("payment_number", models.CharField(blank=True, max_length=20)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "portal config",
            },
        ),
        migrations.CreateModel(
            name="Team",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50, unique=True)),
                ("team_code", models.CharField(blank=True, max_length=255, unique=True)),
                ("email", models.EmailField(max_length=254)),
                ("transaction_id", models.CharField(max_length=40, unique=True)),
                ("payment_status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")], default="pending", max_length=10)),
                ("status", models.CharField(choices=[("registered", "Registered"), ("submitted", "Submitted"), ("approved", "Approved")], default="registered", max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("leader", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="led_teams", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="TeamMember",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveSmallIntegerField(default=0)),
                ("name", models.CharField(max_length=100)),
                ("student_id", models.CharField(max_length=20)),
                ("phone", models.CharField(max_length=20)),
                ("nationality", models.CharField(max_length=50)),
                ("department", models.CharField(blank=True, max_length=10)),
                ("team", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="members", to="portal.team")),
            ],
            options={
                "ordering": ["team", "position"],
            },
        ),
        migrations.AddConstraint(
            model_name="teammember",
            constraint=models.UniqueConstraint(fields=("team", "position"), name="unique_member_position"),
        ),
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name", models.CharField(blank=True, max_length=100)),
                ("role", models.CharField(choices=[("participant", "Participant"), ("admin", "Admin")], default="participant", max_length=15)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("team", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="profiles", to="portal.team")),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name="Submission",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("github_link", models.URLField()),
                ("drive_link", models.URLField(blank=True)),
                ("requirements", models.TextField(blank=True)),
                ("stack_report", models.TextField(blank=True)),
                ("dependencies", models.TextField(blank=True)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")], default="pending", max_length=10)),
                ("submitted_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("team", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="submission", to="portal.team")),
            ],
            options={
                "ordering": ["-submitted_at"],
            },
        ),
    ]
