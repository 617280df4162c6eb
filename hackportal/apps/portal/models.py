from haikunator import Haikunator
from django.conf import settings
from django.db import models
from django.utils import timezone


class PortalConfig(models.Model):
    allow_new_registrations = models.BooleanField(default=True)
    allow_submissions = models.BooleanField(default=True)
    submission_deadline = models.DateTimeField(blank=True, null=True)
    registration_fee = models.PositiveIntegerField(default=300)
    payment_number = models.CharField(max_length=20, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "portal config"

    def __str__(self):
        return "Portal Config"

    @classmethod
    def get_active(cls):
        return cls.objects.first()

    @classmethod
    def get_or_create_active(cls):
        config = cls.get_active()
        if config:
            return config
        return cls.objects.create()

    def can_register(self):
        return self.allow_new_registrations

    def deadline_passed(self, now=None):
        if self.submission_deadline is None:
            return False
        return (now or timezone.now()) > self.submission_deadline

    def can_submit(self, now=None):
        return self.allow_submissions and not self.deadline_passed(now)


class Team(models.Model):
    name = models.CharField(max_length=50, unique=True)
    team_code = models.CharField(max_length=255, unique=True, blank=True)
    leader = models.ForeignKey(settings.AUTH_USER_MODEL,
                               on_delete=models.CASCADE,
                               related_name="led_teams")
    email = models.EmailField()
    transaction_id = models.CharField(max_length=40, unique=True)

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAYMENT_CHOICES = (
        (PENDING, "Pending"),
        (APPROVED, "Approved"),
        (REJECTED, "Rejected"),
    )
    payment_status = models.CharField(max_length=10,
                                      choices=PAYMENT_CHOICES,
                                      default=PENDING)

    REGISTERED = "registered"
    SUBMITTED = "submitted"
    STATUS_CHOICES = (
        (REGISTERED, "Registered"),
        (SUBMITTED, "Submitted"),
        (APPROVED, "Approved"),
    )
    status = models.CharField(max_length=10,
                              choices=STATUS_CHOICES,
                              default=REGISTERED)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.team_code:
            haikunator = Haikunator()
            code = haikunator.haikunate(token_length=0)
            while Team.objects.filter(team_code=code).exists():
                code = haikunator.haikunate(token_length=0)
            self.team_code = code
        super().save(*args, **kwargs)

    @property
    def leader_member(self):
        return self.members.filter(position=0).first()

    @property
    def size(self):
        return self.members.count()

    def submission_or_none(self):
        return Submission.objects.filter(team=self).first()


class TeamMember(models.Model):
    team = models.ForeignKey(Team,
                             on_delete=models.CASCADE,
                             related_name="members")
    position = models.PositiveSmallIntegerField(default=0)
    name = models.CharField(max_length=100)
    student_id = models.CharField(max_length=20)
    phone = models.CharField(max_length=20)
    nationality = models.CharField(max_length=50)
    department = models.CharField(max_length=10, blank=True)

    class Meta:
        ordering = ["team", "position"]
        constraints = [
            models.UniqueConstraint(fields=["team", "position"],
                                    name="unique_member_position"),
        ]

    def __str__(self):
        return f"{self.name} ({self.student_id})"

    @property
    def is_leader(self):
        return self.position == 0

    @property
    def role(self):
        return "Team Leader" if self.is_leader else "Member"


class Profile(models.Model):
    user = models.OneToOneField(settings.AUTH_USER_MODEL,
                                on_delete=models.CASCADE,
                                related_name="profile")
    full_name = models.CharField(max_length=100, blank=True)

    PARTICIPANT = "participant"
    ADMIN = "admin"
    ROLE_CHOICES = (
        (PARTICIPANT, "Participant"),
        (ADMIN, "Admin"),
    )
    role = models.CharField(max_length=15,
                            choices=ROLE_CHOICES,
                            default=PARTICIPANT)
    team = models.ForeignKey(Team,
                             blank=True,
                             null=True,
                             on_delete=models.SET_NULL,
                             related_name="profiles")
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.full_name or self.user.get_username()

    @property
    def is_admin(self):
        return self.role == self.ADMIN or self.user.is_superuser

    @property
    def is_registered(self):
        return self.team_id is not None


class Submission(models.Model):
    team = models.OneToOneField(Team,
                                on_delete=models.CASCADE,
                                related_name="submission")
    github_link = models.URLField()
    drive_link = models.URLField(blank=True)
    requirements = models.TextField(blank=True)
    stack_report = models.TextField(blank=True)
    dependencies = models.TextField(blank=True)

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    STATUS_CHOICES = (
        (PENDING, "Pending"),
        (APPROVED, "Approved"),
        (REJECTED, "Rejected"),
    )
    status = models.CharField(max_length=10,
                              choices=STATUS_CHOICES,
                              default=PENDING)
    submitted_at = models.DateTimeField(default=timezone.now)
    reviewed_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        ordering = ["-submitted_at"]

    def __str__(self):
        return f"Submission for {self.team}"
