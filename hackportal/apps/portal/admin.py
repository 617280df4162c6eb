from django.contrib import admin

from .models import PortalConfig, Profile, Submission, Team, TeamMember


class TeamMemberInline(admin.TabularInline):
    model = TeamMember
    fk_name = "team"
    extra = 0
    fields = ("position", "name", "student_id", "phone", "nationality",
              "department")


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ("name", "team_code", "email", "transaction_id",
                    "payment_status", "status", "created_at")
    list_filter = ("payment_status", "status")
    search_fields = ("name", "team_code", "email", "transaction_id",
                     "members__name", "members__student_id")
    inlines = (TeamMemberInline,)


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "full_name", "role", "team")
    list_filter = ("role",)
    search_fields = ("user__username", "user__email", "full_name")


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ("team", "github_link", "status", "submitted_at",
                    "reviewed_at")
    list_filter = ("status",)
    search_fields = ("team__name", "github_link")


@admin.register(PortalConfig)
class PortalConfigAdmin(admin.ModelAdmin):
    list_display = ("allow_new_registrations", "allow_submissions",
                    "submission_deadline", "updated_at")
