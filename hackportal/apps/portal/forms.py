from django import forms
from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.forms import UserCreationForm

from hackportal.apps.portal.models import PortalConfig, Submission, Team
from hackportal.libs import roster

MEMBER_PREFIXES = ("member_one", "member_two")
LEADER_FIELDS = {
    "name": "leader_name",
    "student_id": "leader_student_id",
    "phone": "leader_phone",
    "nationality": "leader_nationality",
}


def _build_member_fields():
    fields = {}
    for index, prefix in enumerate(MEMBER_PREFIXES, start=1):
        fields[f"{prefix}_name"] = forms.CharField(
            label=f"Member {index} name", required=False, max_length=100
        )
        fields[f"{prefix}_student_id"] = forms.CharField(
            label="Student ID", required=False, max_length=20
        )
        fields[f"{prefix}_phone"] = forms.CharField(
            label="Phone", required=False, max_length=20
        )
        fields[f"{prefix}_nationality"] = forms.CharField(
            label="Nationality", required=False, max_length=50
        )
    return fields


def allowed_years():
    return getattr(settings, "ROSTER_ALLOWED_YEARS", roster.ALLOWED_YEARS)


def roster_field_name(slot, field):
    if slot == roster.LEADER_SLOT:
        return LEADER_FIELDS[field]
    return f"{slot}_{field}"


class TeamRegistrationForm(forms.Form):
    team_name = forms.CharField(max_length=50)
    leader_name = forms.CharField(label="Full name", max_length=100)
    leader_student_id = forms.CharField(label="Student ID", max_length=20)
    leader_phone = forms.CharField(
        label="Phone",
        max_length=20,
        widget=forms.TextInput(attrs={"placeholder": "+880 1XXX-XXXXXX"}),
    )
    leader_nationality = forms.CharField(
        label="Nationality", max_length=50, initial="Bangladeshi"
    )
    transaction_id = forms.CharField(
        label="bKash Transaction ID",
        max_length=40,
        widget=forms.TextInput(attrs={"placeholder": "e.g., TRX1234567890"}),
    )
    locals().update(_build_member_fields())

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.report = None
        for prefix in MEMBER_PREFIXES:
            self.fields[f"{prefix}_student_id"].widget.attrs.setdefault(
                "data-roster-field", "student_id"
            )
            self.fields[f"{prefix}_phone"].widget.attrs.setdefault(
                "data-roster-field", "phone"
            )
        self.fields["leader_student_id"].widget.attrs["data-roster-field"] = "student_id"
        self.fields["leader_phone"].widget.attrs["data-roster-field"] = "phone"

    def clean_team_name(self):
        name = self.cleaned_data["team_name"].strip()
        if Team.objects.filter(name__iexact=name).exists():
            raise forms.ValidationError("A team with this name already exists")
        return name

    def clean_transaction_id(self):
        transaction_id = self.cleaned_data["transaction_id"].strip()
        if Team.objects.filter(transaction_id__iexact=transaction_id).exists():
            raise forms.ValidationError(
                "This transaction ID has already been used"
            )
        return transaction_id

    def _roster_member(self, slot):
        values = {
            field: (self.cleaned_data.get(roster_field_name(slot, field)) or "").strip()
            for field in LEADER_FIELDS
        }
        return roster.RosterMember(slot=slot, **values)

    def get_leader(self):
        return self._roster_member(roster.LEADER_SLOT)

    def get_members(self):
        return roster.active_members(
            [self._roster_member(prefix) for prefix in MEMBER_PREFIXES]
        )

    def clean(self):
        data = super().clean()
        self.report = roster.validate_roster(
            self.get_leader(),
            [self._roster_member(prefix) for prefix in MEMBER_PREFIXES],
            allowed_years(),
        )
        for (slot, field), error in self.report.errors.items():
            field_name = roster_field_name(slot, field)
            if field_name in self.errors:
                continue
            self.add_error(field_name, error.message)
        return data

    def _member_payload(self, member, position):
        return {
            "position": position,
            "name": member.name,
            "student_id": member.student_id,
            "phone": member.phone,
            "nationality": member.nationality,
            "department": roster.validate_student_id(
                member.student_id, allowed_years()
            ).department or "",
        }

    def get_payload(self):
        members = [self.get_leader()] + self.get_members()
        return {
            "name": self.cleaned_data["team_name"],
            "transaction_id": self.cleaned_data["transaction_id"],
            "members": [
                self._member_payload(member, position)
                for position, member in enumerate(members)
            ],
        }


class SubmissionForm(forms.ModelForm):
    class Meta:
        model = Submission
        fields = ("github_link", "drive_link", "requirements",
                  "stack_report", "dependencies")
        labels = {
            "github_link": "GitHub repository",
            "drive_link": "Google Drive link",
            "stack_report": "Tech stack report",
        }
        widgets = {
            "github_link": forms.URLInput(
                attrs={"placeholder": "https://github.com/yourname/project"}
            ),
            "requirements": forms.Textarea(attrs={"rows": 4}),
            "stack_report": forms.Textarea(attrs={"rows": 4}),
            "dependencies": forms.Textarea(attrs={"rows": 3}),
        }

    def clean_github_link(self):
        link = self.cleaned_data["github_link"]
        if "github.com/" not in link:
            raise forms.ValidationError("Enter a link to a GitHub repository")
        return link


class PortalSettingsForm(forms.ModelForm):
    class Meta:
        model = PortalConfig
        fields = ("allow_new_registrations", "allow_submissions",
                  "submission_deadline", "registration_fee", "payment_number")
        labels = {
            "allow_new_registrations": "Allow New Registrations",
            "allow_submissions": "Allow Project Submissions",
        }
        help_texts = {
            "allow_new_registrations":
                "Toggle whether participants can register a new team.",
            "allow_submissions":
                "Controls whether teams can submit or update deliverables.",
            "submission_deadline":
                "Submissions are refused after this time (YYYY-MM-DD HH:MM).",
        }


class SignupForm(UserCreationForm):
    email = forms.EmailField(max_length=254)
    full_name = forms.CharField(max_length=100)

    class Meta(UserCreationForm.Meta):
        model = get_user_model()
        fields = ("username", "email")

    def save(self, commit=True):
        user = super().save(commit=False)
        user.email = self.cleaned_data["email"]
        if commit:
            user.save()
            user.profile.full_name = self.cleaned_data["full_name"]
            user.profile.save()
        return user
