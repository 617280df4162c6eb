"""Team roster validation.

Checks the leader and member records of a team against the institutional
student id scheme, the accepted mobile number forms and the uniqueness
rules across the roster. Nothing here touches the database: every rule
returns a RosterError (or None) and the roster check collects all of them
so a form can show every problem at once.
"""
import re
from collections import namedtuple

INVALID_YEAR = "invalid_year"
INVALID_FIXED_SEGMENT = "invalid_fixed_segment"
INVALID_DEPARTMENT = "invalid_department"
INVALID_PROGRAM_OR_SECTION = "invalid_program_or_section"
INVALID_ROLL = "invalid_roll"
INVALID_STUDENT_ID_FORMAT = "invalid_student_id_format"
UNRECOGNIZED_PHONE_FORMAT = "unrecognized_phone_format"
REQUIRED_FIELD_MISSING = "required_field_missing"
DUPLICATE_WITH_LEADER = "duplicate_with_leader"
DUPLICATE_WITH_MEMBER = "duplicate_with_member"
TOO_MANY_MEMBERS = "too_many_members"

LEADER_SLOT = "leader"
MAX_MEMBERS = 2

ALLOWED_YEARS = frozenset({"22", "23", "24"})

DEPARTMENTS = {
    "1": "MPE",
    "2": "BTM",
    "3": "EEE",
    "4": "CSE",
    "5": "TVE",
}

# department -> (allowed programs, {program: allowed sections})
# A program missing from the section map leaves the section unconstrained.
PROGRAM_RULES = {
    "EEE": (range(1, 4), {}),
    "CSE": (range(1, 3), {1: range(1, 3), 2: range(1, 2)}),
    "MPE": (range(1, 3), {1: range(1, 3), 2: range(1, 2)}),
    "BTM": (range(1, 2), {}),
    "TVE": (range(1, 2), {}),
}

PROGRAM_MESSAGES = {
    "EEE": "EEE student IDs must have program digit 1-3",
    "CSE": ("CSE student IDs must have program 1 (section 1-2) "
            "or program 2 (section 1)"),
    "MPE": ("MPE student IDs must have program 1 (section 1-2) "
            "or program 2 (section 1)"),
    "BTM": "BTM student IDs must have program digit 1",
    "TVE": "TVE student IDs must have program digit 1",
}

FIELD_LABELS = {
    "name": "Name",
    "student_id": "Student ID",
    "phone": "Phone number",
    "nationality": "Nationality",
}

PHONE_SUFFIX = re.compile(r"1[3-9][0-9]{8}")
LOCAL_PHONE = re.compile(r"01[3-9][0-9]{8}")
STUDENT_ID_DIGITS = re.compile(r"[0-9]{9}")

_ID_SEPARATORS = re.compile(r"[\s-]")
_PHONE_SEPARATORS = re.compile(r"[\s\-()]")


class RosterError(namedtuple("RosterError", ["code", "message"])):
    __slots__ = ()

    def __str__(self):
        return self.message


class StudentIdResult(namedtuple("StudentIdResult", ["department", "error"])):
    __slots__ = ()

    @property
    def is_valid(self):
        return self.error is None


RosterMember = namedtuple(
    "RosterMember",
    ["slot", "name", "student_id", "phone", "nationality"],
    defaults=("", "", "", ""),
)


class RosterReport:
    """Per-field errors of a roster, keyed by ``(slot, field)``."""

    def __init__(self, errors=None):
        self.errors = dict(errors or {})

    @property
    def is_valid(self):
        return not self.errors

    def add(self, slot, field, error):
        # The first problem found for a field is the one reported.
        self.errors.setdefault((slot, field), error)

    def for_slot(self, slot):
        return {
            field: error
            for (error_slot, field), error in self.errors.items()
            if error_slot == slot
        }

    def messages(self):
        return {key: error.message for key, error in self.errors.items()}

    def __eq__(self, other):
        if not isinstance(other, RosterReport):
            return NotImplemented
        return self.errors == other.errors

    def __len__(self):
        return len(self.errors)

    def __repr__(self):
        return f"RosterReport({self.errors!r})"


def _fail(code, message):
    return StudentIdResult(None, RosterError(code, message))


def validate_student_id(raw, allowed_years=ALLOWED_YEARS):
    """
    Check a student id against the registration number scheme.

    The id is ``YY 00 D P S RR``: enrollment year, a fixed ``00``, the
    department digit, program and section digits (constrained per
    department) and a roll number. Checks stop at the first failure.

    Arguments:
    raw (str) -- the id as typed, spaces and dashes are ignored
    allowed_years (iterable of str) -- two digit enrollment years accepted

    Returns:
    StudentIdResult -- the department name, or the first RosterError
    """
    value = _ID_SEPARATORS.sub("", raw or "")
    if not STUDENT_ID_DIGITS.fullmatch(value):
        return _fail(INVALID_STUDENT_ID_FORMAT,
                     "Student ID must be exactly 9 digits")

    year, fixed, dept_digit = value[0:2], value[2:4], value[4]
    program, section, roll = int(value[5]), int(value[6]), int(value[7:9])

    if year not in allowed_years:
        years = ", ".join(sorted(allowed_years))
        return _fail(INVALID_YEAR,
                     f"Student ID must start with one of: {years}")
    if fixed != "00":
        return _fail(INVALID_FIXED_SEGMENT,
                     "Digits 3-4 of the student ID must be 00")
    department = DEPARTMENTS.get(dept_digit)
    if department is None:
        return _fail(INVALID_DEPARTMENT,
                     "Department digit (5th) must be between 1 and 5")

    programs, sections = PROGRAM_RULES[department]
    if program not in programs or section not in sections.get(program, range(10)):
        return _fail(INVALID_PROGRAM_OR_SECTION, PROGRAM_MESSAGES[department])

    if not 1 <= roll <= 99:
        return _fail(INVALID_ROLL, "Roll number must be between 01 and 99")
    return StudentIdResult(department, None)


def validate_phone(raw):
    """Return None for an accepted mobile number, else a RosterError."""
    value = _PHONE_SEPARATORS.sub("", raw or "")
    if value.startswith("+880"):
        if PHONE_SUFFIX.fullmatch(value[4:]):
            return None
        return RosterError(UNRECOGNIZED_PHONE_FORMAT,
                           "Use +880 followed by 1[3-9]XXXXXXXX")
    if value.startswith("880"):
        if PHONE_SUFFIX.fullmatch(value[3:]):
            return None
        return RosterError(UNRECOGNIZED_PHONE_FORMAT,
                           "Use 880 followed by 1[3-9]XXXXXXXX")
    if value.startswith("01"):
        if LOCAL_PHONE.fullmatch(value):
            return None
        return RosterError(UNRECOGNIZED_PHONE_FORMAT,
                           "Phone number must be 11 digits: 01[3-9]XXXXXXXX")
    return RosterError(UNRECOGNIZED_PHONE_FORMAT,
                       "Enter a valid mobile number (01XXXXXXXXX, "
                       "880XXXXXXXXXX or +880XXXXXXXXXX)")


def normalize_phone(raw):
    value = _PHONE_SEPARATORS.sub("", raw or "")
    if value.startswith("+880"):
        return "0" + value[4:]
    if value.startswith("880"):
        return "0" + value[3:]
    return value


def normalize_student_id(raw):
    return _ID_SEPARATORS.sub("", raw or "").lower()


def find_duplicates(values):
    seen = set()
    duplicates = set()
    for value in values:
        if not value:
            continue
        if value in seen:
            duplicates.add(value)
        seen.add(value)
    return duplicates


def required_error(field):
    label = FIELD_LABELS.get(field, field.replace("_", " ").capitalize())
    return RosterError(REQUIRED_FIELD_MISSING, f"{label} is required")


def validate_field(field, raw, allowed_years=ALLOWED_YEARS):
    """Re-run the rule for a single field, for per-field feedback."""
    value = (raw or "").strip()
    if not value:
        return required_error(field)
    if field == "student_id":
        return validate_student_id(value, allowed_years).error
    if field == "phone":
        return validate_phone(value)
    return None


def active_members(members):
    """Members with a name; blank rows are slots the user did not fill in."""
    return [member for member in members if (member.name or "").strip()]


def _flag_duplicates(report, field, leader, members, normalize):
    leader_value = normalize(getattr(leader, field))
    values = [(member.slot, normalize(getattr(member, field)))
              for member in members]
    duplicates = find_duplicates([leader_value] + [v for _, v in values])

    label = FIELD_LABELS[field]
    if leader_value in duplicates:
        report.add(LEADER_SLOT, field, RosterError(
            DUPLICATE_WITH_MEMBER,
            f"{label} is already used by another team member"))
    for slot, value in values:
        if value not in duplicates:
            continue
        if value == leader_value:
            error = RosterError(DUPLICATE_WITH_LEADER,
                                f"{label} is the same as the team leader's")
        else:
            error = RosterError(
                DUPLICATE_WITH_MEMBER,
                f"{label} is already used by another team member")
        report.add(slot, field, error)


def validate_roster(leader, members, allowed_years=ALLOWED_YEARS):
    """
    Validate a whole team before it is stored.

    Unlike the single-field rules, every slot is checked and all errors are
    collected. Members without a name are treated as not entered.

    Arguments:
    leader (RosterMember) -- the team leader, slot ``"leader"``
    members (list of RosterMember) -- the additional members
    allowed_years (iterable of str) -- accepted enrollment years

    Returns:
    RosterReport -- empty when the roster can be registered
    """
    report = RosterReport()
    members = active_members(members)
    for extra in members[MAX_MEMBERS:]:
        report.add(extra.slot, "name", RosterError(
            TOO_MANY_MEMBERS,
            f"A team can have at most {MAX_MEMBERS + 1} people including the leader"))

    error = validate_student_id(leader.student_id, allowed_years).error
    if error:
        report.add(LEADER_SLOT, "student_id", error)
    error = validate_phone(leader.phone)
    if error:
        report.add(LEADER_SLOT, "phone", error)

    for member in members:
        for field in ("student_id", "phone", "nationality"):
            error = validate_field(field, getattr(member, field), allowed_years)
            if error:
                report.add(member.slot, field, error)

    _flag_duplicates(report, "student_id", leader, members, normalize_student_id)
    _flag_duplicates(report, "phone", leader, members, normalize_phone)
    return report
