import csv

from hackportal.libs.roster import MAX_MEMBERS

MEMBER_COLUMNS = ("name", "student_id", "phone", "nationality", "department")


def team_headers():
    headers = ["Team Code", "Team Name", "Email", "Transaction ID",
               "Payment Status", "Status", "Registered At"]
    headers += [f"Leader {column.replace('_', ' ').title()}"
                for column in MEMBER_COLUMNS]
    for index in range(1, MAX_MEMBERS + 1):
        headers += [f"Member {index} {column.replace('_', ' ').title()}"
                    for column in MEMBER_COLUMNS]
    return headers


def team_row(team):
    row = [
        team.team_code,
        team.name,
        team.email,
        team.transaction_id,
        team.get_payment_status_display(),
        team.get_status_display(),
        team.created_at.strftime("%Y-%m-%d %H:%M"),
    ]
    members = sorted(team.members.all(), key=lambda member: member.position)
    for index in range(MAX_MEMBERS + 1):
        member = members[index] if len(members) > index else None
        row += [getattr(member, column, "") if member else ""
                for column in MEMBER_COLUMNS]
    return row


def write_teams_csv(stream, teams):
    """Write one row per team, leader first then members; returns the count."""
    writer = csv.writer(stream)
    writer.writerow(team_headers())
    count = 0
    for team in teams:
        writer.writerow(team_row(team))
        count += 1
    return count
