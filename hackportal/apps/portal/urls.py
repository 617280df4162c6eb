from django.urls import path

from . import views

urlpatterns = [
    path("team-registration/", views.team_registration, name="team_registration"),
    path("team-registration/validate/", views.validate_roster_field,
         name="validate_roster_field"),
    path("team-dashboard/", views.team_dashboard, name="team_dashboard"),
    path("submission/", views.submission, name="submission"),
    path("admin-panel/", views.admin_panel, name="admin_panel"),
    path("admin-panel/teams/<int:team_id>/payment/", views.verify_payment,
         name="verify_payment"),
    path("admin-panel/submissions/<int:submission_id>/review/",
         views.review_submission, name="review_submission"),
    path("admin-panel/export/teams.csv", views.export_teams_csv,
         name="export_teams_csv"),
]
