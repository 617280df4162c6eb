from django.contrib import admin
from django.contrib.auth.views import LogoutView
from django.urls import include, path

import hackportal.apps.portal.views as views


admin.autodiscover()

urlpatterns = [
    path("", views.index, name="index"),
    path("rulebook/", views.rulebook, name="rulebook"),
    path("403/", views.render_403, name="403"),
    path("home/", views.home, name="home"),

    # Account related
    path("login/", views.PortalLoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("signup/", views.signup, name="signup"),

    path("admin/", admin.site.urls),
    path("", include("hackportal.apps.portal.urls")),
]

handler403 = "hackportal.apps.portal.views.render_403"
