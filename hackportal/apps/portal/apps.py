from django.apps import AppConfig


class PortalAppConfig(AppConfig):
    default_auto_field = "django.db.models.AutoField"
    name = "hackportal.apps.portal"
    label = "portal"

    def ready(self):
        from . import signals  # noqa: F401  pylint: disable=unused-import,import-outside-toplevel
