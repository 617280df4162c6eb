# Build paths inside the project like this: os.path.join(BASE_DIR, ...)
import os

import sentry_sdk
from sentry_sdk.integrations.django import DjangoIntegration
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "hackportal-dev-1l$9c#u3v0^r7y!k2p@x8w4q6t5z0m3n7b1s"
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.environ.get("DEBUG") in ["1", "true", "True"]

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "*").split(",")

# Application definition

INSTALLED_APPS = ("django.contrib.admin", "django.contrib.auth",
                  "django.contrib.contenttypes", "django.contrib.sessions",
                  "django.contrib.messages", "django.contrib.staticfiles",
                  "hackportal.apps.portal.apps.PortalAppConfig",
                  "bootstrap4",)

MIDDLEWARE = (
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "hackportal.apps.portal.middleware.PortalAccess",
)

ROOT_URLCONF = "hackportal.urls"

WSGI_APPLICATION = "hackportal.wsgi.application"

# The hosted backend is PostgreSQL; without a host we fall back to a local
# SQLite file for development and tests.
DATABASE_HOST = os.environ.get("DATABASE_HOST")

if DATABASE_HOST:
    DATABASES = {
        "default": {
            "ENGINE":   "django.db.backends.postgresql",
            "NAME":     os.environ.get("DATABASE_NAME", "postgres"),
            "USER":     os.environ.get("DATABASE_USER", "postgres"),
            "PASSWORD": os.environ.get("DATABASE_PASSWORD", ""),
            "HOST":     DATABASE_HOST,
            "PORT":     os.environ.get("DATABASE_PORT", "5432"),
            "OPTIONS":  {"sslmode": os.environ.get("DATABASE_SSLMODE", "require")},
            "CONN_MAX_AGE": 60,
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.path.join(BASE_DIR, "hackportal.sqlite3"),
        }
    }

# Error monitoring
# https://docs.sentry.io/platforms/python/integrations/django/
if os.environ.get("SENTRY_DSN"):
    sentry_sdk.init(
        dsn=os.environ["SENTRY_DSN"],
        integrations=[DjangoIntegration()],
        traces_sample_rate=1.0,
        send_default_pii=True,
        )

# Enrollment years accepted in student ids, e.g. "22,23,24"
ROSTER_ALLOWED_YEARS = tuple(
    year.strip()
    for year in os.environ.get("ROSTER_ALLOWED_YEARS", "22,23,24").split(",")
    if year.strip()
)

# Internationalization

LANGUAGE_CODE = "en-us"

TIME_ZONE = os.environ.get("TIME_ZONE", "Asia/Dhaka")

USE_I18N = True

USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = os.path.join(BASE_DIR, "staticfiles")

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [
            os.path.join(BASE_DIR, "hackportal", "templates"),
        ],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.contrib.auth.context_processors.auth",
                "django.template.context_processors.debug",
                "django.template.context_processors.i18n",
                "django.template.context_processors.media",
                "django.contrib.messages.context_processors.messages",
                "django.template.context_processors.request",
            ],
        },
    },
]

MESSAGE_STORAGE = "django.contrib.messages.storage.session.SessionStorage"

# Login/Logout redirects
LOGIN_REDIRECT_URL = "/home/"
LOGOUT_REDIRECT_URL = "/"
LOGIN_URL = "/login/"

DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "hackportal": {
            "handlers": ["console"],
            "level": os.environ.get("HACKPORTAL_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
}

if os.environ.get("HACKPORTAL_LOG_QUERIES"):
    LOGGING["loggers"]["django.db.backends"] = {
        "handlers": ["console"],
        "level": "DEBUG",
    }
