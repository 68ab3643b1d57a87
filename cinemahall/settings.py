"""
Django settings for the cinemahall project.

Everything deployment-specific is read from the environment so the same
module serves local runs, tests and production.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-insecure-key-change-me")
DEBUG = _env_bool("DJANGO_DEBUG", True)
ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h]


# Application definition

INSTALLED_APPS = [
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "theater",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "cinemahall.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "cinemahall.wsgi.application"


# Database
# SQLite file by default; point CINEMA_DB_ENGINE at postgresql/mysql for a real server.

DATABASES = {
    "default": {
        "ENGINE": os.getenv("CINEMA_DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.getenv("CINEMA_DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": os.getenv("CINEMA_DB_USER", ""),
        "PASSWORD": os.getenv("CINEMA_DB_PASSWORD", ""),
        "HOST": os.getenv("CINEMA_DB_HOST", ""),
        "PORT": os.getenv("CINEMA_DB_PORT", ""),
        # services open their own transaction.atomic() blocks
        "ATOMIC_REQUESTS": False,
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Internationalization

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("DJANGO_TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True


# Static files

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"


# Logging

CINEMA_LOG_LEVEL = os.getenv("CINEMA_LOG_LEVEL", "INFO").upper()

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
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "theater": {
            "handlers": ["console"],
            "level": CINEMA_LOG_LEVEL,
            "propagate": False,
        },
    },
}


# Cinema

CINEMA_CURRENCY_SUFFIX = os.getenv("CINEMA_CURRENCY_SUFFIX", "RUB")
