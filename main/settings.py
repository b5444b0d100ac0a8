import os
from importlib.metadata import entry_points

import environ

"""
Flaglinks Django settings.
"""

env = environ.Env(
    ALLOWED_HOSTS=(list, ["*"]),
    INSTALLED_APPS=(list, []),
    SECRET_KEY=(str, "flaglinks-insecure-development-key"),
)
env.read_env(env.str("ENV_PATH", ".environ"))

if os.environ.get("DJANGO_DEBUG") == "1":
    LOGGING = {
        "version": 1,
        "disable_existing_loggers": False,
        "handlers": {
            "console": {"class": "logging.StreamHandler"},
            "null": {"level": "DEBUG", "class": "logging.NullHandler"},
        },
        "loggers": {
            "django": {"handlers": ["console"], "level": "DEBUG"},
            "django.db.backends": {
                "handlers": ["null"],  # Quiet by default!
                "propagate": False,
                "level": "DEBUG",
            },
            "flaglinks": {"handlers": ["console"], "level": "DEBUG"},
        },
    }
    DEBUG = True
else:
    DEBUG = False

# Flaglinks specific apps

ACTIONLINK_APPS = (
    "flaglinks.actionlinks.reload",
    "flaglinks.actionlinks.confirm",
    "flaglinks.actionlinks.ajax",
)

# Application definition

INSTALLED_APPS = (
    (
        "django.contrib.admin",
        "django.contrib.auth",
        "django.contrib.contenttypes",
        "django.contrib.sessions",
        "django.contrib.messages",
        "django.contrib.staticfiles",
        "rest_framework",
        "flaglinks",
    )
    + ACTIONLINK_APPS
)

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "main.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

# Internationalization
# https://docs.djangoproject.com/en/stable/topics/i18n/

LANGUAGE_CODE = "en-us"

TIME_ZONE = "UTC"

USE_I18N = True

USE_TZ = True

# DRF settings

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework.authentication.SessionAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticated",),
    "DEFAULT_RENDERER_CLASSES": ("rest_framework.renderers.JSONRenderer",),
}

APPEND_SLASH = False

STATIC_URL = "/static/"

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

CACHES = {
    "default": env.cache(default="locmemcache://"),
}

DATABASES = {
    "default": env.db(default="sqlite:///db.sqlite3"),
}

PLUGIN_ENTRY_POINT = "flaglinks.apps"

INSTALLED_APPS += tuple(
    entry_point.module
    for entry_point in entry_points(group=PLUGIN_ENTRY_POINT)
    if entry_point.name == "app"
)
INSTALLED_APPS += tuple(env("INSTALLED_APPS"))

SECRET_KEY = env("SECRET_KEY")

ALLOWED_HOSTS = env("ALLOWED_HOSTS")
