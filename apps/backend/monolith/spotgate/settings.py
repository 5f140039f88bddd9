# spotgate/settings.py
from pathlib import Path
from decimal import Decimal
from decouple import AutoConfig, Csv

BASE_DIR = Path(__file__).resolve().parent.parent
config = AutoConfig(search_path=BASE_DIR)

# ==========================================
# BASIC CONFIGURATION
# ==========================================
SECRET_KEY = config("SPOTGATE_SECRET_KEY", default="django-insecure-spotgate-dev-key")
DEBUG = config('DEBUG', default=False, cast=bool)
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='*', cast=Csv())

# ==========================================
# TRADING/BINANCE CONFIGURATION
# ==========================================
# Credentials are NOT configured here: every request carries its own.
BINANCE_USE_TESTNET = config('BINANCE_USE_TESTNET', default=True, cast=bool)

# False sends orders to the exchange's test endpoint (validated, never filled)
TRADING_ENABLED = config('TRADING_ENABLED', default=False, cast=bool)

# ==========================================
# ORDER NORMALIZATION POLICY
# ==========================================
# LIMIT orders without a price rest this fraction away from the market:
# below it for buys, above it for sells.
ORDER_LIMIT_BUY_OFFSET = config('ORDER_LIMIT_BUY_OFFSET', default='0.01', cast=Decimal)
ORDER_LIMIT_SELL_OFFSET = config('ORDER_LIMIT_SELL_OFFSET', default='0.01', cast=Decimal)

# False forces GTC on every LIMIT order; True keeps the caller's timeInForce
ORDER_RESPECT_CALLER_TIME_IN_FORCE = config('ORDER_RESPECT_CALLER_TIME_IN_FORCE', default=False, cast=bool)

# ==========================================
# DJANGO APPS
# ==========================================
DJANGO_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
]

THIRD_PARTY_APPS = [
    'corsheaders',
    'rest_framework',
]

LOCAL_APPS = [
    'api.apps.ApiConfig',
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

# ==========================================
# REST FRAMEWORK
# ==========================================
# No user accounts: exchange credentials in the body are the only identity.
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_THROTTLE_CLASSES': [
        'rest_framework.throttling.AnonRateThrottle',
    ],
    'DEFAULT_THROTTLE_RATES': {
        'anon': config('THROTTLE_ANON_RATE', default='600/min'),
    },
}

# ==========================================
# MIDDLEWARE
# ==========================================
MIDDLEWARE = [
    # Correlation ID - early for request tracking
    'api.middleware.correlation_id.CorrelationIDMiddleware',

    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'spotgate.urls'

WSGI_APPLICATION = 'spotgate.wsgi.application'

# ==========================================
# DATABASES
# ==========================================
# Stateless service: nothing is persisted. Django still wants a default.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# ==========================================
# CACHE
# ==========================================
# Used by the throttling only.
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'spotgate-cache',
    }
}

# ==========================================
# LOGGING
# ==========================================
LOG_FILE = config('LOG_FILE', default='')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {correlation_id} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
        'json': {
            '()': 'pythonjsonlogger.json.JsonFormatter',
            'format': '%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d %(funcName)s %(correlation_id)s',
        },
    },
    'filters': {
        'correlation_id': {
            '()': 'api.middleware.logging_filter.CorrelationIDFilter',
        },
    },
    'handlers': {
        'console': {
            'level': 'DEBUG' if DEBUG else 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'simple' if DEBUG else 'json',  # JSON in production for k8s
            'filters': ['correlation_id'],
        },
    },
    'loggers': {
        'api': {
            'handlers': ['console'],
            'level': 'DEBUG' if DEBUG else 'INFO',
            'propagate': True,
        },
        'binance': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': True,
        },
    },
}

if LOG_FILE:
    LOGGING['handlers']['file'] = {
        'level': 'INFO',
        'class': 'logging.FileHandler',
        'filename': LOG_FILE,
        'formatter': 'verbose',
        'filters': ['correlation_id'],
    }
    for _logger in LOGGING['loggers'].values():
        _logger['handlers'].append('file')

# ==========================================
# INTERNATIONALIZATION
# ==========================================
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# ==========================================
# CORS CONFIGURATION
# ==========================================
# Empty list means any origin, like the original "*" default.
CORS_ALLOWED_ORIGINS = config('CORS_ALLOWED_ORIGINS', default='', cast=Csv())
CORS_ALLOW_ALL_ORIGINS = not CORS_ALLOWED_ORIGINS

CORS_ALLOW_HEADERS = [
    'accept',
    'authorization',
    'content-type',
    'origin',
    'x-request-id',
]

CORS_ALLOW_METHODS = [
    'DELETE',
    'GET',
    'OPTIONS',
    'POST',
    'PUT',
]

CORS_EXPOSE_HEADERS = [
    'content-type',
    'authorization',
    'x-request-id',
]

# ==========================================
# SECURITY SETTINGS
# ==========================================
if not DEBUG:
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SECURE_SSL_REDIRECT = config('SECURE_SSL_REDIRECT', default=False, cast=bool)

# Trusted proxy header for HTTPS detection
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
