"""
Django Local Development Settings
로컬 개발 환경 전용 설정
"""

import os
import socket

from storefront.settings.base import *  # noqa: F401, F403
from storefront.settings.components.logging import get_logging_config

# ==========================================================================
# Debug Settings
# ==========================================================================

DEBUG = True

# ==========================================================================
# Debug Toolbar
# ==========================================================================

INSTALLED_APPS += ["debug_toolbar"]  # noqa: F405

MIDDLEWARE.insert(0, "debug_toolbar.middleware.DebugToolbarMiddleware")  # noqa: F405

INTERNAL_IPS = [
    "127.0.0.1",
    "localhost",
]

# Docker 환경에서도 작동하도록
hostname, _, ips = socket.gethostbyname_ex(socket.gethostname())
INTERNAL_IPS += [ip[: ip.rfind(".")] + ".1" for ip in ips]

# ==========================================================================
# Database (PostgreSQL - Dev/Prod parity)
# ==========================================================================

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DATABASE_NAME", "storefront_dev"),
        "USER": os.getenv("DATABASE_USER", "postgres"),
        "PASSWORD": os.getenv("DATABASE_PASSWORD", "postgres"),
        "HOST": os.getenv("DATABASE_HOST", "localhost"),
        "PORT": os.getenv("DATABASE_PORT", "5432"),
        "CONN_MAX_AGE": 600,
        "CONN_HEALTH_CHECKS": True,
        "OPTIONS": {
            "connect_timeout": 10,
            "options": "-c statement_timeout=30000",
        },
    }
}

# ==========================================================================
# Cache (Redis) - throttle 카운터 저장소
# ==========================================================================

CACHES = {
    "default": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": os.environ.get("REDIS_URL", "redis://127.0.0.1:6379/1"),
        "OPTIONS": {
            "CLIENT_CLASS": "django_redis.client.DefaultClient",
        },
    }
}

# ==========================================================================
# Rate Limiting - 개발 환경에서는 실제 제한 적용
# ==========================================================================

DISABLE_RATE_LIMITING = os.getenv("DISABLE_RATE_LIMITING", "FALSE") == "TRUE"

if DISABLE_RATE_LIMITING:
    REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {  # noqa: F405
        "shipping_quote": "1000/min",
        "anon_global": "10000/hour",
        "user_global": "10000/hour",
    }
else:
    REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = [  # noqa: F405
        "shipping.throttles.GlobalAnonRateThrottle",
        "shipping.throttles.GlobalUserRateThrottle",
    ]
    REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {  # noqa: F405
        "shipping_quote": "60/min",
        "anon_global": "1000/hour",
        "user_global": "5000/hour",
    }

# ==========================================================================
# Logging (Debug mode)
# ==========================================================================

LOGGING = get_logging_config(debug=True)
