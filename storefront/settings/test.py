"""
Django Test Settings
테스트 환경 전용 설정 (pytest, Django test)
"""

import os

from storefront.settings.base import *  # noqa: F401, F403
from storefront.settings.components.logging import get_logging_config

# ==========================================================================
# Test Mode Flag
# ==========================================================================

TESTING = True
DEBUG = True

# ==========================================================================
# Database
# ==========================================================================

# DATABASE_HOST가 지정되면 PostgreSQL, 아니면 SQLite로 빠르게 실행
if os.getenv("DATABASE_HOST"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("DATABASE_NAME", "storefront_dev"),
            "USER": os.getenv("DATABASE_USER", "postgres"),
            "PASSWORD": os.getenv("DATABASE_PASSWORD", "postgres"),
            "HOST": os.getenv("DATABASE_HOST"),
            "PORT": os.getenv("DATABASE_PORT", "5432"),
            # 테스트에서는 연결 즉시 닫기
            "CONN_MAX_AGE": 0,
            "CONN_HEALTH_CHECKS": False,
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "test_db.sqlite3",  # noqa: F405
        }
    }

# ==========================================================================
# Cache (LocMem - throttle 카운터만 사용)
# ==========================================================================

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# ==========================================================================
# Rate Limiting - 테스트에서는 비활성화
# ==========================================================================

REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {  # noqa: F405
    "shipping_quote": "10000/min",
    "anon_global": "100000/hour",
    "user_global": "100000/hour",
}

# ==========================================================================
# Logging (Quiet mode for tests)
# ==========================================================================

LOGGING = get_logging_config(debug=False)

# ==========================================================================
# Password Hashing (빠른 해싱 - 테스트 속도 향상)
# ==========================================================================

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]
