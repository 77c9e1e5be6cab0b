"""
API 엔드포인트 Rate Limiting (속도 제한) 클래스

- 배송비 조회: 비로그인 고객도 호출하므로 IP/사용자 기준으로 제한
- 전역 제한: 모든 API 요청에 대한 기본 제한

throttle 카운터는 Django 캐시(운영: Redis)에 저장됩니다.
"""

from rest_framework.throttling import AnonRateThrottle, UserRateThrottle


class ShippingQuoteRateThrottle(UserRateThrottle):
    """
    배송비 조회 엔드포인트 속도 제한

    로그인 사용자는 사용자 ID, 비로그인 사용자는 IP 기준으로 집계합니다.

    적용 대상: ShippingQuoteView
    """

    scope = "shipping_quote"


# ============================================================
# 전역 Throttles (기본 보호)
# ============================================================


class GlobalAnonRateThrottle(AnonRateThrottle):
    """
    익명 사용자 전역 속도 제한

    모든 엔드포인트에 대한 기본 보호
    """

    scope = "anon_global"


class GlobalUserRateThrottle(UserRateThrottle):
    """
    인증 사용자 전역 속도 제한

    모든 엔드포인트에 대한 기본 보호
    """

    scope = "user_global"
