"""배송 도메인 예외

뷰에서는 code 기준으로 HTTP 상태 코드를 매핑합니다.
- NOT_FOUND → 404
- INVALID_REFERENCE → 400
- VALIDATION_ERROR → 400
- DUPLICATE_KEY → 409
"""

from __future__ import annotations

from .base import ServiceError


class ShippingServiceError(ServiceError):
    """배송 서비스 관련 에러"""

    def __init__(self, message: str, code: str = "SHIPPING_ERROR", details: dict | None = None):
        super().__init__(message, code, details)


class LocationNotFoundError(ShippingServiceError):
    """County/Area가 없거나 비활성화된 경우"""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, "NOT_FOUND", details)


class InvalidLocationReferenceError(ShippingServiceError):
    """Area가 요청한 County에 속하지 않는 경우"""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, "INVALID_REFERENCE", details)


class DuplicateLocationError(ShippingServiceError):
    """유니크 제약 위반 (County명/코드, County 내 Area명)"""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, "DUPLICATE_KEY", details)


class LocationValidationError(ShippingServiceError):
    """필드 제약 위반 (음수 배송비, 범위를 벗어난 배송 소요일 등)"""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR", details: dict | None = None):
        super().__init__(message, code, details)
