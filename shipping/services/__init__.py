"""
배송 지역 비즈니스 로직 서비스 패키지

서비스 레이어 패턴:
- 뷰와 모델 사이의 비즈니스 로직 계층
- County/Area 관리 규칙과 배송비 결정 규칙을 한 곳에서 처리
"""

from .base import ServiceError, log_service_call
from .exceptions import (
    DuplicateLocationError,
    InvalidLocationReferenceError,
    LocationNotFoundError,
    LocationValidationError,
    ShippingServiceError,
)
from .location_service import CountyDeactivationResult, LocationService, ShippingStats
from .shipping_service import ShippingResolution, ShippingService

__all__ = [
    # Base
    "ServiceError",
    "log_service_call",
    # Errors
    "ShippingServiceError",
    "LocationNotFoundError",
    "InvalidLocationReferenceError",
    "DuplicateLocationError",
    "LocationValidationError",
    # Services
    "LocationService",
    "CountyDeactivationResult",
    "ShippingStats",
    "ShippingService",
    "ShippingResolution",
]
