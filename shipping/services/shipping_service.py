"""배송비/배송 소요일 계산 서비스

배송지(County, 선택적으로 Area)에 대해 적용할 배송비와 예상 배송 소요일을 계산합니다.

우선순위 규칙:
- 배송비: Area 배송비가 설정되어 있으면(0 포함) Area 값, 아니면 County 기본 배송비
- 배송 소요일: Area를 선택하면 항상 Area 값 (County 값으로 대체하지 않음)

사용 예시:
    # 고객 주문 화면 (비활성 지역은 NotFound)
    result = ShippingService.resolve_for_customer(county_id=1, area_id=3)

    # 관리자 화면 (비활성 지역도 계산)
    result = ShippingService.resolve_for_admin(county_id=1)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TypedDict

from ..models import Area, County
from .base import log_service_call
from .exceptions import InvalidLocationReferenceError, LocationNotFoundError

logger = logging.getLogger(__name__)


class ShippingResolution(TypedDict):
    """배송비 계산 결과"""

    fee: Decimal
    estimated_days: int
    is_free_shipping: bool
    county_id: int
    county_name: str
    area_id: int | None
    area_name: str | None


class ShippingService:
    """배송지 기준 배송비/배송 소요일을 계산하는 서비스"""

    @staticmethod
    def compute(county: County, area: Area | None = None) -> ShippingResolution:
        """
        이미 조회한 County/Area로 배송비 계산 (DB 접근 없음)

        Args:
            county: 배송 County
            area: 배송 Area (선택)

        Returns:
            ShippingResolution: 배송비, 배송 소요일

        Raises:
            InvalidLocationReferenceError: Area가 다른 County 소속인 경우
        """
        if area is None:
            return {
                "fee": county.default_shipping_fee,
                "estimated_days": county.estimated_delivery_days,
                "is_free_shipping": county.default_shipping_fee == 0,
                "county_id": county.pk,
                "county_name": county.name,
                "area_id": None,
                "area_name": None,
            }

        if area.county_id != county.pk:
            raise InvalidLocationReferenceError(
                "선택한 지역이 해당 County에 속하지 않습니다.",
                details={"county_id": county.pk, "area_id": area.pk},
            )

        # None만 미설정으로 취급 (0은 무료 배송)
        fee = area.shipping_fee if area.shipping_fee is not None else county.default_shipping_fee

        return {
            "fee": fee,
            "estimated_days": area.estimated_delivery_days,
            "is_free_shipping": fee == 0,
            "county_id": county.pk,
            "county_name": county.name,
            "area_id": area.pk,
            "area_name": area.name,
        }

    @staticmethod
    @log_service_call
    def resolve(county_id: int, area_id: int | None = None, *, active_only: bool = True) -> ShippingResolution:
        """
        배송지 ID로 배송비 계산

        Args:
            county_id: County ID
            area_id: Area ID (선택)
            active_only: True면 비활성 County/Area를 찾을 수 없는 것으로 처리

        Returns:
            ShippingResolution: 배송비, 배송 소요일

        Raises:
            LocationNotFoundError: County/Area가 없거나 비활성화된 경우
            InvalidLocationReferenceError: Area가 다른 County 소속인 경우
        """
        county = ShippingService._get_county(county_id, active_only=active_only)

        area = None
        if area_id is not None:
            area = ShippingService._get_area(county, area_id, active_only=active_only)

        result = ShippingService.compute(county, area)

        logger.info(
            "[Shipping] 배송비 계산 | county_id=%s, area_id=%s, fee=%s, days=%d",
            county_id,
            area_id,
            result["fee"],
            result["estimated_days"],
        )
        return result

    @staticmethod
    def resolve_for_customer(county_id: int, area_id: int | None = None) -> ShippingResolution:
        """고객용 배송비 계산 (활성 지역만)"""
        return ShippingService.resolve(county_id, area_id, active_only=True)

    @staticmethod
    def resolve_for_admin(county_id: int, area_id: int | None = None) -> ShippingResolution:
        """관리자용 배송비 계산 (비활성 지역 포함)"""
        return ShippingService.resolve(county_id, area_id, active_only=False)

    @staticmethod
    def validate_location(county_id: int, area_id: int | None = None) -> bool:
        """
        고객이 선택한 배송지가 유효한지 확인

        활성 County이고, Area를 지정했다면 해당 County 소속의 활성 Area여야 합니다.
        """
        county_exists = County.objects.active().filter(pk=county_id).exists()
        if not county_exists:
            return False

        if area_id is None:
            return True

        return Area.objects.filter(pk=area_id, county_id=county_id, is_active=True).exists()

    # ===== 내부 헬퍼 =====

    @staticmethod
    def _get_county(county_id: int, *, active_only: bool) -> County:
        county = County.objects.filter(pk=county_id).first()

        if county is None:
            raise LocationNotFoundError("County를 찾을 수 없습니다.", details={"county_id": county_id})

        if active_only and not county.is_active:
            raise LocationNotFoundError("배송이 중단된 County입니다.", details={"county_id": county_id})

        return county

    @staticmethod
    def _get_area(county: County, area_id: int, *, active_only: bool) -> Area:
        area = Area.objects.filter(pk=area_id).first()

        if area is None:
            raise LocationNotFoundError("지역을 찾을 수 없습니다.", details={"area_id": area_id})

        # 소속 County 불일치는 비활성 여부보다 먼저 판단
        if area.county_id != county.pk:
            raise InvalidLocationReferenceError(
                "선택한 지역이 해당 County에 속하지 않습니다.",
                details={"county_id": county.pk, "area_id": area_id},
            )

        if active_only and not area.is_active:
            raise LocationNotFoundError("배송이 중단된 지역입니다.", details={"area_id": area_id})

        return area
