"""배송 지역(County/Area) 관리 서비스

관리자 화면에서 사용하는 County/Area 생성, 수정, 비활성화, 삭제와
배송 지역 통계를 처리합니다.

정책:
1. County 내 Area명 중복 불가 (다른 County에서는 같은 이름 허용)
2. County명 변경 시 하위 Area의 county_name도 함께 갱신
3. County 비활성화 시 하위 Area도 모두 비활성화 (재활성화 시 Area는 그대로 유지)
4. Area가 남아 있는 County는 삭제 불가 (비활성화 사용)

사용 예시:
    county = LocationService.create_county(name="Nairobi", code="nrb", default_shipping_fee=200)
    area = LocationService.create_area(county_id=county.id, name="CBD", shipping_fee=0)
    stats = LocationService.get_stats()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import Avg, Count, ProtectedError, Q
from django.db.models.functions import Coalesce

if TYPE_CHECKING:
    from django.db.models import QuerySet

from ..models import Area, County
from .base import log_service_call
from .exceptions import DuplicateLocationError, LocationNotFoundError, LocationValidationError

logger = logging.getLogger(__name__)


# ===== Data Transfer Objects (DTO) =====


@dataclass
class CountyDeactivationResult:
    """County 비활성화 결과"""

    county: County
    deactivated_area_count: int


@dataclass
class ShippingStats:
    """배송 지역 통계 (관리자 대시보드용)"""

    total_counties: int
    active_counties: int
    total_areas: int
    active_areas: int
    average_shipping_fee: int
    average_delivery_days: int


class LocationService:
    """
    County/Area 관리 비즈니스 로직 서비스

    Note:
        모든 메서드는 stateless하며, 쓰기 작업은 트랜잭션 안에서 처리합니다.
        유니크 제약은 사전 조회 + DB 제약(IntegrityError)으로 이중 검증합니다.
    """

    COUNTY_FIELDS = ("name", "code", "default_shipping_fee", "estimated_delivery_days", "is_active")
    AREA_FIELDS = ("name", "county_id", "shipping_fee", "estimated_delivery_days", "is_active")

    # ===== County =====

    @staticmethod
    @log_service_call
    def create_county(
        *,
        name: str,
        code: str,
        default_shipping_fee: Any = Decimal("0"),
        estimated_delivery_days: Any = County.DEFAULT_DELIVERY_DAYS,
        is_active: bool = True,
    ) -> County:
        """
        County 생성

        Raises:
            LocationValidationError: 필드 제약 위반
            DuplicateLocationError: County명 또는 코드 중복
        """
        county = County(
            name=LocationService._normalize_name(name),
            code=LocationService._normalize_code(code),
            default_shipping_fee=default_shipping_fee,
            estimated_delivery_days=estimated_delivery_days,
            is_active=is_active,
        )
        LocationService._validate(county)

        with transaction.atomic():
            LocationService._check_county_unique(county)
            LocationService._save(county)

        logger.info("[Location] County 생성 | county_id=%d, name=%s, code=%s", county.id, county.name, county.code)
        return county

    @staticmethod
    @log_service_call
    def update_county(county_id: int, **fields: Any) -> County:
        """
        County 부분 수정

        - name 변경 시 하위 Area의 county_name 갱신
        - is_active=False로 변경 시 하위 Area 일괄 비활성화

        Raises:
            LocationNotFoundError: County가 없는 경우
            LocationValidationError: 필드 제약 위반
            DuplicateLocationError: County명 또는 코드 중복
        """
        LocationService._check_fields(fields, LocationService.COUNTY_FIELDS)

        with transaction.atomic():
            county = LocationService._get_county_for_update(county_id)
            previous_name = county.name
            was_active = county.is_active

            if "name" in fields:
                fields["name"] = LocationService._normalize_name(fields["name"])
            if "code" in fields:
                fields["code"] = LocationService._normalize_code(fields["code"])

            for field_name, value in fields.items():
                setattr(county, field_name, value)

            LocationService._validate(county)
            LocationService._check_county_unique(county)
            LocationService._save(county)

            if county.name != previous_name:
                renamed = Area.objects.filter(county=county).update(county_name=county.name)
                logger.info(
                    "[Location] County명 변경 반영 | county_id=%d, %s → %s, areas=%d",
                    county.id,
                    previous_name,
                    county.name,
                    renamed,
                )

            if was_active and not county.is_active:
                LocationService._deactivate_areas_of(county)

        return county

    @staticmethod
    @log_service_call
    def deactivate_county(county_id: int) -> CountyDeactivationResult:
        """
        County 비활성화 (하위 Area 포함)

        Returns:
            CountyDeactivationResult: 비활성화된 County와 함께 비활성화된 Area 수
        """
        with transaction.atomic():
            county = LocationService._get_county_for_update(county_id)
            county.is_active = False
            county.save(update_fields=["is_active", "updated_at"])
            deactivated = LocationService._deactivate_areas_of(county)

        return CountyDeactivationResult(county=county, deactivated_area_count=deactivated)

    @staticmethod
    @log_service_call
    def delete_county(county_id: int) -> None:
        """
        County 삭제

        Raises:
            LocationNotFoundError: County가 없는 경우
            LocationValidationError: 하위 Area가 남아 있는 경우
        """
        with transaction.atomic():
            county = LocationService._get_county_for_update(county_id)
            area_count = county.areas.count()

            if area_count > 0:
                raise LocationValidationError(
                    "하위 지역이 있는 County는 삭제할 수 없습니다. 비활성화를 사용하세요.",
                    code="COUNTY_HAS_AREAS",
                    details={"county_id": county_id, "area_count": area_count},
                )

            try:
                county.delete()
            except ProtectedError as e:
                raise LocationValidationError(
                    "하위 지역이 있는 County는 삭제할 수 없습니다. 비활성화를 사용하세요.",
                    code="COUNTY_HAS_AREAS",
                    details={"county_id": county_id},
                ) from e

        logger.info("[Location] County 삭제 | county_id=%d", county_id)

    @staticmethod
    def list_counties(active_only: bool = False) -> QuerySet[County]:
        """County 목록 (이름순)"""
        queryset = County.objects.annotate(
            area_count=Count("areas", distinct=True),
            active_area_count=Count("areas", filter=Q(areas__is_active=True), distinct=True),
        )
        if active_only:
            queryset = queryset.filter(is_active=True)
        return queryset.order_by("name")

    # ===== Area =====

    @staticmethod
    @log_service_call
    def create_area(
        *,
        county_id: int,
        name: str,
        estimated_delivery_days: Any = Area.DEFAULT_DELIVERY_DAYS,
        shipping_fee: Any = None,
        is_active: bool = True,
    ) -> Area:
        """
        Area 생성

        shipping_fee를 생략하거나 None으로 주면 County 기본 배송비를 따릅니다.

        Raises:
            LocationNotFoundError: County가 없는 경우
            LocationValidationError: 필드 제약 위반, 비활성 County에 활성 Area 생성
            DuplicateLocationError: 같은 County에 같은 이름의 Area가 있는 경우
        """
        with transaction.atomic():
            county = LocationService._get_county(county_id)

            area = Area(
                name=LocationService._normalize_name(name),
                county=county,
                county_name=county.name,
                shipping_fee=shipping_fee,
                estimated_delivery_days=estimated_delivery_days,
                is_active=is_active,
            )
            LocationService._validate(area)
            LocationService._check_county_active_for(area)
            LocationService._check_area_unique(area)
            LocationService._save(area)

        logger.info(
            "[Location] Area 생성 | area_id=%d, county_id=%d, name=%s, fee=%s",
            area.id,
            county.id,
            area.name,
            area.shipping_fee,
        )
        return area

    @staticmethod
    @log_service_call
    def update_area(area_id: int, **fields: Any) -> Area:
        """
        Area 부분 수정

        - county_id 변경 시 county_name 갱신
        - shipping_fee=None 으로 County 기본 배송비 사용으로 되돌릴 수 있음

        Raises:
            LocationNotFoundError: Area 또는 변경할 County가 없는 경우
            LocationValidationError: 필드 제약 위반, 비활성 County에 활성 Area
            DuplicateLocationError: 같은 County에 같은 이름의 Area가 있는 경우
        """
        LocationService._check_fields(fields, LocationService.AREA_FIELDS)

        with transaction.atomic():
            area = LocationService._get_area_for_update(area_id)

            if "county_id" in fields and fields["county_id"] != area.county_id:
                county = LocationService._get_county(fields.pop("county_id"))
                area.county = county
                area.county_name = county.name
            else:
                fields.pop("county_id", None)

            if "name" in fields:
                fields["name"] = LocationService._normalize_name(fields["name"])

            for field_name, value in fields.items():
                setattr(area, field_name, value)

            LocationService._validate(area)
            LocationService._check_county_active_for(area)
            LocationService._check_area_unique(area)
            LocationService._save(area)

        return area

    @staticmethod
    @log_service_call
    def deactivate_area(area_id: int) -> Area:
        """Area 비활성화"""
        with transaction.atomic():
            area = LocationService._get_area_for_update(area_id)
            area.is_active = False
            area.save(update_fields=["is_active", "updated_at"])

        logger.info("[Location] Area 비활성화 | area_id=%d", area_id)
        return area

    @staticmethod
    @log_service_call
    def delete_area(area_id: int) -> None:
        """Area 삭제"""
        with transaction.atomic():
            area = LocationService._get_area_for_update(area_id)
            area.delete()

        logger.info("[Location] Area 삭제 | area_id=%d", area_id)

    @staticmethod
    def list_areas(county_id: int | None = None, active_only: bool = False) -> QuerySet[Area]:
        """Area 목록 (County명, Area명 순)"""
        queryset = Area.objects.select_related("county")
        if county_id is not None:
            queryset = queryset.for_county(county_id)
        if active_only:
            queryset = queryset.active()
        return queryset.order_by("county_name", "name")

    @staticmethod
    def get_active_areas(county_id: int) -> QuerySet[Area]:
        """
        고객용 Area 목록

        Raises:
            LocationNotFoundError: County가 없거나 비활성화된 경우
        """
        if not County.objects.active().filter(pk=county_id).exists():
            raise LocationNotFoundError("County를 찾을 수 없습니다.", details={"county_id": county_id})

        return LocationService.list_areas(county_id=county_id, active_only=True)

    # ===== 통계 =====

    @staticmethod
    @log_service_call
    def get_stats() -> ShippingStats:
        """
        배송 지역 통계

        평균 배송비/소요일은 활성 Area 기준이며, 배송비는 실제 적용 배송비
        (Area 배송비가 없으면 County 기본 배송비)로 계산합니다.
        """
        county_counts = County.objects.aggregate(
            total=Count("id"),
            active=Count("id", filter=Q(is_active=True)),
        )
        area_counts = Area.objects.aggregate(
            total=Count("id"),
            active=Count("id", filter=Q(is_active=True)),
        )
        averages = Area.objects.filter(is_active=True).aggregate(
            avg_fee=Avg(Coalesce("shipping_fee", "county__default_shipping_fee")),
            avg_days=Avg("estimated_delivery_days"),
        )

        return ShippingStats(
            total_counties=county_counts["total"],
            active_counties=county_counts["active"],
            total_areas=area_counts["total"],
            active_areas=area_counts["active"],
            average_shipping_fee=LocationService._round_half_up(averages["avg_fee"]),
            average_delivery_days=LocationService._round_half_up(averages["avg_days"]),
        )

    # ===== 내부 헬퍼 =====

    @staticmethod
    def _normalize_name(name: Any) -> str:
        return str(name).strip() if name is not None else ""

    @staticmethod
    def _normalize_code(code: Any) -> str:
        return str(code).strip().upper() if code is not None else ""

    @staticmethod
    def _round_half_up(value: Any) -> int:
        if value is None:
            return 0
        return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @staticmethod
    def _check_fields(fields: dict, allowed: tuple[str, ...]) -> None:
        unknown = sorted(set(fields) - set(allowed))
        if unknown:
            raise LocationValidationError(
                "수정할 수 없는 필드입니다.",
                details={field_name: ["수정할 수 없는 필드입니다."] for field_name in unknown},
            )

    @staticmethod
    def _validate(instance: County | Area) -> None:
        """필드 제약 검증 (유니크 제약은 별도로 확인)"""
        try:
            instance.full_clean(validate_unique=False, validate_constraints=False)
        except DjangoValidationError as e:
            raise LocationValidationError("입력값이 올바르지 않습니다.", details=e.message_dict) from e

    @staticmethod
    def _check_county_unique(county: County) -> None:
        others = County.objects.exclude(pk=county.pk)

        if others.filter(name=county.name).exists():
            raise DuplicateLocationError(
                "이미 존재하는 County명입니다.",
                details={"name": county.name},
            )
        if others.filter(code=county.code).exists():
            raise DuplicateLocationError(
                "이미 존재하는 County 코드입니다.",
                details={"code": county.code},
            )

    @staticmethod
    def _check_county_active_for(area: Area) -> None:
        """비활성 County에는 활성 Area를 둘 수 없음"""
        if area.is_active and not area.county.is_active:
            raise LocationValidationError(
                "비활성화된 County에는 활성 지역을 둘 수 없습니다.",
                details={"is_active": ["County를 먼저 활성화하세요."], "county_id": area.county_id},
            )

    @staticmethod
    def _check_area_unique(area: Area) -> None:
        duplicated = Area.objects.filter(county_id=area.county_id, name=area.name).exclude(pk=area.pk).exists()
        if duplicated:
            raise DuplicateLocationError(
                "해당 County에 같은 이름의 지역이 이미 있습니다.",
                details={"name": area.name, "county_id": area.county_id},
            )

    @staticmethod
    def _save(instance: County | Area) -> None:
        """동시 요청으로 사전 검사를 통과한 중복은 DB 제약에서 걸러냄"""
        try:
            with transaction.atomic():
                instance.save()
        except IntegrityError as e:
            raise DuplicateLocationError(
                "이미 존재하는 배송 지역입니다.",
                details={"name": instance.name},
            ) from e

    @staticmethod
    def _deactivate_areas_of(county: County) -> int:
        deactivated = Area.objects.filter(county=county, is_active=True).update(is_active=False)
        logger.info("[Location] County 비활성화 | county_id=%d, deactivated_areas=%d", county.id, deactivated)
        return deactivated

    @staticmethod
    def _get_county(county_id: int) -> County:
        county = County.objects.filter(pk=county_id).first()
        if county is None:
            raise LocationNotFoundError("County를 찾을 수 없습니다.", details={"county_id": county_id})
        return county

    @staticmethod
    def _get_county_for_update(county_id: int) -> County:
        county = County.objects.select_for_update().filter(pk=county_id).first()
        if county is None:
            raise LocationNotFoundError("County를 찾을 수 없습니다.", details={"county_id": county_id})
        return county

    @staticmethod
    def _get_area_for_update(area_id: int) -> Area:
        area = Area.objects.select_for_update().filter(pk=area_id).first()
        if area is None:
            raise LocationNotFoundError("지역을 찾을 수 없습니다.", details={"area_id": area_id})
        return area
