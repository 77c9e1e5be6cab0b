"""
LocationService 테스트
"""

from decimal import Decimal

from django.db.models import ProtectedError

import pytest

from shipping.models import Area, County
from shipping.services import (
    DuplicateLocationError,
    LocationNotFoundError,
    LocationService,
    LocationValidationError,
)
from shipping.tests.factories import AreaFactory, CountyFactory


@pytest.mark.django_db
class TestLocationServiceCounty:
    """County 생성/수정 테스트"""

    def test_create_county_normalizes_code(self):
        """
        [정상 케이스] 코드는 공백 제거 후 대문자로 저장
        """
        # Act
        county = LocationService.create_county(name="  Kiambu ", code=" kbu ", default_shipping_fee=Decimal("250"))

        # Assert
        county.refresh_from_db()
        assert county.name == "Kiambu"
        assert county.code == "KBU"
        assert county.estimated_delivery_days == County.DEFAULT_DELIVERY_DAYS
        assert county.is_active is True

    def test_create_county_duplicate_name(self, nairobi):
        """
        [예외 케이스] County명 중복
        """
        with pytest.raises(DuplicateLocationError) as exc_info:
            LocationService.create_county(name="Nairobi", code="NRX")

        assert exc_info.value.code == "DUPLICATE_KEY"
        assert exc_info.value.details == {"name": "Nairobi"}

    def test_create_county_duplicate_code_case_insensitive(self, nairobi):
        """
        [예외 케이스] 소문자로 입력해도 대문자 변환 후 중복 판단
        """
        with pytest.raises(DuplicateLocationError) as exc_info:
            LocationService.create_county(name="Nairobi West", code="nrb")

        assert exc_info.value.details == {"code": "NRB"}

    def test_create_county_code_too_long(self):
        """
        [예외 케이스] 코드는 최대 5자
        """
        with pytest.raises(LocationValidationError) as exc_info:
            LocationService.create_county(name="Uasin Gishu", code="UASING")

        assert "code" in exc_info.value.details

    def test_create_county_negative_fee(self):
        """
        [예외 케이스] 음수 배송비
        """
        with pytest.raises(LocationValidationError) as exc_info:
            LocationService.create_county(name="Kisumu", code="KSM", default_shipping_fee=Decimal("-1"))

        assert "default_shipping_fee" in exc_info.value.details

    @pytest.mark.parametrize("days", [0, 31])
    def test_create_county_days_out_of_range(self, days):
        """
        [경계값] 배송 소요일은 1~30일
        """
        with pytest.raises(LocationValidationError):
            LocationService.create_county(name="Kisumu", code="KSM", estimated_delivery_days=days)

    def test_update_county_rename_propagates_to_areas(self, nairobi, westlands, cbd):
        """
        [정상 케이스] County명 변경 시 하위 Area의 county_name도 갱신
        """
        # Act
        LocationService.update_county(nairobi.id, name="Nairobi City")

        # Assert
        assert set(Area.objects.values_list("county_name", flat=True)) == {"Nairobi City"}

    def test_update_county_to_inactive_cascades(self, nairobi, westlands, cbd):
        """
        [정상 케이스] is_active=False로 수정하면 하위 Area도 비활성화
        """
        # Act
        LocationService.update_county(nairobi.id, is_active=False)

        # Assert
        assert not Area.objects.filter(county=nairobi, is_active=True).exists()

    def test_update_county_reactivate_keeps_areas_inactive(self, nairobi, westlands):
        """
        [정책] County를 다시 활성화해도 Area는 비활성 상태 유지
        """
        # Arrange
        LocationService.deactivate_county(nairobi.id)

        # Act
        county = LocationService.update_county(nairobi.id, is_active=True)

        # Assert
        westlands.refresh_from_db()
        assert county.is_active is True
        assert westlands.is_active is False

    def test_update_county_duplicate_code(self, nairobi, mombasa):
        """
        [예외 케이스] 다른 County의 코드로 변경
        """
        with pytest.raises(DuplicateLocationError):
            LocationService.update_county(nairobi.id, code="msa")

    def test_update_county_unknown_field(self, nairobi):
        """
        [예외 케이스] 수정할 수 없는 필드
        """
        with pytest.raises(LocationValidationError) as exc_info:
            LocationService.update_county(nairobi.id, created_at=None)

        assert "created_at" in exc_info.value.details

    def test_update_missing_county(self):
        with pytest.raises(LocationNotFoundError):
            LocationService.update_county(999999, name="Nowhere")


@pytest.mark.django_db
class TestLocationServiceCountyLifecycle:
    """County 비활성화/삭제 테스트"""

    def test_deactivate_county_returns_area_count(self, nairobi, westlands, cbd):
        """
        [정상 케이스] 비활성화된 Area 수 반환
        """
        # Arrange
        AreaFactory.inactive(county=nairobi)

        # Act
        result = LocationService.deactivate_county(nairobi.id)

        # Assert
        nairobi.refresh_from_db()
        assert nairobi.is_active is False
        assert result.deactivated_area_count == 2
        assert result.county.id == nairobi.id

    def test_deactivate_county_leaves_other_counties(self, nairobi, westlands, nyali):
        """
        [경계값] 다른 County의 Area는 영향 없음
        """
        # Act
        LocationService.deactivate_county(nairobi.id)

        # Assert
        nyali.refresh_from_db()
        assert nyali.is_active is True

    def test_delete_county_with_areas_rejected(self, nairobi, westlands):
        """
        [예외 케이스] 하위 Area가 있는 County는 삭제 불가
        """
        with pytest.raises(LocationValidationError) as exc_info:
            LocationService.delete_county(nairobi.id)

        assert exc_info.value.code == "COUNTY_HAS_AREAS"
        assert exc_info.value.details["area_count"] == 1
        assert County.objects.filter(id=nairobi.id).exists()

    def test_delete_empty_county(self):
        """
        [정상 케이스] 하위 Area가 없으면 삭제 가능
        """
        # Arrange
        county = CountyFactory()

        # Act
        LocationService.delete_county(county.id)

        # Assert
        assert not County.objects.filter(id=county.id).exists()

    def test_delete_missing_county(self):
        with pytest.raises(LocationNotFoundError):
            LocationService.delete_county(999999)


@pytest.mark.django_db
class TestLocationServiceArea:
    """Area 생성/수정/삭제 테스트"""

    def test_create_area_copies_county_name(self, nairobi):
        """
        [정상 케이스] county_name은 County에서 복사
        """
        # Act
        area = LocationService.create_area(county_id=nairobi.id, name=" Karen ")

        # Assert
        assert area.name == "Karen"
        assert area.county_name == "Nairobi"
        assert area.shipping_fee is None
        assert area.estimated_delivery_days == Area.DEFAULT_DELIVERY_DAYS

    def test_create_area_duplicate_in_same_county(self, nairobi, westlands):
        """
        [예외 케이스] 같은 County에 같은 이름의 Area
        """
        with pytest.raises(DuplicateLocationError) as exc_info:
            LocationService.create_area(county_id=nairobi.id, name="Westlands")

        assert exc_info.value.details == {"name": "Westlands", "county_id": nairobi.id}

    def test_create_area_same_name_in_other_county(self, westlands, mombasa):
        """
        [정상 케이스] 다른 County에는 같은 이름 허용
        """
        # Act
        area = LocationService.create_area(county_id=mombasa.id, name="Westlands")

        # Assert
        assert area.county_id == mombasa.id
        assert Area.objects.filter(name="Westlands").count() == 2

    def test_create_area_missing_county(self):
        with pytest.raises(LocationNotFoundError):
            LocationService.create_area(county_id=999999, name="Ghost")

    def test_create_area_negative_fee(self, nairobi):
        with pytest.raises(LocationValidationError) as exc_info:
            LocationService.create_area(county_id=nairobi.id, name="Karen", shipping_fee=Decimal("-50"))

        assert "shipping_fee" in exc_info.value.details

    def test_update_area_move_to_other_county(self, westlands, mombasa):
        """
        [정상 케이스] 다른 County로 이동하면 county_name 갱신
        """
        # Act
        area = LocationService.update_area(westlands.id, county_id=mombasa.id)

        # Assert
        area.refresh_from_db()
        assert area.county_id == mombasa.id
        assert area.county_name == "Mombasa"

    def test_update_area_clear_fee_override(self, mombasa, nyali):
        """
        [정상 케이스] shipping_fee=None으로 County 기본 배송비 사용으로 되돌림
        """
        # Act
        area = LocationService.update_area(nyali.id, shipping_fee=None)

        # Assert
        area.refresh_from_db()
        assert area.shipping_fee is None
        assert area.effective_shipping_fee == Decimal("300")

    def test_update_area_rename_to_existing(self, westlands, cbd):
        with pytest.raises(DuplicateLocationError):
            LocationService.update_area(cbd.id, name="Westlands")

    def test_deactivate_area(self, westlands):
        area = LocationService.deactivate_area(westlands.id)

        assert area.is_active is False

    def test_delete_area(self, westlands):
        LocationService.delete_area(westlands.id)

        assert not Area.objects.filter(id=westlands.id).exists()

    def test_delete_missing_area(self):
        with pytest.raises(LocationNotFoundError):
            LocationService.delete_area(999999)


@pytest.mark.django_db
class TestLocationServiceListing:
    """목록 조회 테스트"""

    def test_list_counties_annotates_area_counts(self, nairobi, westlands, cbd):
        # Arrange
        AreaFactory.inactive(county=nairobi)

        # Act
        county = LocationService.list_counties().get(id=nairobi.id)

        # Assert
        assert county.area_count == 3
        assert county.active_area_count == 2

    def test_list_counties_active_only(self, nairobi):
        # Arrange
        CountyFactory.inactive(name="Turkana", code="TRK")

        # Act
        names = list(LocationService.list_counties(active_only=True).values_list("name", flat=True))

        # Assert
        assert names == ["Nairobi"]

    def test_get_active_areas_sorted_and_filtered(self, nairobi, westlands, cbd):
        # Arrange
        AreaFactory.inactive(county=nairobi, name="Karen")

        # Act
        names = [area.name for area in LocationService.get_active_areas(nairobi.id)]

        # Assert
        assert names == ["CBD", "Westlands"]

    def test_get_active_areas_of_inactive_county(self):
        county = CountyFactory.inactive()

        with pytest.raises(LocationNotFoundError):
            LocationService.get_active_areas(county.id)

    def test_list_areas_by_county(self, westlands, nyali):
        areas = LocationService.list_areas(county_id=nyali.county_id)

        assert list(areas) == [nyali]


@pytest.mark.django_db
class TestLocationServiceStats:
    """배송 지역 통계 테스트"""

    def test_stats_empty(self):
        """
        [경계값] 지역이 없으면 평균은 0
        """
        stats = LocationService.get_stats()

        assert stats.total_counties == 0
        assert stats.active_areas == 0
        assert stats.average_shipping_fee == 0
        assert stats.average_delivery_days == 0

    def test_stats_uses_effective_fee_of_active_areas(self, nairobi, westlands, cbd, nyali):
        """
        [정상 케이스] 활성 Area의 실제 적용 배송비로 평균

        Westlands 200(County 기본) + CBD 0 + Nyali 280 = 480 / 3 = 160
        """
        # Arrange
        AreaFactory.inactive(county=nairobi, shipping_fee=Decimal("5000"), estimated_delivery_days=30)
        CountyFactory.inactive()

        # Act
        stats = LocationService.get_stats()

        # Assert
        assert stats.total_counties == 3
        assert stats.active_counties == 2
        assert stats.total_areas == 4
        assert stats.active_areas == 3
        assert stats.average_shipping_fee == 160
        # (1 + 1 + 2) / 3 = 1.33
        assert stats.average_delivery_days == 1

    def test_stats_rounds_half_up(self):
        """
        [경계값] 평균 x.5는 올림
        """
        # Arrange
        county = CountyFactory(default_shipping_fee=Decimal("0"))
        AreaFactory(county=county, shipping_fee=Decimal("100"), estimated_delivery_days=1)
        AreaFactory(county=county, shipping_fee=Decimal("101"), estimated_delivery_days=2)

        # Act
        stats = LocationService.get_stats()

        # Assert
        assert stats.average_shipping_fee == 101
        assert stats.average_delivery_days == 2


@pytest.mark.django_db
class TestLocationServiceConcurrentDuplicates:
    """사전 중복 검사를 통과한 동시 요청은 DB 제약에서 걸러짐"""

    def test_area_unique_constraint_raises_duplicate(self, mocker, nairobi, westlands):
        """
        [동시성] 사전 검사를 통과해도 (name, county) 제약 위반은 DUPLICATE_KEY
        """
        # Arrange: 다른 요청이 먼저 저장한 상황 (사전 검사 통과)
        mocker.patch.object(LocationService, "_check_area_unique")

        # Act & Assert
        with pytest.raises(DuplicateLocationError) as exc_info:
            LocationService.create_area(county_id=nairobi.id, name="Westlands")

        assert exc_info.value.code == "DUPLICATE_KEY"
        assert Area.objects.filter(county=nairobi, name="Westlands").count() == 1

    def test_county_unique_constraint_raises_duplicate(self, mocker, nairobi):
        """
        [동시성] 사전 검사를 통과해도 County 코드 제약 위반은 DUPLICATE_KEY
        """
        # Arrange
        mocker.patch.object(LocationService, "_check_county_unique")

        # Act & Assert
        with pytest.raises(DuplicateLocationError) as exc_info:
            LocationService.create_county(name="Nairobi North", code="NRB")

        assert exc_info.value.code == "DUPLICATE_KEY"
        assert County.objects.filter(code="NRB").count() == 1

    def test_delete_county_protected_by_foreign_key(self, mocker):
        """
        [동시성] 개수 확인 후 Area가 추가되어 FK PROTECT에 걸려도 COUNTY_HAS_AREAS
        """
        # Arrange
        county = CountyFactory()
        mocker.patch.object(County, "delete", side_effect=ProtectedError("protected", set()))

        # Act & Assert
        with pytest.raises(LocationValidationError) as exc_info:
            LocationService.delete_county(county.id)

        assert exc_info.value.code == "COUNTY_HAS_AREAS"
        assert exc_info.value.details == {"county_id": county.id}


@pytest.mark.django_db
class TestLocationServiceInactiveCounty:
    """비활성 County의 Area 관리 테스트"""

    def test_create_active_area_in_inactive_county_rejected(self, nairobi):
        """
        [예외 케이스] 비활성 County에는 활성 Area를 만들 수 없음
        """
        # Arrange
        LocationService.deactivate_county(nairobi.id)

        # Act & Assert
        with pytest.raises(LocationValidationError) as exc_info:
            LocationService.create_area(county_id=nairobi.id, name="Karen")

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert "is_active" in exc_info.value.details
        assert not Area.objects.filter(name="Karen").exists()

    def test_create_inactive_area_in_inactive_county(self, nairobi):
        """
        [정상 케이스] 비활성 Area는 미리 등록 가능
        """
        # Arrange
        LocationService.deactivate_county(nairobi.id)

        # Act
        area = LocationService.create_area(county_id=nairobi.id, name="Karen", is_active=False)

        # Assert
        assert area.is_active is False

    def test_activate_area_in_inactive_county_rejected(self, nairobi, westlands):
        """
        [예외 케이스] 비활성 County의 Area는 County 재활성화 전까지 활성화 불가
        """
        # Arrange
        LocationService.deactivate_county(nairobi.id)

        # Act & Assert
        with pytest.raises(LocationValidationError):
            LocationService.update_area(westlands.id, is_active=True)

        westlands.refresh_from_db()
        assert westlands.is_active is False

    def test_move_active_area_to_inactive_county_rejected(self, nyali):
        """
        [예외 케이스] 활성 Area를 비활성 County로 옮길 수 없음
        """
        # Arrange
        county = CountyFactory.inactive()

        # Act & Assert
        with pytest.raises(LocationValidationError):
            LocationService.update_area(nyali.id, county_id=county.id)

    def test_activate_area_after_county_reactivated(self, nairobi, westlands):
        # Arrange
        LocationService.deactivate_county(nairobi.id)
        LocationService.update_county(nairobi.id, is_active=True)

        # Act
        area = LocationService.update_area(westlands.id, is_active=True)

        # Assert
        assert area.is_active is True
