from __future__ import annotations

from rest_framework import serializers

from ..models import County


class PublicCountySerializer(serializers.ModelSerializer):
    """
    고객용 County serializer

    배송지 선택 화면에 필요한 정보만 제공합니다.
    """

    class Meta:
        model = County
        fields = [
            "id",
            "name",
            "code",
            "default_shipping_fee",
            "estimated_delivery_days",
        ]
        read_only_fields = fields


class CountySerializer(serializers.ModelSerializer):
    """
    관리자용 County serializer

    하위 Area 수는 LocationService.list_counties()에서 annotate로 미리 계산합니다.
    """

    area_count = serializers.SerializerMethodField(help_text="하위 Area 수")
    active_area_count = serializers.SerializerMethodField(help_text="활성 Area 수")

    class Meta:
        model = County
        fields = [
            "id",
            "name",
            "code",
            "default_shipping_fee",
            "estimated_delivery_days",
            "is_active",
            "area_count",
            "active_area_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_area_count(self, obj: County) -> int:
        # annotate로 이미 계산된 경우
        if hasattr(obj, "area_count"):
            return obj.area_count
        return obj.areas.count()

    def get_active_area_count(self, obj: County) -> int:
        if hasattr(obj, "active_area_count"):
            return obj.active_area_count
        return obj.areas.filter(is_active=True).count()


class CountyWriteSerializer(serializers.Serializer):
    """
    County 생성/수정 요청 serializer

    형식 검증만 담당하며, 중복 검사 등 비즈니스 규칙은 LocationService에서 처리합니다.
    """

    name = serializers.CharField(max_length=100)
    code = serializers.CharField(max_length=County.MAX_CODE_LENGTH, help_text="대문자로 변환되어 저장됩니다.")
    default_shipping_fee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    estimated_delivery_days = serializers.IntegerField(
        min_value=County.MIN_DELIVERY_DAYS,
        max_value=County.MAX_DELIVERY_DAYS,
        required=False,
    )
    is_active = serializers.BooleanField(required=False)

    def validate_code(self, value: str) -> str:
        return value.upper()
