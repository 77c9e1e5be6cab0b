from __future__ import annotations

from rest_framework import serializers

from ..models import Area, County


class PublicAreaSerializer(serializers.ModelSerializer):
    """
    고객용 Area serializer

    shipping_fee가 null이면 County 기본 배송비가 적용됩니다.
    """

    class Meta:
        model = Area
        fields = [
            "id",
            "name",
            "shipping_fee",
            "estimated_delivery_days",
        ]
        read_only_fields = fields


class AreaSerializer(serializers.ModelSerializer):
    """관리자용 Area serializer"""

    county_id = serializers.IntegerField(read_only=True)
    county_code = serializers.CharField(source="county.code", read_only=True)
    effective_shipping_fee = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        read_only=True,
        help_text="실제 적용 배송비 (미설정 시 County 기본 배송비)",
    )
    uses_county_default = serializers.SerializerMethodField(help_text="County 기본 배송비 사용 여부")

    class Meta:
        model = Area
        fields = [
            "id",
            "name",
            "county_id",
            "county_name",
            "county_code",
            "shipping_fee",
            "effective_shipping_fee",
            "uses_county_default",
            "estimated_delivery_days",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_uses_county_default(self, obj: Area) -> bool:
        return not obj.has_fee_override


class AreaWriteSerializer(serializers.Serializer):
    """
    Area 생성/수정 요청 serializer

    shipping_fee:
    - 생략 또는 null: County 기본 배송비 사용
    - 0: 무료 배송
    """

    name = serializers.CharField(max_length=100)
    county_id = serializers.IntegerField(min_value=1)
    shipping_fee = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
    )
    estimated_delivery_days = serializers.IntegerField(
        min_value=County.MIN_DELIVERY_DAYS,
        max_value=County.MAX_DELIVERY_DAYS,
        required=False,
    )
    is_active = serializers.BooleanField(required=False)
