from __future__ import annotations

from django.conf import settings

from rest_framework import serializers


class ShippingQuoteRequestSerializer(serializers.Serializer):
    """배송비 조회 요청 (query string 또는 body)"""

    county_id = serializers.IntegerField(help_text="County ID")
    area_id = serializers.IntegerField(
        required=False,
        allow_null=True,
        help_text="Area ID (생략 시 County 기본 배송비)",
    )


class ShippingQuoteSerializer(serializers.Serializer):
    """
    배송비 조회 응답

    스토어프론트 클라이언트 규격에 맞춰 camelCase 키를 사용합니다.
    """

    fee = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    estimatedDays = serializers.IntegerField(source="estimated_days")
    isFreeShipping = serializers.BooleanField(source="is_free_shipping")
    countyId = serializers.IntegerField(source="county_id")
    countyName = serializers.CharField(source="county_name")
    areaId = serializers.IntegerField(source="area_id", allow_null=True)
    areaName = serializers.CharField(source="area_name", allow_null=True)
    currency = serializers.SerializerMethodField()

    def get_currency(self, obj) -> str:
        return settings.SHIPPING_CURRENCY


class ShippingStatsSerializer(serializers.Serializer):
    """배송 지역 통계 응답"""

    total_counties = serializers.IntegerField()
    active_counties = serializers.IntegerField()
    total_areas = serializers.IntegerField()
    active_areas = serializers.IntegerField()
    average_shipping_fee = serializers.IntegerField(help_text="활성 Area 평균 배송비 (반올림)")
    average_delivery_days = serializers.IntegerField(help_text="활성 Area 평균 배송 소요일 (반올림)")


class CountyDeactivationSerializer(serializers.Serializer):
    """County 비활성화 응답"""

    message = serializers.CharField()
    county_id = serializers.IntegerField()
    deactivated_area_count = serializers.IntegerField()


class ShippingErrorResponseSerializer(serializers.Serializer):
    """서비스 에러 응답"""

    error = serializers.CharField()
    code = serializers.CharField()
    details = serializers.DictField(required=False)
