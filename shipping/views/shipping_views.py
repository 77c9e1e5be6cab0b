from __future__ import annotations

import logging
from dataclasses import asdict

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from shipping.permissions import IsShippingManager
from shipping.serializers import (
    ShippingErrorResponseSerializer,
    ShippingQuoteRequestSerializer,
    ShippingQuoteSerializer,
    ShippingStatsSerializer,
)
from shipping.services.exceptions import ShippingServiceError
from shipping.services.location_service import LocationService
from shipping.services.shipping_service import ShippingService
from shipping.throttles import ShippingQuoteRateThrottle

from .mixins import ServiceErrorResponseMixin

logger = logging.getLogger(__name__)

QUOTE_PARAMETERS = [
    OpenApiParameter(name="county_id", description="County ID", required=True, type=int),
    OpenApiParameter(name="area_id", description="Area ID (선택)", required=False, type=int),
]

QUOTE_RESPONSES = {
    200: ShippingQuoteSerializer,
    400: ShippingErrorResponseSerializer,
    404: ShippingErrorResponseSerializer,
}


class ShippingQuoteView(ServiceErrorResponseMixin, APIView):
    """
    배송비 조회 (고객용)

    - GET  /api/shipping/quote/?county_id=1&area_id=3
    - POST /api/shipping/quote/  {"county_id": 1, "area_id": 3}

    비활성 County/Area는 찾을 수 없는 것으로 처리합니다.
    """

    permission_classes = [permissions.AllowAny]
    throttle_classes = [ShippingQuoteRateThrottle]

    @extend_schema(
        parameters=QUOTE_PARAMETERS,
        responses=QUOTE_RESPONSES,
        summary="배송지의 배송비와 예상 배송 소요일을 조회한다.",
        description="""처리 내용:
- Area를 지정하지 않으면 County 기본 배송비/소요일을 반환한다.
- Area 배송비가 설정되어 있으면(0 포함) Area 배송비를, 아니면 County 기본 배송비를 반환한다.
- Area를 지정하면 배송 소요일은 항상 Area 값을 반환한다.
- 다른 County의 Area를 지정하면 400, 없거나 비활성화된 지역이면 404를 반환한다.""",
        tags=["Shipping"],
    )
    def get(self, request: Request) -> Response:
        return self._quote(request.query_params)

    @extend_schema(
        request=ShippingQuoteRequestSerializer,
        responses=QUOTE_RESPONSES,
        summary="배송지의 배송비와 예상 배송 소요일을 조회한다. (body 입력)",
        tags=["Shipping"],
    )
    def post(self, request: Request) -> Response:
        return self._quote(request.data)

    def _quote(self, data) -> Response:
        request_serializer = ShippingQuoteRequestSerializer(data=data)
        request_serializer.is_valid(raise_exception=True)

        county_id = request_serializer.validated_data["county_id"]
        area_id = request_serializer.validated_data.get("area_id")

        try:
            result = ShippingService.resolve_for_customer(county_id, area_id)
        except ShippingServiceError as e:
            return self.service_error_response(e)

        return Response(ShippingQuoteSerializer(result).data, status=status.HTTP_200_OK)


class AdminShippingResolveView(ServiceErrorResponseMixin, APIView):
    """
    배송비 계산 (관리자용)

    비활성 County/Area도 계산합니다. (배송비 정책 점검용)
    """

    permission_classes = [IsShippingManager]

    @extend_schema(
        parameters=QUOTE_PARAMETERS,
        responses=QUOTE_RESPONSES,
        summary="관리자용 배송비를 계산한다.",
        description="""처리 내용:
- 비활성화된 County/Area도 포함하여 배송비를 계산한다.
- 우선순위 규칙은 고객용 조회와 동일하다.""",
        tags=["Shipping Admin"],
    )
    def get(self, request: Request) -> Response:
        request_serializer = ShippingQuoteRequestSerializer(data=request.query_params)
        request_serializer.is_valid(raise_exception=True)

        try:
            result = ShippingService.resolve_for_admin(
                request_serializer.validated_data["county_id"],
                request_serializer.validated_data.get("area_id"),
            )
        except ShippingServiceError as e:
            return self.service_error_response(e)

        return Response(ShippingQuoteSerializer(result).data)


class ShippingStatsView(APIView):
    """배송 지역 통계 (관리자 대시보드)"""

    permission_classes = [IsShippingManager]

    @extend_schema(
        responses={200: ShippingStatsSerializer},
        summary="배송 지역 통계를 조회한다.",
        description="""처리 내용:
- 전체/활성 County 수, 전체/활성 Area 수를 반환한다.
- 활성 Area 기준 평균 배송비(실제 적용 배송비)와 평균 배송 소요일을 반올림하여 반환한다.""",
        tags=["Shipping Admin"],
    )
    def get(self, request: Request) -> Response:
        stats = LocationService.get_stats()
        return Response(ShippingStatsSerializer(asdict(stats)).data)
