from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import generics, permissions
from rest_framework.request import Request
from rest_framework.response import Response

from shipping.serializers import PublicAreaSerializer, PublicCountySerializer, ShippingErrorResponseSerializer
from shipping.services.exceptions import ShippingServiceError
from shipping.services.location_service import LocationService

from .mixins import ServiceErrorResponseMixin


@extend_schema(
    summary="배송 가능한 County 목록을 조회한다.",
    description="""처리 내용:
- 활성화된 County만 이름순으로 반환한다.
- 배송지 선택 화면에서 사용한다.""",
    tags=["Locations"],
)
class PublicCountyListView(generics.ListAPIView):
    """활성 County 목록 (고객용)"""

    serializer_class = PublicCountySerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None

    def get_queryset(self):
        return LocationService.list_counties(active_only=True)

    def list(self, request: Request, *args, **kwargs) -> Response:
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({"counties": serializer.data})


class PublicCountyAreaListView(ServiceErrorResponseMixin, generics.GenericAPIView):
    """활성 County의 활성 Area 목록 (고객용)"""

    serializer_class = PublicAreaSerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None

    @extend_schema(
        responses={200: PublicAreaSerializer(many=True), 404: ShippingErrorResponseSerializer},
        summary="County의 배송 가능 지역 목록을 조회한다.",
        description="""처리 내용:
- County가 없거나 비활성화된 경우 404를 반환한다.
- 활성 Area만 이름순으로 반환한다.
- shipping_fee가 null이면 County 기본 배송비가 적용된다.""",
        tags=["Locations"],
    )
    def get(self, request: Request, county_id: int) -> Response:
        try:
            areas = LocationService.get_active_areas(county_id)
        except ShippingServiceError as e:
            return self.service_error_response(e)

        serializer = self.get_serializer(areas, many=True)
        return Response({"county_id": county_id, "areas": serializer.data})
