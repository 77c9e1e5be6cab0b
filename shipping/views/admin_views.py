from __future__ import annotations

from typing import Any

import django_filters
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.serializers import BaseSerializer

from shipping.models import Area
from shipping.permissions import IsShippingManager
from shipping.serializers import (
    AreaSerializer,
    AreaWriteSerializer,
    CountyDeactivationSerializer,
    CountySerializer,
    CountyWriteSerializer,
    ShippingErrorResponseSerializer,
)
from shipping.services.exceptions import ShippingServiceError
from shipping.services.location_service import LocationService

from .mixins import ServiceErrorResponseMixin

ERROR_RESPONSES = {
    400: ShippingErrorResponseSerializer,
    404: ShippingErrorResponseSerializer,
    409: ShippingErrorResponseSerializer,
}


class AreaFilter(django_filters.FilterSet):
    """관리자 Area 목록 필터"""

    county_id = django_filters.NumberFilter(field_name="county_id")
    is_active = django_filters.BooleanFilter(field_name="is_active")
    uses_county_default = django_filters.BooleanFilter(field_name="shipping_fee", lookup_expr="isnull")

    class Meta:
        model = Area
        fields = ["county_id", "is_active", "uses_county_default"]


@extend_schema_view(
    list=extend_schema(summary="전체 County 목록을 조회한다.", tags=["Shipping Admin"]),
    retrieve=extend_schema(summary="County 상세 정보를 조회한다.", tags=["Shipping Admin"]),
)
class AdminCountyViewSet(
    ServiceErrorResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    County 관리 ViewSet

    엔드포인트:
    - GET    /api/admin/counties/                  - 전체 County 목록 (비활성 포함)
    - POST   /api/admin/counties/                  - County 생성
    - GET    /api/admin/counties/{id}/             - County 상세
    - PUT    /api/admin/counties/{id}/             - County 수정
    - PATCH  /api/admin/counties/{id}/             - County 부분 수정
    - DELETE /api/admin/counties/{id}/             - County 삭제 (Area가 없을 때만)
    - POST   /api/admin/counties/{id}/deactivate/  - County 비활성화 (하위 Area 포함)

    권한: 배송 지역 관리자
    """

    permission_classes = [IsShippingManager]
    lookup_value_regex = r"\d+"
    pagination_class = None

    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ["is_active"]
    search_fields = ["name", "code"]

    def get_queryset(self) -> Any:
        return LocationService.list_counties()

    def get_serializer_class(self) -> type[BaseSerializer]:
        if self.action in ["create", "update", "partial_update"]:
            return CountyWriteSerializer
        return CountySerializer

    @extend_schema(
        request=CountyWriteSerializer,
        responses={201: CountySerializer, **ERROR_RESPONSES},
        summary="County를 생성한다.",
        description="""처리 내용:
- 코드는 대문자로 변환하여 저장한다.
- County명 또는 코드가 중복되면 409를 반환한다.""",
        tags=["Shipping Admin"],
    )
    def create(self, request: Request) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            county = LocationService.create_county(**serializer.validated_data)
        except ShippingServiceError as e:
            return self.service_error_response(e)

        return Response(
            {"message": "County가 생성되었습니다.", "county": CountySerializer(county).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        request=CountyWriteSerializer,
        responses={200: CountySerializer, **ERROR_RESPONSES},
        summary="County를 수정한다.",
        description="""처리 내용:
- County명이 바뀌면 하위 Area의 County명도 함께 갱신한다.
- 비활성화하면 하위 Area도 모두 비활성화한다.""",
        tags=["Shipping Admin"],
    )
    def update(self, request: Request, pk: int, partial: bool = False) -> Response:
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            county = LocationService.update_county(int(pk), **serializer.validated_data)
        except ShippingServiceError as e:
            return self.service_error_response(e)

        return Response({"message": "County가 수정되었습니다.", "county": CountySerializer(county).data})

    @extend_schema(
        request=CountyWriteSerializer,
        responses={200: CountySerializer, **ERROR_RESPONSES},
        summary="County를 부분 수정한다.",
        tags=["Shipping Admin"],
    )
    def partial_update(self, request: Request, pk: int) -> Response:
        return self.update(request, pk, partial=True)

    @extend_schema(
        responses={204: None, **ERROR_RESPONSES},
        summary="County를 삭제한다.",
        description="""처리 내용:
- 하위 Area가 있으면 삭제하지 않고 400을 반환한다. (비활성화 사용)""",
        tags=["Shipping Admin"],
    )
    def destroy(self, request: Request, pk: int) -> Response:
        try:
            LocationService.delete_county(int(pk))
        except ShippingServiceError as e:
            return self.service_error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=None,
        responses={200: CountyDeactivationSerializer, 404: ShippingErrorResponseSerializer},
        summary="County를 비활성화한다.",
        description="""처리 내용:
- County와 하위 활성 Area를 모두 비활성화한다.
- 고객 화면과 배송비 조회에서 더 이상 선택할 수 없다.""",
        tags=["Shipping Admin"],
    )
    @action(detail=True, methods=["post"])
    def deactivate(self, request: Request, pk: int) -> Response:
        try:
            result = LocationService.deactivate_county(int(pk))
        except ShippingServiceError as e:
            return self.service_error_response(e)

        return Response(
            {
                "message": "County가 비활성화되었습니다.",
                "county_id": result.county.id,
                "deactivated_area_count": result.deactivated_area_count,
            }
        )


@extend_schema_view(
    list=extend_schema(summary="전체 Area 목록을 조회한다.", tags=["Shipping Admin"]),
    retrieve=extend_schema(summary="Area 상세 정보를 조회한다.", tags=["Shipping Admin"]),
)
class AdminAreaViewSet(
    ServiceErrorResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Area 관리 ViewSet

    엔드포인트:
    - GET    /api/admin/areas/?county_id=1   - 전체 Area 목록 (비활성 포함)
    - POST   /api/admin/areas/               - Area 생성
    - GET    /api/admin/areas/{id}/          - Area 상세
    - PUT    /api/admin/areas/{id}/          - Area 수정
    - PATCH  /api/admin/areas/{id}/          - Area 부분 수정
    - DELETE /api/admin/areas/{id}/          - Area 삭제

    권한: 배송 지역 관리자
    """

    permission_classes = [IsShippingManager]
    lookup_value_regex = r"\d+"

    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = AreaFilter
    search_fields = ["name", "county_name"]
    ordering_fields = ["name", "county_name", "shipping_fee", "estimated_delivery_days"]
    ordering = ["county_name", "name"]

    def get_queryset(self) -> Any:
        return LocationService.list_areas()

    def get_serializer_class(self) -> type[BaseSerializer]:
        if self.action in ["create", "update", "partial_update"]:
            return AreaWriteSerializer
        return AreaSerializer

    @extend_schema(
        request=AreaWriteSerializer,
        responses={201: AreaSerializer, **ERROR_RESPONSES},
        summary="Area를 생성한다.",
        description="""처리 내용:
- shipping_fee를 생략하면 County 기본 배송비를 사용한다. (0은 무료 배송)
- 같은 County에 같은 이름의 Area가 있으면 409를 반환한다.""",
        tags=["Shipping Admin"],
    )
    def create(self, request: Request) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            area = LocationService.create_area(**serializer.validated_data)
        except ShippingServiceError as e:
            return self.service_error_response(e)

        return Response(
            {"message": "지역이 생성되었습니다.", "area": AreaSerializer(area).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        request=AreaWriteSerializer,
        responses={200: AreaSerializer, **ERROR_RESPONSES},
        summary="Area를 수정한다.",
        description="""처리 내용:
- shipping_fee에 null을 보내면 County 기본 배송비 사용으로 되돌린다.
- 다른 County로 옮기면 County명도 함께 갱신한다.""",
        tags=["Shipping Admin"],
    )
    def update(self, request: Request, pk: int, partial: bool = False) -> Response:
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            area = LocationService.update_area(int(pk), **serializer.validated_data)
        except ShippingServiceError as e:
            return self.service_error_response(e)

        return Response({"message": "지역이 수정되었습니다.", "area": AreaSerializer(area).data})

    @extend_schema(
        request=AreaWriteSerializer,
        responses={200: AreaSerializer, **ERROR_RESPONSES},
        summary="Area를 부분 수정한다.",
        tags=["Shipping Admin"],
    )
    def partial_update(self, request: Request, pk: int) -> Response:
        return self.update(request, pk, partial=True)

    @extend_schema(
        responses={204: None, 404: ShippingErrorResponseSerializer},
        summary="Area를 삭제한다.",
        tags=["Shipping Admin"],
    )
    def destroy(self, request: Request, pk: int) -> Response:
        try:
            LocationService.delete_area(int(pk))
        except ShippingServiceError as e:
            return self.service_error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)
