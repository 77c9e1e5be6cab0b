from django.urls import include, path

from rest_framework.routers import DefaultRouter

from shipping.views.admin_views import AdminAreaViewSet, AdminCountyViewSet
from shipping.views.location_views import PublicCountyAreaListView, PublicCountyListView
from shipping.views.shipping_views import AdminShippingResolveView, ShippingQuoteView, ShippingStatsView

# DRF의 라우터 생성
router = DefaultRouter()

# 관리자 County/Area 관리
router.register(r"admin/counties", AdminCountyViewSet, basename="admin-county")
router.register(r"admin/areas", AdminAreaViewSet, basename="admin-area")

# URL 패턴 정의
urlpatterns = [
    # 배송비 조회 (고객용)
    path("shipping/quote/", ShippingQuoteView.as_view(), name="shipping-quote"),
    # 배송지 선택
    path("locations/counties/", PublicCountyListView.as_view(), name="public-county-list"),
    path(
        "locations/counties/<int:county_id>/areas/",
        PublicCountyAreaListView.as_view(),
        name="public-county-areas",
    ),
    # 관리자 대시보드
    path("admin/shipping/stats/", ShippingStatsView.as_view(), name="shipping-stats"),
    path("admin/shipping/resolve/", AdminShippingResolveView.as_view(), name="admin-shipping-resolve"),
    # API root - 라우터가 자동으로 생성하는 URL들
    path("", include(router.urls)),
]
