from django.contrib import admin
from django.db.models import Count, Q

from .models import Area, County
from .services.location_service import LocationService


# Area Inline
class AreaInline(admin.TabularInline):
    """County 편집 페이지에서 하위 Area를 함께 확인"""

    model = Area
    extra = 0
    fields = ["name", "shipping_fee", "estimated_delivery_days", "is_active"]
    ordering = ["name"]
    show_change_link = True


# County Admin
@admin.register(County)
class CountyAdmin(admin.ModelAdmin):
    """
    County 관리자 페이지 설정
    - 기본 배송비, 소요일 한눈에 확인
    - 비활성화 시 하위 Area도 함께 비활성화
    """

    list_display = [
        "name",
        "code",
        "formatted_default_fee",
        "estimated_delivery_days",
        "area_count",
        "is_active",
        "updated_at",
    ]
    list_filter = ["is_active"]
    search_fields = ["name", "code"]
    ordering = ["name"]
    readonly_fields = ["created_at", "updated_at"]

    fieldsets = (
        ("기본 정보", {"fields": ("name", "code", "is_active")}),
        ("배송 정책", {"fields": ("default_shipping_fee", "estimated_delivery_days")}),
        (
            "시간 정보",
            {"fields": ("created_at", "updated_at"), "classes": ("collapse",)},
        ),
    )

    inlines = [AreaInline]
    actions = ["deactivate_with_areas"]

    def get_queryset(self, request):
        return (
            super()
            .get_queryset(request)
            .annotate(
                area_count=Count("areas", distinct=True),
                active_area_count=Count("areas", filter=Q(areas__is_active=True), distinct=True),
            )
        )

    def formatted_default_fee(self, obj):
        """배송비를 KES 형식으로 표시"""
        return f"KES {obj.default_shipping_fee:,.0f}"

    formatted_default_fee.short_description = "기본 배송비"
    formatted_default_fee.admin_order_field = "default_shipping_fee"

    def area_count(self, obj):
        """활성 / 전체 Area 수"""
        return f"{obj.active_area_count} / {obj.area_count}"

    area_count.short_description = "Area (활성/전체)"

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        if change and "name" in form.changed_data:
            obj.areas.update(county_name=obj.name)
        if change and "is_active" in form.changed_data and not obj.is_active:
            LocationService.deactivate_county(obj.pk)

    def deactivate_with_areas(self, request, queryset):
        """선택된 County와 하위 Area 비활성화"""
        total_areas = 0
        for county in queryset:
            total_areas += LocationService.deactivate_county(county.pk).deactivated_area_count
        self.message_user(
            request,
            f"{queryset.count()}개 County와 {total_areas}개 Area가 비활성화되었습니다.",
        )

    deactivate_with_areas.short_description = "선택된 County를 하위 Area와 함께 비활성화"


# Area Admin
@admin.register(Area)
class AreaAdmin(admin.ModelAdmin):
    """
    Area 관리자 페이지 설정
    - 배송비 비워두면 County 기본 배송비 적용
    """

    list_display = [
        "name",
        "county_name",
        "shipping_fee",
        "applied_fee",
        "estimated_delivery_days",
        "is_active",
    ]
    list_filter = ["is_active", "county"]
    search_fields = ["name", "county_name"]
    list_select_related = ["county"]
    ordering = ["county_name", "name"]
    readonly_fields = ["county_name", "created_at", "updated_at"]

    fieldsets = (
        ("기본 정보", {"fields": ("name", "county", "county_name", "is_active")}),
        ("배송 정책", {"fields": ("shipping_fee", "estimated_delivery_days")}),
        (
            "시간 정보",
            {"fields": ("created_at", "updated_at"), "classes": ("collapse",)},
        ),
    )

    actions = ["clear_fee_override"]

    def applied_fee(self, obj):
        """실제 적용 배송비"""
        fee = obj.effective_shipping_fee
        if fee == 0:
            return "무료"
        return f"KES {fee:,.0f}"

    applied_fee.short_description = "적용 배송비"

    def save_model(self, request, obj, form, change):
        # County 변경 시 비정규화 필드 갱신
        obj.county_name = obj.county.name
        super().save_model(request, obj, form, change)

    def clear_fee_override(self, request, queryset):
        """선택된 Area의 배송비를 County 기본 배송비로 되돌림"""
        updated = queryset.update(shipping_fee=None)
        self.message_user(request, f"{updated}개 지역이 County 기본 배송비를 사용합니다.")

    clear_fee_override.short_description = "선택된 지역의 배송비를 County 기본값으로 변경"
