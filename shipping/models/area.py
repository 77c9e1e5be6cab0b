from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .county import County


class AreaQuerySet(models.QuerySet):
    """Area 조회용 QuerySet"""

    def active(self):
        """활성화된 Area 중 상위 County도 활성화된 것만"""
        return self.filter(is_active=True, county__is_active=True)

    def for_county(self, county_id):
        return self.filter(county_id=county_id)


class Area(models.Model):
    """
    County 하위 배송 지역 (Area)

    배송비는 3가지 상태를 가집니다:
    - NULL: County 기본 배송비 사용
    - 0: 무료 배송
    - 양수: Area 전용 배송비

    배송 소요일은 항상 값이 있으며 Area를 선택하면 County 값 대신 사용됩니다.
    """

    DEFAULT_DELIVERY_DAYS = 2

    name = models.CharField(max_length=100, verbose_name="Area명")
    county = models.ForeignKey(
        County,
        on_delete=models.PROTECT,
        related_name="areas",
        verbose_name="County",
    )
    # 조회 편의를 위한 비정규화 필드 (County명 변경 시 함께 갱신)
    county_name = models.CharField(max_length=100, verbose_name="County명")

    shipping_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="배송비",
        help_text="비워두면 County 기본 배송비가 적용됩니다. 0은 무료 배송입니다.",
    )
    estimated_delivery_days = models.PositiveSmallIntegerField(
        default=DEFAULT_DELIVERY_DAYS,
        validators=[
            MinValueValidator(County.MIN_DELIVERY_DAYS),
            MaxValueValidator(County.MAX_DELIVERY_DAYS),
        ],
        verbose_name="예상 배송 소요일",
    )

    is_active = models.BooleanField(default=True, verbose_name="활성화")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AreaQuerySet.as_manager()

    class Meta:
        verbose_name = "Area"
        verbose_name_plural = "Areas"
        ordering = ["county_name", "name"]
        constraints = [
            # 같은 County 안에서는 Area명 중복 불가
            models.UniqueConstraint(fields=["name", "county"], name="unique_area_name_per_county"),
        ]
        indexes = [
            models.Index(fields=["county", "is_active"], name="shipping_ar_county__8d2b41_idx"),
            models.Index(fields=["is_active"], name="shipping_ar_is_acti_3e7a9c_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.county_name})"

    def save(self, *args, **kwargs):
        self.name = (self.name or "").strip()
        if self.county_id and not self.county_name:
            self.county_name = self.county.name
        super().save(*args, **kwargs)

    @property
    def has_fee_override(self) -> bool:
        """Area 전용 배송비(0 포함)가 설정되어 있는지"""
        return self.shipping_fee is not None

    @property
    def effective_shipping_fee(self) -> Decimal:
        """실제 적용되는 배송비 (미설정 시 County 기본 배송비)"""
        if self.has_fee_override:
            return self.shipping_fee
        return self.county.default_shipping_fee
