from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class CountyQuerySet(models.QuerySet):
    """County 조회용 QuerySet"""

    def active(self):
        """고객에게 노출 가능한 (활성화된) 지역만"""
        return self.filter(is_active=True)


class County(models.Model):
    """
    배송 상위 지역 (County)

    지역 선택 없이 주문할 때 적용되는 기본 배송비와 배송 소요일을 가집니다.
    삭제 대신 is_active로 비활성화(soft delete)합니다.
    """

    MAX_CODE_LENGTH = 5
    MIN_DELIVERY_DAYS = 1
    MAX_DELIVERY_DAYS = 30
    DEFAULT_DELIVERY_DAYS = 3

    name = models.CharField(max_length=100, unique=True, verbose_name="County명")
    code = models.CharField(
        max_length=MAX_CODE_LENGTH,
        unique=True,
        verbose_name="지역 코드",
        help_text="대문자 약어 (예: NRB, MSA)",
    )

    # 배송 정책
    default_shipping_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="기본 배송비",
        help_text="하위 지역을 선택하지 않았을 때 적용되는 배송비",
    )
    estimated_delivery_days = models.PositiveSmallIntegerField(
        default=DEFAULT_DELIVERY_DAYS,
        validators=[MinValueValidator(MIN_DELIVERY_DAYS), MaxValueValidator(MAX_DELIVERY_DAYS)],
        verbose_name="예상 배송 소요일",
    )

    is_active = models.BooleanField(default=True, verbose_name="활성화", help_text="체크 해제시 고객에게 노출되지 않습니다.")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CountyQuerySet.as_manager()

    class Meta:
        verbose_name = "County"
        verbose_name_plural = "Counties"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active"], name="shipping_co_is_acti_5c1f0e_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"

    def save(self, *args, **kwargs):
        # 코드는 항상 대문자로 저장
        self.name = (self.name or "").strip()
        self.code = (self.code or "").strip().upper()
        super().save(*args, **kwargs)
