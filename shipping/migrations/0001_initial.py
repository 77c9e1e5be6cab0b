from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="County",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="County명")),
                (
                    "code",
                    models.CharField(
                        help_text="대문자 약어 (예: NRB, MSA)", max_length=5, unique=True, verbose_name="지역 코드"
                    ),
                ),
                (
                    "default_shipping_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        help_text="하위 지역을 선택하지 않았을 때 적용되는 배송비",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="기본 배송비",
                    ),
                ),
                (
                    "estimated_delivery_days",
                    models.PositiveSmallIntegerField(
                        default=3,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(30),
                        ],
                        verbose_name="예상 배송 소요일",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True, help_text="체크 해제시 고객에게 노출되지 않습니다.", verbose_name="활성화"
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "County",
                "verbose_name_plural": "Counties",
                "ordering": ["name"],
                "indexes": [models.Index(fields=["is_active"], name="shipping_co_is_acti_5c1f0e_idx")],
            },
        ),
        migrations.CreateModel(
            name="Area",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="Area명")),
                ("county_name", models.CharField(max_length=100, verbose_name="County명")),
                (
                    "shipping_fee",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="비워두면 County 기본 배송비가 적용됩니다. 0은 무료 배송입니다.",
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="배송비",
                    ),
                ),
                (
                    "estimated_delivery_days",
                    models.PositiveSmallIntegerField(
                        default=2,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(30),
                        ],
                        verbose_name="예상 배송 소요일",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="활성화")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "county",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="areas",
                        to="shipping.county",
                        verbose_name="County",
                    ),
                ),
            ],
            options={
                "verbose_name": "Area",
                "verbose_name_plural": "Areas",
                "ordering": ["county_name", "name"],
                "indexes": [
                    models.Index(fields=["county", "is_active"], name="shipping_ar_county__8d2b41_idx"),
                    models.Index(fields=["is_active"], name="shipping_ar_is_acti_3e7a9c_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("name", "county"), name="unique_area_name_per_county"),
                ],
            },
        ),
    ]
