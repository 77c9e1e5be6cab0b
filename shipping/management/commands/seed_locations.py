"""
배송 지역 초기 데이터 Management Command

케냐 주요 County와 하위 Area를 등록합니다.
이미 있는 지역은 배송비/소요일만 갱신하므로 여러 번 실행해도 안전합니다.

사용법:
    python manage.py seed_locations
    python manage.py seed_locations --clear  # 기존 지역 데이터 삭제 후 등록
"""

import logging
from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db import IntegrityError, transaction

from shipping.models import Area, County

logger = logging.getLogger(__name__)


# (County명, 코드, 기본 배송비, 소요일), [(Area명, 배송비, 소요일), ...]
KENYA_LOCATIONS = [
    (
        ("Nairobi", "NRB", 200, 1),
        [
            ("CBD", 150, 1),
            ("Westlands", 200, 1),
            ("Karen", 250, 1),
            ("Langata", 200, 1),
            ("Kasarani", 200, 1),
            ("Embakasi", 200, 1),
            ("Kibra", 180, 1),
            ("Eastleigh", 180, 1),
            ("South C", 200, 1),
            ("South B", 200, 1),
            ("Kilimani", 200, 1),
            ("Lavington", 220, 1),
            ("Kileleshwa", 200, 1),
            ("Parklands", 200, 1),
            ("Runda", 250, 1),
            ("Muthaiga", 250, 1),
        ],
    ),
    (
        ("Mombasa", "MSA", 300, 2),
        [
            ("Mombasa Island", 250, 2),
            ("Likoni", 300, 2),
            ("Changamwe", 300, 2),
            ("Kisauni", 300, 2),
            ("Nyali", 280, 2),
            ("Bamburi", 300, 2),
            ("Old Town", 250, 2),
        ],
    ),
    (
        ("Kiambu", "KBU", 250, 2),
        [
            ("Thika", 200, 1),
            ("Ruiru", 180, 1),
            ("Kikuyu", 200, 1),
            ("Limuru", 220, 2),
            ("Kiambu Town", 200, 1),
            ("Juja", 200, 1),
            ("Kabete", 180, 1),
            ("Karuri", 200, 1),
        ],
    ),
    (
        ("Nakuru", "NKR", 350, 3),
        [
            ("Nakuru Town", 300, 2),
            ("Naivasha", 320, 3),
            ("Gilgil", 350, 3),
            ("Molo", 380, 3),
            ("Njoro", 350, 3),
        ],
    ),
    (
        ("Machakos", "MCK", 280, 2),
        [
            ("Machakos Town", 250, 2),
            ("Athi River", 200, 1),
            ("Mavoko", 200, 1),
            ("Syokimau", 180, 1),
            ("Mlolongo", 180, 1),
        ],
    ),
    (
        ("Kajiado", "KJD", 300, 2),
        [
            ("Kajiado Town", 280, 2),
            ("Ngong", 220, 1),
            ("Ongata Rongai", 200, 1),
            ("Kitengela", 220, 1),
        ],
    ),
    (
        ("Kisumu", "KSM", 400, 3),
        [
            ("Kisumu Central", 350, 3),
            ("Kisumu East", 380, 3),
            ("Kisumu West", 380, 3),
        ],
    ),
    (
        ("Uasin Gishu", "UGS", 450, 3),
        [
            ("Eldoret", 400, 3),
            ("Moiben", 450, 3),
            ("Turbo", 450, 3),
        ],
    ),
]


class Command(BaseCommand):
    help = "케냐 배송 지역(County/Area) 기본 데이터를 등록합니다"

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="기존 배송 지역 데이터를 모두 삭제하고 새로 등록",
        )

    def handle(self, *args, **options):
        self.stdout.write("🚀 배송 지역 데이터 등록을 시작합니다...")

        with transaction.atomic():
            if options["clear"]:
                self.clear_existing_data()

            created_counties, created_areas = self.seed()

        self.stdout.write("")
        self.stdout.write(self.style.SUCCESS("✅ 배송 지역 데이터 등록 완료"))
        self.stdout.write(f"   - County: {County.objects.count()}개 (신규 {created_counties}개)")
        self.stdout.write(f"   - Area: {Area.objects.count()}개 (신규 {created_areas}개)")

        logger.info(
            "[Seed] 배송 지역 등록 | created_counties=%d, created_areas=%d, clear=%s",
            created_counties,
            created_areas,
            options["clear"],
        )

    def clear_existing_data(self):
        """기존 지역 데이터 삭제 (Area가 County를 PROTECT 하므로 Area부터)"""
        self.stdout.write("🗑️  기존 배송 지역 데이터를 삭제하는 중...")
        area_count, _ = Area.objects.all().delete()
        county_count, _ = County.objects.all().delete()
        self.stdout.write(self.style.WARNING(f"  County {county_count}개, Area {area_count}개 삭제 완료\n"))

    def seed(self):
        created_counties = 0
        created_areas = 0

        for (name, code, fee, days), areas in KENYA_LOCATIONS:
            try:
                with transaction.atomic():
                    county, created = County.objects.update_or_create(
                        code=code,
                        defaults={
                            "name": name,
                            "default_shipping_fee": Decimal(fee),
                            "estimated_delivery_days": days,
                        },
                    )
            except IntegrityError as e:
                # 같은 이름의 County가 다른 코드로 이미 등록된 경우
                existing_code = County.objects.filter(name=name).values_list("code", flat=True).first()
                raise CommandError(
                    f"County '{name}'이(가) 다른 코드({existing_code})로 이미 등록되어 있습니다. "
                    f"코드를 {code}로 수정하거나 --clear 옵션을 사용하세요."
                ) from e

            created_counties += int(created)
            self.stdout.write(f"📍 {county.name} ({county.code}) {'생성' if created else '갱신'}")

            # County명이 바뀐 경우를 대비해 비정규화 필드 갱신
            county.areas.exclude(county_name=county.name).update(county_name=county.name)

            for area_name, area_fee, area_days in areas:
                _, area_created = Area.objects.update_or_create(
                    county=county,
                    name=area_name,
                    defaults={
                        "county_name": county.name,
                        "shipping_fee": Decimal(area_fee),
                        "estimated_delivery_days": area_days,
                    },
                )
                created_areas += int(area_created)

            self.stdout.write(f"  ✓ 하위 지역 {len(areas)}개")

        return created_counties, created_areas
