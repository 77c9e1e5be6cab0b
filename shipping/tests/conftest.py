from decimal import Decimal

from django.conf import settings

import pytest
from rest_framework.test import APIClient

from shipping.models import Area, County
from shipping.tests.factories import TestConstants, UserFactory

# ==========================================
# 1. 전역 설정 (Session Scope)
# ==========================================


@pytest.fixture(scope="session", autouse=True)
def setup_throttle_for_tests():
    """
    테스트 환경에서 throttle rates를 매우 높게 설정

    Session scope: 전체 테스트 세션에서 한 번만 실행
    autouse: 자동으로 모든 테스트에 적용
    """
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
        "shipping_quote": "100000/min",
        "anon_global": "100000/hour",
        "user_global": "100000/hour",
    }


@pytest.fixture(scope="session", autouse=True)
def setup_logging_for_tests():
    """
    테스트 환경에서 로그 propagation 활성화

    caplog가 로그를 캡처할 수 있도록 propagate=True로 설정
    """
    import logging

    for logger_name in [
        "shipping.services",
        "shipping.views",
        "shipping.management",
    ]:
        logging.getLogger(logger_name).propagate = True


@pytest.fixture(autouse=True)
def clear_throttle_cache():
    """테스트 간 throttle 기록 초기화"""
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()


# ==========================================
# 2. API 클라이언트 Fixture
# ==========================================


@pytest.fixture
def api_client():
    """
    DRF APIClient 인스턴스

    Function scope: 매 테스트마다 새로운 클라이언트 생성
    """
    return APIClient()


@pytest.fixture
def staff_user(db):
    """배송 지역 관리 권한이 없는 스태프"""
    return UserFactory.staff(username="staff")


@pytest.fixture
def manager_user(db):
    """shipping.change_county 권한을 가진 스태프"""
    return UserFactory.shipping_manager(username="shipping_manager")


@pytest.fixture
def admin_user(db):
    """슈퍼유저"""
    return UserFactory.superuser(username="admin")


@pytest.fixture
def customer_user(db):
    """일반 고객"""
    return UserFactory(username="customer")


@pytest.fixture
def manager_client(api_client, manager_user):
    """배송 지역 관리자로 인증된 클라이언트"""
    api_client.force_authenticate(user=manager_user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """슈퍼유저로 인증된 클라이언트"""
    api_client.force_authenticate(user=admin_user)
    return api_client


# ==========================================
# 3. 배송 지역 Fixture
# ==========================================


@pytest.fixture
def nairobi(db):
    """
    Nairobi County

    - 코드: NRB
    - 기본 배송비: 200
    - 배송 소요일: 2일
    """
    return County.objects.create(
        name="Nairobi",
        code="NRB",
        default_shipping_fee=TestConstants.NAIROBI_FEE,
        estimated_delivery_days=TestConstants.NAIROBI_DAYS,
    )


@pytest.fixture
def westlands(nairobi):
    """배송비 미설정 Area (County 기본 배송비 적용), 소요일 1일"""
    return Area.objects.create(
        name="Westlands",
        county=nairobi,
        shipping_fee=None,
        estimated_delivery_days=TestConstants.WESTLANDS_DAYS,
    )


@pytest.fixture
def cbd(nairobi):
    """무료 배송 Area (배송비 0), 소요일 1일"""
    return Area.objects.create(
        name="CBD",
        county=nairobi,
        shipping_fee=Decimal("0"),
        estimated_delivery_days=TestConstants.CBD_DAYS,
    )


@pytest.fixture
def mombasa(db):
    """다른 County (소속 불일치 테스트용)"""
    return County.objects.create(
        name="Mombasa",
        code="MSA",
        default_shipping_fee=Decimal("300"),
        estimated_delivery_days=2,
    )


@pytest.fixture
def nyali(mombasa):
    """Mombasa 소속 Area (전용 배송비 280)"""
    return Area.objects.create(
        name="Nyali",
        county=mombasa,
        shipping_fee=Decimal("280"),
        estimated_delivery_days=2,
    )
