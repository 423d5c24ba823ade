from decimal import Decimal

from django.core.cache import cache

import pytest
from rest_framework.test import APIClient

from shipping.services.shipping_dto import FreeShippingPolicy
from shipping.tests.factories import (
    AddressFactory,
    MessagingOptionFactory,
    ShippingZoneFactory,
    TestConstants,
)

# ==========================================
# 1. 전역 설정 (Session Scope)
# ==========================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging_for_tests():
    """
    테스트 환경에서 로그 propagation 활성화

    caplog가 로그를 캡처할 수 있도록 propagate=True로 설정
    Session scope: 전체 테스트 세션에서 한 번만 실행
    autouse: 자동으로 모든 테스트에 적용
    """
    import logging

    for logger_name in [
        "shipping.services",
        "shipping.views",
        "shipping.signals",
    ]:
        logger = logging.getLogger(logger_name)
        logger.propagate = True


@pytest.fixture(autouse=True)
def clear_zone_cache():
    """
    테스트마다 캐시 초기화

    LocMem 캐시는 프로세스 단위로 유지되므로
    이전 테스트의 활성 존 캐시가 남지 않도록 비웁니다.
    """
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

    REST API 테스트용 클라이언트
    Function scope: 매 테스트마다 새로운 클라이언트 생성
    """
    return APIClient()


# ==========================================
# 3. 엔진 입력 Fixture
# ==========================================


@pytest.fixture
def address():
    """기본 배송지 (CABA, 1425)"""
    return AddressFactory()


@pytest.fixture
def national_zone():
    """
    위치 제한 없는 전국 존

    - 서비스: 일반 택배(100), 특급 택배(180)
    """
    return ShippingZoneFactory(
        messaging_options=(
            MessagingOptionFactory(name="일반 택배", base_price=Decimal("100"), min_days=3, max_days=5),
            MessagingOptionFactory(name="특급 택배", base_price=Decimal("180"), min_days=1, max_days=2),
        ),
    )


@pytest.fixture
def local_zone():
    """CABA 주 와일드카드 지역 존 (퀵 배송 60)"""
    return ShippingZoneFactory.local()


@pytest.fixture
def free_threshold_zone():
    """최소 주문 금액 1500 이상 무료배송인 전국 존"""
    return ShippingZoneFactory(
        free_shipping=FreeShippingPolicy(min_order_amount=TestConstants.FREE_SHIPPING_THRESHOLD),
    )
