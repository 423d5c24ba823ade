"""배송 존 조회 레이어

DB의 존/배송 서비스/우편번호 구간을 엔진용 dataclass로 변환하고
Django 캐시에 보관합니다. 엔진은 캐시를 알지 못하며,
존 데이터 변경 시 signals.py에서 invalidate()를 호출합니다.
"""

from __future__ import annotations

import logging
import re

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.cache import cache
from django.db.models import Prefetch

from ..models.zone import MessagingOption as MessagingOptionModel
from ..models.zone import PostalCodeRange as PostalCodeRangeModel
from ..models.zone import ShippingZone as ShippingZoneModel
from .shipping_dto import FreeShippingPolicy, MessagingOption, PackageConfig, PostalCodeRange, ShippingZone
from .zone_matcher import ZoneMatcher

logger = logging.getLogger(__name__)

# "1-3 días", "2 ~ 4일" 같은 구간 표기
_DAY_RANGE_PATTERN = re.compile(r"(\d+)\s*[-~–]\s*(\d+)")
_SINGLE_DAY_PATTERN = re.compile(r"(\d+)")


class ZoneRepository:
    """활성 배송 존 조회 (캐시 포함)"""

    @staticmethod
    def parse_delivery_days(text: str) -> tuple[int | None, int | None]:
        """
        배송 기간 문구에서 (최소일, 최대일) 추출

        "1-3 días" → (1, 3), "2일" → (2, 2), 숫자가 없으면 (None, None)
        """
        if not text:
            return None, None

        match = _DAY_RANGE_PATTERN.search(text)
        if match:
            low, high = int(match.group(1)), int(match.group(2))
            return min(low, high), max(low, high)

        match = _SINGLE_DAY_PATTERN.search(text)
        if match:
            days = int(match.group(1))
            return days, days
        return None, None

    @classmethod
    def to_engine_option(cls, option: MessagingOptionModel) -> MessagingOption:
        min_days, max_days = option.min_days, option.max_days
        if min_days is None and max_days is None:
            min_days, max_days = cls.parse_delivery_days(option.delivery_time)

        package_config = None
        if option.has_package_config:
            package_config = PackageConfig(
                max_weight_per_package=option.max_weight_per_package,
                cost_per_extra_kg=option.cost_per_extra_kg,
                max_products_per_package=option.max_products_per_package,
                cost_per_extra_product=option.cost_per_extra_product,
            )

        return MessagingOption(
            name=option.name,
            base_price=option.base_price,
            min_days=min_days,
            max_days=max_days,
            package_config=package_config,
        )

    @staticmethod
    def canonical_wildcard_state(zone: ShippingZoneModel) -> str | None:
        """와일드카드 존의 주 이름을 배송지와 같은 변환표로 정규화"""
        if not zone.is_state_wildcard:
            return None
        return ZoneMatcher.canonical_state(zone.state, getattr(settings, "SHIPPING_STATE_ALIASES", {}))

    @classmethod
    def to_engine_zone(cls, zone: ShippingZoneModel) -> ShippingZone:
        """ORM 존 → 엔진 존 (옵션/구간은 prefetch된 상태여야 쿼리가 늘지 않음)"""
        return ShippingZone(
            id=zone.code,
            display_name=zone.name,
            scope=zone.scope,
            active=zone.is_active,
            postal_codes=tuple(str(code) for code in zone.postal_codes or ()),
            postal_code_ranges=tuple(
                PostalCodeRange(start=code_range.start, end=code_range.end)
                for code_range in zone.postal_code_ranges.all()
            ),
            wildcard_state=cls.canonical_wildcard_state(zone),
            messaging_options=tuple(cls.to_engine_option(option) for option in zone.messaging_options.all()),
            free_shipping=FreeShippingPolicy(
                always_free=zone.always_free,
                min_order_amount=zone.free_shipping_min_amount,
            ),
        )

    @classmethod
    def load_active_zones(cls) -> tuple[ShippingZone, ...]:
        """DB에서 활성 존 조회 (캐시 미사용)"""
        queryset = (
            ShippingZoneModel.objects.filter(is_active=True)
            .order_by("sort_order", "id")
            .prefetch_related(
                Prefetch("messaging_options", queryset=MessagingOptionModel.objects.order_by("sort_order", "id")),
                Prefetch("postal_code_ranges", queryset=PostalCodeRangeModel.objects.order_by("id")),
            )
        )
        return tuple(cls.to_engine_zone(zone) for zone in queryset)

    @classmethod
    def list_active_zones(cls) -> tuple[ShippingZone, ...]:
        """
        활성 존 목록 (캐시 우선)

        Returns:
            tuple[ShippingZone, ...]: sort_order 순서의 활성 존
        """
        cache_key = settings.SHIPPING_ZONE_CACHE_KEY
        zones = cache.get(cache_key)
        if zones is not None:
            return zones

        zones = cls.load_active_zones()
        cache.set(cache_key, zones, settings.SHIPPING_ZONE_CACHE_TIMEOUT)
        logger.debug("[ZoneRepository] 활성 존 캐시 갱신 | count=%d", len(zones))
        return zones

    @classmethod
    async def alist_active_zones(cls) -> tuple[ShippingZone, ...]:
        """비동기 뷰용 list_active_zones"""
        return await sync_to_async(cls.list_active_zones)()

    @staticmethod
    def invalidate() -> None:
        cache.delete(settings.SHIPPING_ZONE_CACHE_KEY)
