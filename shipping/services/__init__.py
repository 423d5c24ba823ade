"""
배송 옵션 계산 서비스 패키지

엔진(ZoneMatcher, ShippingCostCalculator, CombinationBuilder, OptionRanker)은
ORM/캐시에 의존하지 않는 순수 계산이며, ShippingService가 이를 순서대로 호출합니다.
DB 조회가 필요한 ZoneRepository는 모델 로딩 순서 때문에 여기서 export하지 않습니다.
"""

from .base import ServiceError, log_service_call
from .combination_service import CombinationBuilder
from .option_ranker import OptionRanker
from .shipping_cost_service import ShippingCostCalculator
from .shipping_service import ShippingService, ShippingServiceError
from .zone_matcher import ZoneMatcher

__all__ = [
    # Base
    "ServiceError",
    "log_service_call",
    # Engine
    "ZoneMatcher",
    "ShippingCostCalculator",
    "CombinationBuilder",
    "OptionRanker",
    # Services
    "ShippingService",
    "ShippingServiceError",
]
