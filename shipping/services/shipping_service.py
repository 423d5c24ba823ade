"""배송 서비스 레이어

장바구니와 배송지로 선택 가능한 배송 옵션 목록을 계산합니다.

흐름:
    입력 검증 → 존 조회(ZoneRepository) → ZoneMatcher → CombinationBuilder → OptionRanker

사용 예시:
    result = ShippingService.resolve(cart_items, address)
    if not result.is_available:
        # result.failure.code / message 로 사용자에게 안내 (체크아웃 진행 불가)
        ...

    # 목록만 필요한 경우
    options = ShippingService.compute_options(cart_items, address)

입력 오류(장바구니/배송지 누락, 가격·무게 누락)는 ShippingServiceError로 즉시 실패하고,
배송 불가는 예외가 아닌 빈 목록 + 사유(CoverageFailure)로 반환합니다.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .base import ServiceError, log_service_call
from .combination_service import CombinationBuilder
from .option_ranker import OptionRanker
from .shipping_dto import Address, CartItem, CoverageFailure, ShippingCombination, ShippingOptionsResult, ShippingZone
from .zone_matcher import ZoneMatcher

logger = logging.getLogger(__name__)


class ShippingServiceError(ServiceError):
    """배송 옵션 계산 입력 오류"""

    def __init__(self, message: str, field: str):
        super().__init__(message, code="INVALID_SHIPPING_INPUT", details={"field": field})


class ShippingService:
    """배송 옵션 계산 서비스"""

    # 배송 불가 사유 코드
    NO_ELIGIBLE_ZONES = "NO_ELIGIBLE_ZONES"
    PRODUCT_NOT_SHIPPABLE = "PRODUCT_NOT_SHIPPABLE"
    NO_COVERING_COMBINATION = "NO_COVERING_COMBINATION"

    # ===== 입력 검증 =====

    @staticmethod
    def validate_input(cart_items: Sequence[CartItem] | None, address: Address | None) -> None:
        """
        계산 전 입력 검증 (실패 시 문제 필드를 담아 ShippingServiceError)

        Raises:
            ShippingServiceError: 장바구니/배송지 누락, 아이템 가격·무게 누락 또는 음수, 수량 1 미만
        """
        if not cart_items:
            raise ShippingServiceError("장바구니가 비어 있습니다.", field="items")
        if address is None:
            raise ShippingServiceError("배송지 정보가 없습니다.", field="address")
        if not (address.postal_code or "").strip():
            raise ShippingServiceError("배송지 우편번호가 없습니다.", field="address.postal_code")

        for index, item in enumerate(cart_items):
            prefix = f"items[{index}]"
            if item.quantity is None or item.quantity < 1:
                raise ShippingServiceError(
                    f"상품 {item.product_id}의 수량은 1 이상이어야 합니다.", field=f"{prefix}.quantity"
                )
            if item.unit_price is None:
                raise ShippingServiceError(f"상품 {item.product_id}의 가격 정보가 없습니다.", field=f"{prefix}.unit_price")
            if item.unit_weight is None:
                raise ShippingServiceError(
                    f"상품 {item.product_id}의 무게 정보가 없습니다.", field=f"{prefix}.unit_weight"
                )
            if item.unit_price < 0:
                raise ShippingServiceError(
                    f"상품 {item.product_id}의 가격은 음수일 수 없습니다.", field=f"{prefix}.unit_price"
                )
            if item.unit_weight < 0:
                raise ShippingServiceError(
                    f"상품 {item.product_id}의 무게는 음수일 수 없습니다.", field=f"{prefix}.unit_weight"
                )

    # ===== 배송 불가 사유 =====

    @classmethod
    def describe_failure(cls, cart_items: Sequence[CartItem], eligible_zones: Sequence[ShippingZone]) -> CoverageFailure:
        """조합이 하나도 없을 때 사용자에게 보여줄 사유"""
        if not eligible_zones:
            return CoverageFailure(code=cls.NO_ELIGIBLE_ZONES, message="배송지에 적용 가능한 배송 존이 없습니다.")

        shippable_zone_ids = {zone.id for zone in eligible_zones if zone.messaging_options}
        for item in cart_items:
            if not shippable_zone_ids.intersection(item.eligible_zone_ids):
                label = item.name or item.product_id
                return CoverageFailure(
                    code=cls.PRODUCT_NOT_SHIPPABLE,
                    message=f"상품 {label}은(는) 이 배송지로 배송할 수 없습니다.",
                    product_id=item.product_id,
                )

        return CoverageFailure(
            code=cls.NO_COVERING_COMBINATION,
            message="장바구니 상품을 함께 배송할 수 있는 조합이 없습니다.",
        )

    # ===== 진입점 =====

    @classmethod
    @log_service_call
    def resolve(
        cls,
        cart_items: Sequence[CartItem] | None,
        address: Address | None,
        zones: Sequence[ShippingZone] | None = None,
    ) -> ShippingOptionsResult:
        """
        배송 옵션 계산

        Args:
            cart_items: 장바구니 아이템
            address: 정규화된 배송지
            zones: 미리 불러온 존 목록 (없으면 ZoneRepository에서 활성 존 조회)

        Returns:
            ShippingOptionsResult: 정렬된 옵션과 (옵션이 없으면) 배송 불가 사유

        Raises:
            ShippingServiceError: 입력 오류
        """
        cls.validate_input(cart_items, address)

        if zones is None:
            from .zone_repository import ZoneRepository

            zones = ZoneRepository.list_active_zones()

        active_zones = [zone for zone in zones if zone.active]
        eligible_zones = ZoneMatcher.match_zones(active_zones, address)
        combinations = CombinationBuilder.build(cart_items, eligible_zones)

        if not combinations:
            failure = cls.describe_failure(cart_items, eligible_zones)
            logger.info(
                "[ShippingService] 배송 불가 | code=%s, postal_code=%s, product_id=%s",
                failure.code,
                address.postal_code,
                failure.product_id,
            )
            return ShippingOptionsResult(options=(), failure=failure)

        ranked = OptionRanker.rank(combinations)
        logger.info(
            "[ShippingService] 배송 옵션 계산 완료 | postal_code=%s, options=%d, best=%s",
            address.postal_code,
            len(ranked),
            ranked[0].id,
        )
        return ShippingOptionsResult(options=tuple(ranked))

    @classmethod
    def compute_options(
        cls,
        cart_items: Sequence[CartItem] | None,
        address: Address | None,
        zones: Sequence[ShippingZone] | None = None,
    ) -> list[ShippingCombination]:
        """정렬된 배송 옵션 목록만 반환 (배송 불가면 빈 리스트)"""
        return list(cls.resolve(cart_items, address, zones).options)
