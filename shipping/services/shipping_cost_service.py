"""존별 배송비 계산

존 하나 + 배송 서비스 하나로 아이템 묶음을 보낼 때의 요금을 계산합니다.

계산 순서:
1. 소계/총 무게/총 수량 집계
2. 상시 무료배송 존이면 0원
3. 최소 주문 금액 이상이면 0원
4. 기본 요금 + 추가 상품 요금 + 초과 무게 요금
5. 포장 한도 초과 여부 표시 (요금에는 영향 없음, 안내용)

금액은 Decimal 그대로 계산하며 반올림은 응답 직렬화 시점에만 합니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from .shipping_dto import CartItem, MessagingOption, PriceBreakdownLine, PriceResult, ShippingZone

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def format_amount(value: Decimal) -> str:
    """안내 문구용 금액 표기 (소수점 2자리)"""
    return str(value.quantize(Decimal("0.01")))


class ShippingCostCalculator:
    """존별 배송비 계산기 (상태 없음)"""

    @staticmethod
    def summarize(items: Iterable[CartItem]) -> tuple[Decimal, Decimal, int]:
        """
        아이템 묶음 집계

        Returns:
            tuple: (소계, 총 무게, 총 수량)
        """
        subtotal = ZERO
        total_weight = ZERO
        product_count = 0
        for item in items:
            subtotal += item.line_subtotal
            total_weight += item.line_weight
            product_count += item.quantity
        return subtotal, total_weight, product_count

    @staticmethod
    def check_limits(option: MessagingOption, total_weight: Decimal, product_count: int) -> tuple[bool, str]:
        """
        포장 한도 초과 여부

        Returns:
            tuple: (초과 여부, 사유 문구)
        """
        config = option.package_config
        if config is None:
            return False, ""

        reasons = []
        if config.max_products_per_package and product_count > config.max_products_per_package:
            reasons.append(
                f"상품 수량 {product_count}개가 포장당 최대 {config.max_products_per_package}개를 초과합니다."
            )
        if config.max_weight_per_package and total_weight > config.max_weight_per_package:
            reasons.append(
                f"총 무게 {total_weight}kg이 포장당 최대 {config.max_weight_per_package}kg을 초과합니다."
            )
        return bool(reasons), " ".join(reasons)

    @classmethod
    def price_items(cls, zone: ShippingZone, option: MessagingOption, items: Iterable[CartItem]) -> PriceResult:
        """
        아이템 묶음의 배송비 계산

        Args:
            zone: 배송 존 (무료배송 정책 포함)
            option: 존 안의 배송 서비스
            items: 이 존으로 보낼 아이템들

        Returns:
            PriceResult: 요금, 무료 여부/사유, 상세 내역, 한도 초과 안내
        """
        items = tuple(items)
        subtotal, total_weight, product_count = cls.summarize(items)
        exceeds_limits, limit_reason = cls.check_limits(option, total_weight, product_count)

        policy = zone.free_shipping

        # 상시 무료배송이 최소 금액 조건보다 우선
        if policy.always_free:
            reason = f"{zone.display_name} 존은 항상 무료배송입니다."
            return PriceResult(
                price=ZERO,
                is_free=True,
                subtotal=subtotal,
                total_weight=total_weight,
                product_count=product_count,
                free_reason=reason,
                breakdown=(PriceBreakdownLine("무료배송", ZERO),),
                exceeds_limits=exceeds_limits,
                limit_reason=limit_reason,
            )

        threshold = policy.min_order_amount
        if threshold is not None and subtotal >= threshold:
            reason = (
                f"주문 금액 {format_amount(subtotal)}이(가) "
                f"무료배송 기준 {format_amount(threshold)} 이상입니다."
            )
            return PriceResult(
                price=ZERO,
                is_free=True,
                subtotal=subtotal,
                total_weight=total_weight,
                product_count=product_count,
                free_reason=reason,
                breakdown=(PriceBreakdownLine("무료배송 (최소 주문 금액 달성)", ZERO),),
                exceeds_limits=exceeds_limits,
                limit_reason=limit_reason,
            )

        price = option.base_price
        breakdown = [PriceBreakdownLine(f"기본 배송비 ({option.name})", option.base_price)]

        config = option.package_config
        if config is not None:
            # 첫 상품은 기본 요금에 포함
            extra_product_cost = config.cost_per_extra_product
            if product_count > 1 and extra_product_cost and extra_product_cost > ZERO:
                extra_products = product_count - 1
                amount = extra_product_cost * extra_products
                price += amount
                breakdown.append(PriceBreakdownLine(f"추가 상품 {extra_products}개", amount))

            max_weight = config.max_weight_per_package
            extra_kg_cost = config.cost_per_extra_kg
            if (
                max_weight
                and max_weight > ZERO
                and extra_kg_cost
                and extra_kg_cost > ZERO
                and total_weight > max_weight
            ):
                extra_weight = total_weight - max_weight
                amount = extra_weight * extra_kg_cost
                price += amount
                breakdown.append(PriceBreakdownLine(f"초과 무게 {extra_weight}kg", amount))

        logger.debug(
            "[ShippingCostCalculator] 요금 계산 | zone=%s, option=%s, items=%d, price=%s",
            zone.id,
            option.name,
            len(items),
            price,
        )

        return PriceResult(
            price=price,
            is_free=False,
            subtotal=subtotal,
            total_weight=total_weight,
            product_count=product_count,
            breakdown=tuple(breakdown),
            exceeds_limits=exceeds_limits,
            limit_reason=limit_reason,
        )
