"""배송 조합 생성

장바구니 아이템을 적용 가능한 존들에 나누어 배정하고
각 배정(조합)의 요금을 계산합니다.

전략은 아래 순서로 시도하며, 모든 아이템을 커버하는 조합이 하나라도
나오면 그 단계에서 멈춥니다.

1. 단일 존: 모든 아이템이 허용하는 존 하나로 전부 배송
2. 지역 + 전국 분할: 지역 존으로 갈 수 있는 아이템과 나머지를 전국 존으로
3. 다중 존 분할(그리디): 전국 → 지역 → 기타 순으로 존을 돌며 남은 아이템 배정
4. 전국 배송 강제 적용: 위에서 아무것도 못 만들면 첫 전국 존으로 전부 배송

위 단계로 아무 조합도 만들지 못하면 빈 리스트를 반환합니다 (예외 아님).
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from decimal import Decimal

from .shipping_cost_service import ShippingCostCalculator
from .shipping_dto import (
    CartItem,
    CombinationStrategy,
    MessagingOption,
    ShippingCombination,
    ShippingSelection,
    ShippingZone,
    ZoneScope,
)

logger = logging.getLogger(__name__)

# 그리디 분할 시 존 우선순위 (낮을수록 먼저)
SCOPE_PRIORITY = {
    ZoneScope.NATIONAL.value: 0,
    ZoneScope.LOCAL.value: 1,
    ZoneScope.OTHER.value: 2,
}


class CombinationBuilder:
    """배송 조합 생성기 (상태 없음)"""

    # ===== 공통 =====

    @staticmethod
    def make_selection(zone: ShippingZone, option: MessagingOption, items: Sequence[CartItem]) -> ShippingSelection:
        """존/서비스 하나에 아이템 묶음을 배정하고 요금 계산"""
        assigned = tuple(items)
        return ShippingSelection(
            zone_id=zone.id,
            zone_name=zone.display_name,
            option=option,
            assigned_items=assigned,
            pricing=ShippingCostCalculator.price_items(zone, option, assigned),
        )

    @staticmethod
    def covers_exactly(items: Sequence[CartItem], selections: Sequence[ShippingSelection]) -> bool:
        """모든 아이템이 정확히 한 번씩 배정되었는지 (중복/누락 없음)"""
        assigned = Counter(item for selection in selections for item in selection.assigned_items)
        return assigned == Counter(items)

    @classmethod
    def make_combination(
        cls,
        combination_id: str,
        items: Sequence[CartItem],
        selections: Sequence[ShippingSelection],
        strategy: str,
        forced_fallback: bool = False,
    ) -> ShippingCombination | None:
        """selection 목록으로 조합 생성 (커버 불변식을 어기면 None)"""
        selections = tuple(selections)
        if not cls.covers_exactly(items, selections):
            logger.warning(
                "[CombinationBuilder] 커버 불변식 위반 조합 제외 | id=%s, strategy=%s",
                combination_id,
                strategy,
            )
            return None

        total_price = sum((selection.price for selection in selections), Decimal("0"))
        return ShippingCombination(
            id=combination_id,
            covers_all_items=True,
            total_price=total_price,
            selections=selections,
            strategy=strategy,
            forced_fallback=forced_fallback,
        )

    @staticmethod
    def shippable_zones(zones: Sequence[ShippingZone]) -> list[ShippingZone]:
        """배송 서비스가 하나 이상 있는 존만 (서비스가 없으면 요금을 낼 수 없음)"""
        return [zone for zone in zones if zone.messaging_options]

    # ===== 1. 단일 존 =====

    @classmethod
    def build_single_zone(cls, items: Sequence[CartItem], zones: Sequence[ShippingZone]) -> list[ShippingCombination]:
        combinations = []
        for zone in zones:
            if not all(item.is_eligible_for(zone.id) for item in items):
                continue
            for index, option in enumerate(zone.messaging_options):
                combination = cls.make_combination(
                    f"single-{zone.id}-{index}",
                    items,
                    [cls.make_selection(zone, option, items)],
                    CombinationStrategy.SINGLE_ZONE,
                )
                if combination is not None:
                    combinations.append(combination)
        return combinations

    # ===== 2. 지역 + 전국 분할 =====

    @classmethod
    def build_local_national(
        cls, items: Sequence[CartItem], zones: Sequence[ShippingZone]
    ) -> list[ShippingCombination]:
        local_zone = next((zone for zone in zones if zone.scope == ZoneScope.LOCAL), None)
        national_zone = next((zone for zone in zones if zone.scope == ZoneScope.NATIONAL), None)
        if local_zone is None or national_zone is None:
            return []

        local_items = [item for item in items if item.is_eligible_for(local_zone.id)]
        national_items = [item for item in items if not item.is_eligible_for(local_zone.id)]

        # 분할이 장바구니 전체를 커버해야 하고, 두 묶음 모두 비어 있지 않아야 함
        if not local_items or not national_items:
            return []
        if not all(item.is_eligible_for(national_zone.id) for item in national_items):
            return []

        combinations = []
        # 전국 서비스가 보통 선택지가 더 다양하므로 바깥 루프
        for national_index, national_option in enumerate(national_zone.messaging_options):
            national_selection = cls.make_selection(national_zone, national_option, national_items)
            for local_index, local_option in enumerate(local_zone.messaging_options):
                combination = cls.make_combination(
                    f"mixed-{local_zone.id}-{national_zone.id}-{national_index}-{local_index}",
                    items,
                    [cls.make_selection(local_zone, local_option, local_items), national_selection],
                    CombinationStrategy.LOCAL_NATIONAL,
                )
                if combination is not None:
                    combinations.append(combination)
        return combinations

    # ===== 3. 다중 존 분할 (그리디) =====

    @classmethod
    def build_greedy(cls, items: Sequence[CartItem], zones: Sequence[ShippingZone]) -> list[ShippingCombination]:
        """
        전국 → 지역 → 기타 순으로 존을 돌며 아직 배정되지 않은 아이템을 배정

        최적해(최저가 분할)를 찾지 않는 휴리스틱입니다. 목표는 "배송 가능한 조합을
        빠르게 하나" 만드는 것이고, 앞선 존이 아이템을 가져가면 뒤의 더 싼 존은
        고려되지 않습니다. 각 존은 첫 번째 배송 서비스로 계산합니다.
        """
        ordered_zones = sorted(zones, key=lambda zone: SCOPE_PRIORITY.get(str(zone.scope), len(SCOPE_PRIORITY)))

        remaining = list(items)
        assignments: list[tuple[ShippingZone, list[CartItem]]] = []
        for zone in ordered_zones:
            if not remaining:
                break
            taken = [item for item in remaining if item.is_eligible_for(zone.id)]
            if not taken:
                continue
            assignments.append((zone, taken))
            remaining = [item for item in remaining if not item.is_eligible_for(zone.id)]

        if remaining:
            return []

        selections = [cls.make_selection(zone, zone.messaging_options[0], taken) for zone, taken in assignments]
        combination = cls.make_combination(
            "greedy-" + "-".join(zone.id for zone, _ in assignments),
            items,
            selections,
            CombinationStrategy.GREEDY,
        )
        return [combination] if combination is not None else []

    # ===== 4. 전국 배송 강제 적용 =====

    @classmethod
    def build_national_fallback(
        cls, items: Sequence[CartItem], zones: Sequence[ShippingZone]
    ) -> list[ShippingCombination]:
        """아이템의 허용 존과 무관하게 첫 전국 존으로 전부 배송 (호출부에서 사용자에게 안내 필요)"""
        national_zone = next((zone for zone in zones if zone.scope == ZoneScope.NATIONAL), None)
        if national_zone is None:
            return []

        combinations = []
        for index, option in enumerate(national_zone.messaging_options):
            combination = cls.make_combination(
                f"fallback-{national_zone.id}-{index}",
                items,
                [cls.make_selection(national_zone, option, items)],
                CombinationStrategy.NATIONAL_FALLBACK,
                forced_fallback=True,
            )
            if combination is not None:
                combinations.append(combination)
        return combinations

    # ===== 진입점 =====

    @classmethod
    def build(cls, items: Sequence[CartItem], eligible_zones: Sequence[ShippingZone]) -> list[ShippingCombination]:
        """
        배송 조합 생성

        Args:
            items: 장바구니 아이템 (비어 있지 않아야 함)
            eligible_zones: 주소에 적용 가능한 존 (ZoneMatcher 결과)

        Returns:
            list[ShippingCombination]: 생성 순서대로의 조합 (정렬 전). 배송 불가면 빈 리스트
        """
        items = tuple(items)
        if not items:
            return []

        zones = cls.shippable_zones(eligible_zones)

        strategies = (
            cls.build_single_zone,
            cls.build_local_national,
            cls.build_greedy,
            cls.build_national_fallback,
        )
        for strategy in strategies:
            combinations = strategy(items, zones)
            if combinations:
                logger.debug(
                    "[CombinationBuilder] 조합 생성 | strategy=%s, count=%d",
                    combinations[0].strategy,
                    len(combinations),
                )
                if combinations[0].forced_fallback:
                    logger.info(
                        "[CombinationBuilder] 전국 배송 강제 적용 | zone=%s, items=%d",
                        combinations[0].selections[0].zone_id,
                        len(items),
                    )
                return combinations

        logger.info(
            "[CombinationBuilder] 배송 가능한 조합 없음 | items=%d, zones=%s",
            len(items),
            [zone.id for zone in zones],
        )
        return []
