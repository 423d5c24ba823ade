"""배송 조합 정렬 및 표시 정보 생성"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from .shipping_dto import ShippingCombination, ShippingSelection


class OptionRanker:
    """
    정렬 기준 (오름차순): (전체 커버 여부 0/1, 총 배송비)

    안정 정렬이므로 같은 값이면 생성 순서를 유지합니다.
    """

    LABEL_SEPARATOR = " + "

    @staticmethod
    def sort_key(combination: ShippingCombination) -> tuple:
        return (0 if combination.covers_all_items else 1, combination.total_price)

    @staticmethod
    def selection_label(selection: ShippingSelection) -> str:
        return f"{selection.zone_name} · {selection.option.name}"

    @classmethod
    def build_label(cls, combination: ShippingCombination) -> str:
        """존/서비스 이름으로 표시 문구 생성 (예: "서울 · 퀵 + 전국 · 택배")"""
        return cls.LABEL_SEPARATOR.join(cls.selection_label(selection) for selection in combination.selections)

    @staticmethod
    def build_estimated_delivery(combination: ShippingCombination) -> str:
        """
        예상 배송 기간 문구

        여러 존으로 나뉘면 가장 늦게 도착하는 쪽 기준으로 계산합니다.
        배송 기간 정보가 없는 서비스만 있으면 빈 문자열입니다.
        """
        min_days = [s.option.min_days for s in combination.selections if s.option.min_days is not None]
        max_days = [s.option.max_days for s in combination.selections if s.option.max_days is not None]
        if not min_days and not max_days:
            return ""

        low = max(min_days) if min_days else max(max_days)
        high = max(max_days) if max_days else low
        high = max(high, low)
        if low == high:
            return f"{low}일"
        return f"{low}-{high}일"

    @classmethod
    def format(cls, combination: ShippingCombination) -> ShippingCombination:
        return dataclasses.replace(
            combination,
            label=cls.build_label(combination),
            estimated_delivery=cls.build_estimated_delivery(combination),
        )

    @classmethod
    def rank(cls, combinations: Iterable[ShippingCombination]) -> list[ShippingCombination]:
        """정렬 후 표시 정보를 붙인 조합 목록 반환"""
        return [cls.format(combination) for combination in sorted(combinations, key=cls.sort_key)]
