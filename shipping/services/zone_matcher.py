"""배송 존 적용 여부 판별

주소(우편번호/주)에 적용 가능한 존을 고릅니다.
체크아웃, 관리자 미리보기 등 모든 호출부가 이 매처 하나만 사용합니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from .shipping_dto import Address, PostalCodeRange, ShippingZone

logger = logging.getLogger(__name__)


class ZoneMatcher:
    """
    존 적용 규칙 (앞에서부터 우선):

    1. 주 와일드카드 존이고 주 이름이 일치 (대소문자/앞뒤 공백 무시)
    2. 명시된 우편번호 목록에 포함
    3. 우편번호 구간에 포함 (start <= code <= end)
    4. 위치 제한이 전혀 없는 존 (전역 적용)

    비활성 존은 호출부에서 미리 걸러 전달합니다.
    """

    @staticmethod
    def normalize_state(state: str | None) -> str:
        return (state or "").strip().casefold()

    @staticmethod
    def canonical_state(state: str | None, aliases: Mapping[str, str] | None = None) -> str:
        """
        주 이름을 표준 코드로 변환 (변환표에 없으면 앞뒤 공백만 제거)

        배송지와 와일드카드 존의 주 이름을 같은 변환표로 맞춰야
        "Jalisco"로 저장된 존이 "JAL"이나 "jalisco" 배송지와도 일치합니다.
        """
        value = (state or "").strip()
        if not value or not aliases:
            return value
        lookup = {key.strip().casefold(): code for key, code in aliases.items()}
        return lookup.get(value.casefold(), value)

    @staticmethod
    def normalize_postal_code(postal_code: str | None) -> str:
        return (postal_code or "").strip()

    @staticmethod
    def in_range(postal_code: str, code_range: PostalCodeRange) -> bool:
        """
        우편번호 구간 포함 여부

        세 값이 모두 숫자면 정수로 비교하고 ("999" < "1000"),
        문자가 섞여 있으면 문자열 사전순으로 비교합니다.
        """
        start = code_range.start.strip()
        end = code_range.end.strip()
        if not postal_code or not start or not end:
            return False

        if postal_code.isdigit() and start.isdigit() and end.isdigit():
            return int(start) <= int(postal_code) <= int(end)
        return start <= postal_code <= end

    @classmethod
    def zone_applies(cls, zone: ShippingZone, address: Address) -> bool:
        """존 하나가 주소에 적용되는지 판별"""
        postal_code = cls.normalize_postal_code(address.postal_code)

        # 1. 주 와일드카드
        if zone.wildcard_state:
            address_state = cls.normalize_state(address.state)
            if address_state and address_state == cls.normalize_state(zone.wildcard_state):
                return True

        # 2. 명시된 우편번호
        if postal_code and postal_code in zone.postal_codes:
            return True

        # 3. 우편번호 구간
        if any(cls.in_range(postal_code, code_range) for code_range in zone.postal_code_ranges):
            return True

        # 4. 위치 제한 없음
        return not zone.has_positional_restriction

    @classmethod
    def match_zones(cls, zones: Iterable[ShippingZone], address: Address) -> list[ShippingZone]:
        """
        주소에 적용 가능한 존 목록

        Returns:
            list[ShippingZone]: 입력 순서를 유지한 적용 가능 존 (없으면 빈 리스트)
        """
        matched = [zone for zone in zones if cls.zone_applies(zone, address)]

        logger.debug(
            "[ZoneMatcher] 존 매칭 | postal_code=%s, state=%s, matched=%s",
            address.postal_code,
            address.state,
            [zone.id for zone in matched],
        )
        return matched
