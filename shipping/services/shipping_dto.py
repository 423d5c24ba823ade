"""배송 계산 엔진 입출력 데이터 타입

엔진(매처, 비용 계산기, 조합 빌더, 정렬기)은 ORM 모델이 아닌
이 모듈의 불변 dataclass만 주고받습니다.
금액/무게는 모두 Decimal이며 계산 중에는 반올림하지 않습니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from django.db import models


class ZoneScope(models.TextChoices):
    """배송 존 범위"""

    LOCAL = "local", "지역 배송"
    NATIONAL = "national", "전국 배송"
    OTHER = "other", "기타"


def _to_decimal(value: Decimal | int | float | str | None) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    # float은 str을 거쳐야 이진 오차가 들어가지 않음
    return Decimal(str(value))


# ===== 입력 =====


@dataclass(frozen=True)
class CartItem:
    """
    장바구니 아이템

    eligible_zone_ids가 비어 있으면 어떤 존의 일반 전략으로도 배송할 수 없습니다.
    unit_price/unit_weight가 None이면 서비스 입력 검증에서 거절됩니다.
    """

    product_id: str
    quantity: int
    unit_price: Decimal | None
    unit_weight: Decimal | None
    eligible_zone_ids: tuple[str, ...] = ()
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "product_id", str(self.product_id))
        object.__setattr__(self, "unit_price", _to_decimal(self.unit_price))
        object.__setattr__(self, "unit_weight", _to_decimal(self.unit_weight))
        object.__setattr__(
            self, "eligible_zone_ids", tuple(str(zone_id) for zone_id in self.eligible_zone_ids or ())
        )

    @property
    def line_subtotal(self) -> Decimal:
        return (self.unit_price or Decimal("0")) * self.quantity

    @property
    def line_weight(self) -> Decimal:
        return (self.unit_weight or Decimal("0")) * self.quantity

    def is_eligible_for(self, zone_id: str) -> bool:
        return zone_id in self.eligible_zone_ids


@dataclass(frozen=True)
class Address:
    """배송지 (매칭에는 postal_code와 state만 사용)"""

    postal_code: str
    state: str = ""
    city: str = ""
    country: str = ""


@dataclass(frozen=True)
class PackageConfig:
    """포장 단위 제한 및 초과 요금 (모든 필드 선택)"""

    max_weight_per_package: Decimal | None = None
    cost_per_extra_kg: Decimal | None = None
    max_products_per_package: int | None = None
    cost_per_extra_product: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_weight_per_package", _to_decimal(self.max_weight_per_package))
        object.__setattr__(self, "cost_per_extra_kg", _to_decimal(self.cost_per_extra_kg))
        object.__setattr__(self, "cost_per_extra_product", _to_decimal(self.cost_per_extra_product))


@dataclass(frozen=True)
class MessagingOption:
    """존 안의 배송 서비스 (택배사/서비스 등급)"""

    name: str
    base_price: Decimal
    min_days: int | None = None
    max_days: int | None = None
    package_config: PackageConfig | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_price", _to_decimal(self.base_price) or Decimal("0"))


@dataclass(frozen=True)
class FreeShippingPolicy:
    """무료배송 정책 (always_free가 최소 금액보다 우선)"""

    always_free: bool = False
    min_order_amount: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_order_amount", _to_decimal(self.min_order_amount))


@dataclass(frozen=True)
class PostalCodeRange:
    """우편번호 구간 (양 끝 포함)"""

    start: str
    end: str


@dataclass(frozen=True)
class ShippingZone:
    """엔진에서 사용하는 배송 존"""

    id: str
    display_name: str
    scope: str = ZoneScope.OTHER
    active: bool = True
    postal_codes: tuple[str, ...] = ()
    postal_code_ranges: tuple[PostalCodeRange, ...] = ()
    wildcard_state: str | None = None
    messaging_options: tuple[MessagingOption, ...] = ()
    free_shipping: FreeShippingPolicy = field(default_factory=FreeShippingPolicy)

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "postal_codes", tuple(str(code).strip() for code in self.postal_codes))
        object.__setattr__(self, "postal_code_ranges", tuple(self.postal_code_ranges))
        object.__setattr__(self, "messaging_options", tuple(self.messaging_options))

    @property
    def has_positional_restriction(self) -> bool:
        """우편번호/주 단위 제한이 하나라도 있는지"""
        return bool(self.wildcard_state or self.postal_codes or self.postal_code_ranges)


# ===== 출력 =====


@dataclass(frozen=True)
class PriceBreakdownLine:
    """요금 상세 한 줄"""

    label: str
    amount: Decimal


@dataclass(frozen=True)
class PriceResult:
    """존 + 배송 서비스 하나로 아이템 묶음을 배송할 때의 요금"""

    price: Decimal
    is_free: bool
    subtotal: Decimal
    total_weight: Decimal
    product_count: int
    free_reason: str = ""
    breakdown: tuple[PriceBreakdownLine, ...] = ()
    exceeds_limits: bool = False
    limit_reason: str = ""


@dataclass(frozen=True)
class ShippingSelection:
    """조합 안에서 하나의 존/서비스가 담당하는 아이템과 요금"""

    zone_id: str
    zone_name: str
    option: MessagingOption
    assigned_items: tuple[CartItem, ...]
    pricing: PriceResult

    @property
    def price(self) -> Decimal:
        return self.pricing.price


class CombinationStrategy(models.TextChoices):
    """조합을 만든 전략"""

    SINGLE_ZONE = "single_zone", "단일 존"
    LOCAL_NATIONAL = "local_national", "지역 + 전국 분할"
    GREEDY = "greedy", "다중 존 분할"
    NATIONAL_FALLBACK = "national_fallback", "전국 배송 강제 적용"


@dataclass(frozen=True)
class ShippingCombination:
    """
    장바구니 전체에 대한 배송 조합

    covers_all_items가 True면 모든 아이템이 정확히 한 selection에 배정되어 있습니다.
    label/estimated_delivery는 OptionRanker가 채웁니다.
    """

    id: str
    covers_all_items: bool
    total_price: Decimal
    selections: tuple[ShippingSelection, ...]
    strategy: str
    forced_fallback: bool = False
    label: str = ""
    estimated_delivery: str = ""

    @property
    def is_free(self) -> bool:
        return all(selection.pricing.is_free for selection in self.selections)

    @property
    def exceeds_limits(self) -> bool:
        return any(selection.pricing.exceeds_limits for selection in self.selections)


@dataclass(frozen=True)
class CoverageFailure:
    """배송 불가 사유 (예외가 아닌 데이터로 전달)"""

    code: str
    message: str
    product_id: str | None = None


@dataclass(frozen=True)
class ShippingOptionsResult:
    """배송 옵션 계산 결과"""

    options: tuple[ShippingCombination, ...]
    failure: CoverageFailure | None = None

    @property
    def is_available(self) -> bool:
        return bool(self.options)
