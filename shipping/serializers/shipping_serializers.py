from __future__ import annotations

import re
from typing import Any

from django.conf import settings

from rest_framework import serializers

from ..services.shipping_dto import Address, CartItem
from ..services.zone_matcher import ZoneMatcher

# 우편번호에서 제거할 문자 (공백, 하이픈)
_POSTAL_CODE_STRIP = re.compile(r"[-\s]")


class AddressSerializer(serializers.Serializer):
    """
    배송지 입력 Serializer

    프론트엔드/외부 주소 API마다 필드 이름이 달라서
    검증 전에 동의어를 표준 필드로 모읍니다.

    - postal_code: postalCode, zip, zipcode, codigo_postal
    - state: provincia, estado
    - city: ciudad, localidad
    - country: pais
    """

    FIELD_SYNONYMS = {
        "postal_code": ("postalCode", "zip", "zipcode", "codigo_postal"),
        "state": ("provincia", "estado"),
        "city": ("ciudad", "localidad"),
        "country": ("pais",),
    }

    postal_code = serializers.CharField(max_length=20, help_text="우편번호 (공백/하이픈은 제거됩니다)")
    state = serializers.CharField(max_length=100, required=False, allow_blank=True, default="", help_text="주/도")
    city = serializers.CharField(max_length=100, required=False, allow_blank=True, default="", help_text="도시")
    country = serializers.CharField(max_length=100, required=False, allow_blank=True, default="", help_text="국가")

    def to_internal_value(self, data: Any) -> dict[str, Any]:
        """동의어 필드를 표준 필드 이름으로 변환 후 검증"""
        if hasattr(data, "items"):
            normalized = dict(data.items())
            for field_name, synonyms in self.FIELD_SYNONYMS.items():
                if normalized.get(field_name) not in (None, ""):
                    continue
                for synonym in synonyms:
                    if normalized.get(synonym) not in (None, ""):
                        normalized[field_name] = normalized[synonym]
                        break
            data = normalized
        return super().to_internal_value(data)

    def validate_postal_code(self, value: str) -> str:
        postal_code = _POSTAL_CODE_STRIP.sub("", value)
        if not postal_code:
            raise serializers.ValidationError("우편번호를 입력해주세요.")
        return postal_code

    def validate_state(self, value: str) -> str:
        """주 전체 이름을 존에서 쓰는 표준 코드로 변환 (설정에 없으면 그대로)"""
        return ZoneMatcher.canonical_state(value, getattr(settings, "SHIPPING_STATE_ALIASES", {}))


class CartItemInputSerializer(serializers.Serializer):
    """배송비 계산용 장바구니 아이템 입력"""

    product_id = serializers.CharField(max_length=100, help_text="상품 ID")
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, default="", help_text="상품명")
    quantity = serializers.IntegerField(min_value=1, help_text="수량 (1 이상)")
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, help_text="단가")
    unit_weight = serializers.DecimalField(max_digits=10, decimal_places=3, min_value=0, help_text="단위 무게(kg)")
    eligible_zone_ids = serializers.ListField(
        child=serializers.CharField(max_length=50),
        allow_empty=True,
        help_text="이 상품을 배송할 수 있는 존 코드 목록 (비어 있으면 배송 불가)",
    )


class ShippingOptionsRequestSerializer(serializers.Serializer):
    """배송 옵션 계산 요청"""

    address = AddressSerializer(help_text="배송지")
    items = CartItemInputSerializer(many=True, allow_empty=False, help_text="장바구니 아이템 목록")

    def to_engine_input(self) -> tuple[list[CartItem], Address]:
        """검증된 데이터를 엔진 입력으로 변환"""
        data = self.validated_data
        items = [CartItem(**item) for item in data["items"]]
        return items, Address(**data["address"])


# ===== 응답 Serializers =====


class MessagingOptionOutputSerializer(serializers.Serializer):
    """배송 서비스 정보"""

    name = serializers.CharField()
    base_price = serializers.DecimalField(max_digits=None, decimal_places=2)
    min_days = serializers.IntegerField(allow_null=True)
    max_days = serializers.IntegerField(allow_null=True)


class AssignedItemOutputSerializer(serializers.Serializer):
    """조합에 배정된 아이템"""

    product_id = serializers.CharField()
    name = serializers.CharField()
    quantity = serializers.IntegerField()


class PriceBreakdownOutputSerializer(serializers.Serializer):
    """요금 상세 한 줄"""

    label = serializers.CharField()
    amount = serializers.DecimalField(max_digits=None, decimal_places=2)


class ShippingSelectionOutputSerializer(serializers.Serializer):
    """존 하나가 담당하는 배송"""

    zone_id = serializers.CharField()
    zone_name = serializers.CharField()
    option = MessagingOptionOutputSerializer()
    assigned_items = AssignedItemOutputSerializer(many=True)
    price = serializers.DecimalField(source="pricing.price", max_digits=None, decimal_places=2)
    is_free = serializers.BooleanField(source="pricing.is_free")
    free_reason = serializers.CharField(source="pricing.free_reason")
    breakdown = PriceBreakdownOutputSerializer(source="pricing.breakdown", many=True)
    exceeds_limits = serializers.BooleanField(source="pricing.exceeds_limits")
    limit_reason = serializers.CharField(source="pricing.limit_reason")


class ShippingCombinationSerializer(serializers.Serializer):
    """배송 조합 (정렬된 옵션 하나)"""

    id = serializers.CharField()
    label = serializers.CharField()
    estimated_delivery = serializers.CharField()
    covers_all_items = serializers.BooleanField()
    total_price = serializers.DecimalField(max_digits=None, decimal_places=2)
    is_free = serializers.BooleanField()
    exceeds_limits = serializers.BooleanField()
    forced_fallback = serializers.BooleanField(help_text="True면 허용 존과 무관하게 전국 배송으로 강제 적용된 조합")
    strategy = serializers.CharField()
    selections = ShippingSelectionOutputSerializer(many=True)


class CoverageFailureSerializer(serializers.Serializer):
    """배송 불가 사유"""

    code = serializers.CharField()
    message = serializers.CharField()
    product_id = serializers.CharField(allow_null=True)


class ShippingOptionsResponseSerializer(serializers.Serializer):
    """배송 옵션 계산 응답"""

    available = serializers.BooleanField(source="is_available")
    options = ShippingCombinationSerializer(many=True)
    reason = CoverageFailureSerializer(source="failure", allow_null=True)
