"""
shipping/serializers/__init__.py

Serializer 모듈의 진입점입니다.

사용 예시:
    from shipping.serializers import ShippingOptionsRequestSerializer
"""

from .shipping_serializers import (
    AddressSerializer,
    CartItemInputSerializer,
    CoverageFailureSerializer,
    ShippingCombinationSerializer,
    ShippingOptionsRequestSerializer,
    ShippingOptionsResponseSerializer,
)

__all__ = [
    "AddressSerializer",
    "CartItemInputSerializer",
    "CoverageFailureSerializer",
    "ShippingCombinationSerializer",
    "ShippingOptionsRequestSerializer",
    "ShippingOptionsResponseSerializer",
]
