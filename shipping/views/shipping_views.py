from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import permissions, serializers as drf_serializers, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from shipping.serializers import ShippingOptionsRequestSerializer, ShippingOptionsResponseSerializer
from shipping.services.base import ServiceError
from shipping.services.shipping_service import ShippingService

logger = logging.getLogger(__name__)


# ===== Swagger 문서화용 응답 Serializers =====


class ShippingErrorResponseSerializer(drf_serializers.Serializer):
    """배송 옵션 계산 에러 응답"""

    error = drf_serializers.CharField()
    code = drf_serializers.CharField()
    details = drf_serializers.DictField(required=False)


class ShippingOptionsView(APIView):
    """
    배송 옵션 계산 API

    체크아웃 화면에서 배송지 입력 후 호출합니다.
    회원/비회원 모두 사용 가능하며, 존 정보는 캐시된 활성 존을 사용합니다.
    """

    permission_classes = [permissions.AllowAny]

    @extend_schema(
        request=ShippingOptionsRequestSerializer,
        responses={
            200: ShippingOptionsResponseSerializer,
            400: ShippingErrorResponseSerializer,
        },
        summary="배송 옵션 계산",
        description="""
장바구니와 배송지로 선택 가능한 배송 조합을 계산합니다.

**요청 본문:**
```json
{
    "address": {"zip": "1425", "provincia": "CABA"},
    "items": [
        {"product_id": "p1", "quantity": 2, "unit_price": "500.00",
         "unit_weight": "1.5", "eligible_zone_ids": ["caba", "nacional"]}
    ]
}
```

**응답 사용법:**
- `options`: 가격 오름차순 정렬, 첫 번째가 기본 선택 추천
- `available=false`면 `reason`을 안내하고 체크아웃을 진행하지 않음
- `forced_fallback=true`인 옵션은 상품 설정과 무관하게 전국 배송으로 강제 적용된 것이므로 사용자에게 안내
        """,
        tags=["배송"],
    )
    def post(self, request: Request) -> Response:
        """배송 옵션 계산"""
        serializer = ShippingOptionsRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        cart_items, address = serializer.to_engine_input()

        try:
            result = ShippingService.resolve(cart_items, address)
        except ServiceError as e:
            return Response(e.to_dict(), status=status.HTTP_400_BAD_REQUEST)

        if not result.is_available:
            logger.info(
                "[ShippingOptionsView] 배송 불가 응답 | code=%s, postal_code=%s",
                result.failure.code if result.failure else None,
                address.postal_code,
            )

        return Response(ShippingOptionsResponseSerializer(result).data, status=status.HTTP_200_OK)
