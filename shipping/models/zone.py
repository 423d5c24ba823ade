from __future__ import annotations

from typing import Any

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from shipping.services.shipping_dto import ZoneScope


class ShippingZone(models.Model):
    """
    배송 존 모델
    어떤 배송지(우편번호/주)에 어떤 배송 서비스가 적용되는지 정의합니다.
    """

    # 엔진에서 존 ID로 사용 (상품의 배송 가능 존 목록이 이 값을 참조)
    code = models.SlugField(
        max_length=50,
        unique=True,
        verbose_name="존 코드",
        help_text="상품의 배송 가능 존 목록에서 참조하는 고유 코드",
    )

    name = models.CharField(max_length=100, verbose_name="존 이름")

    scope = models.CharField(
        max_length=20,
        choices=ZoneScope.choices,
        default=ZoneScope.OTHER,
        verbose_name="배송 범위",
    )

    is_active = models.BooleanField(
        default=True,
        db_index=True,
        verbose_name="활성 상태",
        help_text="비활성 존은 배송 옵션 계산에서 제외됩니다.",
    )

    # 위치 조건 (하나도 없으면 모든 배송지에 적용)
    postal_codes = models.JSONField(
        default=list,
        blank=True,
        verbose_name="우편번호 목록",
        help_text='명시적으로 포함되는 우편번호 (예: ["1425", "1426"])',
    )

    is_state_wildcard = models.BooleanField(
        default=False,
        verbose_name="주 전체 적용",
        help_text="체크하면 아래 주(state)에 속한 모든 배송지에 적용됩니다.",
    )

    state = models.CharField(max_length=100, blank=True, verbose_name="주(state)")

    # 무료배송 정책 (둘 중 하나만 설정 가능)
    always_free = models.BooleanField(default=False, verbose_name="상시 무료배송")

    free_shipping_min_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name="무료배송 최소 주문 금액",
    )

    sort_order = models.PositiveIntegerField(
        default=0,
        db_index=True,
        verbose_name="정렬 순서",
        help_text="같은 범위의 존이 여러 개면 순서가 빠른 존이 먼저 선택됩니다.",
    )

    # 시간 정보
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="생성일시")

    updated_at = models.DateTimeField(auto_now=True, verbose_name="수정일시")

    class Meta:
        db_table = "shipping_zones"
        verbose_name = "배송 존"
        verbose_name_plural = "배송 존 목록"
        ordering = ["sort_order", "id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"

    def clean(self) -> None:
        """유효성 검사"""
        # 상시 무료배송과 최소 금액 조건은 동시에 설정할 수 없음
        if self.always_free and self.free_shipping_min_amount is not None:
            raise ValidationError("상시 무료배송과 무료배송 최소 주문 금액은 동시에 설정할 수 없습니다.")

        if self.is_state_wildcard and not self.state.strip():
            raise ValidationError({"state": "주 전체 적용 존은 주(state)를 입력해야 합니다."})

        if not isinstance(self.postal_codes, list):
            raise ValidationError({"postal_codes": "우편번호 목록은 리스트여야 합니다."})

    def save(self, *args: Any, **kwargs: Any) -> None:
        """저장 전 유효성 검사"""
        self.full_clean()
        super().save(*args, **kwargs)


class PostalCodeRange(models.Model):
    """우편번호 구간 (양 끝 포함)"""

    zone = models.ForeignKey(
        ShippingZone,
        on_delete=models.CASCADE,
        related_name="postal_code_ranges",
        verbose_name="배송 존",
    )

    start = models.CharField(max_length=20, verbose_name="시작 우편번호")

    end = models.CharField(max_length=20, verbose_name="끝 우편번호")

    class Meta:
        db_table = "shipping_postal_code_ranges"
        verbose_name = "우편번호 구간"
        verbose_name_plural = "우편번호 구간 목록"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.start} ~ {self.end}"

    def clean(self) -> None:
        """유효성 검사"""
        start = self.start.strip()
        end = self.end.strip()
        if start.isdigit() and end.isdigit():
            out_of_order = int(start) > int(end)
        else:
            out_of_order = start > end
        if out_of_order:
            raise ValidationError("시작 우편번호는 끝 우편번호보다 클 수 없습니다.")

    def save(self, *args: Any, **kwargs: Any) -> None:
        """저장 전 유효성 검사"""
        self.full_clean()
        super().save(*args, **kwargs)


class MessagingOption(models.Model):
    """
    존 안의 배송 서비스 (택배사/서비스 등급)
    기본 요금과 포장 단위 초과 요금을 정의합니다.
    """

    zone = models.ForeignKey(
        ShippingZone,
        on_delete=models.CASCADE,
        related_name="messaging_options",
        verbose_name="배송 존",
    )

    name = models.CharField(max_length=100, verbose_name="서비스 이름")

    base_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        verbose_name="기본 요금",
    )

    # 배송 기간 (비어 있으면 delivery_time 문구에서 추출)
    min_days = models.PositiveIntegerField(null=True, blank=True, verbose_name="최소 배송일")

    max_days = models.PositiveIntegerField(null=True, blank=True, verbose_name="최대 배송일")

    delivery_time = models.CharField(
        max_length=100,
        blank=True,
        verbose_name="배송 기간 문구",
        help_text='예: "1-3 días", "2일"',
    )

    # 포장 단위 설정 (모두 선택)
    max_weight_per_package = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name="포장당 최대 무게(kg)",
    )

    cost_per_extra_kg = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name="초과 kg당 요금",
    )

    max_products_per_package = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name="포장당 최대 상품 수",
    )

    cost_per_extra_product = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name="추가 상품당 요금",
    )

    sort_order = models.PositiveIntegerField(default=0, verbose_name="정렬 순서")

    class Meta:
        db_table = "shipping_messaging_options"
        verbose_name = "배송 서비스"
        verbose_name_plural = "배송 서비스 목록"
        ordering = ["sort_order", "id"]

    def __str__(self) -> str:
        return f"{self.zone.name} - {self.name}"

    def clean(self) -> None:
        """유효성 검사"""
        if self.min_days is not None and self.max_days is not None and self.min_days > self.max_days:
            raise ValidationError("최소 배송일은 최대 배송일보다 클 수 없습니다.")

    def save(self, *args: Any, **kwargs: Any) -> None:
        """저장 전 유효성 검사"""
        self.full_clean()
        super().save(*args, **kwargs)

    @property
    def has_package_config(self) -> bool:
        return any(
            value is not None
            for value in (
                self.max_weight_per_package,
                self.cost_per_extra_kg,
                self.max_products_per_package,
                self.cost_per_extra_product,
            )
        )
