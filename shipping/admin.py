from django.contrib import admin

from .models import MessagingOption, PostalCodeRange, ShippingZone


class PostalCodeRangeInline(admin.TabularInline):
    """우편번호 구간 인라인 (존 수정 페이지에서 함께 편집)"""

    model = PostalCodeRange
    extra = 1
    fields = ["start", "end"]


class MessagingOptionInline(admin.TabularInline):
    """배송 서비스 인라인"""

    model = MessagingOption
    extra = 1
    fields = [
        "name",
        "base_price",
        "min_days",
        "max_days",
        "delivery_time",
        "max_weight_per_package",
        "cost_per_extra_kg",
        "max_products_per_package",
        "cost_per_extra_product",
        "sort_order",
    ]
    ordering = ["sort_order"]


@admin.register(ShippingZone)
class ShippingZoneAdmin(admin.ModelAdmin):
    """
    배송 존 관리자 페이지 설정
    저장/삭제 시 시그널로 활성 존 캐시가 비워집니다.
    """

    list_display = ["name", "code", "scope", "is_active", "free_shipping_display", "option_count", "sort_order"]
    list_filter = ["scope", "is_active", "always_free"]
    search_fields = ["name", "code", "state"]
    list_editable = ["is_active", "sort_order"]
    prepopulated_fields = {"code": ("name",)}
    inlines = [MessagingOptionInline, PostalCodeRangeInline]

    fieldsets = (
        ("기본 정보", {"fields": ("code", "name", "scope", "is_active", "sort_order")}),
        ("적용 지역", {"fields": ("postal_codes", "is_state_wildcard", "state")}),
        ("무료배송", {"fields": ("always_free", "free_shipping_min_amount")}),
    )

    def free_shipping_display(self, obj):
        """무료배송 조건 표시"""
        if obj.always_free:
            return "상시 무료"
        if obj.free_shipping_min_amount is not None:
            return f"{obj.free_shipping_min_amount:,.2f} 이상 무료"
        return "-"

    free_shipping_display.short_description = "무료배송"

    def option_count(self, obj):
        return obj.messaging_options.count()

    option_count.short_description = "배송 서비스 수"
