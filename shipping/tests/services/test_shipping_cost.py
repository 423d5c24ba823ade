"""ShippingCostCalculator 단위 테스트"""

from decimal import Decimal

from shipping.services.shipping_cost_service import ShippingCostCalculator
from shipping.services.shipping_dto import FreeShippingPolicy, PackageConfig
from shipping.tests.factories import CartItemFactory, MessagingOptionFactory, ShippingZoneFactory


class TestShippingCostBasePrice:
    """기본 요금"""

    def test_base_price_only(self):
        """포장 설정이 없으면 기본 요금 그대로"""
        # Arrange
        option = MessagingOptionFactory(base_price=Decimal("100"))
        zone = ShippingZoneFactory(messaging_options=(option,))
        items = [CartItemFactory(quantity=3), CartItemFactory()]

        # Act
        result = ShippingCostCalculator.price_items(zone, option, items)

        # Assert
        assert result.price == Decimal("100")
        assert result.is_free is False
        assert result.free_reason == ""
        assert result.product_count == 4
        assert result.subtotal == Decimal("2000")
        assert result.total_weight == Decimal("4")
        assert [line.amount for line in result.breakdown] == [Decimal("100")]

    def test_no_rounding_during_calculation(self):
        """계산 중 반올림 없음 (소수점 그대로 유지)"""
        # Arrange
        option = MessagingOptionFactory(
            base_price=Decimal("10.005"),
            package_config=PackageConfig(max_weight_per_package=Decimal("1"), cost_per_extra_kg=Decimal("0.333")),
        )
        zone = ShippingZoneFactory(messaging_options=(option,))
        items = [CartItemFactory(unit_weight=Decimal("1.5"))]

        # Act
        result = ShippingCostCalculator.price_items(zone, option, items)

        # Assert
        assert result.price == Decimal("10.005") + Decimal("0.5") * Decimal("0.333")


class TestShippingCostFreeShipping:
    """무료배송 정책"""

    def test_min_order_amount_reached(self):
        """최소 주문 금액 이상이면 무료, 사유에 기준 금액 포함"""
        # Arrange
        option = MessagingOptionFactory(base_price=Decimal("100"))
        zone = ShippingZoneFactory(
            messaging_options=(option,),
            free_shipping=FreeShippingPolicy(min_order_amount=Decimal("1500")),
        )
        items = [CartItemFactory(unit_price=Decimal("800"), quantity=2)]

        # Act
        result = ShippingCostCalculator.price_items(zone, option, items)

        # Assert
        assert result.is_free is True
        assert result.price == Decimal("0")
        assert "1500" in result.free_reason
        assert "1600" in result.free_reason

    def test_exactly_threshold_is_free(self):
        """정확히 기준 금액 (경계값)"""
        # Arrange
        option = MessagingOptionFactory()
        zone = ShippingZoneFactory(
            messaging_options=(option,),
            free_shipping=FreeShippingPolicy(min_order_amount=Decimal("1500")),
        )
        items = [CartItemFactory(unit_price=Decimal("1500"))]

        # Act
        result = ShippingCostCalculator.price_items(zone, option, items)

        # Assert
        assert result.is_free is True

    def test_under_threshold_is_charged(self):
        """기준 금액 미달이면 유료"""
        # Arrange
        option = MessagingOptionFactory(base_price=Decimal("100"))
        zone = ShippingZoneFactory(
            messaging_options=(option,),
            free_shipping=FreeShippingPolicy(min_order_amount=Decimal("1500")),
        )
        items = [CartItemFactory(unit_price=Decimal("1499.99"))]

        # Act
        result = ShippingCostCalculator.price_items(zone, option, items)

        # Assert
        assert result.is_free is False
        assert result.price == Decimal("100")

    def test_always_free_wins_over_threshold(self):
        """상시 무료배송이 최소 금액 조건보다 우선"""
        # Arrange
        option = MessagingOptionFactory(base_price=Decimal("100"))
        zone = ShippingZoneFactory(
            display_name="CABA",
            messaging_options=(option,),
            free_shipping=FreeShippingPolicy(always_free=True, min_order_amount=Decimal("99999")),
        )
        items = [CartItemFactory(unit_price=Decimal("1"))]

        # Act
        result = ShippingCostCalculator.price_items(zone, option, items)

        # Assert
        assert result.is_free is True
        assert result.price == Decimal("0")
        assert "CABA" in result.free_reason

    def test_limits_still_reported_when_free(self):
        """무료배송이어도 포장 한도 초과는 안내"""
        # Arrange
        option = MessagingOptionFactory(package_config=PackageConfig(max_products_per_package=2))
        zone = ShippingZoneFactory(messaging_options=(option,), free_shipping=FreeShippingPolicy(always_free=True))
        items = [CartItemFactory(quantity=3)]

        # Act
        result = ShippingCostCalculator.price_items(zone, option, items)

        # Assert
        assert result.is_free is True
        assert result.exceeds_limits is True


class TestShippingCostPackageConfig:
    """추가 상품 / 초과 무게 요금"""

    def test_extra_weight_charged_per_kg(self):
        """최대 5kg, kg당 50, 총 7kg → 기본 + 100"""
        # Arrange
        option = MessagingOptionFactory(
            base_price=Decimal("100"),
            package_config=PackageConfig(max_weight_per_package=Decimal("5"), cost_per_extra_kg=Decimal("50")),
        )
        zone = ShippingZoneFactory(messaging_options=(option,))
        items = [CartItemFactory(unit_weight=Decimal("3.5"), quantity=2)]

        # Act
        result = ShippingCostCalculator.price_items(zone, option, items)

        # Assert
        assert result.total_weight == Decimal("7")
        assert result.price == Decimal("200")
        assert result.exceeds_limits is True
        assert "7" in result.limit_reason

    def test_weight_under_limit_has_no_surcharge(self):
        """무게 한도 이내면 추가 요금 없음"""
        # Arrange
        option = MessagingOptionFactory(
            base_price=Decimal("100"),
            package_config=PackageConfig(max_weight_per_package=Decimal("5"), cost_per_extra_kg=Decimal("50")),
        )
        zone = ShippingZoneFactory(messaging_options=(option,))

        # Act
        result = ShippingCostCalculator.price_items(zone, option, [CartItemFactory(unit_weight=Decimal("5"))])

        # Assert
        assert result.price == Decimal("100")
        assert result.exceeds_limits is False
        assert result.limit_reason == ""

    def test_extra_product_cost_after_first_unit(self):
        """첫 상품은 기본 요금에 포함, 이후 수량마다 추가 요금"""
        # Arrange
        option = MessagingOptionFactory(
            base_price=Decimal("100"),
            package_config=PackageConfig(cost_per_extra_product=Decimal("15")),
        )
        zone = ShippingZoneFactory(messaging_options=(option,))
        items = [CartItemFactory(quantity=2), CartItemFactory(quantity=2)]

        # Act
        result = ShippingCostCalculator.price_items(zone, option, items)

        # Assert
        assert result.price == Decimal("145")
        assert len(result.breakdown) == 2

    def test_single_product_has_no_extra_product_cost(self):
        """상품 1개면 추가 상품 요금 없음"""
        # Arrange
        option = MessagingOptionFactory(
            base_price=Decimal("100"),
            package_config=PackageConfig(cost_per_extra_product=Decimal("15")),
        )
        zone = ShippingZoneFactory(messaging_options=(option,))

        # Act
        result = ShippingCostCalculator.price_items(zone, option, [CartItemFactory()])

        # Assert
        assert result.price == Decimal("100")

    def test_product_limit_is_advisory_only(self):
        """포장당 최대 상품 수 초과는 안내만 하고 요금은 그대로"""
        # Arrange
        option = MessagingOptionFactory(
            base_price=Decimal("100"),
            package_config=PackageConfig(max_products_per_package=3),
        )
        zone = ShippingZoneFactory(messaging_options=(option,))

        # Act
        result = ShippingCostCalculator.price_items(zone, option, [CartItemFactory(quantity=5)])

        # Assert
        assert result.price == Decimal("100")
        assert result.exceeds_limits is True
        assert "5개" in result.limit_reason

    def test_price_never_decreases_when_quantity_or_weight_grows(self):
        """수량/무게가 늘어도 요금은 줄지 않음 (무료배송 기준 미적용 시)"""
        # Arrange
        option = MessagingOptionFactory(
            base_price=Decimal("100"),
            package_config=PackageConfig(
                max_weight_per_package=Decimal("5"),
                cost_per_extra_kg=Decimal("50"),
                cost_per_extra_product=Decimal("10"),
            ),
        )
        zone = ShippingZoneFactory(messaging_options=(option,))

        # Act
        prices = [
            ShippingCostCalculator.price_items(
                zone, option, [CartItemFactory(quantity=quantity, unit_weight=Decimal(weight))]
            ).price
            for quantity, weight in [(1, "1"), (2, "1"), (2, "3"), (4, "3"), (4, "4.5")]
        ]

        # Assert
        assert prices == sorted(prices)
