"""배송 Serializer 단위 테스트"""

from decimal import Decimal

from shipping.serializers import AddressSerializer, ShippingOptionsRequestSerializer
from shipping.services.shipping_dto import Address, CartItem


class TestAddressSerializer:
    """배송지 동의어/정규화"""

    def test_postal_code_synonyms(self):
        """postalCode, zip, zipcode, codigo_postal 모두 postal_code로 변환"""
        for key in ("postalCode", "zip", "zipcode", "codigo_postal"):
            # Act
            serializer = AddressSerializer(data={key: "1425"})

            # Assert
            assert serializer.is_valid(), serializer.errors
            assert serializer.validated_data["postal_code"] == "1425"

    def test_standard_field_wins_over_synonym(self):
        """표준 필드가 있으면 동의어는 무시"""
        # Act
        serializer = AddressSerializer(data={"postal_code": "1425", "zip": "9999"})

        # Assert
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["postal_code"] == "1425"

    def test_strips_spaces_and_hyphens(self):
        """우편번호 공백/하이픈 제거"""
        # Act
        serializer = AddressSerializer(data={"postal_code": " 14-25 "})

        # Assert
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["postal_code"] == "1425"

    def test_only_hyphens_is_invalid(self):
        """하이픈만 있으면 우편번호 없음으로 처리"""
        # Act
        serializer = AddressSerializer(data={"postal_code": "--"})

        # Assert
        assert serializer.is_valid() is False
        assert "postal_code" in serializer.errors

    def test_state_city_country_synonyms(self):
        """provincia/ciudad/pais 동의어"""
        # Act
        serializer = AddressSerializer(
            data={"postal_code": "44100", "provincia": "Jalisco", "localidad": "Guadalajara", "pais": "MX"}
        )

        # Assert
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["state"] == "JAL"
        assert serializer.validated_data["city"] == "Guadalajara"
        assert serializer.validated_data["country"] == "MX"

    def test_default_aliases_ignore_case_and_accents(self):
        """기본 변환표: 대소문자 무시, 악센트 없는 표기와 약칭도 같은 코드"""
        for state in ("Ciudad de México", "CIUDAD DE MEXICO", "cdmx"):
            # Act
            serializer = AddressSerializer(data={"postal_code": "06700", "state": state})

            # Assert
            assert serializer.is_valid(), serializer.errors
            assert serializer.validated_data["state"] == "CMX"


    def test_state_aliases_from_settings(self, settings):
        """주 이름 변환표는 설정에서 읽음"""
        # Arrange
        settings.SHIPPING_STATE_ALIASES = {"tierra del fuego": "TF"}

        # Act
        serializer = AddressSerializer(data={"postal_code": "9410", "estado": " Tierra del Fuego "})

        # Assert
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["state"] == "TF"

    def test_unknown_state_kept_as_is(self):
        """변환표에 없는 주는 그대로"""
        serializer = AddressSerializer(data={"postal_code": "1425", "state": "CABA"})

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["state"] == "CABA"


class TestShippingOptionsRequestSerializer:
    """요청 → 엔진 입력 변환"""

    def test_to_engine_input(self):
        """검증된 데이터를 CartItem/Address로 변환"""
        # Arrange
        serializer = ShippingOptionsRequestSerializer(
            data={
                "address": {"zip": "1425", "provincia": "CABA"},
                "items": [
                    {
                        "product_id": 7,
                        "quantity": 2,
                        "unit_price": "10.50",
                        "unit_weight": "0.250",
                        "eligible_zone_ids": ["caba"],
                    }
                ],
            }
        )

        # Act
        assert serializer.is_valid(), serializer.errors
        items, address = serializer.to_engine_input()

        # Assert
        assert address == Address(postal_code="1425", state="CABA", city="", country="")
        assert items == [
            CartItem(
                product_id="7",
                quantity=2,
                unit_price=Decimal("10.50"),
                unit_weight=Decimal("0.250"),
                eligible_zone_ids=("caba",),
                name="",
            )
        ]

    def test_negative_price_rejected(self):
        """음수 가격은 검증 실패"""
        # Act
        serializer = ShippingOptionsRequestSerializer(
            data={
                "address": {"postal_code": "1425"},
                "items": [
                    {
                        "product_id": "p1",
                        "quantity": 1,
                        "unit_price": "-1",
                        "unit_weight": "1",
                        "eligible_zone_ids": [],
                    }
                ],
            }
        )

        # Assert
        assert serializer.is_valid() is False
        assert "unit_price" in serializer.errors["items"][0]
