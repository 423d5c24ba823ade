from .zone import MessagingOption, PostalCodeRange, ShippingZone

__all__ = [
    "ShippingZone",
    "PostalCodeRange",
    "MessagingOption",
]
