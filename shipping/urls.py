from django.urls import path

from shipping.views.shipping_views import ShippingOptionsView

urlpatterns = [
    # 배송 옵션 계산
    path("shipping/options/", ShippingOptionsView.as_view(), name="shipping-options"),
]
