from django.apps import AppConfig


class ShippingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "shipping"
    verbose_name = "배송"

    def ready(self):
        """
        앱이 준비되면 시그널 등록

        존/서비스/우편번호 구간이 바뀌면
        활성 존 캐시를 비우도록 합니다.
        """
        import shipping.signals  # noqa
