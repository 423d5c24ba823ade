from __future__ import annotations

import logging
from typing import Any

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from shipping.models.zone import MessagingOption, PostalCodeRange, ShippingZone
from shipping.services.zone_repository import ZoneRepository

logger = logging.getLogger(__name__)


@receiver(post_save, sender=ShippingZone)
@receiver(post_delete, sender=ShippingZone)
@receiver(post_save, sender=PostalCodeRange)
@receiver(post_delete, sender=PostalCodeRange)
@receiver(post_save, sender=MessagingOption)
@receiver(post_delete, sender=MessagingOption)
def invalidate_zone_cache(sender: Any, instance: Any, **kwargs: Any) -> None:
    """
    존 관련 레코드 변경 시그널 핸들러

    존 정의가 바뀌면 다음 배송 옵션 계산에서
    최신 존을 다시 불러오도록 캐시를 비웁니다.
    """
    logger.debug("[signals] 존 캐시 무효화 | sender=%s, pk=%s", sender.__name__, instance.pk)
    ZoneRepository.invalidate()
