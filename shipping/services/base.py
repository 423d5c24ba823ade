"""서비스 레이어 공통 모듈

배송 서비스 클래스에서 공통으로 사용하는 로깅 데코레이터와 예외 클래스를 제공합니다.
"""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

# 제네릭 타입 변수 (반환 타입 보존용)
T = TypeVar("T")

# 이 시간(ms)을 넘기면 느린 실행으로 경고
SLOW_CALL_THRESHOLD_MS = 100


def log_service_call(func: Callable[..., T]) -> Callable[..., T]:
    """
    서비스 메서드 호출 로깅 데코레이터

    기능:
    - 메서드 호출 시작/종료 DEBUG 로깅
    - 실행 시간 측정 (ms)
    - 느린 실행 경고 (100ms 이상)
    - 비즈니스 예외 WARNING 로깅
    - 시스템 예외 ERROR 로깅 (스택 트레이스 포함)

    사용법:
        @classmethod
        @log_service_call
        def some_method(cls, ...):
            ...

    Note:
        - 서비스 이름은 메서드가 정의된 클래스 이름(__qualname__)에서 추출합니다.
        - 장바구니/주소 전체를 찍지 않도록 인자는 개수만 기록합니다.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        qualname = func.__qualname__
        service_name, _, func_name = qualname.rpartition(".")
        service_name = service_name or func.__module__.split(".")[-1]
        start_time = time.perf_counter()

        logger.debug(
            "[%s.%s] 호출 시작 | args=%d, kwargs=%s",
            service_name,
            func_name,
            len(args),
            sorted(kwargs),
        )

        try:
            result = func(*args, **kwargs)
            elapsed = (time.perf_counter() - start_time) * 1000  # ms

            logger.debug(
                "[%s.%s] 호출 완료 | elapsed=%.2fms",
                service_name,
                func_name,
                elapsed,
            )

            if elapsed > SLOW_CALL_THRESHOLD_MS:
                logger.warning(
                    "[%s.%s] 느린 실행 감지 | elapsed=%.2fms",
                    service_name,
                    func_name,
                    elapsed,
                )

            return result

        except Exception as e:
            elapsed = (time.perf_counter() - start_time) * 1000

            # 비즈니스 에러인지 확인 (code 속성 존재 여부로 판단)
            if hasattr(e, "code") and hasattr(e, "message"):
                logger.warning(
                    "[%s.%s] 비즈니스 에러 | code=%s, message=%s, elapsed=%.2fms",
                    service_name,
                    func_name,
                    e.code,
                    e.message,
                    elapsed,
                )
            else:
                logger.error(
                    "[%s.%s] 예외 발생 | error=%s, elapsed=%.2fms",
                    service_name,
                    func_name,
                    str(e),
                    elapsed,
                    exc_info=True,  # 스택 트레이스 포함
                )
            raise

    return wrapper


class ServiceError(Exception):
    """
    서비스 레이어 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        code: 에러 코드 (API 응답에 활용)
        details: 추가 상세 정보 (예: 문제가 된 필드 이름)

    사용법:
        class ShippingServiceError(ServiceError):
            pass

        raise ShippingServiceError("배송지 정보가 없습니다.", code="INVALID_SHIPPING_INPUT")
    """

    def __init__(self, message: str, code: str = "SERVICE_ERROR", details: dict | None = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """API 에러 응답 형태로 변환"""
        return {"error": self.message, "code": self.code, "details": self.details}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"
