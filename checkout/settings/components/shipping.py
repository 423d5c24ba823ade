"""
Shipping Configuration
배송 존 캐시 및 주소 정규화 관련 설정을 관리합니다.
"""

import os

# ==========================================================================
# Zone Cache
# ==========================================================================

# 활성 배송 존 목록 캐시 키 (존/옵션 변경 시 시그널로 무효화)
SHIPPING_ZONE_CACHE_KEY = os.environ.get("SHIPPING_ZONE_CACHE_KEY", "shipping_active_zones_v1")

# 캐시 유지 시간 (초)
SHIPPING_ZONE_CACHE_TIMEOUT = int(os.environ.get("SHIPPING_ZONE_CACHE_TIMEOUT", 60 * 10))

# ==========================================================================
# Address Normalization
# ==========================================================================

# 주 전체 이름 → 존에서 사용하는 표준 주 코드 (멕시코 32개 주)
# 키는 대소문자 구분 없이 비교하며, 악센트 없는 표기도 함께 등록합니다.
SHIPPING_STATE_ALIASES = {
    "aguascalientes": "AGU",
    "baja california": "BCN",
    "baja california norte": "BCN",
    "baja california sur": "BCS",
    "campeche": "CAM",
    "chiapas": "CHP",
    "chihuahua": "CHH",
    "ciudad de méxico": "CMX",
    "ciudad de mexico": "CMX",
    "cdmx": "CMX",
    "coahuila": "COA",
    "colima": "COL",
    "durango": "DUR",
    "guanajuato": "GUA",
    "guerrero": "GRO",
    "hidalgo": "HID",
    "jalisco": "JAL",
    "estado de méxico": "MEX",
    "estado de mexico": "MEX",
    "michoacán": "MIC",
    "michoacan": "MIC",
    "morelos": "MOR",
    "nayarit": "NAY",
    "nuevo león": "NLE",
    "nuevo leon": "NLE",
    "oaxaca": "OAX",
    "puebla": "PUE",
    "querétaro": "QUE",
    "queretaro": "QUE",
    "quintana roo": "ROO",
    "san luis potosí": "SLP",
    "san luis potosi": "SLP",
    "sinaloa": "SIN",
    "sonora": "SON",
    "tabasco": "TAB",
    "tamaulipas": "TAM",
    "tlaxcala": "TLA",
    "veracruz": "VER",
    "yucatán": "YUC",
    "yucatan": "YUC",
    "zacatecas": "ZAC",
}

