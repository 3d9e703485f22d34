"""
Настройки проекта Aislewalk.

ВАЖНО: Номер магазина и путь к кешу можно переопределить через переменные окружения!
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"

# Кеш результатов поиска отделов (JSON, ключ верхнего уровня = номер магазина)
CACHE_PATH = Path(os.getenv("AISLEWALK_CACHE_PATH", str(DATA_DIR / "cache.json")))

# Пользовательский YAML с дополнительными правилами парсинга (опционально)
RULES_OVERLAY_PATH = os.getenv("AISLEWALK_RULES_PATH")

# =============================================================================
# STOREFRONT API
# =============================================================================
STOREFRONT_API_BASE = os.getenv(
    "AISLEWALK_API_BASE",
    "https://storefrontgateway.shoprite.com/api"
)

# Номер магазина: данные об отделах зависят от конкретного магазина
DEFAULT_STORE_ID = os.getenv("AISLEWALK_STORE_ID", "592")
STORE_LABEL = os.getenv("AISLEWALK_STORE_LABEL", "South Plainfield, NJ")

HTTP_TIMEOUT_SECONDS = float(os.getenv("AISLEWALK_HTTP_TIMEOUT", "15"))
HTTP_MAX_RETRIES = 2                 # Повторы сверх первой попытки
HTTP_BACKOFF_BASE_SECONDS = 1.0      # Экспоненциальная задержка: 1s, 2s, 4s...
HTTP_RETRY_STATUSES = {429, 500, 502, 503, 504}

HTTP_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "application/json, text/plain, */*",
    "Origin": "https://www.shoprite.com",
    "Referer": "https://www.shoprite.com/",
    "Authorization": "Bearer anonymous",
    "X-Site-Host": "https://www.shoprite.com",
}

# =============================================================================
# ПОРЯДОК ОБХОДА МАГАЗИНА
# =============================================================================
# Меньшее значение = раньше в маршруте. Данные для магазина #592.
AISLE_SORT_ORDER = {
    "Produce": 1,
    "Bakery": 2,
    "Bread": 3,
    "Deli": 4,
    "Meat": 5,
    "Seafood": 6,
    "Backwall": 7,
    **{f"Aisle {n}": 9 + n for n in range(1, 21)},
    "Dairy": 30,
    "International Cheese": 31,
    "Kosher": 32,
    "Frozen": 33,
    "Natural": 34,
    "Health & Beauty": 35,
    "Pharmacy": 36,
    "Floral": 37,
    "Grocery": 38,
    "Bulk": 39,
    "Customer Service": 40,
    "Unknown": 99,
}

# Отделы, отсутствующие в AISLE_SORT_ORDER, идут перед "Unknown"
UNRANKED_AISLE_ORDER = 98

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================
LOG_LEVEL = os.getenv("AISLEWALK_LOG_LEVEL", "INFO")
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | <level>{message}</level>"
)

# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if not DEFAULT_STORE_ID or not DEFAULT_STORE_ID.isdigit():
        errors.append(
            f"Некорректный номер магазина: '{DEFAULT_STORE_ID}'\n"
            "Укажите числовой AISLEWALK_STORE_ID."
        )

    if HTTP_TIMEOUT_SECONDS <= 0:
        errors.append(f"HTTP таймаут должен быть положительным: {HTTP_TIMEOUT_SECONDS}")

    if RULES_OVERLAY_PATH and not Path(RULES_OVERLAY_PATH).exists():
        errors.append(f"Файл правил не найден: {RULES_OVERLAY_PATH}")

    if errors:
        raise ValueError("\n".join(errors))

    # Создаём директорию кеша если не существует
    CACHE_PATH.parent.mkdir(parents=True, exist_ok=True)

    return True
