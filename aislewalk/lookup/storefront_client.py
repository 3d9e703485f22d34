"""
Storefront Client - Поиск отдела товара через API магазина.

ЦКП: AisleLocation для поискового ключа (ILocationProvider).

Алгоритм:
1. GET /stores/{id}/multisearch?q=<term>&take=1 -> sku первого товара
2. GET /stores/{id}/products/{sku} -> productLocation.aisle
3. Разбор текста отдела (aisle_parser)
"""

import time
from typing import Any, Dict, Optional

import requests
from loguru import logger

from config.settings import (
    STOREFRONT_API_BASE,
    DEFAULT_STORE_ID,
    HTTP_TIMEOUT_SECONDS,
    HTTP_MAX_RETRIES,
    HTTP_BACKOFF_BASE_SECONDS,
    HTTP_RETRY_STATUSES,
    HTTP_HEADERS,
)
from contracts.d2_lookup_dto import AisleLocation

from .aisle_parser import AisleTextParser
from .domain.exceptions import LookupRequestError, LookupResponseError
from .domain.interfaces import ILocationProvider


class StorefrontClient(ILocationProvider):
    """
    HTTP клиент storefront API (домен Lookup).

    Повторяет запрос при 429/5xx и сетевых ошибках с экспоненциальной задержкой.
    """

    def __init__(
        self,
        store_id: str = DEFAULT_STORE_ID,
        api_base: str = STOREFRONT_API_BASE,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = HTTP_TIMEOUT_SECONDS,
        max_retries: int = HTTP_MAX_RETRIES,
        backoff_base_seconds: float = HTTP_BACKOFF_BASE_SECONDS,
    ):
        self.store_id = store_id
        self.api_base = api_base.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.backoff_base_seconds = backoff_base_seconds
        self.aisle_parser = AisleTextParser()

        self.session = session or requests.Session()
        self.session.headers.update(HTTP_HEADERS)

    def locate(self, term: str) -> AisleLocation:
        search = self._get_json(
            f"/stores/{self.store_id}/multisearch",
            params={"q": term, "take": 1},
        )

        product = self._first_product(search)
        if not isinstance(product, dict) or not product.get("sku"):
            logger.debug(f"[StorefrontClient] '{term}': нет результатов")
            return AisleLocation.unknown()

        detail = self._get_json(f"/stores/{self.store_id}/products/{product['sku']}")
        location = detail.get("productLocation") or {}
        if not isinstance(location, dict):
            raise LookupResponseError(
                message=f"Неожиданный формат productLocation для sku={product['sku']}",
                component="StorefrontClient"
            )
        if not location.get("aisle"):
            logger.debug(f"[StorefrontClient] '{term}': нет расположения (sku={product['sku']})")
            return AisleLocation.unknown()

        return self.aisle_parser.parse(str(location["aisle"]))

    @staticmethod
    def _first_product(search: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        items[0].items[0] из ответа multisearch.

        Raises:
            LookupResponseError: Если items не список (или группа не объект)
        """
        groups = search.get("items") or []
        if not isinstance(groups, list):
            raise LookupResponseError(
                message="Неожиданный формат items в ответе multisearch",
                component="StorefrontClient"
            )
        if not groups:
            return None

        group = groups[0]
        products = (group.get("items") or []) if isinstance(group, dict) else None
        if not isinstance(products, list):
            raise LookupResponseError(
                message="Неожиданный формат группы товаров в ответе multisearch",
                component="StorefrontClient"
            )
        return products[0] if products else None

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = self.api_base + path
        resp = self._get_with_retries(url, params)

        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise LookupRequestError(
                message=f"API вернул {resp.status_code}: {url}",
                component="StorefrontClient",
                original_error=e
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise LookupResponseError(
                message=f"Некорректный JSON в ответе: {url}",
                component="StorefrontClient",
                original_error=e
            )

        if not isinstance(data, dict):
            raise LookupResponseError(
                message=f"Ожидался JSON объект: {url}",
                component="StorefrontClient"
            )
        return data

    def _get_with_retries(self, url: str, params: Optional[Dict[str, Any]]) -> requests.Response:
        """GET с повторами для сетевых ошибок и статусов HTTP_RETRY_STATUSES."""
        last_exc: Optional[BaseException] = None

        for attempt in range(1, self.max_retries + 2):
            try:
                resp = self.session.get(url, params=params, timeout=self.timeout_seconds)
                if resp.status_code not in HTTP_RETRY_STATUSES:
                    return resp
                last_exc = requests.HTTPError(f"HTTP {resp.status_code}", response=resp)
            except requests.RequestException as exc:
                last_exc = exc

            if attempt >= self.max_retries + 1:
                break
            backoff = self.backoff_base_seconds * (2 ** (attempt - 1))
            logger.debug(f"[StorefrontClient] Повтор через {backoff:.1f}s: {last_exc}")
            time.sleep(backoff)

        raise LookupRequestError(
            message=f"Запрос не удался после {self.max_retries + 1} попыток: {url}",
            component="StorefrontClient",
            original_error=last_exc
        )
