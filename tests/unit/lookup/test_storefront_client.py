"""
Unit-тесты для StorefrontClient.

ЦКП: Поиск sku, разбор расположения, повторы при 429/5xx.
"""

import pytest
import requests
from unittest.mock import MagicMock, patch

from aislewalk.lookup import StorefrontClient
from aislewalk.lookup.domain.exceptions import LookupRequestError, LookupResponseError


def make_response(status_code: int = 200, payload=None) -> MagicMock:
    """Создаёт ответ requests с заданным статусом и JSON."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload if payload is not None else {}
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"HTTP {status_code}")
    return resp


def search_payload(sku: str = "123") -> dict:
    return {"items": [{"items": [{"sku": sku, "name": "Whole Milk"}]}]}


def detail_payload(aisle: str) -> dict:
    return {"productLocation": {"aisle": aisle}}


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return StorefrontClient(store_id="592", api_base="https://api.test/api/", session=session)


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("aislewalk.lookup.storefront_client.time.sleep") as sleep:
        yield sleep


class TestLocate:
    """Тесты успешного поиска."""

    def test_locate_found(self, client, session):
        session.get.side_effect = [
            make_response(payload=search_payload("123")),
            make_response(payload=detail_payload("12B")),
        ]

        location = client.locate("milk")

        assert location.aisle == "Aisle 12"
        assert location.bay == "B"

        search_call, detail_call = session.get.call_args_list
        assert search_call.args[0] == "https://api.test/api/stores/592/multisearch"
        assert search_call.kwargs["params"] == {"q": "milk", "take": 1}
        assert detail_call.args[0] == "https://api.test/api/stores/592/products/123"

    def test_no_search_results(self, client, session):
        session.get.return_value = make_response(payload={"items": []})

        location = client.locate("unobtainium")

        assert location.is_unknown
        assert session.get.call_count == 1

    def test_product_without_location(self, client, session):
        session.get.side_effect = [
            make_response(payload=search_payload()),
            make_response(payload={"productLocation": None}),
        ]

        assert client.locate("milk").is_unknown

    def test_default_headers_applied(self, session):
        StorefrontClient(session=session)

        session.headers.update.assert_called_once()


class TestRetries:
    """Тесты повторов."""

    def test_retry_on_503_then_success(self, client, session, no_sleep):
        session.get.side_effect = [
            make_response(status_code=503),
            make_response(payload=search_payload()),
            make_response(payload=detail_payload("DAIRY")),
        ]

        location = client.locate("milk")

        assert location.aisle == "Dairy"
        assert session.get.call_count == 3
        no_sleep.assert_called_once_with(1.0)

    def test_exponential_backoff_exhausted(self, client, session, no_sleep):
        session.get.return_value = make_response(status_code=429)

        with pytest.raises(LookupRequestError):
            client.locate("milk")

        # 1 попытка + 2 повтора
        assert session.get.call_count == 3
        assert [c.args[0] for c in no_sleep.call_args_list] == [1.0, 2.0]

    def test_network_error_retried(self, client, session):
        session.get.side_effect = requests.ConnectionError("boom")

        with pytest.raises(LookupRequestError) as exc_info:
            client.locate("milk")

        assert session.get.call_count == 3
        assert isinstance(exc_info.value.original_error, requests.ConnectionError)

    def test_404_not_retried(self, client, session, no_sleep):
        session.get.return_value = make_response(status_code=404)

        with pytest.raises(LookupRequestError):
            client.locate("milk")

        assert session.get.call_count == 1
        no_sleep.assert_not_called()


class TestResponseErrors:
    """Тесты некорректных ответов."""

    def test_invalid_json(self, client, session):
        resp = make_response()
        resp.json.side_effect = ValueError("no json")
        session.get.return_value = resp

        with pytest.raises(LookupResponseError):
            client.locate("milk")

    def test_non_object_json(self, client, session):
        session.get.return_value = make_response(payload=["not", "an", "object"])

        with pytest.raises(LookupResponseError):
            client.locate("milk")


class TestResponseShape:
    """Тесты ответов неожиданной структуры."""

    def test_product_location_not_object(self, client, session):
        session.get.side_effect = [
            make_response(payload=search_payload()),
            make_response(payload={"productLocation": "AISLE 5"}),
        ]

        with pytest.raises(LookupResponseError):
            client.locate("milk")

    def test_search_items_not_list(self, client, session):
        session.get.return_value = make_response(payload={"items": {"sku": "123"}})

        with pytest.raises(LookupResponseError):
            client.locate("milk")

    def test_search_group_items_not_list(self, client, session):
        session.get.return_value = make_response(payload={"items": [{"items": "123"}]})

        with pytest.raises(LookupResponseError):
            client.locate("milk")

    def test_search_group_not_object(self, client, session):
        session.get.return_value = make_response(payload={"items": ["123"]})

        with pytest.raises(LookupResponseError):
            client.locate("milk")

    def test_numeric_aisle_value(self, client, session):
        session.get.side_effect = [
            make_response(payload=search_payload()),
            make_response(payload={"productLocation": {"aisle": 7}}),
        ]

        assert client.locate("milk").aisle == "Aisle 7"
