"""Tests for the LLM-backed bill parser and the Ollama provider."""

from unittest.mock import AsyncMock

import httpx
import pytest

from swipelite.core.exceptions import (
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
    ParsingFailedError,
)
from swipelite.core.interfaces import LLMResponse
from swipelite.infrastructure.llm import LLMBillParser, OllamaProvider
from swipelite.infrastructure.llm.bill_parser import BILL_SCHEMA


@pytest.fixture
def mock_llm():
    llm = AsyncMock()
    llm.generate = AsyncMock()
    return llm


class TestLLMBillParser:
    """Tests for LLMBillParser."""

    async def test_parses_json(self, mock_llm):
        mock_llm.generate.return_value = LLMResponse(
            text='{"customerName": "Rohan", "phone": "9876543210", "items": '
            '[{"name": "coffee beans", "quantity": 2, "price": 450}]}',
            model="test",
        )
        bill = await LLMBillParser(mock_llm).parse("2 coffee beans for Rohan 9876543210")

        assert bill.customer_name == "Rohan"
        assert bill.phone == "9876543210"
        assert len(bill.items) == 1
        assert bill.items[0].name == "coffee beans"
        assert bill.items[0].quantity == 2
        assert bill.items[0].price == 450

    async def test_prompt_and_schema(self, mock_llm):
        mock_llm.generate.return_value = LLMResponse(text='{"items": []}', model="test")
        await LLMBillParser(mock_llm).parse("1 honey")

        kwargs = mock_llm.generate.call_args.kwargs
        assert '"1 honey"' in kwargs["prompt"]
        assert kwargs["json_schema"] == BILL_SCHEMA
        assert kwargs["system_prompt"]

    async def test_missing_customer_ok(self, mock_llm):
        mock_llm.generate.return_value = LLMResponse(
            text='{"items": [{"name": "tea", "quantity": 1, "price": 20}]}', model="test"
        )
        bill = await LLMBillParser(mock_llm).parse("1 tea")
        assert bill.customer_name is None

    @pytest.mark.parametrize(
        "text",
        [
            "Sure! Here is your bill",
            '{"items": [{"name": "tea"}]}',
            '{"items": "many"}',
        ],
    )
    async def test_malformed_json_raises(self, mock_llm, text):
        mock_llm.generate.return_value = LLMResponse(text=text, model="test")
        with pytest.raises(ParsingFailedError):
            await LLMBillParser(mock_llm).parse("something")

    async def test_llm_errors_propagate(self, mock_llm):
        mock_llm.generate.side_effect = LLMUnavailableError("ollama", "down")
        with pytest.raises(LLMUnavailableError):
            await LLMBillParser(mock_llm).parse("1 tea")

    def test_default_provider_is_ollama(self):
        assert isinstance(LLMBillParser()._get_llm(), OllamaProvider)


class TestOllamaProvider:
    """Tests for OllamaProvider with the HTTP layer mocked."""

    @pytest.fixture
    def provider(self, monkeypatch):
        monkeypatch.setenv("LLM_HOST", "http://ollama.test:11434/")
        monkeypatch.setenv("LLM_MODEL_NAME", "test-model")
        from swipelite.config import reset_settings

        reset_settings()
        return OllamaProvider()

    def test_settings(self, provider):
        assert provider.host == "http://ollama.test:11434"
        assert provider.model == "test-model"

    async def test_generate_payload(self, provider, monkeypatch):
        request = AsyncMock(return_value={"response": '{"items": []}', "done": True})
        monkeypatch.setattr(provider, "_make_request", request)

        response = await provider.generate("prompt", system_prompt="sys", json_schema=BILL_SCHEMA)

        assert response.text == '{"items": []}'
        assert response.model == "test-model"
        endpoint, payload = request.call_args.args
        assert endpoint == "api/generate"
        assert payload["model"] == "test-model"
        assert payload["system"] == "sys"
        assert payload["format"] == BILL_SCHEMA
        assert payload["stream"] is False

    async def test_empty_response(self, provider, monkeypatch):
        monkeypatch.setattr(
            provider, "_make_request", AsyncMock(return_value={"response": "  ", "done": True})
        )
        with pytest.raises(LLMResponseError):
            await provider.generate("prompt")

    async def test_connection_error_mapped(self, provider, monkeypatch):
        request = AsyncMock(side_effect=httpx.ConnectError("refused"))
        monkeypatch.setattr(provider, "_make_request", request)

        with pytest.raises(LLMUnavailableError):
            await provider.generate("prompt")
        assert request.call_count == 1

    async def test_timeout_mapped(self, provider, monkeypatch):
        monkeypatch.setattr(
            provider, "_make_request", AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        )
        with pytest.raises(LLMTimeoutError):
            await provider.generate("prompt")

    async def test_retries_when_configured(self, monkeypatch):
        monkeypatch.setenv("LLM_MAX_RETRIES", "3")
        monkeypatch.setenv("LLM_RETRY_DELAY", "0")
        from swipelite.config import reset_settings

        reset_settings()
        provider = OllamaProvider()
        request = AsyncMock(
            side_effect=[
                httpx.ConnectError("refused"),
                {"response": '{"items": []}', "done": True},
            ]
        )
        monkeypatch.setattr(provider, "_make_request", request)

        response = await provider.generate("prompt")

        assert response.text == '{"items": []}'
        assert request.call_count == 2


class TestOllamaProviderTransport:
    """OllamaProvider against a mocked HTTP transport."""

    @staticmethod
    def _provider(handler) -> OllamaProvider:
        return OllamaProvider(host="http://ollama.test", transport=httpx.MockTransport(handler))

    async def test_generate_over_http(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/generate"
            return httpx.Response(200, json={"response": '{"items": []}', "done": True})

        response = await self._provider(handler).generate("prompt")
        assert response.text == '{"items": []}'

    async def test_non_json_body(self):
        provider = self._provider(lambda request: httpx.Response(200, text="<html>Bad gateway</html>"))
        with pytest.raises(LLMResponseError):
            await provider.generate("prompt")

    async def test_non_object_body(self):
        provider = self._provider(lambda request: httpx.Response(200, json=["response"]))
        with pytest.raises(LLMResponseError):
            await provider.generate("prompt")

    async def test_http_error_status(self):
        provider = self._provider(lambda request: httpx.Response(502, text="Bad gateway"))
        with pytest.raises(LLMUnavailableError):
            await provider.generate("prompt")

    async def test_health_with_unreadable_tags(self):
        provider = self._provider(lambda request: httpx.Response(200, text="not json"))
        health = await provider.check_health()
        assert not health.available

    async def test_health_model_pulled(self):
        provider = self._provider(
            lambda request: httpx.Response(200, json={"models": [{"name": provider.model}]})
        )
        health = await provider.check_health()
        assert health.available

    async def test_bill_parser_reports_bad_body(self):
        provider = self._provider(lambda request: httpx.Response(200, text="<html>Bad gateway</html>"))
        with pytest.raises(LLMResponseError):
            await LLMBillParser(provider).parse("2 coffee")
