"""Unit tests for SaveInvoiceUseCase and BusinessInsightsUseCase."""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from swipelite.application.invoice_composer import InvoiceComposer
from swipelite.application.use_cases import (
    FALLBACK_INSIGHTS,
    BusinessInsightsUseCase,
    SaveInvoiceUseCase,
)
from swipelite.core.exceptions import LLMUnavailableError, ValidationError
from swipelite.core.interfaces import LLMResponse
from swipelite.infrastructure.llm import OllamaProvider


class TestSaveInvoiceUseCase:
    """Tests for SaveInvoiceUseCase."""

    async def test_creates_invoice(self, state):
        composer = InvoiceComposer.new(state)
        composer.select_customer("c1")
        composer.add_product(state.get_product("1"))

        result = await SaveInvoiceUseCase(state).execute(composer)

        assert result.created
        assert state.invoices[0].id == result.invoice.id
        assert result.invoice.grand_total == pytest.approx(531.0)

    async def test_updates_existing(self, state):
        composer = InvoiceComposer.new(state)
        composer.select_customer("c1")
        composer.add_product(state.get_product("1"))
        first = await SaveInvoiceUseCase(state).execute(composer)

        editor = InvoiceComposer.edit(state, first.invoice)
        editor.add_product(state.get_product("2"))
        second = await SaveInvoiceUseCase(state).execute(editor)

        assert not second.created
        assert second.invoice.id == first.invoice.id
        assert len(state.invoices) == 1
        assert state.invoices[0].subtotal == pytest.approx(770)

    async def test_validation_propagates(self, state):
        composer = InvoiceComposer.new(state)
        composer.add_product(state.get_product("1"))
        with pytest.raises(ValidationError):
            await SaveInvoiceUseCase(state).execute(composer)
        assert state.invoices == []


class TestBusinessInsightsUseCase:
    """Tests for BusinessInsightsUseCase."""

    @pytest.fixture
    def mock_llm(self):
        llm = AsyncMock()
        llm.generate = AsyncMock()
        return llm

    async def test_returns_model_insights(self, mock_llm, sample_invoice, coffee):
        mock_llm.generate.return_value = LLMResponse(
            text=json.dumps(["Coffee sells best", "Chase INV-123456", "Bundle honey"]),
            model="test",
        )
        insights = await BusinessInsightsUseCase(mock_llm).execute([sample_invoice], [coffee])

        assert insights == ["Coffee sells best", "Chase INV-123456", "Bundle honey"]
        prompt = mock_llm.generate.call_args.kwargs["prompt"]
        assert "INV-123456" in prompt
        assert "Premium Coffee Beans" in prompt

    async def test_truncates_to_three(self, mock_llm):
        mock_llm.generate.return_value = LLMResponse(text='["a", "b", "c", "d"]', model="test")
        assert await BusinessInsightsUseCase(mock_llm).execute([], []) == ["a", "b", "c"]

    async def test_llm_failure_fallback(self, mock_llm):
        mock_llm.generate.side_effect = LLMUnavailableError("ollama")
        assert await BusinessInsightsUseCase(mock_llm).execute([], []) == FALLBACK_INSIGHTS

    @pytest.mark.parametrize("text", ["not json", '{"a": 1}', "[]", '["  "]'])
    async def test_unusable_answer_fallback(self, mock_llm, text):
        mock_llm.generate.return_value = LLMResponse(text=text, model="test")
        assert await BusinessInsightsUseCase(mock_llm).execute([], []) == FALLBACK_INSIGHTS

    def test_fallback_text(self):
        assert FALLBACK_INSIGHTS == [
            "Monitor your top selling items",
            "Follow up on unpaid invoices",
            "Stock up on fast-moving goods",
        ]


class TestBusinessInsightsOverHttp:
    """Server failures fall back to the fixed insights."""

    async def test_non_json_server_body(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>Bad gateway</html>")
        )
        llm = OllamaProvider(host="http://ollama.test", transport=transport)
        assert await BusinessInsightsUseCase(llm).execute([], []) == FALLBACK_INSIGHTS
