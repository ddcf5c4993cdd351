"""Tests for the structlog configuration."""

from swipelite.config import reset_settings
from swipelite.config.logging import add_app_context


class TestAddAppContext:
    """Tests for the app context processor."""

    def test_adds_app_fields(self):
        event = add_app_context(None, "info", {"event": "invoice_saved"})
        assert event["event"] == "invoice_saved"
        assert event["app"] == "SwipeLite"
        assert "environment" in event

    def test_reports_storage_backend(self, monkeypatch):
        assert add_app_context(None, "info", {})["storage_backend"] == "memory"

        monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
        reset_settings()
        assert add_app_context(None, "info", {})["storage_backend"] == "sqlite"
