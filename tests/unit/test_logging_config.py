"""Tests for logging processors and request context."""

import structlog

from stockroom.config.logging import add_app_context, bind_request_context, render_enums
from stockroom.core.entities.stock_item import ItemKind, StockStatus


class TestProcessors:
    def test_render_enums(self):
        event = render_enums(
            None, "info", {"event": "x", "status": StockStatus.LOW_STOCK, "kind": ItemKind.PRODUCT}
        )

        assert event["status"] == "low-stock"
        assert event["kind"] == "product"

    def test_app_context(self):
        event = add_app_context(None, "info", {"event": "x"})

        assert event["app"] == "Stockroom"
        assert event["environment"] == "development"


class TestRequestContext:
    def test_bind_replaces_previous_context(self):
        structlog.contextvars.bind_contextvars(stale="yes")

        bind_request_context("abc123")

        context = structlog.contextvars.get_contextvars()
        assert context == {"request_id": "abc123", "user": "system"}
        structlog.contextvars.clear_contextvars()
