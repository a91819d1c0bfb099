"""Precise unit tests for RESTTransport.

Tests focus on HTTPClient delegation.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from dbento.data.runtime.rest import HTTPClient, RESTTransport


class TestRESTTransport:
    """Test RESTTransport wrapper."""

    @pytest.fixture
    def transport(self):
        return RESTTransport(HTTPClient("db-test-key", base_url="https://api.example.com"))

    def test_base_url(self, transport):
        assert transport.base_url == "https://api.example.com"

    @pytest.mark.asyncio
    async def test_get_delegates_to_http_client(self, transport):
        transport._http.get = AsyncMock(return_value="a,b\n")

        result = await transport.get("/test", params={"key": "value"})

        assert result == "a,b\n"
        transport._http.get.assert_called_once_with("/test", params={"key": "value"}, headers=None)

    @pytest.mark.asyncio
    async def test_post_delegates_to_http_client(self, transport):
        transport._http.post = AsyncMock(return_value='{"ok": true}')

        result = await transport.post("/test", json_body={"key": "value"})

        assert result == '{"ok": true}'
        transport._http.post.assert_called_once_with("/test", json_body={"key": "value"}, headers=None)

    @pytest.mark.asyncio
    async def test_post_form_delegates_to_http_client(self, transport):
        transport._http.post_form = AsyncMock(return_value="{}")

        await transport.post_form("/test", form={"symbols": ["A", "B"]})

        transport._http.post_form.assert_called_once_with(
            "/test", form={"symbols": ["A", "B"]}, headers=None
        )

    @pytest.mark.asyncio
    async def test_close_delegates_to_http_client(self, transport):
        transport._http.close = AsyncMock()

        await transport.close()

        transport._http.close.assert_called_once()
