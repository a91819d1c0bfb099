"""Precise unit tests for RestRunner.

Tests focus on endpoint execution, parameter building, and response decoding.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from dbento.data.core import DecodeError
from dbento.data.io import ResponseKind, StructuredResponse, TabularResponse
from dbento.data.runtime.rest import ResponseAdapter, RestEndpointSpec, RestRunner, RESTTransport


class TestRestRunner:
    """Test RestRunner endpoint execution."""

    @pytest.fixture
    def mock_transport(self):
        """Create mock REST transport."""
        transport = MagicMock(spec=RESTTransport)
        transport.get = AsyncMock(return_value="id,value\n1,a\n")
        transport.post = AsyncMock(return_value='{"created": true}')
        transport.post_form = AsyncMock(return_value='{"id": "job-1"}')
        return transport

    @pytest.fixture
    def runner(self, mock_transport):
        """Create RestRunner with mock transport."""
        return RestRunner(mock_transport)

    @pytest.fixture
    def mock_adapter(self):
        """Create mock response adapter."""
        adapter = MagicMock(spec=ResponseAdapter)
        adapter.parse = MagicMock(return_value={"parsed": "data"})
        return adapter

    @pytest.mark.asyncio
    async def test_run_get_endpoint_decodes_tabular(self, runner, mock_transport, mock_adapter):
        """Test GET endpoint with tabular response."""
        spec = RestEndpointSpec(
            id="test",
            method="GET",
            build_path=lambda p: f"/test/{p['id']}",
            build_query=lambda p: {"param": p.get("param")},
        )

        result = await runner.run(
            spec=spec, adapter=mock_adapter, params={"id": "123", "param": "value"}
        )

        assert result == {"parsed": "data"}
        mock_transport.get.assert_called_once_with(
            "/test/123", params={"param": "value"}, headers=None
        )
        decoded = mock_adapter.parse.call_args[0][0]
        assert isinstance(decoded, TabularResponse)
        assert decoded.rows == [{"id": "1", "value": "a"}]

    @pytest.mark.asyncio
    async def test_run_post_json_endpoint(self, runner, mock_transport, mock_adapter):
        """Test POST endpoint with JSON body and structured response."""
        spec = RestEndpointSpec(
            id="test",
            method="POST",
            build_path=lambda p: "/test",
            build_body=lambda p: {"data": p["data"]},
            response_kind=ResponseKind.STRUCTURED,
        )

        await runner.run(spec=spec, adapter=mock_adapter, params={"data": "value"})

        mock_transport.post.assert_called_once_with(
            "/test", json_body={"data": "value"}, headers=None
        )
        decoded = mock_adapter.parse.call_args[0][0]
        assert isinstance(decoded, StructuredResponse)
        assert decoded.value == {"created": True}

    @pytest.mark.asyncio
    async def test_run_post_form_endpoint(self, runner, mock_transport, mock_adapter):
        """Test POST endpoint with form body."""
        spec = RestEndpointSpec(
            id="test",
            method="POST",
            build_path=lambda p: "/submit",
            build_form=lambda p: {"symbols": p["symbols"]},
            response_kind=ResponseKind.STRUCTURED,
        )

        await runner.run(spec=spec, adapter=mock_adapter, params={"symbols": ["A", "B"]})

        mock_transport.post_form.assert_called_once_with(
            "/submit", form={"symbols": ["A", "B"]}, headers=None
        )
        mock_transport.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_run_without_query_builder(self, runner, mock_transport, mock_adapter):
        """Test endpoint without query builder."""
        spec = RestEndpointSpec(id="test", method="GET", build_path=lambda p: "/test")

        await runner.run(spec=spec, adapter=mock_adapter, params={})

        mock_transport.get.assert_called_once_with("/test", params=None, headers=None)

    @pytest.mark.asyncio
    async def test_adapter_receives_params(self, runner, mock_adapter):
        """Test adapter receives both decoded response and params."""
        spec = RestEndpointSpec(id="test", method="GET", build_path=lambda p: "/test")

        await runner.run(spec=spec, adapter=mock_adapter, params={"key": "value"})

        assert mock_adapter.parse.call_args[0][1] == {"key": "value"}

    @pytest.mark.asyncio
    async def test_malformed_json_surfaces_decode_error(self, runner, mock_transport, mock_adapter):
        """Test decode failures propagate without reaching the adapter."""
        mock_transport.get = AsyncMock(return_value="<html>oops</html>")
        spec = RestEndpointSpec(
            id="test",
            method="GET",
            build_path=lambda p: "/test",
            response_kind=ResponseKind.STRUCTURED,
        )

        with pytest.raises(DecodeError):
            await runner.run(spec=spec, adapter=mock_adapter, params={})

        mock_adapter.parse.assert_not_called()
