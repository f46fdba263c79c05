"""Tests for tool metadata fetching."""

from __future__ import annotations

import json

import httpx
import pytest

from nexusctl.domain.errors import RpcError
from nexusctl.infrastructure.tools import ToolMeta, fetch_tool_meta

META = {
    "fqn": "xyz.dummy.tool@1",
    "url": "http://somewhere-else",
    "description": "Echoes its input",
    "input_schema": {"type": "object", "properties": {"a": {"type": "string"}}},
    "output_schema": {"type": "object"},
}


def _transport(response: httpx.Response, paths: list[str] | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if paths is not None:
            paths.append(request.url.path)
        return response

    return httpx.MockTransport(handler)


class TestFetchToolMeta:
    def test_fetches_meta_and_keeps_caller_url(self) -> None:
        paths: list[str] = []
        meta = fetch_tool_meta(
            "http://tool.test/", transport=_transport(httpx.Response(200, json=META), paths)
        )
        assert paths == ["/meta"]
        assert meta.fqn == "xyz.dummy.tool@1"
        assert meta.url == "http://tool.test/"

    def test_http_error(self) -> None:
        with pytest.raises(RpcError):
            fetch_tool_meta("http://tool.test", transport=_transport(httpx.Response(404)))

    def test_not_json(self) -> None:
        with pytest.raises(RpcError, match="not valid JSON"):
            fetch_tool_meta(
                "http://tool.test", transport=_transport(httpx.Response(200, text="nope"))
            )

    def test_not_an_object(self) -> None:
        with pytest.raises(RpcError, match="JSON object"):
            fetch_tool_meta("http://tool.test", transport=_transport(httpx.Response(200, json=[])))

    def test_missing_fqn(self) -> None:
        with pytest.raises(RpcError, match="Invalid tool metadata"):
            fetch_tool_meta(
                "http://tool.test",
                transport=_transport(httpx.Response(200, json={"description": "x"})),
            )


class TestToolMeta:
    def test_schema_json_is_compact_and_sorted(self) -> None:
        meta = ToolMeta.model_validate(META)
        text = meta.schema_json("input")
        assert " " not in text
        assert json.loads(text) == META["input_schema"]
        assert meta.schema_json("output") == '{"type":"object"}'
