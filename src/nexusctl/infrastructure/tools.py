"""Fetch an off-chain tool's metadata from its HTTP endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from nexusctl.domain.errors import RpcError

logger = logging.getLogger(__name__)


class ToolMeta(BaseModel):
    """The ``GET <url>/meta`` document every Nexus tool serves."""

    model_config = {"frozen": True}

    fqn: str
    url: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict)
    output_schema: dict[str, Any] = Field(default_factory=dict)

    def schema_json(self, which: str) -> str:
        """Compact JSON of ``input_schema`` or ``output_schema`` for on-chain storage."""
        schema = self.input_schema if which == "input" else self.output_schema
        return json.dumps(schema, separators=(",", ":"), sort_keys=True)


def fetch_tool_meta(
    url: str,
    *,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> ToolMeta:
    """Fetch and validate tool metadata.

    The tool's own ``url`` field is replaced with *url* so the registered
    location is the one the caller actually reached.

    Raises:
        RpcError: If the endpoint is unreachable or the document is invalid.
    """
    meta_url = url.rstrip("/") + "/meta"
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            resp = client.get(meta_url)
            resp.raise_for_status()
            raw = resp.json()
    except httpx.HTTPError as exc:
        raise RpcError(f"Could not fetch tool metadata: {exc}", url=meta_url) from exc
    except ValueError as exc:
        raise RpcError("Tool metadata is not valid JSON", url=meta_url) from exc

    if not isinstance(raw, dict):
        raise RpcError("Tool metadata must be a JSON object", url=meta_url)
    try:
        meta = ToolMeta.model_validate({**raw, "url": url})
    except ValidationError as exc:
        raise RpcError(f"Invalid tool metadata: {exc.error_count()} errors", url=meta_url) from exc
    logger.debug("Fetched metadata for tool %s", meta.fqn)
    return meta
