"""Sui faucet client.

Single-shot by contract: the faucet on testnet rate-limits requests, so a
refusal is reported to the caller rather than retried here.
"""

from __future__ import annotations

import logging

import httpx

from nexusctl.domain.errors import TopUpFailed
from nexusctl.domain.types import NetworkTier

logger = logging.getLogger(__name__)


class FaucetClient:
    """Requests gas from the faucet of a non-mainnet tier."""

    def __init__(
        self,
        url: str | None,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self._timeout = timeout
        self._transport = transport

    def request_funds(self, tier: NetworkTier, address: str) -> None:
        """Ask the faucet to send gas coins to *address*.

        Raises:
            TopUpFailed: On mainnet, with no faucet URL, or on any HTTP failure.
        """
        if not tier.allows_top_up:
            raise TopUpFailed(f"No faucet available on {tier}", tier=str(tier))
        if not self.url:
            raise TopUpFailed(f"No faucet URL configured for {tier}", tier=str(tier))

        body = {"FixedAmountRequest": {"recipient": address}}
        logger.info("Requesting funds from %s faucet for %s", tier, address)
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.post(self.url, json=body)
        except httpx.HTTPError as exc:
            raise TopUpFailed(
                f"Faucet request failed: {exc}", tier=str(tier), url=self.url
            ) from exc

        if resp.status_code == 429:
            raise TopUpFailed("Faucet rate limit exceeded", tier=str(tier), status=429)
        if resp.status_code not in (200, 201, 202):
            raise TopUpFailed(
                f"Faucet returned status {resp.status_code}",
                tier=str(tier),
                status=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            return
        # v1 reports {"error": ...}; v2 reports {"status": {"Failure": ...}}.
        status = data.get("status")
        faucet_error = data.get("error") or (
            status.get("Failure") if isinstance(status, dict) else None
        )
        if faucet_error:
            raise TopUpFailed(f"Faucet refused request: {faucet_error}", tier=str(tier))
