"""Ledger — the single collaborator injected into every service.

Bundles the wallet, the fullnode RPC client, and the faucet behind the
narrow interface the pipeline needs. Components are created lazily so
``--help`` never touches the wallet or the network.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from nexusctl.infrastructure.faucet import FaucetClient
from nexusctl.infrastructure.rpc import SuiRpcClient
from nexusctl.infrastructure.tools import ToolMeta, fetch_tool_meta
from nexusctl.infrastructure.wallet import WalletContext

if TYPE_CHECKING:
    from nexusctl.config.models import NexusObjects
    from nexusctl.config.settings import NexusSettings
    from nexusctl.domain.response import ExecutionResponse
    from nexusctl.domain.transaction import TransactionPayload
    from nexusctl.domain.types import Coin, NetworkTier

log = structlog.get_logger(__name__)


class Ledger:
    """Wallet + fullnode + faucet for one CLI invocation."""

    def __init__(
        self,
        settings: NexusSettings,
        *,
        wallet: WalletContext | None = None,
        rpc: SuiRpcClient | None = None,
        faucet: FaucetClient | None = None,
    ) -> None:
        self.settings = settings
        self._wallet = wallet
        self._rpc = rpc
        self._faucet = faucet

    # ------------------------------------------------------------------
    # Lazy components
    # ------------------------------------------------------------------

    @property
    def wallet(self) -> WalletContext:
        if self._wallet is None:
            sui = self.settings.sui
            self._wallet = WalletContext.load(sui.wallet_path, sui_binary=sui.sui_binary)
        return self._wallet

    @property
    def rpc(self) -> SuiRpcClient:
        if self._rpc is None:
            sui = self.settings.sui
            auth = (
                (sui.auth_user, sui.auth_password or "")
                if sui.auth_user is not None
                else None
            )
            self._rpc = SuiRpcClient(sui.resolved_rpc_url, auth=auth, timeout=sui.request_timeout)
        return self._rpc

    @property
    def faucet(self) -> FaucetClient:
        if self._faucet is None:
            sui = self.settings.sui
            self._faucet = FaucetClient(sui.resolved_faucet_url, timeout=sui.request_timeout)
        return self._faucet

    # ------------------------------------------------------------------
    # Pipeline interface
    # ------------------------------------------------------------------

    @property
    def tier(self) -> NetworkTier:
        return self.settings.sui.net

    @property
    def objects(self) -> NexusObjects:
        return self.settings.require_nexus()

    def active_address(self) -> str:
        return self.wallet.active_address()

    def enumerate_coins(self, address: str) -> list[Coin]:
        return self.rpc.enumerate_coins(address)

    def request_funds(self, tier: NetworkTier, address: str) -> None:
        self.faucet.request_funds(tier, address)

    def reference_gas_price(self) -> int:
        return self.rpc.reference_gas_price()

    def fetch_tool_meta(self, url: str) -> ToolMeta:
        return fetch_tool_meta(url, timeout=self.settings.sui.request_timeout)

    def submit(self, payload: TransactionPayload) -> ExecutionResponse:
        """Build bytes, sign, and execute *payload*. Issued exactly once."""
        tx_bytes = self.rpc.build_move_call(payload)
        signature = self.wallet.sign(payload.sender, tx_bytes)
        response = self.rpc.execute(tx_bytes, [signature])
        log.info("transaction.executed", digest=response.digest, target=str(payload.call))
        return response

    def close(self) -> None:
        if self._rpc is not None:
            self._rpc.close()
