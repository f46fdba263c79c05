"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, conf.toml only contains overrides.
A fresh install needs only a [nexus] section with the deployed object ids.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from nexusctl.config.discovery import default_wallet_path
from nexusctl.domain.types import NetworkTier, ObjectRef, normalize_address

_RPC_URLS: dict[NetworkTier, str] = {
    NetworkTier.LOCALNET: "http://127.0.0.1:9000",
    NetworkTier.DEVNET: "https://fullnode.devnet.sui.io:443",
    NetworkTier.TESTNET: "https://fullnode.testnet.sui.io:443",
    NetworkTier.MAINNET: "https://fullnode.mainnet.sui.io:443",
}

_FAUCET_URLS: dict[NetworkTier, str] = {
    NetworkTier.LOCALNET: "http://127.0.0.1:9123/v2/gas",
    NetworkTier.DEVNET: "https://faucet.devnet.sui.io/v2/gas",
    NetworkTier.TESTNET: "https://faucet.testnet.sui.io/v2/gas",
}


class SuiConfig(BaseModel):
    """[sui] section."""

    model_config = {"frozen": True}

    net: NetworkTier = NetworkTier.LOCALNET
    wallet_path: Path = Field(default_factory=default_wallet_path)
    rpc_url: str | None = None
    faucet_url: str | None = None
    auth_user: str | None = None
    auth_password: str | None = None
    request_timeout: float = 30.0
    sui_binary: str = "sui"

    @field_validator("wallet_path", mode="before")
    @classmethod
    def _expand_wallet_path(cls, value: object) -> object:
        if isinstance(value, str):
            return Path(value).expanduser()
        return value

    @property
    def resolved_rpc_url(self) -> str:
        return self.rpc_url or _RPC_URLS[self.net]

    @property
    def resolved_faucet_url(self) -> str | None:
        return self.faucet_url or _FAUCET_URLS.get(self.net)


class ObjectRefConfig(BaseModel):
    """An object reference stored in conf.toml."""

    model_config = {"frozen": True}

    object_id: str
    version: int
    digest: str

    @field_validator("object_id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        return normalize_address(value)

    def to_ref(self) -> ObjectRef:
        return ObjectRef(self.object_id, self.version, self.digest)


class NexusObjects(BaseModel):
    """[nexus] section — ids of the deployed Nexus packages and shared objects."""

    model_config = {"frozen": True}

    workflow_pkg_id: str
    primitives_pkg_id: str
    interface_pkg_id: str
    network_id: str
    tool_registry: ObjectRefConfig
    default_sap: ObjectRefConfig
    gas_service: ObjectRefConfig

    @field_validator("workflow_pkg_id", "primitives_pkg_id", "interface_pkg_id", "network_id")
    @classmethod
    def _normalize_ids(cls, value: str) -> str:
        return normalize_address(value)
