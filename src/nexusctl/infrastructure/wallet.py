"""Sui wallet context: active address from client.yaml, signing via ``sui keytool``.

Key material never passes through this process; signing is delegated to
the Sui CLI, which reads the keystore referenced by client.yaml.
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from nexusctl.domain.errors import ConfigurationMissing, NoActiveAddress, SubmissionFailed
from nexusctl.domain.types import normalize_address

logger = logging.getLogger(__name__)

_SIGN_TIMEOUT_S = 60.0


class WalletContext:
    """A loaded Sui client.yaml."""

    def __init__(
        self,
        wallet_path: Path,
        data: dict[str, Any],
        *,
        sui_binary: str = "sui",
    ) -> None:
        self.wallet_path = wallet_path
        self._data = data
        self._sui_binary = sui_binary

    @classmethod
    def load(cls, wallet_path: Path, *, sui_binary: str = "sui") -> WalletContext:
        """Read *wallet_path*.

        Raises:
            ConfigurationMissing: If the file is absent or not valid YAML.
        """
        if not wallet_path.is_file():
            raise ConfigurationMissing(
                f"Sui wallet config not found at {wallet_path}",
                key="sui.wallet_path",
                wallet_path=str(wallet_path),
            )
        try:
            data = YAML(typ="safe").load(wallet_path.read_text(encoding="utf-8"))
        except YAMLError as exc:
            raise ConfigurationMissing(
                f"Invalid YAML in {wallet_path}: {exc}",
                key="sui.wallet_path",
                wallet_path=str(wallet_path),
            ) from exc
        return cls(wallet_path, data if isinstance(data, dict) else {}, sui_binary=sui_binary)

    @property
    def keystore_path(self) -> Path | None:
        keystore = self._data.get("keystore")
        if isinstance(keystore, dict) and keystore.get("File"):
            return Path(str(keystore["File"])).expanduser()
        return None

    def active_address(self) -> str:
        """The wallet's active address.

        Raises:
            NoActiveAddress: If client.yaml has no (valid) active address.
        """
        raw = self._data.get("active_address")
        if not raw:
            raise NoActiveAddress(
                "No active address in the Sui wallet",
                wallet_path=str(self.wallet_path),
            )
        try:
            return normalize_address(str(raw))
        except ValueError as exc:
            raise NoActiveAddress(
                f"Invalid active address in the Sui wallet: {raw}",
                wallet_path=str(self.wallet_path),
            ) from exc

    def sign(self, address: str, tx_bytes: str) -> str:
        """Sign base64 *tx_bytes* as *address*; returns the serialized signature.

        Raises:
            SubmissionFailed: If the Sui CLI is missing, fails, or returns no signature.
        """
        cmd = [self._sui_binary, "keytool"]
        if self.keystore_path is not None:
            cmd += ["--keystore-path", str(self.keystore_path)]
        cmd += ["sign", "--address", address, "--data", tx_bytes, "--json"]

        try:
            out = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=_SIGN_TIMEOUT_S,
            ).stdout
        except FileNotFoundError as exc:
            raise SubmissionFailed(
                f"Sui CLI not found: {self._sui_binary}", stage="sign"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise SubmissionFailed("Signing timed out", stage="sign") from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "")[:500]
            raise SubmissionFailed(
                f"Signing failed (exit {exc.returncode})", stage="sign", stderr=stderr
            ) from exc

        try:
            signature = json.loads(out).get("suiSignature")
        except (ValueError, AttributeError) as exc:
            raise SubmissionFailed("Signer returned invalid JSON", stage="sign") from exc
        if not signature:
            raise SubmissionFailed("Signer returned no signature", stage="sign")
        logger.debug("Signed transaction for %s", address)
        return str(signature)
