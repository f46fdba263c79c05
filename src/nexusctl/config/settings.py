"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``NEXUSCTL_*`` prefix
  3. TOML file    — ``~/.nexus/conf.toml`` (or ``--config`` / ``NEXUSCTL_CONFIG``)
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from nexusctl.config.discovery import find_config
from nexusctl.config.models import NexusObjects, SuiConfig
from nexusctl.domain.errors import ConfigurationMissing


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the resolved conf.toml."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class NexusSettings(BaseSettings):
    """Unified settings for the entire nexusctl CLI.

    Stored on the :class:`AppContext` at the CLI root level and frozen
    after construction. Output-mode flags live here and are handed to the
    formatter explicitly; nothing reads them from global state.

    Attributes:
        config_path: The conf.toml that was loaded, or None if none exists.
        nexus: Deployed Nexus object ids, or None when not configured.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "NEXUSCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    sui: SuiConfig = Field(default_factory=SuiConfig)
    nexus: NexusObjects | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(cls, *, config_path: str | None = None, **cli_flags: Any) -> NexusSettings:
        """Construct settings from a CLI invocation.

        Resolves conf.toml (explicit *config_path*, env var, or default
        location) and merges CLI flags as highest-priority overrides.
        """
        toml_path = find_config(config_path)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    def require_nexus(self) -> NexusObjects:
        """Return the [nexus] section or fail with ConfigurationMissing."""
        if self.nexus is None:
            raise ConfigurationMissing(
                "Nexus objects are missing from the configuration",
                key="nexus",
                config_path=str(self.config_path) if self.config_path else None,
            )
        return self.nexus
