"""Shared pytest fixtures for nexusctl tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from hypothesis import HealthCheck
from hypothesis import settings as hypothesis_settings

from nexusctl.commands._context import AppContext
from nexusctl.config.settings import NexusSettings
from tests.fakes import FakeLedger, make_objects

# The autouse HOME isolation below is function-scoped; it holds no state
# that hypothesis examples could leak into each other.
hypothesis_settings.register_profile(
    "nexusctl", suppress_health_check=[HealthCheck.function_scoped_fixture]
)
hypothesis_settings.load_profile("nexusctl")


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a temp dir so no real ~/.nexus or ~/.sui is read."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("NEXUSCTL_CONFIG", "SUI_CONFIG_DIR"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> NexusSettings:
    """Settings with a configured [nexus] section."""
    return NexusSettings(nexus=make_objects())


@pytest.fixture
def make_app(settings: NexusSettings) -> Callable[..., AppContext]:
    """Build an AppContext around a FakeLedger.

    Output flags (``json_output``, ``quiet``, ``verbose``) are settings
    overrides, since an injected context skips the root group's flags.
    """

    def _make(ledger: FakeLedger, **flags: Any) -> AppContext:
        app_settings = settings.model_copy(update=flags)
        return AppContext(app_settings, ledger=ledger)  # type: ignore[arg-type]

    return _make
