"""Shared pytest fixtures and test helpers for signctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from signctl.config.settings import SignSettings
from signctl.domain.signing import SignatureService
from signctl.services.telemetry import disable_telemetry

TEST_SECRET = "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop any SIGNCTL_* variables from the developer's shell."""
    for name in list(os.environ):
        if name.startswith("SIGNCTL_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo logging and telemetry changes made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("signctl")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def signer() -> SignatureService:
    """SignatureService keyed with the 30-byte test secret."""
    return SignatureService(TEST_SECRET)


@pytest.fixture
def settings(tmp_path: Path) -> SignSettings:
    """Settings with the test secret and no config file."""
    return SignSettings.from_cli(
        search_root=tmp_path,
        signature={"secret": TEST_SECRET},
    )


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change CWD to a temp dir holding a signctl.toml with the test secret.

    Use via ``@pytest.mark.usefixtures("config_dir")`` on command test
    classes.
    """
    config_file = tmp_path / "signctl.toml"
    config_file.write_text(f'[signature]\nsecret = "{TEST_SECRET}"\n')
    config_file.chmod(0o600)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def unconfigured_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change CWD to an empty temp dir (no config file, no secret)."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
