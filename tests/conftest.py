"""
Shared test fixtures and configuration.

Install tests never touch the real system: shell commands go to a
``MockAdapter`` scripted per action id, and every path the installer
writes (applications dir, JVM dir, Homebrew prefix, shell profile)
lives under ``tmp_path``. The real ``FilesystemAdapter`` is kept so
moves and symlinks actually happen inside the temp tree.
"""

from pathlib import Path

import pytest

from ghidra_setup.adapters.mock import MockAdapter
from ghidra_setup.adapters.registry import AdapterRegistry
from ghidra_setup.adapters.shell.filesystem import FilesystemAdapter
from ghidra_setup.core.models.settings import InstallSettings
from ghidra_setup.core.services.installer.context import InstallContext


@pytest.fixture
def brew_prefix(tmp_path: Path) -> Path:
    prefix = tmp_path / "homebrew"
    (prefix / "bin").mkdir(parents=True)
    return prefix


@pytest.fixture
def settings(tmp_path: Path, brew_prefix: Path) -> InstallSettings:
    """Settings pointing every writable location into tmp_path."""
    applications = tmp_path / "Applications"
    applications.mkdir()
    jvm_dir = tmp_path / "JavaVirtualMachines"
    jvm_dir.mkdir()
    return InstallSettings(
        applications_dir=applications,
        jvm_dir=jvm_dir,
        brew_prefix=brew_prefix,
        shell_profile=tmp_path / ".zshrc",
    )


@pytest.fixture
def shell_mock() -> MockAdapter:
    return MockAdapter(adapter_name="shell")


@pytest.fixture
def registry(shell_mock: MockAdapter) -> AdapterRegistry:
    reg = AdapterRegistry()
    reg.register(shell_mock)
    reg.register(FilesystemAdapter())
    return reg


@pytest.fixture
def make_ctx(settings: InstallSettings, registry: AdapterRegistry):
    """Factory for an InstallContext on a simulated Apple Silicon Mac."""

    def _make(**overrides) -> InstallContext:
        fields = {"machine": "arm64", "system": "Darwin", "shell": "zsh"}
        fields.update(overrides)
        fields.setdefault("settings", settings)
        return InstallContext(registry=registry, **fields)

    return _make


@pytest.fixture
def ctx(make_ctx) -> InstallContext:
    """Context with the architecture step already applied."""
    c = make_ctx()
    c.arch = "apple-silicon"
    c.brew_prefix = c.settings.brew_prefix
    return c


@pytest.fixture
def jdk_bundle(brew_prefix: Path) -> Path:
    """A fake Homebrew openjdk@21 keg with its .jdk bundle."""
    bundle = brew_prefix / "opt" / "openjdk@21" / "libexec" / "openjdk.jdk"
    bundle.mkdir(parents=True)
    return bundle
