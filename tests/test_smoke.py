"""
Smoke tests — verify the bootstrap is healthy.

These tests ensure the basic scaffolding works:
- Package imports successfully
- CLI entrypoint responds
- Version is set
"""

from click.testing import CliRunner

from ghidra_setup import __version__
from ghidra_setup.main import cli


class TestBootstrap:
    """Verify the project bootstrap is healthy."""

    def test_version_is_set(self):
        """Version string should be defined and non-empty."""
        assert __version__
        assert isinstance(__version__, str)

    def test_cli_version(self):
        """CLI --version should print the version."""
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_install_command_exists(self):
        """Install command should be registered with its options."""
        result = CliRunner().invoke(cli, ["install", "--help"])
        assert result.exit_code == 0
        assert "--dry-run" in result.output
        assert "--json" in result.output

    def test_module_entrypoint_imports(self):
        """``python -m ghidra_setup`` resolves to the same click group."""
        from ghidra_setup import __main__

        assert __main__.cli is cli

    def test_installer_package_imports(self):
        """Layer re-exports resolve."""
        from ghidra_setup.core.services import installer
        from ghidra_setup.core.services.installer import (
            data,
            detection,
            domain,
            execution,
            orchestration,
        )

        assert installer.run_steps is orchestration.run_steps
        assert len(installer.INSTALL_STEPS) == 8
        assert data.MACHINE_ARCH["arm64"] == "apple-silicon"
        assert callable(detection.locate_ghidra)
        assert callable(domain.parse_version)
        assert callable(execution.upsert_profile_lines)
