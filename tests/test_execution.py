"""
Tests for the execution layer — shell profile upserts, brew shellenv
parsing, installer script verification and Homebrew commands.
"""

import hashlib
import os
from pathlib import Path

import pytest

from ghidra_setup.core.services.installer.data.constants import PROFILE_MARKER
from ghidra_setup.core.services.installer.execution.homebrew import (
    brew_install,
    install_homebrew,
    load_shellenv,
    parse_shellenv,
)
from ghidra_setup.core.services.installer.execution.script_verify import (
    download_and_verify_script,
)
from ghidra_setup.core.services.installer.execution.shell_profile import (
    missing_lines,
    resolve_profile_path,
    shell_config_line,
    upsert_profile_lines,
)

BREW_SHELLENV = """\
export HOMEBREW_PREFIX="/opt/homebrew";
export HOMEBREW_CELLAR="/opt/homebrew/Cellar";
export HOMEBREW_REPOSITORY="/opt/homebrew";
fpath[1,0]="/opt/homebrew/share/zsh/site-functions";
export PATH="/opt/homebrew/bin:/opt/homebrew/sbin${PATH+:$PATH}";
[ -z "${MANPATH-}" ] || export MANPATH=":${MANPATH#:}";
export INFOPATH="/opt/homebrew/share/info:${INFOPATH:-}";
"""

EMPTY_SHA256 = hashlib.sha256(b"").hexdigest()

# ── Shell profile ───────────────────────────────────────────────────


class TestShellConfigLine:
    def test_posix_path(self):
        line = shell_config_line("zsh", path_entry="/opt/homebrew/opt/openjdk@21/bin")
        assert line == 'export PATH="/opt/homebrew/opt/openjdk@21/bin:$PATH"'

    def test_posix_env(self):
        line = shell_config_line("bash", env_var=("JAVA_HOME", "/opt/homebrew/opt/openjdk@21"))
        assert line == 'export JAVA_HOME="/opt/homebrew/opt/openjdk@21"'

    def test_fish(self):
        assert shell_config_line("fish", path_entry="/x/bin") == "set -gx PATH /x/bin $PATH"
        assert shell_config_line("fish", env_var=("JAVA_HOME", "/x")) == "set -gx JAVA_HOME /x"


class TestResolveProfilePath:
    @pytest.mark.parametrize(
        ("shell", "rc"),
        [("zsh", ".zshrc"), ("bash", ".bash_profile"), ("tcsh", ".profile")],
    )
    def test_by_shell(self, shell, rc, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert resolve_profile_path(shell) == tmp_path / rc

    def test_override_wins(self, tmp_path: Path):
        custom = tmp_path / "custom.sh"
        assert resolve_profile_path("zsh", custom) == custom


class TestUpsertProfileLines:
    LINES = [
        'export PATH="/opt/homebrew/opt/openjdk@21/bin:$PATH"',
        'export JAVA_HOME="/opt/homebrew/opt/openjdk@21"',
    ]

    def test_creates_missing_profile(self, tmp_path: Path):
        profile = tmp_path / ".zshrc"
        result = upsert_profile_lines(profile, self.LINES)
        assert result["ok"]
        assert result["lines_added"] == 2
        assert result["backup"] is None
        content = profile.read_text()
        assert PROFILE_MARKER in content
        for line in self.LINES:
            assert line in content

    def test_second_run_is_noop(self, tmp_path: Path):
        profile = tmp_path / ".zshrc"
        upsert_profile_lines(profile, self.LINES)
        before = profile.read_text()

        result = upsert_profile_lines(profile, self.LINES)
        assert result["ok"]
        assert result["lines_added"] == 0
        assert profile.read_text() == before
        assert list(tmp_path.glob(".zshrc.backup.*")) == []

    def test_only_missing_lines_added(self, tmp_path: Path):
        profile = tmp_path / ".zshrc"
        profile.write_text(f"alias ll='ls -l'\n  {self.LINES[1]}\n")

        assert missing_lines(profile, self.LINES) == [self.LINES[0]]
        result = upsert_profile_lines(profile, self.LINES)
        assert result["lines_added"] == 1
        assert profile.read_text().count("JAVA_HOME") == 1

    def test_backs_up_existing_profile(self, tmp_path: Path):
        profile = tmp_path / ".zshrc"
        profile.write_text("alias ll='ls -l'")  # no trailing newline

        result = upsert_profile_lines(profile, self.LINES)
        backup = Path(result["backup"])
        assert backup.read_text() == "alias ll='ls -l'"
        assert profile.read_text().startswith("alias ll='ls -l'\n")

    def test_non_utf8_profile(self, tmp_path: Path):
        profile = tmp_path / ".zshrc"
        profile.write_bytes(b"# caf\xe9 alias\n")

        result = upsert_profile_lines(profile, self.LINES)
        assert result["ok"]
        assert result["lines_added"] == 2
        content = profile.read_bytes()
        assert content.startswith(b"# caf\xe9 alias\n")
        assert self.LINES[1].encode() in content
        assert upsert_profile_lines(profile, self.LINES)["lines_added"] == 0


# ── brew shellenv ───────────────────────────────────────────────────


class TestParseShellenv:
    def test_resolves_path_against_current(self):
        env = parse_shellenv(BREW_SHELLENV, {"PATH": "/usr/bin:/bin"})
        assert env["PATH"] == "/opt/homebrew/bin:/opt/homebrew/sbin:/usr/bin:/bin"
        assert env["HOMEBREW_PREFIX"] == "/opt/homebrew"
        assert env["INFOPATH"] == "/opt/homebrew/share/info:"

    def test_unset_path(self):
        env = parse_shellenv(BREW_SHELLENV, {})
        assert env["PATH"] == "/opt/homebrew/bin:/opt/homebrew/sbin"

    def test_skips_conditional_lines(self):
        env = parse_shellenv(BREW_SHELLENV, {"MANPATH": "/usr/share/man"})
        assert "MANPATH" not in env

    def test_load_shellenv_updates_context(self, ctx, shell_mock, brew_prefix):
        shell_mock.set_output("brew-shellenv", BREW_SHELLENV)
        ctx.env["PATH"] = "/usr/bin"

        exports = load_shellenv(ctx)
        assert "HOMEBREW_CELLAR" in exports
        assert ctx.env["PATH"].startswith("/opt/homebrew/bin:")
        command = shell_mock.calls_for("brew-shellenv")[0].params["command"]
        assert command == [str(brew_prefix / "bin" / "brew"), "shellenv"]

    def test_load_shellenv_failure_falls_back_to_path(self, ctx, shell_mock, brew_prefix):
        shell_mock.set_failure("brew-shellenv")
        assert load_shellenv(ctx) == {}
        assert ctx.env["PATH"].split(os.pathsep)[0] == str(brew_prefix / "bin")


# ── Installer script / Homebrew ─────────────────────────────────────


class TestScriptVerify:
    def test_pinned_hash_matches(self, ctx):
        result = download_and_verify_script(ctx, "https://example.invalid/install.sh", EMPTY_SHA256)
        assert result["ok"]
        assert result["sha256"] == EMPTY_SHA256
        Path(result["path"]).unlink()

    def test_pinned_hash_mismatch_removes_file(self, ctx, shell_mock):
        result = download_and_verify_script(ctx, "https://example.invalid/install.sh", "0" * 64)
        assert not result["ok"]
        assert "SHA256 mismatch" in result["error"]
        output_path = shell_mock.calls_for("download-script")[0].params["command"][3]
        assert not Path(output_path).exists()

    def test_download_failure(self, ctx, shell_mock):
        shell_mock.set_failure("download-script", error="curl: (6) Could not resolve host")
        result = download_and_verify_script(ctx, "https://example.invalid/install.sh")
        assert not result["ok"]
        assert "Download failed" in result["error"]


class TestHomebrewCommands:
    def test_install_homebrew_runs_script_interactively(self, ctx, shell_mock):
        receipt = install_homebrew(ctx)
        assert receipt.ok
        call = shell_mock.calls_for("install-homebrew")[0]
        assert call.params["interactive"] is True
        assert call.params["command"][0] == "/bin/bash"
        # tempfile cleaned up afterwards
        assert not Path(call.params["command"][1]).exists()

    def test_install_homebrew_download_failure(self, ctx, shell_mock):
        shell_mock.set_failure("download-script")
        receipt = install_homebrew(ctx)
        assert receipt.failed
        assert "install-homebrew" not in shell_mock.called_ids

    def test_brew_install_cask(self, ctx, shell_mock):
        brew_install(ctx, "ghidra", cask=True)
        call = shell_mock.calls_for("brew-install-cask-ghidra")[0]
        assert call.params["command"] == ["brew", "install", "--cask", "ghidra"]
        assert call.timeout == ctx.settings.command_timeout
