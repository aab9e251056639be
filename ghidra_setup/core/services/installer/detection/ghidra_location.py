"""
L3 Detection — Where did Ghidra land?

Checks the primary location (``/Applications/Ghidra.app``) first, then
the versioned Homebrew directories (``Cellar/ghidra/<ver>`` and
``Caskroom/ghidra/<ver>``). Read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from ghidra_setup.core.services.installer.context import InstallContext
from ghidra_setup.core.services.installer.domain.version import version_sort_key


@dataclass
class GhidraLocation:
    """Result of a location scan.

    ``where`` is ``primary``, ``secondary`` (launcher found in a version
    dir), ``incomplete`` (version dir exists but has no launcher) or
    ``missing``.
    """

    where: Literal["primary", "secondary", "incomplete", "missing"]
    path: Path | None = None
    version_dir: Path | None = None
    app_bundle: Path | None = None
    searched: tuple[Path, ...] = ()

    def to_dict(self) -> dict:
        return {
            "where": self.where,
            "path": str(self.path) if self.path else None,
            "version_dir": str(self.version_dir) if self.version_dir else None,
            "app_bundle": str(self.app_bundle) if self.app_bundle else None,
            "searched": [str(p) for p in self.searched],
        }


def secondary_roots(ctx: InstallContext) -> list[Path]:
    cask = ctx.settings.cask
    return [ctx.prefix / "Cellar" / cask, ctx.prefix / "Caskroom" / cask]


def latest_version_dir(root: Path) -> Path | None:
    """Newest version directory under ``root`` by parsed version order."""
    if not root.is_dir():
        return None
    candidates = [p for p in root.iterdir() if p.is_dir() and not p.name.startswith(".")]
    if not candidates:
        return None
    return max(candidates, key=lambda p: version_sort_key(p.name))


def _find_launcher(version_dir: Path, launcher: str) -> Path | None:
    """Launcher directly in the version dir, or one level down
    (cask payloads unpack to ``ghidra_<ver>_PUBLIC/``)."""
    direct = version_dir / launcher
    if direct.is_file():
        return direct
    for child in sorted(version_dir.iterdir()):
        nested = child / launcher
        if child.is_dir() and nested.is_file():
            return nested
    return None


def locate_ghidra(ctx: InstallContext) -> GhidraLocation:
    """Scan install locations in priority order."""
    settings = ctx.settings
    primary = ctx.app_path
    roots = secondary_roots(ctx)
    searched = (primary, *roots)

    if primary.is_dir():
        return GhidraLocation(where="primary", path=primary, searched=searched)

    incomplete: Path | None = None
    for root in roots:
        version_dir = latest_version_dir(root)
        if version_dir is None:
            continue
        launcher = _find_launcher(version_dir, settings.launcher)
        if launcher is None:
            incomplete = incomplete or version_dir
            continue
        bundle = version_dir / settings.app_name
        return GhidraLocation(
            where="secondary",
            path=launcher,
            version_dir=version_dir,
            app_bundle=bundle if bundle.is_dir() else None,
            searched=searched,
        )

    if incomplete is not None:
        return GhidraLocation(where="incomplete", version_dir=incomplete, searched=searched)
    return GhidraLocation(where="missing", searched=searched)
