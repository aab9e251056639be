"""
L4 Execution — Installer script download and integrity check.

Replaces the ``bash -c "$(curl ...)"`` pattern: the script is
downloaded to a tempfile, optionally checked against a pinned SHA256,
and executed from the file.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ghidra_setup.core.services.installer.context import InstallContext

logger = logging.getLogger(__name__)


def sha256_file(path: Path) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(65536), b""):
            digest.update(block)
    return digest.hexdigest()


def download_and_verify_script(
    ctx: InstallContext,
    url: str,
    expected_sha256: str | None = None,
) -> dict[str, Any]:
    """Download a script to a tempfile and optionally verify its SHA256.

    Returns::

        {"ok": True, "path": "/tmp/xxx.sh", "sha256": "abc123..."}
        or
        {"ok": False, "error": "SHA256 mismatch ..."}
    """
    fd, tmp = tempfile.mkstemp(suffix=".sh", prefix="ghidra_setup_script_")
    os.close(fd)
    path = Path(tmp)

    receipt = ctx.run("download-script", ["curl", "-fsSL", "-o", str(path), url])
    if not receipt.ok:
        cleanup_script(path)
        return {"ok": False, "error": f"Download failed: {receipt.error}"}

    actual = sha256_file(path)
    if expected_sha256:
        expected = expected_sha256.removeprefix("sha256:").lower()
        if actual != expected:
            cleanup_script(path)
            return {
                "ok": False,
                "error": (
                    f"SHA256 mismatch for {url}\n"
                    f"Expected: {expected}\n"
                    f"Got:      {actual}"
                ),
            }
    else:
        logger.warning("Running %s unpinned (sha256=%s)", url, actual)

    path.chmod(0o700)
    return {"ok": True, "path": str(path), "sha256": actual}


def cleanup_script(path: str | Path) -> None:
    """Remove a temporary script file."""
    try:
        os.unlink(path)
    except OSError:
        pass
