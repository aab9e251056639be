"""
L3 Detection — Java runtime version.

Read-only probe: runs ``java -version`` and parses its banner, which
JDKs print to stderr, e.g.::

    openjdk version "21.0.2" 2024-01-16
    java version "1.8.0_381"
"""

from __future__ import annotations

import logging
import re

from ghidra_setup.core.services.installer.context import InstallContext

logger = logging.getLogger(__name__)

_JAVA_VERSION_RE = re.compile(r'version\s+"([^"]+)"')

# Reported for a runtime that runs but prints no recognisable banner
UNKNOWN_VERSION = "unknown"


def parse_java_version_output(output: str) -> str | None:
    """Extract the quoted version string from ``java -version`` output."""
    match = _JAVA_VERSION_RE.search(output)
    if match:
        return match.group(1)
    return None


def get_java_version(ctx: InstallContext) -> str | None:
    """Installed Java version, or ``None`` when no working runtime exists.

    macOS ships a ``/usr/bin/java`` stub even without a JDK; it exits
    non-zero, so a failed run counts as "not installed". A runtime whose
    banner cannot be parsed is reported as ``UNKNOWN_VERSION``, which
    never satisfies a minimum version.
    """
    receipt = ctx.run("probe-java", ["java", "-version"], merge_stderr=True, probe=True)
    if not receipt.ok:
        logger.debug("java probe failed: %s", receipt.error)
        return None

    version = parse_java_version_output(receipt.output)
    if version is None:
        logger.warning("Could not parse java -version output: %r", receipt.output[:200])
        return UNKNOWN_VERSION
    return version
