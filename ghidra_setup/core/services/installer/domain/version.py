"""
L1 Domain — Version parsing and comparison (pure).

Versions are compared as integer tuples, never as strings:
``"9" < "21"`` is False lexicographically but True here.
No I/O, no subprocess.
"""

from __future__ import annotations

import re

_VERSION_RE = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_version(version: str) -> tuple[int, int, int]:
    """Parse a version string into a ``(major, minor, patch)`` tuple.

    Accepts ``"21"``, ``"21.0.2"``, ``"17.0.9+9"`` and Java's legacy
    ``"1.8.0_381"`` scheme, where the real major version is the second
    component (→ ``(8, 0, 381)``). A ``v`` prefix marks a plain semver
    string, so ``"v1.2"`` stays ``(1, 2, 0)``.

    Raises:
        ValueError: If no leading numeric component is found.
    """
    text = version.strip()
    m = _VERSION_RE.match(text)
    if not m:
        raise ValueError(f"Unparseable version: {version!r}")

    major = int(m.group(1))
    minor = int(m.group(2) or 0)
    patch = int(m.group(3) or 0)

    if major == 1 and m.group(2) is not None and not text.startswith("v"):
        # 1.8.0_381 → 8.0.381
        update = re.search(r"_(\d+)", text)
        return (minor, patch, int(update.group(1)) if update else 0)

    return (major, minor, patch)


def is_below(version: str, minimum: str) -> bool:
    """True if ``version`` is strictly older than ``minimum``."""
    return parse_version(version) < parse_version(minimum)


def version_sort_key(name: str) -> tuple[int, ...]:
    """Sort key for versioned directory names (``11.3.1``, ``11.3.1-20250219``).

    Non-numeric names sort first so they never win a "latest" pick.
    """
    parts = re.findall(r"\d+", name)
    if not parts:
        return (-1,)
    return tuple(int(p) for p in parts)
