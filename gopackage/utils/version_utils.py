"""
Go version comparison utilities for gopackage.

Go toolchain versions are translated into PEP 440 versions and compared
with :mod:`packaging`. Only the shapes the Go toolchain reports are
supported:

- ``go1``, ``go1.4``, ``go1.21.3`` (the ``go`` prefix is optional)
- pre-releases: ``go1.5beta1``, ``go1.22rc2``, ``go1.9alpha1``
- trailing platform or experiment text is ignored:
  ``go1.22.1 linux/amd64``, ``go1.21.0-X:boringcrypto``
- development builds: ``devel go1.23-3b3b2a1 ...``

This is not a general semantic-versioning implementation.
"""

from __future__ import annotations

import re
from typing import Optional

from packaging.version import InvalidVersion, Version

from gopackage.utils.logger import get_logger

logger = get_logger("version_utils")

_GO_VERSION_RE = re.compile(
    r"^(?:go)?(?P<release>\d+(?:\.\d+)*)(?P<pre>(?:alpha|beta|rc)\d+)?(?:[\s-].*)?$"
)

_DEVEL_PREFIX = "devel"


def is_development_version(value: Optional[str]) -> bool:
    """Return True for toolchains built from source (``devel ...``)."""
    return bool(value) and value.strip().startswith(_DEVEL_PREFIX)


def parse_go_version(value: Optional[str]) -> Optional[Version]:
    """Translate a Go version tag into a comparable :class:`Version`.

    Args:
        value: Version tag such as ``"go1.21.3"``.

    Returns:
        The parsed version, or ``None`` when ``value`` is empty, a
        development build, or not a supported Go version shape.

    Examples:
        >>> parse_go_version("go1.22rc1")
        <Version('1.22rc1')>
        >>> parse_go_version("go1.4") == parse_go_version("go1.4.0")
        True
    """
    if not value:
        return None

    match = _GO_VERSION_RE.match(value.strip())
    if match is None:
        return None

    try:
        return Version(match.group("release") + (match.group("pre") or ""))
    except InvalidVersion:
        return None


def satisfies(required: Optional[str], actual: Optional[str]) -> bool:
    """Check whether ``actual`` is equal to or newer than ``required``.

    A development build as ``actual`` satisfies any requirement. When
    either side cannot be parsed the requirement is treated as not
    satisfied.

    Args:
        required: Minimum Go version, e.g. from a stored record.
        actual: Version reported by the installed toolchain.

    Returns:
        ``True`` if the installed version is acceptable.

    Examples:
        >>> satisfies("go1.4", "go1.5")
        True
        >>> satisfies("go1.5", "go1.4")
        False
    """
    if is_development_version(actual):
        logger.debug("Development toolchain %r accepted for %r", actual, required)
        return True

    required_version = parse_go_version(required)
    actual_version = parse_go_version(actual)

    if required_version is None or actual_version is None:
        logger.debug(
            "Cannot compare Go versions required=%r actual=%r", required, actual
        )
        return False

    return actual_version >= required_version
