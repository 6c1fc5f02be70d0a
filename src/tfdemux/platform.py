#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Host platform detection and artifact selection.

Selection is a table lookup: each ``PlatformRule`` row names the host
properties it accepts and the artifact key it resolves to. Supporting a new
platform means adding a row here and an artifact to the release definition.
"""

from __future__ import annotations

from collections.abc import Sequence
import sys

from attrs import define
from provide.foundation import logger
from provide.foundation.platform import get_arch_name, get_os_name

from tfdemux.catalog import Artifact, ArtifactKey
from tfdemux.exceptions import UnsupportedPlatform

_OS_ALIASES = {
    "darwin": "macos",
    "macos": "macos",
    "macosx": "macos",
    "linux": "linux",
}

# arch name -> (family, 64-bit)
_ARCH_FAMILIES = {
    "arm64": ("arm", True),
    "aarch64": ("arm", True),
    "armv8l": ("arm", False),
    "armv7l": ("arm", False),
    "armv7": ("arm", False),
    "armv6l": ("arm", False),
    "arm": ("arm", False),
    "amd64": ("intel", True),
    "x86_64": ("intel", True),
    "x64": ("intel", True),
    "x86": ("intel", False),
    "i386": ("intel", False),
    "i686": ("intel", False),
}


@define(frozen=True)
class Host:
    """Operating system, CPU family and word size of the installing machine."""

    os: str
    arch: str
    bits64: bool

    def describe(self) -> str:
        return f"{self.os}/{self.arch} ({'64' if self.bits64 else '32'}-bit)"


@define(frozen=True)
class PlatformRule:
    """One row of the dispatch table."""

    os: str
    arch: str
    bits64: bool | None = None  # None accepts any word size

    def matches(self, host: Host) -> bool:
        if host.os != self.os or host.arch != self.arch:
            return False
        return self.bits64 is None or host.bits64 == self.bits64

    @property
    def artifact_key(self) -> ArtifactKey:
        return (self.os, self.arch, self.bits64)


# Precedence order.
DEFAULT_RULES: tuple[PlatformRule, ...] = (
    PlatformRule("macos", "arm"),
    PlatformRule("macos", "intel"),
    PlatformRule("linux", "arm", bits64=True),
    PlatformRule("linux", "intel"),
)


def normalize_os(name: str) -> str:
    lowered = name.strip().lower()
    return _OS_ALIASES.get(lowered, lowered)


def normalize_arch(name: str) -> tuple[str, bool]:
    """Map an architecture name to its (family, 64-bit) pair.

    Unknown names are kept verbatim so selection can report them.
    """
    lowered = name.strip().lower()
    if lowered in _ARCH_FAMILIES:
        return _ARCH_FAMILIES[lowered]
    return lowered, sys.maxsize > 2**32


def detect_host(arch_override: str | None = None) -> Host:
    """Describe the running machine.

    Args:
        arch_override: Architecture name to use instead of the detected one

    Returns:
        Host descriptor for platform selection
    """
    os_name = normalize_os(get_os_name())
    raw_arch = arch_override or get_arch_name()
    arch, bits64 = normalize_arch(raw_arch)
    host = Host(os=os_name, arch=arch, bits64=bits64)
    logger.debug(
        "Detected host platform",
        os=host.os,
        arch=host.arch,
        bits64=host.bits64,
        raw_arch=raw_arch,
        overridden=arch_override is not None,
    )
    return host


def _overlaps(a: PlatformRule, b: PlatformRule) -> bool:
    if (a.os, a.arch) != (b.os, b.arch):
        return False
    return a.bits64 is None or b.bits64 is None or a.bits64 == b.bits64


class PlatformMatcher:
    """Selects the artifact for a host from a release's artifact list."""

    def __init__(self, rules: Sequence[PlatformRule] = DEFAULT_RULES) -> None:
        self.rules = tuple(rules)
        for i, rule in enumerate(self.rules):
            for other in self.rules[i + 1 :]:
                if _overlaps(rule, other):
                    raise ValueError(f"Platform rules overlap: {rule} and {other}")

    def select(self, host: Host, artifacts: Sequence[Artifact], version: str | None = None) -> Artifact:
        """Return the single artifact for ``host``.

        Raises:
            UnsupportedPlatform: If no rule matches the host or the release
                lacks the artifact the matching rule points at
        """
        by_key = {artifact.key: artifact for artifact in artifacts}
        for rule in self.rules:
            if not rule.matches(host):
                continue
            artifact = by_key.get(rule.artifact_key)
            if artifact is not None:
                logger.debug("Selected artifact", host=host.describe(), tag=artifact.tag, url=artifact.url)
                return artifact
        raise UnsupportedPlatform(host, version)

    def supported(self) -> list[ArtifactKey]:
        return [rule.artifact_key for rule in self.rules]


# 🌶️📦🔚
