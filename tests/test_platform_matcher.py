#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Test platform.py - Host detection and artifact selection."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

from conftest import LINUX_ARM32, LINUX_ARM64, LINUX_INTEL, MAC_ARM, MAC_INTEL
import pytest

from tfdemux.catalog import Artifact, ArtifactCatalog
from tfdemux.exceptions import UnsupportedPlatform
from tfdemux.platform import (
    DEFAULT_RULES,
    Host,
    PlatformMatcher,
    PlatformRule,
    detect_host,
    normalize_arch,
    normalize_os,
)


@pytest.mark.unit
class TestSelection:
    """Test selection against the default dispatch table."""

    @pytest.mark.parametrize(
        ("host", "tag"),
        [
            (MAC_ARM, "darwin_arm64"),
            (MAC_INTEL, "darwin_amd64"),
            (LINUX_ARM64, "linux_arm64"),
            (LINUX_INTEL, "linux_amd64"),
        ],
    )
    def test_supported_hosts(self, test_catalog: ArtifactCatalog, host: Host, tag: str) -> None:
        artifact = PlatformMatcher().select(host, test_catalog.lookup("1.1.2"))
        assert artifact.tag == tag
        assert artifact.url.endswith(f"terraform-demux_1.1.2_{tag}.tar.gz")

    def test_selection_is_deterministic(self, test_catalog: ArtifactCatalog) -> None:
        artifacts = test_catalog.lookup("2.0.0")
        matcher = PlatformMatcher()
        picks = {matcher.select(LINUX_ARM64, artifacts) for _ in range(5)}
        assert len(picks) == 1

    def test_arm_linux_32bit_unsupported(self, test_catalog: ArtifactCatalog) -> None:
        with pytest.raises(UnsupportedPlatform) as exc_info:
            PlatformMatcher().select(LINUX_ARM32, test_catalog.lookup("1.1.2"), version="1.1.2")

        assert exc_info.value.host == LINUX_ARM32
        assert exc_info.value.version == "1.1.2"
        assert "32-bit" in str(exc_info.value)

    def test_32bit_intel_linux_uses_intel_artifact(self, test_catalog: ArtifactCatalog) -> None:
        host = Host("linux", "intel", False)
        assert PlatformMatcher().select(host, test_catalog.lookup("1.1.2")).tag == "linux_amd64"

    def test_unknown_os_unsupported(self, test_catalog: ArtifactCatalog) -> None:
        with pytest.raises(UnsupportedPlatform):
            PlatformMatcher().select(Host("windows", "intel", True), test_catalog.lookup("1.1.2"))

    def test_release_missing_platform(self) -> None:
        only_mac = [Artifact("macos", "arm", "https://x", "a" * 64)]
        with pytest.raises(UnsupportedPlatform):
            PlatformMatcher().select(LINUX_INTEL, only_mac)

    def test_supported_keys(self) -> None:
        assert PlatformMatcher().supported() == [
            ("macos", "arm", None),
            ("macos", "intel", None),
            ("linux", "arm", True),
            ("linux", "intel", None),
        ]


@pytest.mark.unit
class TestCustomRules:
    """Test extending the dispatch table."""

    def test_adding_32bit_arm_linux_row(self) -> None:
        rules = (*DEFAULT_RULES, PlatformRule("linux", "arm", bits64=False))
        artifacts = [
            Artifact("linux", "arm", "https://x/arm64", "a" * 64, bits64=True),
            Artifact("linux", "arm", "https://x/arm", "b" * 64, bits64=False),
        ]
        matcher = PlatformMatcher(rules)

        assert matcher.select(LINUX_ARM32, artifacts).url == "https://x/arm"
        assert matcher.select(LINUX_ARM64, artifacts).url == "https://x/arm64"

    def test_overlapping_rules_rejected(self) -> None:
        with pytest.raises(ValueError, match="overlap"):
            PlatformMatcher((PlatformRule("linux", "intel"), PlatformRule("linux", "intel", bits64=True)))


@pytest.mark.unit
class TestNormalization:
    """Test OS and architecture name normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("arm64", ("arm", True)),
            ("aarch64", ("arm", True)),
            ("armv7l", ("arm", False)),
            ("x86_64", ("intel", True)),
            ("AMD64", ("intel", True)),
            ("i686", ("intel", False)),
        ],
    )
    def test_normalize_arch(self, raw: str, expected: tuple[str, bool]) -> None:
        assert normalize_arch(raw) == expected

    def test_unknown_arch_kept_verbatim(self) -> None:
        assert normalize_arch("riscv64") == ("riscv64", sys.maxsize > 2**32)

    @pytest.mark.parametrize(("raw", "expected"), [("darwin", "macos"), ("Linux", "linux"), ("windows", "windows")])
    def test_normalize_os(self, raw: str, expected: str) -> None:
        assert normalize_os(raw) == expected


@pytest.mark.unit
class TestDetectHost:
    """Test host detection through foundation platform helpers."""

    @patch("tfdemux.platform.get_arch_name")
    @patch("tfdemux.platform.get_os_name")
    def test_detects_mac_arm(self, mock_os: MagicMock, mock_arch: MagicMock) -> None:
        mock_os.return_value = "darwin"
        mock_arch.return_value = "arm64"

        assert detect_host() == MAC_ARM

    @patch("tfdemux.platform.get_arch_name")
    @patch("tfdemux.platform.get_os_name")
    def test_arch_override(self, mock_os: MagicMock, mock_arch: MagicMock) -> None:
        mock_os.return_value = "linux"
        mock_arch.return_value = "arm64"

        assert detect_host(arch_override="x86_64") == LINUX_INTEL
        mock_arch.assert_not_called()


# 🌶️📦🔚
