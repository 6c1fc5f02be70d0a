#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest fixtures and helpers for tfdemux tests."""

from __future__ import annotations

from collections.abc import Iterator
import gzip
import io
import tarfile

import provide.testkit  # noqa: F401 - Installs setproctitle blocker early
from provide.testkit.logger import reset_foundation_setup_for_testing
import pytest

from tfdemux.catalog import Artifact, ArtifactCatalog, Release
from tfdemux.exceptions import DownloadFailure
from tfdemux.platform import Host
from tfdemux.verification import compute_digest

TEST_VERSIONS = ("1.1.2", "2.0.0")

# (os, arch, bits64, tag) in definition order
TEST_PLATFORMS = (
    ("macos", "arm", None, "darwin_arm64"),
    ("macos", "intel", None, "darwin_amd64"),
    ("linux", "arm", True, "linux_arm64"),
    ("linux", "intel", None, "linux_amd64"),
)

MAC_ARM = Host("macos", "arm", True)
MAC_INTEL = Host("macos", "intel", True)
LINUX_ARM64 = Host("linux", "arm", True)
LINUX_ARM32 = Host("linux", "arm", False)
LINUX_INTEL = Host("linux", "intel", True)


def make_archive(content: bytes, name: str = "terraform-demux") -> bytes:
    """Build a gzipped tarball holding one executable entry."""
    tar_buf = io.BytesIO()
    with tarfile.open(fileobj=tar_buf, mode="w") as tar:
        info = tarfile.TarInfo(name)
        info.size = len(content)
        info.mode = 0o755
        tar.addfile(info, io.BytesIO(content))

    gz_buf = io.BytesIO()
    with gzip.GzipFile(fileobj=gz_buf, mode="wb", mtime=0) as gz:
        gz.write(tar_buf.getvalue())
    return gz_buf.getvalue()


def binary_content(version: str, tag: str) -> bytes:
    return f"#!/bin/sh\necho terraform-demux {version} {tag}\n".encode()


def artifact_url(version: str, tag: str) -> str:
    return f"https://releases.example.test/v{version}/terraform-demux_{version}_{tag}.tar.gz"


class FakeFetcher:
    """Serves archives from memory and records every requested URL."""

    def __init__(self, payloads: dict[str, bytes]) -> None:
        self.payloads = dict(payloads)
        self.calls: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        if url not in self.payloads:
            raise DownloadFailure(url, "HTTP 404 Not Found")
        return self.payloads[url]


@pytest.fixture(autouse=True)
def reset_foundation_logging() -> Iterator[None]:
    """Reset foundation logging state before each test to avoid conflicts."""
    reset_foundation_setup_for_testing()
    yield
    reset_foundation_setup_for_testing()


@pytest.fixture
def release_archives() -> dict[tuple[str, str], bytes]:
    """Archive bytes for every (version, tag) in the test catalog."""
    return {
        (version, tag): make_archive(binary_content(version, tag))
        for version in TEST_VERSIONS
        for _os, _arch, _bits64, tag in TEST_PLATFORMS
    }


@pytest.fixture
def test_catalog(release_archives: dict[tuple[str, str], bytes]) -> ArtifactCatalog:
    """Two releases, four platforms each, pinned to the fixture archives."""
    releases = []
    for version in TEST_VERSIONS:
        artifacts = [
            Artifact(
                os=os_name,
                arch=arch,
                url=artifact_url(version, tag),
                sha256=compute_digest(release_archives[(version, tag)]),
                bits64=bits64,
            )
            for os_name, arch, bits64, tag in TEST_PLATFORMS
        ]
        releases.append(Release(version=version, artifacts=artifacts))
    return ArtifactCatalog(releases)


@pytest.fixture
def fake_fetcher(release_archives: dict[tuple[str, str], bytes]) -> FakeFetcher:
    return FakeFetcher({artifact_url(v, tag): data for (v, tag), data in release_archives.items()})


# 🌶️📦🔚
