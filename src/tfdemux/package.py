#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Public API for resolving and installing the terraform-demux formula."""

from __future__ import annotations

from pathlib import Path

from provide.foundation import logger

from tfdemux.catalog import Artifact, ArtifactCatalog, load_default_catalog
from tfdemux.fetch import ArtifactCache, ArtifactFetcher
from tfdemux.formula import TERRAFORM_DEMUX, Formula
from tfdemux.installer import InstalledPackage, Installer
from tfdemux.platform import Host, PlatformMatcher, detect_host
from tfdemux.verification import IntegrityVerifier


def resolve_artifact(
    version: str,
    host: Host | None = None,
    catalog: ArtifactCatalog | None = None,
    matcher: PlatformMatcher | None = None,
) -> Artifact:
    """Select the artifact for ``version`` on ``host``.

    Args:
        version: Exact published version, e.g. "1.1.2"
        host: Host descriptor (detected from the running machine if None)
        catalog: Release catalog (the bundled one if None)
        matcher: Platform matcher (default dispatch table if None)

    Returns:
        The one artifact matching the host

    Raises:
        UnknownVersion: If the version is not published
        UnsupportedPlatform: If no artifact matches the host

    Example:
        ```python
        from tfdemux import resolve_artifact
        from tfdemux.platform import Host

        artifact = resolve_artifact("1.1.2", Host("macos", "arm", True))
        print(artifact.url)
        ```
    """
    if catalog is None:
        catalog = load_default_catalog()
    matcher = matcher or PlatformMatcher()
    host = host or detect_host()
    artifacts = catalog.lookup(version)
    return matcher.select(host, artifacts, version=version)


def retrieve_artifact(
    artifact: Artifact,
    fetcher: ArtifactFetcher | None = None,
    cache: ArtifactCache | None = None,
) -> bytes:
    """Return verified archive bytes for ``artifact``, consulting the cache first.

    Raises:
        DownloadFailure: If the archive cannot be fetched
        ChecksumMismatch: If the fetched bytes do not match the pinned digest
    """
    if cache is not None:
        cached = cache.get(artifact)
        if cached is not None:
            return cached

    fetcher = fetcher or ArtifactFetcher()
    data = fetcher.fetch(artifact.url)
    IntegrityVerifier.verify(data, artifact.sha256, source=artifact.url)

    if cache is not None:
        cache.put(artifact, data)
    return data


def install_formula(
    version: str,
    prefix: Path,
    host: Host | None = None,
    catalog: ArtifactCatalog | None = None,
    fetcher: ArtifactFetcher | None = None,
    cache: ArtifactCache | None = None,
    formula: Formula = TERRAFORM_DEMUX,
) -> InstalledPackage:
    """Resolve, fetch, verify and install ``version`` under ``prefix``.

    Re-installing the same version is idempotent; installing another version
    replaces the binary while the alias keeps resolving to it.

    Raises:
        UnknownVersion, UnsupportedPlatform, DownloadFailure,
        ChecksumMismatch, InstallCollision, InstallError
    """
    artifact = resolve_artifact(version, host=host, catalog=catalog)
    logger.info("Resolved artifact", version=version, tag=artifact.tag, url=artifact.url)

    data = retrieve_artifact(artifact, fetcher=fetcher, cache=cache)
    return Installer(prefix, formula).install(data, artifact, version)


def install_archive(
    archive_path: Path,
    version: str,
    prefix: Path,
    host: Host | None = None,
    catalog: ArtifactCatalog | None = None,
    formula: Formula = TERRAFORM_DEMUX,
) -> InstalledPackage:
    """Install from an archive already on disk, verifying it against the catalog."""
    artifact = resolve_artifact(version, host=host, catalog=catalog)
    data = IntegrityVerifier.verify_file(archive_path, artifact.sha256)
    return Installer(prefix, formula).install(data, artifact, version)


def verify_archive(
    archive_path: Path,
    version: str,
    host: Host | None = None,
    catalog: ArtifactCatalog | None = None,
) -> Artifact:
    """Check a local archive against the digest pinned for ``version`` on ``host``.

    Raises:
        ChecksumMismatch: If the archive is not the pinned artifact
    """
    artifact = resolve_artifact(version, host=host, catalog=catalog)
    IntegrityVerifier.verify_file(archive_path, artifact.sha256)
    return artifact


def uninstall_formula(prefix: Path, formula: Formula = TERRAFORM_DEMUX) -> list[Path]:
    """Remove the installed binary, its alias and the receipt."""
    return Installer(prefix, formula).uninstall()


def installed_formula(prefix: Path, formula: Formula = TERRAFORM_DEMUX) -> InstalledPackage | None:
    """Return the installed package record under ``prefix``, if any."""
    return Installer(prefix, formula).installed()


# 🌶️📦🔚
