#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Release catalog: published versions and their per-platform artifacts.

The catalog is plain data loaded from a release definition record. Each
release lists its artifacts in definition order and is validated at load time
so that no two artifacts share the same (os, arch, bits64) key.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from importlib import resources
from pathlib import Path
import re
from typing import Any

from attrs import define, field
from packaging.version import InvalidVersion, Version
from provide.foundation import logger
from provide.foundation.file.formats import read_json

from tfdemux.config.defaults import RELEASES_FILE, SHA256_HEX_LENGTH, SUPPORTED_ARCH, SUPPORTED_OS
from tfdemux.exceptions import CatalogError, UnknownVersion

_SHA256_RE = re.compile(rf"^[0-9a-f]{{{SHA256_HEX_LENGTH}}}$")

_OS_TAGS = {"macos": "darwin", "linux": "linux"}

ArtifactKey = tuple[str, str, bool | None]


@define(frozen=True)
class Artifact:
    """A single platform-specific download with a pinned SHA-256 digest."""

    os: str
    arch: str
    url: str
    sha256: str = field(converter=str.lower)
    bits64: bool | None = None

    @property
    def key(self) -> ArtifactKey:
        return (self.os, self.arch, self.bits64)

    @property
    def tag(self) -> str:
        """Release asset platform tag, e.g. ``darwin_arm64``."""
        if self.arch == "intel":
            arch_tag = "amd64"
        elif self.bits64 is False:
            arch_tag = "arm"
        else:
            arch_tag = "arm64"
        return f"{_OS_TAGS.get(self.os, self.os)}_{arch_tag}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Artifact:
        """Build an artifact from one ``platforms`` entry, validating its fields."""
        if not isinstance(data, Mapping):
            raise CatalogError(f"Platform entry must be an object, got {data!r}")
        missing = [name for name in ("os", "arch", "url", "sha256") if not data.get(name)]
        if missing:
            raise CatalogError(f"Platform entry is missing {', '.join(missing)}: {dict(data)}")

        os_name = str(data["os"]).lower()
        arch = str(data["arch"]).lower()
        if os_name not in SUPPORTED_OS:
            raise CatalogError(f"Unknown os '{data['os']}' (expected one of {', '.join(SUPPORTED_OS)})")
        if arch not in SUPPORTED_ARCH:
            raise CatalogError(f"Unknown arch '{data['arch']}' (expected one of {', '.join(SUPPORTED_ARCH)})")

        sha256 = str(data["sha256"]).lower()
        if not _SHA256_RE.match(sha256):
            raise CatalogError(f"Invalid sha256 for {data['url']}: {data['sha256']!r}")

        bits64 = data.get("bits64")
        if bits64 is not None and not isinstance(bits64, bool):
            raise CatalogError(f"bits64 must be true, false or null, got {bits64!r}")

        return cls(os=os_name, arch=arch, url=str(data["url"]), sha256=sha256, bits64=bits64)

    def to_dict(self) -> dict[str, Any]:
        return {
            "os": self.os,
            "arch": self.arch,
            "bits64": self.bits64,
            "url": self.url,
            "sha256": self.sha256,
        }


def _to_artifact_tuple(artifacts: Iterable[Artifact]) -> tuple[Artifact, ...]:
    return tuple(artifacts)


@define(frozen=True)
class Release:
    """A published version together with its complete set of platform artifacts."""

    version: str
    artifacts: tuple[Artifact, ...] = field(converter=_to_artifact_tuple)

    def __attrs_post_init__(self) -> None:
        parse_version(self.version)
        seen: dict[ArtifactKey, Artifact] = {}
        for artifact in self.artifacts:
            if artifact.key in seen:
                raise CatalogError(
                    f"Release {self.version} defines {artifact.key} twice: "
                    f"{seen[artifact.key].url} and {artifact.url}"
                )
            seen[artifact.key] = artifact

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Release:
        if not isinstance(data, Mapping):
            raise CatalogError(f"Release entry must be an object, got {data!r}")
        version = data.get("version")
        if not version:
            raise CatalogError("Release entry must define 'version'")
        platforms = data.get("platforms")
        if not isinstance(platforms, list) or not platforms:
            raise CatalogError(f"Release {version} must define a non-empty 'platforms' list")
        return cls(version=str(version), artifacts=[Artifact.from_dict(p) for p in platforms])


def parse_version(version: str) -> Version:
    """Parse a release version; pre-releases order below their final release."""
    try:
        return Version(version)
    except InvalidVersion:
        raise CatalogError(f"Invalid release version '{version}'") from None


class ArtifactCatalog:
    """Immutable table mapping release versions to their artifacts."""

    def __init__(self, releases: Iterable[Release]) -> None:
        self._releases: dict[str, Release] = {}
        for release in releases:
            if release.version in self._releases:
                raise CatalogError(f"Release {release.version} is defined more than once")
            self._releases[release.version] = release

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ArtifactCatalog:
        if not isinstance(data, Mapping):
            raise CatalogError("Release definition must be a JSON object")
        releases = data.get("releases")
        if not isinstance(releases, list):
            raise CatalogError("Release definition must contain a 'releases' list")
        return cls(Release.from_dict(entry) for entry in releases)

    @classmethod
    def from_file(cls, path: Path) -> ArtifactCatalog:
        logger.debug("Loading release catalog", path=str(path))
        return cls.from_dict(read_json(path))

    def lookup(self, version: str) -> tuple[Artifact, ...]:
        """Return the artifacts for an exactly-matching version, in definition order."""
        return self.release(version).artifacts

    def release(self, version: str) -> Release:
        try:
            return self._releases[version]
        except KeyError:
            raise UnknownVersion(version, self.versions()) from None

    def versions(self) -> list[str]:
        return list(self._releases)

    def latest(self) -> Release:
        if not self._releases:
            raise CatalogError("Catalog is empty")
        return max(self._releases.values(), key=lambda r: parse_version(r.version))

    def __contains__(self, version: object) -> bool:
        return version in self._releases

    def __len__(self) -> int:
        return len(self._releases)


def load_default_catalog() -> ArtifactCatalog:
    """Load the release catalog bundled with the package."""
    source = resources.files("tfdemux.data").joinpath(RELEASES_FILE)
    with resources.as_file(source) as path:
        return ArtifactCatalog.from_file(path)


# 🌶️📦🔚
