#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Placement of the launcher binary and its alias.

An install produces two named entries for one owned file:
``<prefix>/bin/<binary>`` and ``<prefix>/bin/<alias>``, the latter a relative
symlink to the former. Both are swapped in with ``os.replace`` so the alias
never points at a missing or partially written target.
"""

from __future__ import annotations

import io
import os
from pathlib import Path
import tarfile
from typing import Any

from attrs import define, field
from provide.foundation import logger
from provide.foundation.errors import FoundationError
from provide.foundation.file import atomic_write
from provide.foundation.file.directory import ensure_dir, ensure_parent_dir
from provide.foundation.file.formats import read_json, write_json

from tfdemux.catalog import Artifact
from tfdemux.config.defaults import BIN_DIR, DEFAULT_EXECUTABLE_PERMS, RECEIPTS_DIR
from tfdemux.exceptions import InstallCollision, InstallError
from tfdemux.formula import TERRAFORM_DEMUX, Formula
from tfdemux.verification import IntegrityVerifier


@define(frozen=True)
class InstalledPackage:
    """On-disk state of an installed formula."""

    name: str
    version: str
    primary_path: Path = field(converter=Path)
    alias_name: str
    alias_path: Path = field(converter=Path)
    conflicts_with: tuple[str, ...] = field(converter=tuple)
    platform_tag: str = ""
    sha256: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "primary_path": str(self.primary_path),
            "alias_name": self.alias_name,
            "alias_path": str(self.alias_path),
            "conflicts_with": list(self.conflicts_with),
            "platform_tag": self.platform_tag,
            "sha256": self.sha256,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InstalledPackage:
        return cls(
            name=data["name"],
            version=data["version"],
            primary_path=data["primary_path"],
            alias_name=data["alias_name"],
            alias_path=data["alias_path"],
            conflicts_with=data.get("conflicts_with", []),
            platform_tag=data.get("platform_tag", ""),
            sha256=data.get("sha256", ""),
        )


class Installer:
    """Owns ``<prefix>/bin`` entries and the install receipt for one formula."""

    def __init__(self, prefix: Path, formula: Formula = TERRAFORM_DEMUX) -> None:
        self.prefix = prefix
        self.formula = formula
        self.bin_dir = prefix / BIN_DIR
        self.primary_path = self.bin_dir / formula.binary
        self.alias_path = self.bin_dir / formula.alias
        self.receipt_path = prefix / RECEIPTS_DIR / f"{formula.name}.json"

    def install(self, data: bytes, artifact: Artifact, version: str) -> InstalledPackage:
        """Install a release archive.

        Args:
            data: The complete downloaded archive
            artifact: The artifact the archive was fetched for
            version: Release version being installed

        Returns:
            The installed package record

        Raises:
            ChecksumMismatch: If ``data`` does not match ``artifact.sha256``
            InstallCollision: If the alias slot belongs to another package
            InstallError: If the archive lacks the binary or files cannot be placed
        """
        IntegrityVerifier.verify(data, artifact.sha256, source=artifact.url)
        self._check_alias_slot()
        content = self._extract_binary(data)

        fresh = not self.primary_path.exists()
        previous = None if fresh else self.primary_path.read_bytes()
        logger.info(
            "Installing formula",
            name=self.formula.name,
            version=version,
            tag=artifact.tag,
            bin_dir=str(self.bin_dir),
            fresh=fresh,
        )

        package = InstalledPackage(
            name=self.formula.name,
            version=version,
            primary_path=self.primary_path,
            alias_name=self.formula.alias,
            alias_path=self.alias_path,
            conflicts_with=self.formula.conflicts_with,
            platform_tag=artifact.tag,
            sha256=artifact.sha256,
        )

        try:
            self._place_primary(content)
            self._link_alias()
            self._write_receipt(package)
        except (OSError, FoundationError) as e:
            if fresh:
                self._rollback()
            else:
                self._restore_primary(previous)
            raise InstallError(f"Failed to install {self.formula.name} {version}: {e}") from e

        logger.info("Installed formula", name=package.name, version=version, alias=str(self.alias_path))
        return package

    def uninstall(self) -> list[Path]:
        """Remove the alias (when ours), the binary and the receipt."""
        removed: list[Path] = []
        if self._alias_is_ours():
            self.alias_path.unlink()
            removed.append(self.alias_path)
        elif self.alias_path.exists() or self.alias_path.is_symlink():
            logger.warning("Leaving alias owned by another package", path=str(self.alias_path))

        for path in (self.primary_path, self.receipt_path):
            if path.exists():
                path.unlink()
                removed.append(path)

        logger.info("Uninstalled formula", name=self.formula.name, removed=[str(p) for p in removed])
        return removed

    def installed(self) -> InstalledPackage | None:
        """Read the install receipt, if any."""
        if not self.receipt_path.exists():
            return None
        try:
            data = read_json(self.receipt_path)
            if not isinstance(data, dict):
                raise ValueError("receipt is not a JSON object")
            return InstalledPackage.from_dict(data)
        except (KeyError, TypeError, ValueError, FoundationError) as e:
            raise InstallError(f"Corrupt install receipt {self.receipt_path}: {e}") from e

    def alias_resolves(self) -> bool:
        """True when the alias leads to the installed primary binary."""
        return self._alias_is_ours() and self.primary_path.is_file()

    def _alias_is_ours(self) -> bool:
        if not self.alias_path.is_symlink():
            return False
        target = Path(os.readlink(self.alias_path))
        if not target.is_absolute():
            target = self.bin_dir / target
        return os.path.normpath(target) == os.path.normpath(self.primary_path)

    def _check_alias_slot(self) -> None:
        occupied = self.alias_path.exists() or self.alias_path.is_symlink()
        if occupied and not self._alias_is_ours():
            owner = self.formula.conflicts_with[0] if self.formula.conflicts_with else "another package"
            logger.error("Alias slot already taken", path=str(self.alias_path), owner=owner)
            raise InstallCollision(str(self.alias_path), owner)

    def _extract_binary(self, data: bytes) -> bytes:
        name = self.formula.binary
        try:
            with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as tar:
                for member in tar.getmembers():
                    if member.isfile() and Path(member.name).name == name:
                        extracted = tar.extractfile(member)
                        if extracted is None:
                            break
                        return extracted.read()
        except tarfile.TarError as e:
            raise InstallError(f"Could not read release archive: {e}") from e
        raise InstallError(f"Release archive does not contain '{name}'")

    def _place_primary(self, content: bytes) -> None:
        ensure_dir(self.bin_dir)
        atomic_write(self.primary_path, content, mode=DEFAULT_EXECUTABLE_PERMS)
        logger.debug("Placed binary", path=str(self.primary_path), size=len(content))

    def _link_alias(self) -> None:
        if self._alias_is_ours():
            return
        tmp_link = self.bin_dir / f".{self.formula.alias}.{os.getpid()}.tmp"
        tmp_link.unlink(missing_ok=True)
        os.symlink(self.formula.binary, tmp_link)
        os.replace(tmp_link, self.alias_path)
        logger.debug("Linked alias", alias=str(self.alias_path), target=self.formula.binary)

    def _write_receipt(self, package: InstalledPackage) -> None:
        ensure_parent_dir(self.receipt_path)
        write_json(self.receipt_path, package.to_dict())

    def _restore_primary(self, previous: bytes | None) -> None:
        if previous is None:
            return
        logger.warning("Restoring previous binary", path=str(self.primary_path))
        atomic_write(self.primary_path, previous, mode=DEFAULT_EXECUTABLE_PERMS)

    def _rollback(self) -> None:
        logger.warning("Rolling back partial install", name=self.formula.name)
        if self._alias_is_ours():
            self.alias_path.unlink()
        self.primary_path.unlink(missing_ok=True)
        self.receipt_path.unlink(missing_ok=True)


# 🌶️📦🔚
