#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Custom exceptions for the terraform-demux formula."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from provide.foundation.errors import FoundationError

if TYPE_CHECKING:
    from tfdemux.platform import Host


class FormulaError(FoundationError):
    """Base exception for all formula-related errors."""

    pass


class CatalogError(FormulaError):
    """Raised when a release definition is malformed."""

    pass


class UnknownVersion(FormulaError):
    """Raised when the requested version is not in the catalog."""

    def __init__(self, version: str, known: Sequence[str] = ()) -> None:
        self.version = version
        self.known = tuple(known)
        known_str = ", ".join(self.known) if self.known else "none"
        super().__init__(f"Unknown version '{version}' (published: {known_str})")


class UnsupportedPlatform(FormulaError):
    """Raised when no artifact matches the host descriptor."""

    def __init__(self, host: Host, version: str | None = None) -> None:
        self.host = host
        self.version = version
        suffix = f" in release {version}" if version else ""
        super().__init__(f"No artifact for platform {host.describe()}{suffix}")


class DownloadFailure(FormulaError):
    """Raised for transport-level failures fetching an artifact. Retryable."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download {url}: {reason}")


class ChecksumMismatch(FormulaError):
    """Raised when the downloaded bytes do not match the pinned digest."""

    def __init__(self, expected: str, actual: str, source: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        self.source = source
        where = f" for {source}" if source else ""
        super().__init__(f"SHA256 mismatch{where}: expected {expected}, got {actual}")


class InstallCollision(FormulaError):
    """Raised when the alias name is already owned by another package."""

    def __init__(self, alias_path: str, owner: str) -> None:
        self.alias_path = alias_path
        self.owner = owner
        super().__init__(
            f"'{alias_path}' is already provided by '{owner}'. Uninstall '{owner}' first."
        )


class InstallError(FormulaError):
    """Raised for errors while placing files on disk."""

    pass


# 🌶️📦🔚
