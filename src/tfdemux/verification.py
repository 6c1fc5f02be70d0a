#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""SHA-256 verification of downloaded release archives."""

from __future__ import annotations

import hashlib
import hmac
from pathlib import Path

from provide.foundation import logger

from tfdemux.exceptions import ChecksumMismatch


def compute_digest(data: bytes) -> str:
    """Return the lower-case hex SHA-256 of ``data``."""
    return hashlib.sha256(data).hexdigest()


class IntegrityVerifier:
    """Compares payload digests against pinned values. A mismatch is never retried."""

    @staticmethod
    def verify(data: bytes, expected_sha256: str, source: str | None = None) -> None:
        """Verify ``data`` against ``expected_sha256`` (case-insensitive).

        Raises:
            ChecksumMismatch: If the digests differ
        """
        expected = expected_sha256.strip().lower()
        actual = compute_digest(data)
        if not hmac.compare_digest(actual.encode(), expected.encode()):
            logger.error(
                "Checksum mismatch",
                source=source,
                expected=expected,
                actual=actual,
                size=len(data),
            )
            raise ChecksumMismatch(expected, actual, source)
        logger.debug("Checksum verified", source=source, sha256=actual)

    @classmethod
    def verify_file(cls, path: Path, expected_sha256: str) -> bytes:
        """Verify a file on disk and return its bytes."""
        data = path.read_bytes()
        cls.verify(data, expected_sha256, source=str(path))
        return data


# 🌶️📦🔚
