#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Test verification.py - SHA-256 integrity checks."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from tfdemux.exceptions import ChecksumMismatch
from tfdemux.verification import IntegrityVerifier, compute_digest

PAYLOAD = b"terraform-demux release archive"
PAYLOAD_SHA = hashlib.sha256(PAYLOAD).hexdigest()


@pytest.mark.unit
class TestIntegrityVerifier:
    def test_matching_digest(self) -> None:
        IntegrityVerifier.verify(PAYLOAD, PAYLOAD_SHA)

    def test_digest_is_case_insensitive(self) -> None:
        IntegrityVerifier.verify(PAYLOAD, PAYLOAD_SHA.upper())

    def test_single_byte_change_rejected(self) -> None:
        tampered = b"T" + PAYLOAD[1:]

        with pytest.raises(ChecksumMismatch) as exc_info:
            IntegrityVerifier.verify(tampered, PAYLOAD_SHA, source="https://x/a.tar.gz")

        error = exc_info.value
        assert error.expected == PAYLOAD_SHA
        assert error.actual == compute_digest(tampered)
        assert error.source == "https://x/a.tar.gz"
        assert "SHA256 mismatch" in str(error)

    def test_empty_payload(self) -> None:
        IntegrityVerifier.verify(b"", hashlib.sha256(b"").hexdigest())
        with pytest.raises(ChecksumMismatch):
            IntegrityVerifier.verify(b"", PAYLOAD_SHA)

    def test_verify_file_returns_bytes(self, tmp_path: Path) -> None:
        archive = tmp_path / "a.tar.gz"
        archive.write_bytes(PAYLOAD)

        assert IntegrityVerifier.verify_file(archive, PAYLOAD_SHA) == PAYLOAD

    def test_verify_file_mismatch_names_path(self, tmp_path: Path) -> None:
        archive = tmp_path / "a.tar.gz"
        archive.write_bytes(b"something else")

        with pytest.raises(ChecksumMismatch) as exc_info:
            IntegrityVerifier.verify_file(archive, PAYLOAD_SHA)
        assert exc_info.value.source == str(archive)


# 🌶️📦🔚
