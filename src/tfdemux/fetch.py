#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Artifact retrieval and the verified-archive cache.

Downloads are blocking and read the whole payload before anything else looks
at it. Only payloads that passed verification are ever written to the cache.
"""

from __future__ import annotations

import http.client
from pathlib import Path
import urllib.error
import urllib.request

from provide.foundation import logger, retry
from provide.foundation.file import atomic_write
from provide.foundation.file.directory import ensure_dir
from provide.foundation.resilience.types import BackoffStrategy

from tfdemux.catalog import Artifact
from tfdemux.config.defaults import (
    CACHE_SUFFIX,
    DEFAULT_DOWNLOAD_TIMEOUT,
    DOWNLOAD_BASE_DELAY,
    DOWNLOAD_CHUNK_SIZE,
    DOWNLOAD_MAX_ATTEMPTS,
)
from tfdemux.exceptions import ChecksumMismatch, DownloadFailure
from tfdemux.verification import IntegrityVerifier


class ArtifactFetcher:
    """Fetches release archives over HTTP(S) or from ``file://`` mirrors."""

    def __init__(self, timeout: float = DEFAULT_DOWNLOAD_TIMEOUT) -> None:
        self.timeout = timeout

    def fetch(self, url: str) -> bytes:
        """Download ``url`` completely.

        Raises:
            DownloadFailure: On any transport error, after retries are exhausted
        """
        logger.info("Downloading artifact", url=url)
        try:
            data = self._download(url)
        except DownloadFailure:
            raise
        except (OSError, ValueError) as e:
            raise DownloadFailure(url, str(e)) from e
        logger.debug("Download complete", url=url, size=len(data))
        return data

    @retry(
        ConnectionError,
        TimeoutError,
        max_attempts=DOWNLOAD_MAX_ATTEMPTS,
        base_delay=DOWNLOAD_BASE_DELAY,
        backoff=BackoffStrategy.EXPONENTIAL,
        jitter=True,
    )
    def _download(self, url: str) -> bytes:
        """Read the full response body.

        Retries:
            Up to 3 attempts with exponential backoff for connection errors,
            timeouts, broken HTTP responses and 5xx responses
        """
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as response:  # noqa: S310
                chunks = []
                while chunk := response.read(DOWNLOAD_CHUNK_SIZE):
                    chunks.append(chunk)
                return b"".join(chunks)
        except urllib.error.HTTPError as e:
            if e.code >= 500:
                raise ConnectionError(f"HTTP {e.code} {e.reason}") from e
            raise DownloadFailure(url, f"HTTP {e.code} {e.reason}") from e
        except urllib.error.URLError as e:
            if isinstance(e.reason, TimeoutError):
                raise TimeoutError(str(e.reason)) from e
            raise ConnectionError(str(e.reason)) from e
        except http.client.HTTPException as e:
            raise ConnectionError(f"{type(e).__name__}: {e}") from e


class ArtifactCache:
    """Content-addressed store of verified archives, keyed by SHA-256."""

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = cache_dir

    def path_for(self, artifact: Artifact) -> Path:
        return self.cache_dir / f"{artifact.sha256}{CACHE_SUFFIX}"

    def get(self, artifact: Artifact) -> bytes | None:
        """Return the cached payload, or None if absent or corrupt."""
        path = self.path_for(artifact)
        if not path.is_file():
            return None
        try:
            data = IntegrityVerifier.verify_file(path, artifact.sha256)
        except ChecksumMismatch:
            logger.warning("Discarding corrupt cache entry", path=str(path))
            path.unlink(missing_ok=True)
            return None
        logger.debug("Using cached artifact", path=str(path), tag=artifact.tag)
        return data

    def put(self, artifact: Artifact, data: bytes) -> Path:
        """Store ``data`` after checking it against the artifact digest."""
        IntegrityVerifier.verify(data, artifact.sha256, source=artifact.url)
        path = self.path_for(artifact)
        ensure_dir(self.cache_dir)
        atomic_write(path, data)
        logger.debug("Cached artifact", path=str(path), size=len(data))
        return path

    def clear(self) -> list[Path]:
        removed: list[Path] = []
        if not self.cache_dir.exists():
            return removed
        for entry in self.cache_dir.glob(f"*{CACHE_SUFFIX}"):
            if entry.is_file():
                entry.unlink()
                removed.append(entry)
        return removed


# 🌶️📦🔚
