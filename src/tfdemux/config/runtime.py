#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""tfdemux runtime configuration for CLI startup."""

from __future__ import annotations

import os
from pathlib import Path

from attrs import define
from provide.foundation.config.base import field
from provide.foundation.config.env import RuntimeConfig

from tfdemux.config.defaults import CACHE_DIR_NAME, DEFAULT_DOWNLOAD_TIMEOUT, DEFAULT_PREFIX

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_log_level(value: str) -> str:
    """Validate and normalize log levels."""
    normalized = value.strip().upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {value}")
    return normalized


def parse_timeout(value: str | float) -> float:
    """Parse a positive timeout in seconds."""
    timeout = float(value)
    if timeout <= 0:
        raise ValueError(f"Invalid download timeout: {value}")
    return timeout


def default_cache_dir() -> str:
    xdg_cache = os.environ.get("XDG_CACHE_HOME", str(Path("~/.cache").expanduser()))
    return str(Path(xdg_cache) / CACHE_DIR_NAME)


@define
class TfdemuxRuntimeConfig(RuntimeConfig):
    """tfdemux runtime configuration for CLI startup."""

    log_level: str = field(
        default="WARNING",
        env_var="TFDEMUX_LOG_LEVEL",
        converter=parse_log_level,
        metadata={"help": "Log level for tfdemux operations (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)"},
    )

    setup_log_level: str = field(
        default="WARNING",
        env_var="TFDEMUX_SETUP_LOG_LEVEL",
        converter=parse_log_level,
        metadata={"help": "Log level for Foundation setup messages during initialization"},
    )

    prefix: str = field(
        default=DEFAULT_PREFIX,
        env_var="TFDEMUX_PREFIX",
        metadata={"help": "Install prefix; binaries land in <prefix>/bin"},
    )

    cache_dir: str = field(
        default="",
        env_var="TFDEMUX_CACHE_DIR",
        metadata={"help": "Directory holding verified release archives (default: $XDG_CACHE_HOME/tfdemux)"},
    )

    arch: str = field(
        default="",
        env_var="TFDEMUX_ARCH",
        metadata={"help": "Override the detected CPU architecture (e.g. arm64, amd64)"},
    )

    download_timeout: float = field(
        default=DEFAULT_DOWNLOAD_TIMEOUT,
        env_var="TFDEMUX_DOWNLOAD_TIMEOUT",
        converter=parse_timeout,
        metadata={"help": "Per-request download timeout in seconds"},
    )

    @property
    def prefix_path(self) -> Path:
        return Path(self.prefix).expanduser()

    @property
    def cache_path(self) -> Path:
        return Path(self.cache_dir or default_cache_dir()).expanduser()

    @property
    def arch_override(self) -> str | None:
        return self.arch.strip() or None


# 🌶️📦🔚
