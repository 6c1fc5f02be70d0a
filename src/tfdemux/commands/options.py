#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared click options for tfdemux commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from tfdemux.config import TfdemuxRuntimeConfig
from tfdemux.platform import Host, detect_host, normalize_arch, normalize_os

F = TypeVar("F", bound=Callable[..., Any])


def host_options(func: F) -> F:
    """Add --os/--arch options for resolving against a host other than this one."""
    func = click.option(
        "--arch",
        "arch",
        default=None,
        help="CPU architecture to resolve for (e.g. arm64, amd64, armv7l). Defaults to this machine.",
    )(func)
    func = click.option(
        "--os",
        "os_name",
        default=None,
        help="Operating system to resolve for (macos, linux). Defaults to this machine.",
    )(func)
    return func


def get_config(ctx: click.Context) -> TfdemuxRuntimeConfig:
    obj = ctx.find_root().obj or {}
    config = obj.get("config")
    if config is None:
        config = TfdemuxRuntimeConfig.from_env()
    return config


def build_host(ctx: click.Context, os_name: str | None, arch: str | None) -> Host:
    """Host from explicit options, falling back to detection (honouring TFDEMUX_ARCH)."""
    config = get_config(ctx)
    detected = detect_host(arch_override=arch or config.arch_override)
    if os_name is None:
        return detected
    family, bits64 = normalize_arch(arch) if arch else (detected.arch, detected.bits64)
    return Host(os=normalize_os(os_name), arch=family, bits64=bits64)


# 🌶️📦🔚
