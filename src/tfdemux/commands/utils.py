#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Utility commands for the tfdemux CLI."""

from __future__ import annotations

from pathlib import Path

import click
from provide.foundation import logger
from provide.foundation.console import pout
from provide.foundation.formatting import format_size

from tfdemux.commands.options import get_config
from tfdemux.config.defaults import CACHE_SUFFIX
from tfdemux.fetch import ArtifactCache


@click.command("clean")
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be removed without removing",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip confirmation prompt",
)
@click.pass_context
def clean_command(ctx: click.Context, dry_run: bool, yes: bool) -> None:
    """Clean the downloaded archive cache."""
    cache = ArtifactCache(get_config(ctx).cache_path)
    log_ctx = {"cache_dir": str(cache.cache_dir), "dry_run": dry_run}
    logger.debug("Clean command started", **log_ctx)

    cached = _cached_archives(cache.cache_dir)
    if not cached:
        pout("Archive cache is empty")
        return

    total_size = sum(p.stat().st_size for p in cached)

    if dry_run:
        pout("🔍 DRY RUN - Nothing will be removed\n")
        pout(f"Would remove {len(cached)} cached archives ({format_size(total_size)}):")
        for path in cached:
            pout(f"  - {path.name}")
        return

    if not yes and not click.confirm(f"Remove {len(cached)} cached archives ({format_size(total_size)})?"):
        pout("Aborted.")
        return

    removed = cache.clear()
    logger.info("Removed cached archives", count=len(removed), size_bytes=total_size)
    pout(f"✅ Removed {len(removed)} cached archives")
    pout(f"\n💾 Total freed: {format_size(total_size)}")


def _cached_archives(cache_dir: Path) -> list[Path]:
    if not cache_dir.exists():
        return []
    return sorted(p for p in cache_dir.glob(f"*{CACHE_SUFFIX}") if p.is_file())


# 🌶️📦🔚
