#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Verify command for the tfdemux CLI."""

from __future__ import annotations

from pathlib import Path

import click
from provide.foundation import logger
from provide.foundation.console import perr, pout

from tfdemux.commands.options import build_host, host_options
from tfdemux.exceptions import FormulaError
from tfdemux.package import verify_archive


@click.command("verify")
@click.argument(
    "archive_file",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    required=True,
)
@click.option("--version", "version", required=True, help="Release version the archive claims to be")
@host_options
@click.pass_context
def verify_command(
    ctx: click.Context, archive_file: str, version: str, os_name: str | None, arch: str | None
) -> None:
    """Verifies a release archive against its pinned SHA256."""
    archive = Path(archive_file)
    host = build_host(ctx, os_name, arch)
    logger.debug("Starting archive verification", archive=str(archive), version=version, host=host.describe())
    pout(f"🔍 Verifying '{archive.name}' against {version} ({host.describe()})...")

    try:
        artifact = verify_archive(archive, version, host=host)
    except FormulaError as e:
        logger.error("Verification failed", error=str(e), archive=str(archive))
        perr(f"❌ Verification failed: {e}")
        raise click.Abort() from e

    logger.info("Archive verified", archive=str(archive), tag=artifact.tag)
    pout(f"✅ {artifact.tag} archive matches SHA256 {artifact.sha256}")


# 🌶️📦🔚
