#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Info and resolve commands for the tfdemux CLI."""

from __future__ import annotations

import click
from provide.foundation import logger
from provide.foundation.console import perr, pout

from tfdemux.catalog import load_default_catalog
from tfdemux.commands.options import build_host, host_options
from tfdemux.exceptions import FormulaError
from tfdemux.formula import TERRAFORM_DEMUX
from tfdemux.package import resolve_artifact


@click.command("info")
def info_command() -> None:
    """Show formula metadata, conflicts and published releases."""
    formula = TERRAFORM_DEMUX
    catalog = load_default_catalog()

    pout(f"📦 {formula.name}: {formula.desc}")
    pout(f"Homepage: {formula.homepage}")
    pout(f"License: {formula.license}")
    pout(f"Installs: bin/{formula.binary}, bin/{formula.alias} -> {formula.binary}")
    pout(f"Conflicts with: {', '.join(formula.conflicts_with) or 'nothing'}")

    pout("\nReleases:")
    for version in catalog.versions():
        tags = ", ".join(artifact.tag for artifact in catalog.lookup(version))
        pout(f"  • {version} ({tags})")


@click.command("resolve")
@click.argument("version", required=False)
@host_options
@click.pass_context
def resolve_command(ctx: click.Context, version: str | None, os_name: str | None, arch: str | None) -> None:
    """Show which artifact VERSION resolves to (default: latest release)."""
    catalog = load_default_catalog()
    version = version or catalog.latest().version
    host = build_host(ctx, os_name, arch)
    logger.debug("Resolving artifact", version=version, host=host.describe())

    try:
        artifact = resolve_artifact(version, host=host, catalog=catalog)
    except FormulaError as e:
        logger.error("Resolution failed", version=version, host=host.describe(), error=str(e))
        perr(f"❌ {e}")
        raise click.Abort() from e

    pout(f"Version: {version}")
    pout(f"Platform: {artifact.tag}")
    pout(f"URL: {artifact.url}")
    pout(f"SHA256: {artifact.sha256}")


# 🌶️📦🔚
