#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Install, uninstall and status commands for the tfdemux CLI."""

from __future__ import annotations

from pathlib import Path

import click
from provide.foundation import logger
from provide.foundation.console import perr, pout

from tfdemux.catalog import load_default_catalog
from tfdemux.commands.options import build_host, get_config, host_options
from tfdemux.exceptions import FormulaError
from tfdemux.fetch import ArtifactCache, ArtifactFetcher
from tfdemux.installer import Installer
from tfdemux.package import install_archive, install_formula, uninstall_formula

prefix_option = click.option(
    "--prefix",
    type=click.Path(file_okay=False, resolve_path=True),
    default=None,
    help="Install prefix (default: $TFDEMUX_PREFIX or ~/.local)",
)


def _resolve_prefix(ctx: click.Context, prefix: str | None) -> Path:
    return Path(prefix) if prefix else get_config(ctx).prefix_path


@click.command("install")
@click.argument("version", required=False)
@prefix_option
@click.option(
    "--archive",
    "archive_file",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    default=None,
    help="Install from a local archive instead of downloading",
)
@click.option("--no-cache", is_flag=True, help="Do not read or write the archive cache")
@host_options
@click.pass_context
def install_command(
    ctx: click.Context,
    version: str | None,
    prefix: str | None,
    archive_file: str | None,
    no_cache: bool,
    os_name: str | None,
    arch: str | None,
) -> None:
    """Install VERSION (default: latest release) and its alias."""
    config = get_config(ctx)
    catalog = load_default_catalog()
    version = version or catalog.latest().version
    install_prefix = _resolve_prefix(ctx, prefix)
    host = build_host(ctx, os_name, arch)
    log_ctx = {"version": version, "prefix": str(install_prefix), "host": host.describe()}
    logger.debug("Install command started", **log_ctx)

    try:
        if archive_file:
            package = install_archive(Path(archive_file), version, install_prefix, host=host, catalog=catalog)
        else:
            cache = None if no_cache else ArtifactCache(config.cache_path)
            package = install_formula(
                version,
                install_prefix,
                host=host,
                catalog=catalog,
                fetcher=ArtifactFetcher(timeout=config.download_timeout),
                cache=cache,
            )
    except FormulaError as e:
        logger.error("Install failed", error=str(e), **log_ctx)
        perr(f"❌ Install failed: {e}")
        raise click.Abort() from e

    pout(f"✅ Installed {package.name} {package.version} ({package.platform_tag})")
    pout(f"  • {package.primary_path}")
    pout(f"  • {package.alias_path} -> {package.primary_path.name}")


@click.command("uninstall")
@prefix_option
@click.pass_context
def uninstall_command(ctx: click.Context, prefix: str | None) -> None:
    """Remove the installed binary, its alias and the receipt."""
    install_prefix = _resolve_prefix(ctx, prefix)
    try:
        removed = uninstall_formula(install_prefix)
    except OSError as e:
        logger.error("Uninstall failed", error=str(e), prefix=str(install_prefix))
        perr(f"❌ Uninstall failed: {e}")
        raise click.Abort() from e

    if not removed:
        pout("Nothing to uninstall")
        return

    pout(f"✅ Removed {len(removed)} file(s):")
    for path in removed:
        pout(f"  • {path}")


@click.command("status")
@prefix_option
@click.pass_context
def status_command(ctx: click.Context, prefix: str | None) -> None:
    """Show what is installed under the prefix."""
    installer = Installer(_resolve_prefix(ctx, prefix))
    try:
        package = installer.installed()
    except FormulaError as e:
        perr(f"❌ {e}")
        raise click.Abort() from e

    if package is None:
        pout(f"{installer.formula.name} is not installed in {installer.prefix}")
        return

    pout(f"📦 {package.name} {package.version} ({package.platform_tag})")
    pout(f"Binary: {package.primary_path}")
    pout(f"SHA256: {package.sha256}")
    pout(f"Conflicts with: {', '.join(package.conflicts_with)}")
    if installer.alias_resolves():
        pout(f"Alias: {package.alias_path} -> {package.primary_path.name} ✅")
    else:
        perr(f"Alias: {package.alias_path} ❌ does not resolve to the installed binary")
        raise click.Abort()


# 🌶️📦🔚
