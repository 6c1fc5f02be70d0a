#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""tfdemux command-line interface entrypoint."""

from __future__ import annotations

from attrs import evolve
import click
from provide.foundation import CLIContext, TelemetryConfig, get_hub
from provide.foundation.utils import get_version

from tfdemux.commands.info import info_command, resolve_command
from tfdemux.commands.install import install_command, status_command, uninstall_command
from tfdemux.commands.utils import clean_command
from tfdemux.commands.verify import verify_command
from tfdemux.config import TfdemuxRuntimeConfig

__version__ = get_version("tfdemux-formula", caller_file=__file__)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="tfdemux",
    message="%(prog)s version %(version)s",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """terraform-demux formula: resolve, verify and install the launcher.

    Configure via environment variables:
    - TFDEMUX_LOG_LEVEL: Set log level (trace, debug, info, warning, error)
    - TFDEMUX_SETUP_LOG_LEVEL: Control Foundation's initialization logs
    - TFDEMUX_PREFIX: Install prefix (default ~/.local)
    - TFDEMUX_CACHE_DIR: Archive cache directory
    - TFDEMUX_ARCH: Override the detected CPU architecture
    - TFDEMUX_DOWNLOAD_TIMEOUT: Download timeout in seconds
    - PROVIDE_LOG_FILE: Write logs to file
    """
    ctx.ensure_object(dict)

    config = TfdemuxRuntimeConfig.from_env()

    cli_ctx = CLIContext.from_env()

    base_telemetry = TelemetryConfig.from_env()

    telemetry_config = evolve(
        base_telemetry,
        service_name="tfdemux",
        logging=evolve(
            base_telemetry.logging,
            default_level=config.log_level,  # type: ignore[arg-type]
        ),
    )

    hub = get_hub()
    hub.initialize_foundation(telemetry_config)

    ctx.obj["cli_context"] = cli_ctx
    ctx.obj["config"] = config
    ctx.obj["log"] = cli_ctx.logger


cli.add_command(info_command, name="info")
cli.add_command(resolve_command, name="resolve")
cli.add_command(verify_command, name="verify")
cli.add_command(install_command, name="install")
cli.add_command(uninstall_command, name="uninstall")
cli.add_command(status_command, name="status")
cli.add_command(clean_command, name="clean")

main = cli

if __name__ == "__main__":
    cli()

# 🌶️📦🔚
