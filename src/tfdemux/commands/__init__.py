#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Command modules for the tfdemux CLI."""

from __future__ import annotations

from tfdemux.commands.info import info_command, resolve_command
from tfdemux.commands.install import install_command, status_command, uninstall_command
from tfdemux.commands.utils import clean_command
from tfdemux.commands.verify import verify_command

__all__ = [
    "clean_command",
    "info_command",
    "install_command",
    "resolve_command",
    "status_command",
    "uninstall_command",
    "verify_command",
]

# 🌶️📦🔚
