#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""terraform-demux formula: artifact resolution and verified installation."""

from __future__ import annotations

from provide.foundation.utils import get_version

from tfdemux.exceptions import (
    ChecksumMismatch,
    DownloadFailure,
    FormulaError,
    InstallCollision,
    UnknownVersion,
    UnsupportedPlatform,
)
from tfdemux.package import (
    install_formula,
    resolve_artifact,
    uninstall_formula,
    verify_archive,
)

__version__ = get_version("tfdemux-formula", caller_file=__file__)

__all__ = [
    "ChecksumMismatch",
    "DownloadFailure",
    "FormulaError",
    "InstallCollision",
    "UnknownVersion",
    "UnsupportedPlatform",
    "__version__",
    "install_formula",
    "resolve_artifact",
    "uninstall_formula",
    "verify_archive",
]

# 🌶️📦🔚
