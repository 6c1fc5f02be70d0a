#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Centralized default values for tfdemux configuration."""

from __future__ import annotations

# =================================
# Formula identity
# =================================
FORMULA_NAME = "terraform-demux"
FORMULA_DESC = "A user-friendly launcher (à la Bazelisk) for Terraform."
FORMULA_HOMEPAGE = "https://github.com/etsy/terraform-demux"
FORMULA_LICENSE = "Apache-2.0"
PRIMARY_BINARY = "terraform-demux"
ALIAS_NAME = "terraform"
CONFLICTS_WITH = ("terraform",)

# =================================
# File permissions defaults
# =================================
DEFAULT_EXECUTABLE_PERMS = 0o755

# =================================
# Path constants
# =================================
DEFAULT_PREFIX = "~/.local"
BIN_DIR = "bin"
RECEIPTS_DIR = "var/tfdemux/receipts"
CACHE_DIR_NAME = "tfdemux"
CACHE_SUFFIX = ".tar.gz"
RELEASES_FILE = "releases.json"

# =================================
# Download defaults
# =================================
DEFAULT_DOWNLOAD_TIMEOUT = 30.0
DOWNLOAD_MAX_ATTEMPTS = 3
DOWNLOAD_BASE_DELAY = 1.0
DOWNLOAD_CHUNK_SIZE = 64 * 1024

# =================================
# Catalog vocabulary
# =================================
SUPPORTED_OS = ("macos", "linux")
SUPPORTED_ARCH = ("arm", "intel")
SHA256_HEX_LENGTH = 64

# 🌶️📦🔚
