#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""tfdemux configuration built on the Provide Foundation config stack."""

from __future__ import annotations

from tfdemux.config.runtime import TfdemuxRuntimeConfig

__all__ = [
    "TfdemuxRuntimeConfig",
]

# 🌶️📦🔚
