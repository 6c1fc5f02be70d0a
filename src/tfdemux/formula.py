#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Formula metadata and its conflict declaration."""

from __future__ import annotations

from typing import Any

from attrs import define, field

from tfdemux.config.defaults import (
    ALIAS_NAME,
    CONFLICTS_WITH,
    FORMULA_DESC,
    FORMULA_HOMEPAGE,
    FORMULA_LICENSE,
    FORMULA_NAME,
    PRIMARY_BINARY,
)


@define(frozen=True)
class ConflictDeclaration:
    """Declares that ``package`` and ``conflicts_with`` claim the same ``slot``.

    Enforcement belongs to the host package manager; this is data only.
    """

    package: str
    conflicts_with: tuple[str, ...]
    slot: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "package": self.package,
            "conflicts_with": list(self.conflicts_with),
            "slot": self.slot,
        }


@define(frozen=True)
class Formula:
    """Static description of the distributed launcher."""

    name: str = FORMULA_NAME
    desc: str = FORMULA_DESC
    homepage: str = FORMULA_HOMEPAGE
    license: str = FORMULA_LICENSE
    binary: str = PRIMARY_BINARY
    alias: str = ALIAS_NAME
    conflicts_with: tuple[str, ...] = field(default=CONFLICTS_WITH, converter=tuple)

    def __attrs_post_init__(self) -> None:
        if self.alias == self.binary:
            raise ValueError("Alias name must differ from the primary binary name")

    @property
    def conflict(self) -> ConflictDeclaration:
        return ConflictDeclaration(package=self.name, conflicts_with=self.conflicts_with, slot=self.alias)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "desc": self.desc,
            "homepage": self.homepage,
            "license": self.license,
            "binary": self.binary,
            "alias": self.alias,
            "conflicts_with": list(self.conflicts_with),
        }


TERRAFORM_DEMUX = Formula()

# 🌶️📦🔚
