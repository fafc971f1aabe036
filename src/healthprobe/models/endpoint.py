# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe target model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Endpoint:
    """A named network target to be health-checked.

    `url` is passed to the transport as-is; malformed URLs surface as probe errors.
    """

    name: str
    url: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Endpoint name must be non-empty")
