# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for healthprobe."""

from .endpoint import Endpoint
from .outcome import CheckReport, ProbeError, ProbeOutcome, is_healthy_status

__all__ = [
    "CheckReport",
    "Endpoint",
    "ProbeError",
    "ProbeOutcome",
    "is_healthy_status",
]
