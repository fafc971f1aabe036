# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe execution: single probes and concurrent dispatch."""

from .dispatcher import Dispatcher
from .prober import Prober

__all__ = ["Dispatcher", "Prober"]
