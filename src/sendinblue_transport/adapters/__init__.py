"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the application to external
systems and frameworks (CLI, configuration, Sendinblue HTTP API, logging).

Contents:
    * :mod:`.config` - Configuration loading and display
    * :mod:`.sendinblue` - Transactional email via the Sendinblue API
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
