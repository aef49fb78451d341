"""CLI command implementations.

Collects all subcommand functions and re-exports them for registration
with the root CLI group.

Contents:
    * Info command from :mod:`.info`
    * Config command from :mod:`.config`
    * Mail commands from :mod:`.mail` (subpackage)
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .mail import cli_build_body, cli_send_email

__all__ = [
    "cli_build_body",
    "cli_config",
    "cli_info",
    "cli_send_email",
]
