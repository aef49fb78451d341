"""Mail CLI commands.

Contents:
    * :func:`.send_email.cli_send_email` - Send one message through the API.
    * :func:`.build_body.cli_build_body` - Print the request body without sending.
"""

from __future__ import annotations

from ._common import filter_sentinels
from .build_body import cli_build_body
from .send_email import cli_send_email

__all__ = ["cli_build_body", "cli_send_email", "filter_sentinels"]
