"""Application ports - callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function.  Existing module-level functions
satisfy these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters.  Infrastructure types (``Config``,
    ``TransportConfig``, ``MailDescriptor``) are imported under
    ``TYPE_CHECKING`` only so that the layering stays one-directional at
    runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.sendinblue.config import TransportConfig
    from ..adapters.sendinblue.models import BuiltBody, MailDescriptor, SendResult


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class SendMail(Protocol):
    """Send one message through the Sendinblue API."""

    def __call__(self, *, config: TransportConfig, mail: MailDescriptor | Mapping[str, Any]) -> SendResult: ...


class BuildRequestBody(Protocol):
    """Build the request body a send would post, without sending."""

    def __call__(self, *, config: TransportConfig, mail: MailDescriptor | Mapping[str, Any]) -> BuiltBody: ...


class LoadTransportConfigFromDict(Protocol):
    """Load TransportConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> TransportConfig: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "BuildRequestBody",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadTransportConfigFromDict",
    "SendMail",
]
