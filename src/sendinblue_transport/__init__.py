"""Sendinblue transactional email transport.

Public surface:
- Transport: :class:`SendinblueTransport` (async) and :func:`send_mail` (sync)
- Models: :class:`MailDescriptor`, :class:`Attachment`, :class:`SendResult`
- Configuration: :class:`TransportConfig`, :func:`get_config`
- Metadata: :func:`print_info`
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Sendinblue adapter
from .adapters.sendinblue import (
    Attachment,
    BuiltBody,
    MailDescriptor,
    SendinblueTransport,
    SendResult,
    TransportConfig,
    build_body,
    load_transport_config_from_dict,
    send_mail,
)

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain.enums import ApiVersion
from .domain.errors import (
    AttachmentError,
    BodyBuildError,
    ConfigurationError,
    InvalidAddressError,
    NetworkError,
    ResponseError,
    TransportError,
)
from .domain.versioning import detect_api_version

__all__ = [
    "ApiVersion",
    "Attachment",
    "AttachmentError",
    "BodyBuildError",
    "BuiltBody",
    "ConfigurationError",
    "InvalidAddressError",
    "MailDescriptor",
    "NetworkError",
    "ResponseError",
    "SendResult",
    "SendinblueTransport",
    "TransportConfig",
    "TransportError",
    "build_body",
    "detect_api_version",
    "get_config",
    "load_transport_config_from_dict",
    "print_info",
    "send_mail",
]
