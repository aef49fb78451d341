"""Sendinblue adapter - transactional email over the Sendinblue HTTP API.

Structure:
    * :mod:`.config` - Transport configuration model and loader
    * :mod:`.models` - Mail descriptor, attachment and result models
    * :mod:`.attachments` - Attachment resolution (v2 and v3 shapes)
    * :mod:`.payload` - Request body shaping
    * :mod:`.transport` - HTTP transport and synchronous helpers
    * :mod:`.validation` - Runtime address validation

Contents:
    * :class:`.transport.SendinblueTransport` - Async single-shot transport
    * :func:`.transport.send_mail` - Synchronous send wrapper
    * :func:`.payload.build_body` - Request body builder
"""

from __future__ import annotations

from .attachments import encode_content, encode_text, resolve_v2_attachments, resolve_v3_attachments
from .config import DEFAULT_API_URL, TransportConfig, load_transport_config_from_dict
from .models import Attachment, BuiltBody, MailDescriptor, SendResult
from .payload import build_body
from .transport import SendinblueTransport, build_request_body, send_mail
from .validation import validate_address, validate_addresses

__all__ = [
    "DEFAULT_API_URL",
    "Attachment",
    "BuiltBody",
    "MailDescriptor",
    "SendResult",
    "SendinblueTransport",
    "TransportConfig",
    "build_body",
    "build_request_body",
    "encode_content",
    "encode_text",
    "load_transport_config_from_dict",
    "resolve_v2_attachments",
    "resolve_v3_attachments",
    "send_mail",
    "validate_address",
    "validate_addresses",
]
