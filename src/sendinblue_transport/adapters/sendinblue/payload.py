"""Request body shaping for the Sendinblue ``/email`` endpoint.

Address errors propagate to the caller and abort the send. Attachment errors
are absorbed here: the body is returned without ``attachment`` and the
failure travels in :attr:`BuiltBody.attachment_error`.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from sendinblue_transport.domain.addresses import (
    transform_addresses,
    transform_from_address,
    transform_v3_address,
    transform_v3_addresses,
)
from sendinblue_transport.domain.enums import ApiVersion
from sendinblue_transport.domain.errors import AttachmentError

from .attachments import resolve_v2_attachments, resolve_v3_attachments
from .models import BuiltBody, MailDescriptor, as_mail_descriptor

logger = logging.getLogger(__name__)

AttachmentResolver = Callable[[object], Awaitable[Any]]


def _drop_absent(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``payload`` without keys whose value is ``None``.

    Example:
        >>> _drop_absent({"to": None, "subject": "Hi"})
        {'subject': 'Hi'}
    """
    return {key: value for key, value in payload.items() if value is not None}


async def _attachment_field(
    resolver: AttachmentResolver,
    attachments: object,
) -> tuple[Any, AttachmentError | None]:
    try:
        return await resolver(attachments), None
    except AttachmentError as exc:
        return None, exc


async def _build_v2(mail: MailDescriptor) -> BuiltBody:
    payload: dict[str, Any] = {
        "from": transform_from_address(mail.from_),
        "to": transform_addresses(mail.to),
        "cc": transform_addresses(mail.cc),
        "bcc": transform_addresses(mail.bcc),
        "replyTo": transform_from_address(mail.reply_to),
        "subject": mail.subject,
        "text": mail.text,
        "html": mail.html,
        "headers": mail.headers,
    }
    payload["attachment"], error = await _attachment_field(resolve_v2_attachments, mail.attachments)
    return BuiltBody(payload=_drop_absent(payload), attachment_error=error)


async def _build_v3(mail: MailDescriptor) -> BuiltBody:
    payload: dict[str, Any] = {
        "sender": transform_v3_address(mail.from_),
        "to": transform_v3_addresses(mail.to),
        "cc": transform_v3_addresses(mail.cc),
        "bcc": transform_v3_addresses(mail.bcc),
        "replyTo": transform_v3_addresses(mail.reply_to),
        "subject": mail.subject,
        "headers": mail.headers,
    }
    if mail.params is None and mail.template_id is None:
        payload["textContent"] = mail.text
        payload["htmlContent"] = mail.html
    payload["params"] = mail.params
    payload["templateId"] = mail.template_id
    payload["attachment"], error = await _attachment_field(resolve_v3_attachments, mail.attachments)
    return BuiltBody(payload=_drop_absent(payload), attachment_error=error)


async def build_body(mail: MailDescriptor | Mapping[str, Any], api_version: ApiVersion) -> BuiltBody:
    """Build the JSON request body for ``api_version``.

    Args:
        mail: Message descriptor, or a mapping accepted by :class:`MailDescriptor`.
        api_version: Schema to shape the body for.

    Returns:
        The payload, plus the absorbed attachment failure if any.

    Raises:
        InvalidAddressError: An address field could not be normalized.
        pydantic.ValidationError: A mapping ``mail`` carried ill-typed fields.

    Example:
        >>> import asyncio
        >>> built = asyncio.run(build_body({"to": "ops@example.com", "text": "Hi"}, ApiVersion.V2))
        >>> built.payload
        {'to': {'ops@example.com': ''}, 'text': 'Hi'}
        >>> built = asyncio.run(build_body({"to": "ops@example.com", "text": "Hi"}, ApiVersion.V3))
        >>> built.payload
        {'to': {'email': 'ops@example.com'}, 'textContent': 'Hi'}
    """
    descriptor = as_mail_descriptor(mail)
    if api_version is ApiVersion.V3:
        built = await _build_v3(descriptor)
    else:
        built = await _build_v2(descriptor)
    logger.debug(
        "Built request body",
        extra={
            "api_version": int(api_version),
            "fields": sorted(built.payload),
            "attachment_error": str(built.attachment_error) if built.degraded else None,
        },
    )
    return built


__all__ = ["build_body"]
