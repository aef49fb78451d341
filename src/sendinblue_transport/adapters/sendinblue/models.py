"""Typed mail descriptor, attachment and result models.

The descriptor mirrors what a mail composer hands to a transport: loosely
typed addresses, string bodies, template parameters and a list of attachment
specifications. Address fields and the attachment list are kept as received;
they are normalized only when a body is built, so malformed values surface as
build errors instead of construction errors.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

if TYPE_CHECKING:
    import httpx

    from sendinblue_transport.domain.errors import AttachmentError

_REMOTE_SCHEMES = ("http://", "https://")


class Attachment(BaseModel):
    """One attachment specification.

    Exactly one source is expected: ``href``/``url`` (remote), ``path``
    (local file, or a remote URL when it starts with ``http(s)://``), or
    ``content`` (text, bytes-like, binary readable, async byte iterator).

    Example:
        >>> Attachment(filename="a.txt", content="Hello World").remote_url is None
        True
        >>> Attachment(filename="a.pdf", path="https://example.com/a.pdf").remote_url
        'https://example.com/a.pdf'
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="ignore")

    filename: str | None = None
    href: str | None = None
    url: str | None = None
    path: str | Path | None = None
    content: Any = None
    encoding: str | None = None
    raw: Any = None

    @property
    def remote_url(self) -> str | None:
        """URL the API should fetch the attachment from, if any."""
        if self.href or self.url:
            return self.href or self.url
        if isinstance(self.path, str) and self.path.lower().startswith(_REMOTE_SCHEMES):
            return self.path
        return None


class MailDescriptor(BaseModel):
    """Provider-neutral description of one message.

    Accepts wire-style keys (``from``, ``replyTo``, ``templateId``) as well
    as their snake_case field names. Unknown keys are ignored. Template ids
    are kept exactly as given, string or integer.

    Example:
        >>> mail = MailDescriptor.model_validate(
        ...     {"from": "noreply@example.com", "to": "ops@example.com", "replyTo": "help@example.com"}
        ... )
        >>> mail.from_, mail.reply_to
        ('noreply@example.com', 'help@example.com')
        >>> MailDescriptor(to="a@x.com", template_id=7).template_id
        7
        >>> MailDescriptor.model_validate({"templateId": "7"}).template_id
        '7'
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    from_: Any = Field(default=None, alias="from")
    to: Any = None
    cc: Any = None
    bcc: Any = None
    reply_to: Any = Field(default=None, alias="replyTo")
    subject: str | None = None
    text: str | None = None
    html: str | None = None
    params: dict[str, Any] | None = None
    template_id: StrictStr | StrictInt | None = Field(default=None, alias="templateId")
    headers: dict[str, Any] | None = None
    attachments: Any = None


def as_mail_descriptor(mail: MailDescriptor | Mapping[str, Any]) -> MailDescriptor:
    """Return ``mail`` as a :class:`MailDescriptor`, validating plain mappings.

    Raises:
        pydantic.ValidationError: When a mapping carries ill-typed fields.

    Example:
        >>> as_mail_descriptor({"subject": "Hi"}).subject
        'Hi'
    """
    if isinstance(mail, MailDescriptor):
        return mail
    return MailDescriptor.model_validate(dict(mail))


@dataclass(frozen=True, slots=True)
class BuiltBody:
    """Outcome of building a request body.

    ``attachment_error`` holds the attachment failure that was absorbed while
    building. When set, ``payload`` carries no ``attachment`` field and the
    send proceeds without attachments.

    Example:
        >>> BuiltBody(payload={"subject": "Hi"}).degraded
        False
    """

    payload: dict[str, Any]
    attachment_error: AttachmentError | None = None

    @property
    def degraded(self) -> bool:
        return self.attachment_error is not None


@dataclass(frozen=True, slots=True)
class SendResult:
    """Successful send outcome.

    Attributes:
        message_id: Provider message id (``""`` when the API returned none).
        response: The raw HTTP response.
        code: v2 status code string (``None`` for v3).
        message: v2 status message (``None`` for v3).
    """

    message_id: str
    response: httpx.Response
    code: str | None = None
    message: str | None = None


__all__ = [
    "Attachment",
    "BuiltBody",
    "MailDescriptor",
    "SendResult",
    "as_mail_descriptor",
]
