"""Attachment resolution for both Sendinblue API schemas.

Each attachment is resolved independently and concurrently. File reads and
blocking stream drains run in worker threads; async byte iterators are
drained on the event loop. Resolution yields either a remote reference (URL)
or generated content (base64 text), which the version-specific functions then
arrange into the shape the API expects:

* v2: a list of URLs, or a ``{filename: base64}`` mapping; never both.
* v3: a list of ``{"name", "url"}`` / ``{"name", "content"}`` objects.

Contents:
    * :func:`encode_text` - Encode text with Node-style encoding names.
    * :func:`resolve_v2_attachments` - v2 ``attachment`` value.
    * :func:`resolve_v3_attachments` - v3 ``attachment`` value.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import AsyncIterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

from pydantic import ValidationError

from sendinblue_transport.domain.enums import ApiVersion
from sendinblue_transport.domain.errors import (
    AttachmentSourceError,
    MissingFilenameError,
    MissingSourceError,
    MixedAttachmentKindsError,
    UnsupportedAttachmentError,
)

from .models import Attachment

logger = logging.getLogger(__name__)

#: Encoding names used by Node.js buffers mapped to Python codec names.
_ENCODING_ALIASES: Final[dict[str, str]] = {
    "binary": "latin-1",
    "latin1": "latin-1",
    "utf8": "utf-8",
    "ucs2": "utf-16-le",
    "ucs-2": "utf-16-le",
    "utf16le": "utf-16-le",
    "utf-16le": "utf-16-le",
}


@runtime_checkable
class SupportsRead(Protocol):
    """Blocking binary readable (open file, ``io.BytesIO``, socket file)."""

    def read(self, size: int = -1, /) -> bytes | str: ...


@dataclass(frozen=True, slots=True)
class ResolvedAttachment:
    """Attachment reduced to its name and either a URL or base64 content."""

    name: str | None
    url: str | None = None
    content: str | None = None

    @property
    def is_remote(self) -> bool:
        return self.url is not None


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _is_base64(encoding: str | None) -> bool:
    return encoding is not None and encoding.lower() == "base64"


def encode_text(content: str, encoding: str | None = None) -> bytes:
    """Encode ``content`` using a codec name or Node-style alias.

    ``None`` selects UTF-8; ``hex`` decodes the hex digits.

    Raises:
        UnsupportedAttachmentError: Unknown encoding, or text not representable in it.

    Example:
        >>> encode_text("\\xff\\xfa\\xc3\\x4e", "binary")
        b'\\xff\\xfa\\xc3N'
        >>> encode_text("48690a", "hex")
        b'Hi\\n'
        >>> encode_text("Hi")
        b'Hi'
    """
    name = (encoding or "utf-8").lower()
    try:
        if name == "hex":
            return bytes.fromhex(content)
        return content.encode(_ENCODING_ALIASES.get(name, name))
    except LookupError as exc:
        raise UnsupportedAttachmentError(f"unknown attachment encoding: {encoding}") from exc
    except ValueError as exc:
        raise UnsupportedAttachmentError(f"attachment content cannot be encoded as {encoding}: {exc}") from exc


async def _read_file(path: Path) -> bytes:
    try:
        return await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        raise AttachmentSourceError(f"unable to read attachment {path}: {exc}") from exc


async def _drain_readable(stream: SupportsRead, encoding: str | None) -> bytes:
    try:
        data = await asyncio.to_thread(stream.read)
    except (OSError, ValueError) as exc:
        raise AttachmentSourceError(f"unable to read attachment stream: {exc}") from exc
    return encode_text(data, encoding) if isinstance(data, str) else bytes(data)


async def _drain_async(stream: AsyncIterable[Any], encoding: str | None) -> bytes:
    chunks: list[Any] = []
    try:
        async for chunk in stream:
            chunks.append(chunk)
    except (OSError, ValueError) as exc:
        raise AttachmentSourceError(f"unable to read attachment stream: {exc}") from exc
    return b"".join(encode_text(chunk, encoding) if isinstance(chunk, str) else bytes(chunk) for chunk in chunks)


async def encode_content(content: Any, encoding: str | None = None) -> str:
    """Return base64 text for inline attachment content.

    Text declared as ``base64`` passes through; other text is encoded with
    ``encoding`` first. Bytes-like values, blocking readables and async byte
    iterators are read fully and base64-encoded.

    Raises:
        UnsupportedAttachmentError: Content of an unsupported type.
        AttachmentSourceError: Stream failed while being read.

    Example:
        >>> import asyncio
        >>> asyncio.run(encode_content("Hello World"))
        'SGVsbG8gV29ybGQ='
        >>> asyncio.run(encode_content(b"\\xff\\xfa\\xc3N"))
        '//rDTg=='
    """
    match content:
        case str() if _is_base64(encoding):
            return content
        case str():
            return _b64(encode_text(content, encoding))
        case bytes() | bytearray() | memoryview():
            return _b64(bytes(content))
        case SupportsRead():
            return _b64(await _drain_readable(content, encoding))
        case AsyncIterable():
            return _b64(await _drain_async(content, encoding))
        case _:
            raise UnsupportedAttachmentError(f"unsupported attachment content: {type(content).__name__}")


def _coerce(item: object) -> Attachment:
    match item:
        case Attachment():
            return item
        case Mapping():
            try:
                return Attachment.model_validate(dict(item))
            except ValidationError as exc:
                raise UnsupportedAttachmentError(f"invalid attachment: {exc}") from exc
        case _:
            raise UnsupportedAttachmentError(f"unsupported attachment: {type(item).__name__}")


def _as_list(attachments: object) -> list[Attachment]:
    match attachments:
        case None:
            return []
        case list() | tuple():
            return [_coerce(item) for item in attachments]
        case _:
            raise UnsupportedAttachmentError("attachments property must be an array")


async def _resolve(attachment: Attachment, api_version: ApiVersion) -> ResolvedAttachment:
    if attachment.raw is not None:
        raise UnsupportedAttachmentError("raw attachments not supported")
    if api_version is ApiVersion.V3 and not attachment.filename:
        raise MissingFilenameError("one of name or filename is required")

    remote = attachment.remote_url
    if remote is not None:
        return ResolvedAttachment(name=attachment.filename, url=remote)

    if not attachment.filename:
        raise MissingFilenameError("filename is required")
    if attachment.path is not None:
        data = await _read_file(Path(attachment.path))
        return ResolvedAttachment(name=attachment.filename, content=_b64(data))
    if attachment.content is None:
        raise MissingSourceError("one of url, path, href or content must be defined")
    if api_version is ApiVersion.V3 and isinstance(attachment.content, str) and attachment.encoding is None:
        # v3 takes undeclared text content as already encoded
        return ResolvedAttachment(name=attachment.filename, content=attachment.content)
    encoded = await encode_content(attachment.content, attachment.encoding)
    return ResolvedAttachment(name=attachment.filename, content=encoded)


async def _resolve_all(attachments: object, api_version: ApiVersion) -> list[ResolvedAttachment]:
    items = _as_list(attachments)
    resolved = await asyncio.gather(*(_resolve(item, api_version) for item in items))
    logger.debug(
        "Resolved attachments",
        extra={
            "api_version": int(api_version),
            "count": len(resolved),
            "remote": sum(1 for item in resolved if item.is_remote),
        },
    )
    return list(resolved)


async def resolve_v2_attachments(attachments: object) -> list[str] | dict[str, str] | None:
    """Return the v2 ``attachment`` value, or ``None`` for no attachments.

    Raises:
        MixedAttachmentKindsError: Remote and generated attachments combined.
        MissingFilenameError: Generated attachment without ``filename``.
        UnsupportedAttachmentError: Raw MIME or unsupported content.
        AttachmentSourceError: Unreadable file or failing stream.

    Example:
        >>> import asyncio
        >>> asyncio.run(resolve_v2_attachments([{"filename": "a", "content": "Hello World"}]))
        {'a': 'SGVsbG8gV29ybGQ='}
        >>> asyncio.run(resolve_v2_attachments([{"href": "https://example.com/a.pdf"}]))
        ['https://example.com/a.pdf']
    """
    resolved = await _resolve_all(attachments, ApiVersion.V2)
    if not resolved:
        return None
    remote = [item.url for item in resolved if item.url is not None]
    if remote and len(remote) != len(resolved):
        raise MixedAttachmentKindsError("remote and generated attachments cannot be combined")
    if remote:
        return remote
    return {str(item.name): str(item.content) for item in resolved}


async def resolve_v3_attachments(attachments: object) -> list[dict[str, str]] | None:
    """Return the v3 ``attachment`` list, or ``None`` for no attachments.

    Raises:
        MissingFilenameError: Attachment without ``filename``.
        MissingSourceError: Attachment without any source.
        UnsupportedAttachmentError: Non-list value, raw MIME or unsupported content.
        AttachmentSourceError: Unreadable file or failing stream.

    Example:
        >>> import asyncio
        >>> asyncio.run(resolve_v3_attachments([{"filename": "a", "content": "Hello World"}]))
        [{'name': 'a', 'content': 'Hello World'}]
    """
    resolved = await _resolve_all(attachments, ApiVersion.V3)
    if not resolved:
        return None
    return [
        {"name": str(item.name), "url": item.url}
        if item.url is not None
        else {"name": str(item.name), "content": str(item.content)}
        for item in resolved
    ]


__all__ = [
    "ResolvedAttachment",
    "SupportsRead",
    "encode_content",
    "encode_text",
    "resolve_v2_attachments",
    "resolve_v3_attachments",
]
