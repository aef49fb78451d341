"""Sendinblue HTTP transport.

One :class:`SendinblueTransport` instance owns the connection settings
derived from a :class:`TransportConfig`: the endpoint, the request headers
and the API version detected from the base URL. None of them change after
construction, so instances configured for different API versions can share
a process.

A send is single shot: build the body, POST it once, classify the answer.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Final

import httpx
import orjson

from sendinblue_transport import __init__conf__
from sendinblue_transport.domain.enums import ApiVersion
from sendinblue_transport.domain.errors import (
    BodyBuildError,
    ConfigurationError,
    NetworkError,
    ResponseError,
)
from sendinblue_transport.domain.versioning import detect_api_version

from .config import TransportConfig
from .models import BuiltBody, MailDescriptor, SendResult
from .payload import build_body

logger = logging.getLogger(__name__)

_SUPPORTED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})


def _parse_response_body(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object response body; anything else becomes ``{}``.

    Example:
        >>> _parse_response_body(httpx.Response(200, content=b'{"code": "success"}'))
        {'code': 'success'}
        >>> _parse_response_body(httpx.Response(200, content=b"<html>"))
        {}
        >>> _parse_response_body(httpx.Response(200, content=b"[1, 2]"))
        {}
    """
    try:
        data = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


class SendinblueTransport:
    """Send messages through the Sendinblue transactional email API.

    Args:
        config: API key and base URL.
        client: Optional shared ``httpx.AsyncClient``. When omitted, each
            send opens and closes its own client.

    Raises:
        ConfigurationError: The base URL is not an ``http``/``https`` URL.

    Example:
        >>> transport = SendinblueTransport(TransportConfig(api_key="k", api_url="https://api.sendinblue.com/v3"))
        >>> transport.api_version
        <ApiVersion.V3: 3>
        >>> transport.endpoint
        'https://api.sendinblue.com/v3/email'
        >>> transport.name
        'Sendinblue'
    """

    name: Final[str] = "Sendinblue"
    version: Final[str] = __init__conf__.version

    def __init__(self, config: TransportConfig, *, client: httpx.AsyncClient | None = None) -> None:
        try:
            scheme = httpx.URL(config.api_url).scheme
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"invalid api_url: {exc}") from exc
        if scheme not in _SUPPORTED_SCHEMES:
            raise ConfigurationError(f"unsupported api_url scheme: {scheme!r}")

        self._client = client
        self._headers: dict[str, str] = {
            "api-key": config.api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self.api_version: ApiVersion = detect_api_version(config.api_url)
        self.endpoint: str = f"{config.api_url}/email"

    def __repr__(self) -> str:
        return f"SendinblueTransport(endpoint={self.endpoint!r}, api_version={int(self.api_version)})"

    @property
    def headers(self) -> dict[str, str]:
        """Request headers (a copy; includes the API key)."""
        return dict(self._headers)

    async def build(self, mail: MailDescriptor | Mapping[str, Any]) -> BuiltBody:
        """Build the request body without sending it.

        Raises:
            BodyBuildError: An address or another non-attachment field is invalid.
        """
        try:
            return await build_body(mail, self.api_version)
        except (ValueError, TypeError) as exc:
            raise BodyBuildError(f"unable to build body: {exc}") from exc

    async def send(self, mail: MailDescriptor | Mapping[str, Any]) -> SendResult:
        """Send one message.

        Args:
            mail: Message descriptor, or a mapping accepted by :class:`MailDescriptor`.

        Returns:
            Message id and raw response of the accepted request.

        Raises:
            BodyBuildError: The body could not be built; nothing was sent.
            NetworkError: The request did not reach the API.
            ResponseError: The API answered with an unexpected status.

        Side Effects:
            One HTTP POST. Logs the attempt at INFO, a dropped attachment
            field at WARNING, and rejections at ERROR level.
        """
        built = await self.build(mail)
        if built.attachment_error is not None:
            logger.warning(
                "Sending without attachments",
                extra={"endpoint": self.endpoint, "error": str(built.attachment_error)},
            )
        try:
            content = orjson.dumps(built.payload)
        except orjson.JSONEncodeError as exc:
            raise BodyBuildError(f"unable to build body: {exc}") from exc

        logger.info(
            "Sending email",
            extra={
                "endpoint": self.endpoint,
                "api_version": int(self.api_version),
                "subject": built.payload.get("subject"),
                "has_attachments": "attachment" in built.payload,
            },
        )

        try:
            response = await self._post(content)
        except httpx.TransportError as exc:
            logger.error("Request failed", extra={"endpoint": self.endpoint, "error": str(exc)})
            raise NetworkError(f"error sending request: {exc}") from exc

        body = _parse_response_body(response)
        if response.status_code != self.api_version.success_status:
            error = ResponseError(body.get("message"), body.get("code"), response.status_code)
            logger.error(
                "Email rejected",
                extra={"endpoint": self.endpoint, "status_code": response.status_code, "error": str(error)},
            )
            raise error

        result = self._make_result(body, response)
        logger.info(
            "Email accepted",
            extra={"status_code": response.status_code, "message_id": result.message_id},
        )
        return result

    async def _post(self, content: bytes) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.endpoint, content=content, headers=self._headers)
        async with httpx.AsyncClient() as client:
            return await client.post(self.endpoint, content=content, headers=self._headers)

    def _make_result(self, body: dict[str, Any], response: httpx.Response) -> SendResult:
        if self.api_version is ApiVersion.V3:
            return SendResult(message_id=str(body.get("messageId") or ""), response=response)
        data = body.get("data")
        message_id = data.get("message-id") if isinstance(data, dict) else None
        return SendResult(
            message_id=str(message_id or ""),
            response=response,
            code=_optional_str(body.get("code")),
            message=_optional_str(body.get("message")),
        )


def send_mail(*, config: TransportConfig, mail: MailDescriptor | Mapping[str, Any]) -> SendResult:
    """Send one message synchronously on a fresh event loop.

    Args:
        config: API key and base URL.
        mail: Message descriptor, or a mapping accepted by :class:`MailDescriptor`.

    Returns:
        Message id and raw response of the accepted request.

    Raises:
        ConfigurationError: The base URL is not an ``http``/``https`` URL.
        TransportError: The send failed (see :meth:`SendinblueTransport.send`).
    """
    transport = SendinblueTransport(config)
    return asyncio.run(transport.send(mail))


def build_request_body(*, config: TransportConfig, mail: MailDescriptor | Mapping[str, Any]) -> BuiltBody:
    """Build the request body a send would post, synchronously.

    Example:
        >>> config = TransportConfig(api_url="https://api.sendinblue.com/v3")
        >>> build_request_body(config=config, mail={"from": "a@x.com", "subject": "Hi"}).payload
        {'sender': {'email': 'a@x.com'}, 'subject': 'Hi'}
    """
    transport = SendinblueTransport(config)
    return asyncio.run(transport.build(mail))


__all__ = [
    "SendinblueTransport",
    "build_request_body",
    "send_mail",
]
