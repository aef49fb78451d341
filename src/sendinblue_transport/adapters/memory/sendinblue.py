"""In-memory Sendinblue adapters for testing.

Provides mail functions that satisfy the same Protocols as production
adapters but perform no HTTP requests.

Contents:
    * :class:`MailSpy` - Captures send calls for test assertions.
    * :func:`load_transport_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..sendinblue.config import TransportConfig
from ..sendinblue.models import MailDescriptor, SendResult
from ..sendinblue.transport import SendinblueTransport, build_request_body


def _empty_record_list() -> list[dict[str, Any]]:
    """Create an empty typed list for send records."""
    return []


@dataclass
class MailSpy:
    """Captures send operations for test assertions.

    Bodies are built with the real builder, so address errors surface exactly
    as they would in production; only the HTTP request is skipped. Each test
    should create its own MailSpy instance to avoid cross-test pollution.

    Attributes:
        sent: Captured sends (``config``, ``mail``, ``payload``, ``attachment_error``).
        raise_exception: When set, send operations raise this exception
            after recording the call.

    Example:
        >>> spy = MailSpy()
        >>> config = TransportConfig(api_key="k", api_url="https://api.sendinblue.com/v3")
        >>> spy.send_mail(config=config, mail={"to": "ops@example.com", "subject": "Hi"}).message_id
        '<spy-1@sendinblue.test>'
        >>> spy.sent[0]["payload"]["to"]
        {'email': 'ops@example.com'}
    """

    sent: list[dict[str, Any]] = field(default_factory=_empty_record_list)
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent.clear()
        self.raise_exception = None

    def send_mail(self, *, config: TransportConfig, mail: MailDescriptor | Mapping[str, Any]) -> SendResult:
        """Record the call and return a synthetic accepted result.

        Raises:
            BodyBuildError: When the mail carries invalid addresses.
            Exception: If raise_exception is set, raises that exception.
        """
        built = build_request_body(config=config, mail=mail)
        self.sent.append(
            {
                "config": config,
                "mail": mail,
                "payload": built.payload,
                "attachment_error": built.attachment_error,
            }
        )
        if self.raise_exception is not None:
            raise self.raise_exception
        status = SendinblueTransport(config).api_version.success_status
        return SendResult(
            message_id=f"<spy-{len(self.sent)}@sendinblue.test>",
            response=httpx.Response(status, json={}),
        )


def load_transport_config_from_dict_in_memory(config_dict: Mapping[str, Any]) -> TransportConfig:
    """Parse transport config from dict using the real Pydantic model."""
    section = config_dict.get("sendinblue", {})
    return TransportConfig.model_validate(section if section else {})


__all__ = [
    "MailSpy",
    "load_transport_config_from_dict_in_memory",
]
