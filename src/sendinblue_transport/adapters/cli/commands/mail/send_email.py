"""Send email CLI command.

Sends one message through the Sendinblue API and reports the message id.
"""

from __future__ import annotations

import logging
from typing import Any

import lib_log_rich.runtime
import rich_click as click

from sendinblue_transport.adapters.sendinblue.models import SendResult

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import (
    build_mail_descriptor,
    execute_with_mail_error_handling,
    filter_sentinels,
    load_transport_config,
    mail_options,
    transport_config_options,
)

logger = logging.getLogger(__name__)


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@mail_options
@transport_config_options
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    from_address: str | None,
    reply_to: str | None,
    subject: str | None,
    text: str | None,
    html: str | None,
    attachments: tuple[str, ...],
    params: dict[str, Any] | None,
    template_id: str | None,
    api_key: str | None,
    api_url: str | None,
) -> None:
    r"""Send one email through the Sendinblue transactional API.

    The API version follows the configured base URL: a ``/v3`` segment
    selects the v3 schema, anything else the legacy v2 schema.

    \b
    Exit codes:
    - 22: invalid address or option value
    - 69: network failure or request rejected by the API
    - 78: no API key configured
    """
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send-email", "to": list(to), "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra=extra):
        transport_config = load_transport_config(
            cli_ctx.config,
            cli_ctx.services.load_transport_config_from_dict,
            overrides=filter_sentinels(api_key=api_key, api_url=api_url),
            require_api_key=True,
        )

        def _send() -> SendResult:
            mail = build_mail_descriptor(
                to=to,
                cc=cc,
                bcc=bcc,
                from_address=from_address,
                reply_to=reply_to,
                subject=subject,
                text=text,
                html=html,
                attachments=attachments,
                params=params,
                template_id=template_id,
            )
            return cli_ctx.services.send_mail(config=transport_config, mail=mail)

        logger.info(
            "Sending email",
            extra={"to": list(to), "subject": subject, "attachment_count": len(attachments)},
        )
        result = execute_with_mail_error_handling(operation=_send, action="Send email")
        click.echo(f"\nEmail sent successfully! Message id: {result.message_id or '-'}")
        logger.info("Email sent via CLI", extra={"message_id": result.message_id})


__all__ = ["cli_send_email"]
