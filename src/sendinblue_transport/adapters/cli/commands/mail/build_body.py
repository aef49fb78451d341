"""Build-body CLI command.

Prints the JSON request body a send would post, without contacting the API.
"""

from __future__ import annotations

import logging
from typing import Any

import lib_log_rich.runtime
import orjson
import rich_click as click

from sendinblue_transport.adapters.sendinblue.models import BuiltBody

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


@click.command("build-body", context_settings=CLICK_CONTEXT_SETTINGS)
@mail_options
@transport_config_options
@click.pass_context
def cli_build_body(
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
    """Print the JSON body ``send-email`` would post, without sending.

    Useful for checking how addresses, attachments and template parameters
    are shaped for the configured API version. No API key is required.
    """
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "build-body", "to": list(to), "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-build-body", extra=extra):
        transport_config = load_transport_config(
            cli_ctx.config,
            cli_ctx.services.load_transport_config_from_dict,
            overrides=filter_sentinels(api_key=api_key, api_url=api_url),
            require_api_key=False,
        )

        def _build() -> BuiltBody:
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
            return cli_ctx.services.build_request_body(config=transport_config, mail=mail)

        built = execute_with_mail_error_handling(operation=_build, action="Build body")
        logger.info("Built request body", extra={"fields": sorted(built.payload), "degraded": built.degraded})
        if built.attachment_error is not None:
            click.echo(f"Warning: attachments dropped - {built.attachment_error}", err=True)
        click.echo(orjson.dumps(built.payload, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS).decode("utf-8"))


__all__ = ["cli_build_body"]
