"""Shared utilities for the mail CLI commands.

Contains option decorators, descriptor assembly, configuration loading and
the error boundary shared between ``send-email`` and ``build-body``.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, NoReturn, TypeVar, cast

import orjson
import rich_click as click
from lib_layered_config import Config
from pydantic import ValidationError

from sendinblue_transport import __init__conf__
from sendinblue_transport.adapters.sendinblue.config import TransportConfig
from sendinblue_transport.adapters.sendinblue.models import MailDescriptor
from sendinblue_transport.adapters.sendinblue.validation import validate_addresses
from sendinblue_transport.application.ports import LoadTransportConfigFromDict
from sendinblue_transport.domain.errors import (
    BodyBuildError,
    ConfigurationError,
    NetworkError,
    ResponseError,
)

from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)

T = TypeVar("T")


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop unset options (None and empty tuples); turn tuples into lists.

    Example:
        >>> filter_sentinels(api_key=None, to=(), cc=("a@x.com",), subject="Hi")
        {'cc': ['a@x.com'], 'subject': 'Hi'}
    """
    result: dict[str, Any] = {}
    for k, v in kwargs.items():
        if v is None or v == ():
            continue
        if isinstance(v, tuple):
            result[k] = list(cast(tuple[Any, ...], v))
        else:
            result[k] = v
    return result


def coerce_param_value(raw: str) -> Any:
    """Interpret a ``--param`` value as JSON, falling back to the raw string.

    Examples:
        >>> coerce_param_value("42")
        42
        >>> coerce_param_value('["a","b"]')
        ['a', 'b']
        >>> coerce_param_value("Jon")
        'Jon'
        >>> coerce_param_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def _parse_params(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, Any] | None:
    """Parse repeated ``KEY=VALUE`` options into a template parameter mapping.

    Raises:
        click.BadParameter: If an entry has no ``=`` or an empty key.
    """
    if not values:
        return None
    params: dict[str, Any] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}")
        params[key.strip()] = coerce_param_value(value)
    return params


def apply_validated_overrides(base_config: TransportConfig, overrides: dict[str, Any]) -> TransportConfig:
    """Merge CLI overrides into ``base_config`` and re-run validation.

    Raises:
        ValidationError: When overrides contain invalid values.
    """
    if not overrides:
        return base_config
    return TransportConfig.model_validate({**base_config.model_dump(), **overrides})


def transport_config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--api-key`` and ``--api-url`` overrides to a Click command."""
    options = [
        click.option("--api-key", default=None, help="Override sendinblue.api_key"),
        click.option(
            "--api-url",
            default=None,
            help="Override sendinblue.api_url (a '/v3' segment selects the v3 schema)",
        ),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def mail_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the message-composition options shared by the mail commands."""
    options = [
        click.option("--to", "to", multiple=True, help="Recipient address (repeatable; display names allowed)"),
        click.option("--cc", "cc", multiple=True, help="Carbon-copy address (repeatable)"),
        click.option("--bcc", "bcc", multiple=True, help="Blind-carbon-copy address (repeatable)"),
        click.option("--from", "from_address", default=None, help="Sender address"),
        click.option("--reply-to", "reply_to", default=None, help="Reply-to address"),
        click.option("--subject", default=None, help="Subject line"),
        click.option("--text", default=None, help="Plain-text body"),
        click.option("--html", default=None, help="HTML body"),
        click.option(
            "--attachment",
            "attachments",
            multiple=True,
            type=click.Path(exists=True, dir_okay=False, path_type=str),
            help="File to attach (repeatable)",
        ),
        click.option(
            "--param",
            "params",
            multiple=True,
            callback=_parse_params,
            metavar="KEY=VALUE",
            help="Template parameter; VALUE is parsed as JSON when possible (repeatable)",
        ),
        click.option("--template-id", type=str, default=None, help="Sendinblue template id (v3)"),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def build_mail_descriptor(
    *,
    to: Sequence[str],
    cc: Sequence[str],
    bcc: Sequence[str],
    from_address: str | None,
    reply_to: str | None,
    subject: str | None,
    text: str | None,
    html: str | None,
    attachments: Sequence[str],
    params: dict[str, Any] | None,
    template_id: str | None,
) -> MailDescriptor:
    """Assemble a MailDescriptor from CLI options.

    Runtime addresses are validated first so typos fail before any request.

    Raises:
        InvalidAddressError: When an address has invalid email format.

    Example:
        >>> mail = build_mail_descriptor(
        ...     to=["ops@example.com"], cc=[], bcc=[], from_address=None, reply_to=None,
        ...     subject="Hi", text="Hello", html=None, attachments=[], params=None, template_id=None,
        ... )
        >>> mail.to, mail.cc
        (['ops@example.com'], None)
    """
    for addresses in (to, cc, bcc):
        validate_addresses(list(addresses))
    validate_addresses(from_address)
    validate_addresses(reply_to)

    fields = filter_sentinels(
        to=tuple(to),
        cc=tuple(cc),
        bcc=tuple(bcc),
        from_=from_address,
        reply_to=reply_to,
        subject=subject,
        text=text,
        html=html,
        params=params,
        template_id=template_id,
    )
    if attachments:
        fields["attachments"] = [{"filename": Path(path).name, "path": path} for path in attachments]
    return MailDescriptor(**fields)


def load_transport_config(
    config: Config,
    loader: LoadTransportConfigFromDict,
    *,
    overrides: dict[str, Any],
    require_api_key: bool,
) -> TransportConfig:
    """Load TransportConfig from ``config`` and apply CLI overrides.

    Raises:
        SystemExit: Invalid override values (INVALID_ARGUMENT), or no API key
            when one is required (CONFIG_ERROR).
    """
    try:
        transport_config = apply_validated_overrides(loader(config.as_dict()), overrides)
    except ValidationError as exc:
        _handle_error(exc, "Invalid configuration", "Invalid option value", exit_code=ExitCode.INVALID_ARGUMENT)

    if require_api_key and not transport_config.api_key:
        logger.error("No API key configured")
        click.echo(
            "\nError: No API key configured. Set sendinblue.api_key in your config file or pass --api-key.",
            err=True,
        )
        click.echo(f"See: {__init__conf__.shell_command} config --section sendinblue", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR)

    return transport_config


def execute_with_mail_error_handling(*, operation: Callable[[], T], action: str) -> T:
    """Run a mail operation and map failures to exit codes.

    Exceptions are caught most specific first:

    1. ConfigurationError -> CONFIG_ERROR (78)
    2. BodyBuildError / ValueError -> INVALID_ARGUMENT (22)
    3. NetworkError / ResponseError -> DELIVERY_FAILURE (69)
    4. Exception -> GENERAL_ERROR (1), re-raised when ``DEVELOPMENT_MODE`` is set

    Args:
        operation: Zero-arg callable performing the work.
        action: Short description used in log and user messages.

    Raises:
        SystemExit: On any handled error.
    """
    try:
        return operation()
    except ConfigurationError as exc:
        _handle_error(exc, f"{action}: configuration error", "Configuration error", exit_code=ExitCode.CONFIG_ERROR)
    except (BodyBuildError, ValueError) as exc:
        _handle_error(exc, f"{action}: invalid mail", "Invalid mail", exit_code=ExitCode.INVALID_ARGUMENT)
    except ResponseError as exc:
        _handle_error(
            exc,
            f"{action}: rejected by API",
            "Sendinblue rejected the request",
            exit_code=ExitCode.DELIVERY_FAILURE,
        )
    except NetworkError as exc:
        _handle_error(
            exc,
            f"{action}: network failure",
            "Could not reach Sendinblue",
            exit_code=ExitCode.DELIVERY_FAILURE,
        )
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _handle_error(
            exc,
            f"{action}: unexpected error",
            "Unexpected error",
            exit_code=ExitCode.GENERAL_ERROR,
            log_traceback=True,
        )


def _handle_error(
    exc: Exception,
    log_message: str,
    user_message: str,
    *,
    exit_code: ExitCode = ExitCode.GENERAL_ERROR,
    log_traceback: bool = False,
) -> NoReturn:
    """Log ``exc``, print a one-line error to stderr and exit with ``exit_code``."""
    logger.error(
        log_message,
        extra={"error": str(exc), "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code)


__all__ = [
    "apply_validated_overrides",
    "build_mail_descriptor",
    "coerce_param_value",
    "execute_with_mail_error_handling",
    "filter_sentinels",
    "load_transport_config",
    "mail_options",
    "transport_config_options",
]
