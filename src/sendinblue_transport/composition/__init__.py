"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config, get_default_config_path

# Logging services
from ..adapters.logging.setup import init_logging

# Sendinblue services
from ..adapters.sendinblue.config import load_transport_config_from_dict
from ..adapters.sendinblue.transport import build_request_body, send_mail

# Static conformance assertions - pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory.sendinblue import MailSpy
    from ..application.ports import (
        BuildRequestBody,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadTransportConfigFromDict,
        SendMail,
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_display_config: DisplayConfig = display_config
    _assert_send_mail: SendMail = send_mail
    _assert_build_request_body: BuildRequestBody = build_request_body
    _assert_load_transport_config_from_dict: LoadTransportConfigFromDict = load_transport_config_from_dict
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    display_config: DisplayConfig
    send_mail: SendMail
    build_request_body: BuildRequestBody
    load_transport_config_from_dict: LoadTransportConfigFromDict
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        display_config=display_config,
        send_mail=send_mail,
        build_request_body=build_request_body,
        load_transport_config_from_dict=load_transport_config_from_dict,
        init_logging=init_logging,
    )


def build_testing(*, spy: MailSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Body building stays real (it performs no I/O beyond reading attachment
    sources); sends are captured by the spy.

    Args:
        spy: Optional MailSpy instance for capturing sends. When None, a
            fresh MailSpy is created. Pass your own spy to assert on
            captured sends in tests.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        MailSpy,
        display_config_in_memory,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        load_transport_config_from_dict_in_memory,
    )

    mail_spy = spy if spy is not None else MailSpy()

    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        display_config=display_config_in_memory,
        send_mail=mail_spy.send_mail,
        build_request_body=build_request_body,
        load_transport_config_from_dict=load_transport_config_from_dict_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "get_config",
    "get_default_config_path",
    "display_config",
    # Sendinblue
    "send_mail",
    "build_request_body",
    "load_transport_config_from_dict",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
