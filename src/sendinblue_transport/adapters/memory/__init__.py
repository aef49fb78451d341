"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no HTTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.sendinblue` - In-memory mail adapters (MailSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
)
from .logging import init_logging_in_memory
from .sendinblue import (
    MailSpy,
    load_transport_config_from_dict_in_memory,
)

# Static conformance assertions
if TYPE_CHECKING:
    from sendinblue_transport.application.ports import (
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadTransportConfigFromDict,
        SendMail,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_transport_config: LoadTransportConfigFromDict = load_transport_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_send_mail: SendMail = MailSpy().send_mail

__all__ = [
    "MailSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
    "load_transport_config_from_dict_in_memory",
]
