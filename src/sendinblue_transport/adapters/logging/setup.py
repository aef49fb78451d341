"""Process-wide lib_log_rich initialization.

Every entry point (console script, ``python -m``, tests) calls
:func:`init_logging`; only the first call configures the runtime. Standard
library loggers used throughout the package are bridged into lib_log_rich,
so the ``extra={...}`` fields of each record reach the configured sinks.

Contents:
    * :class:`LoggingConfigModel` - Typed view of the ``[lib_log_rich]`` section.
    * :func:`init_logging` - Idempotent runtime initialization.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from sendinblue_transport import __init__conf__


class LoggingConfigModel(BaseModel):
    """``[lib_log_rich]`` settings.

    Only ``service`` and ``environment`` are typed here; every other key is
    passed through unchanged to ``lib_log_rich.runtime.RuntimeConfig``.

    Example:
        >>> LoggingConfigModel().environment
        'prod'
        >>> LoggingConfigModel(console_level="DEBUG").model_dump()["console_level"]
        'DEBUG'
    """

    model_config = ConfigDict(extra="allow")

    service: str | None = None
    environment: str = "prod"


def _runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the ``[lib_log_rich]`` section onto a RuntimeConfig.

    A missing ``service`` falls back to the package name.
    """
    section: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", section) if section else {})
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Initialize the lib_log_rich runtime once per process.

    Loads ``.env`` files first so ``LOG_*`` variables take effect, then
    configures the runtime from ``config`` and attaches the standard
    logging bridge. Later calls return immediately.

    Args:
        config: Loaded layered configuration (``[lib_log_rich]`` section).

    Example:
        >>> from lib_layered_config import Config
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
