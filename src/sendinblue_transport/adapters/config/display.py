"""Configuration display via lib_layered_config's Rich renderer."""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from sendinblue_transport.domain.enums import OutputFormat

#: Keys whose values are masked before display.
_SECRET_KEYS = frozenset({"api_key"})


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Render ``config`` (or one section of it) to the console.

    Pending log records are flushed first so they do not interleave with
    the rendered configuration. A configured ``sendinblue.api_key`` is
    masked.

    Args:
        config: Already-loaded layered configuration.
        output_format: Human-readable TOML-like listing or JSON.
        section: Only render this top-level section.
        console: Rich console to write to (tests pass a recording console).
        profile: Profile name shown in provenance comments.

    Raises:
        ValueError: The requested section does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    _lib_display(
        _mask_secrets(config),
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


def _mask_secrets(config: Config) -> Config:
    """Return ``config`` with non-empty secret values replaced by ``***``."""
    data = config.as_dict()
    section = data.get("sendinblue")
    if not isinstance(section, dict) or not any(section.get(key) for key in _SECRET_KEYS):
        return config
    masked = {key: ("***" if key in _SECRET_KEYS and value else value) for key, value in section.items()}
    return config.with_overrides({"sendinblue": masked})


__all__ = ["display_config"]
