"""Sendinblue transport configuration model and loader.

Provides the TransportConfig Pydantic model for validated, immutable API
settings and the loader function to create it from configuration dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final, cast

from pydantic import BaseModel, ConfigDict, field_validator

#: Base URL used when none is configured (legacy v2 API).
DEFAULT_API_URL: Final[str] = "https://api.sendinblue.com/v2.0"


class TransportConfig(BaseModel):
    """Validated, immutable Sendinblue API settings.

    Example:
        >>> config = TransportConfig(api_key="xkeysib-123", api_url="https://api.sendinblue.com/v3/")
        >>> config.api_url
        'https://api.sendinblue.com/v3'
        >>> TransportConfig().api_url
        'https://api.sendinblue.com/v2.0'
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    api_url: str = DEFAULT_API_URL

    @field_validator("api_key", mode="before")
    @classmethod
    def _coerce_missing_key(cls, v: Any) -> Any:
        """Treat ``None`` as "no key configured".

        Examples:
            >>> TransportConfig._coerce_missing_key(None)
            ''
            >>> TransportConfig._coerce_missing_key("abc")
            'abc'
        """
        return "" if v is None else v

    @field_validator("api_url", mode="before")
    @classmethod
    def _normalize_api_url(cls, v: Any) -> Any:
        """Strip whitespace and trailing slashes; blank values select the default.

        Examples:
            >>> TransportConfig._normalize_api_url("https://api.sendinblue.com/v3/")
            'https://api.sendinblue.com/v3'
            >>> TransportConfig._normalize_api_url("  ")
            'https://api.sendinblue.com/v2.0'
        """
        if v is None:
            return DEFAULT_API_URL
        if isinstance(v, str):
            stripped = v.strip().rstrip("/")
            return stripped or DEFAULT_API_URL
        return v

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> config = TransportConfig(api_key="secret123")
            >>> "secret123" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"TransportConfig({', '.join(fields)})"

    __str__ = __repr__


def load_transport_config_from_dict(config_dict: Mapping[str, Any]) -> TransportConfig:
    """Load TransportConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed model.
    Settings live in the ``[sendinblue]`` section.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.

    Returns:
        Configured transport settings with defaults for missing values.

    Example:
        >>> config = load_transport_config_from_dict(
        ...     {"sendinblue": {"api_key": "k", "api_url": "https://api.sendinblue.com/v3"}}
        ... )
        >>> config.api_url
        'https://api.sendinblue.com/v3'
        >>> load_transport_config_from_dict({}).api_key
        ''
    """
    section: Any = config_dict.get("sendinblue", {})

    # Non-mapping section (e.g. "sendinblue": "invalid") is left to pydantic
    if not isinstance(section, Mapping):
        return TransportConfig.model_validate(section)

    return TransportConfig.model_validate(dict(cast(Mapping[str, Any], section)))


__all__ = [
    "DEFAULT_API_URL",
    "TransportConfig",
    "load_transport_config_from_dict",
]
