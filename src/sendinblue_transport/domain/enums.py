"""Type-safe domain enums for API versions and output formats."""

from __future__ import annotations

from enum import Enum, IntEnum


class ApiVersion(IntEnum):
    """Sendinblue API schema selected by the configured base URL.

    Attributes:
        V2: Legacy schema (``from``/``text``/``html``, address mappings).
        V3: Current schema (``sender``/``textContent``, address objects).

    Example:
        >>> ApiVersion.V3 == 3
        True
        >>> ApiVersion.V2.success_status
        200
    """

    V2 = 2
    V3 = 3

    @property
    def success_status(self) -> int:
        """HTTP status the API answers with when the message was accepted."""
        return 201 if self is ApiVersion.V3 else 200


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Example:
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = [
    "ApiVersion",
    "OutputFormat",
]
