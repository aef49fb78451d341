"""Domain layer - pure normalization logic with no I/O or framework dependencies.

Contents:
    * :mod:`.addresses` - Address parsing and v2/v3 address shaping
    * :mod:`.enums` - Domain enumerations (ApiVersion, OutputFormat)
    * :mod:`.errors` - Domain exception types
    * :mod:`.versioning` - API version detection from the base URL
"""

from __future__ import annotations

from .addresses import (
    ParsedAddress,
    parse_address_header,
    parse_addresses,
    transform_addresses,
    transform_from_address,
    transform_v3_address,
    transform_v3_addresses,
)
from .enums import ApiVersion, OutputFormat
from .errors import (
    AttachmentError,
    AttachmentSourceError,
    BodyBuildError,
    ConfigurationError,
    InvalidAddressError,
    MissingFilenameError,
    MissingSourceError,
    MixedAttachmentKindsError,
    NetworkError,
    ResponseError,
    TransportError,
    UnsupportedAttachmentError,
)
from .versioning import detect_api_version

__all__ = [
    # Addresses
    "ParsedAddress",
    "parse_address_header",
    "parse_addresses",
    "transform_addresses",
    "transform_from_address",
    "transform_v3_address",
    "transform_v3_addresses",
    # Enums
    "ApiVersion",
    "OutputFormat",
    # Errors
    "AttachmentError",
    "AttachmentSourceError",
    "BodyBuildError",
    "ConfigurationError",
    "InvalidAddressError",
    "MissingFilenameError",
    "MissingSourceError",
    "MixedAttachmentKindsError",
    "NetworkError",
    "ResponseError",
    "TransportError",
    "UnsupportedAttachmentError",
    # Versioning
    "detect_api_version",
]
