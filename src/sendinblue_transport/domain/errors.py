"""Domain-specific exceptions for typed error handling at boundaries.

Two families live here:

* Normalization errors (:class:`InvalidAddressError`, :class:`AttachmentError`
  and its subclasses) describe malformed mail input. They inherit from
  ``ValueError`` so generic input-validation handlers keep working.
* Send errors (:class:`TransportError` and its subclasses) describe why a
  single send did not succeed. Every failure reaching the caller of
  ``send`` is one of these.
"""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Example:
        >>> from sendinblue_transport.domain.errors import ConfigurationError
        >>> str(ConfigurationError("unsupported api_url scheme: 'ftp'"))
        "unsupported api_url scheme: 'ftp'"
    """


class InvalidAddressError(ValueError):
    """Address value is neither a string, an address mapping, nor a list.

    Example:
        >>> err = InvalidAddressError("invalid address: 42")
        >>> isinstance(err, ValueError)
        True
    """


class AttachmentError(ValueError):
    """Base class for attachment validation and resolution failures.

    The transport treats every ``AttachmentError`` as a soft failure: the
    request is still sent, without the ``attachment`` field.
    """


class MissingFilenameError(AttachmentError):
    """Attachment needs a ``filename`` but none was given."""


class MissingSourceError(AttachmentError):
    """Attachment has none of ``href``, ``url``, ``path`` or ``content``."""


class UnsupportedAttachmentError(AttachmentError):
    """Attachment kind cannot be sent (raw MIME, unknown content type)."""


class MixedAttachmentKindsError(AttachmentError):
    """Remote and generated attachments were combined in one v2 request."""


class AttachmentSourceError(AttachmentError):
    """Attachment source could not be read (missing file, failing stream)."""


class TransportError(Exception):
    """Base class for failures of a single send."""


class BodyBuildError(TransportError):
    """Request body could not be built; nothing was sent.

    Example:
        >>> str(BodyBuildError("unable to build body: invalid address: 42"))
        'unable to build body: invalid address: 42'
    """


class NetworkError(TransportError):
    """Request could not be delivered to the API endpoint."""


class ResponseError(TransportError):
    """API answered with an unexpected HTTP status.

    Carries the server-supplied ``message`` and ``code`` (when present)
    together with the literal status code.

    Example:
        >>> err = ResponseError("not found", "X", 404)
        >>> str(err)
        'not found (X, 404)'
        >>> err.status_code
        404
    """

    def __init__(self, message: object, code: object, status_code: int) -> None:
        self.message = str(message) if message else "server error"
        self.code = str(code) if code else "-"
        self.status_code = status_code
        super().__init__(f"{self.message} ({self.code}, {self.status_code})")


__all__ = [
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
]
