"""Address validation for addresses supplied at runtime (CLI options).

Raises the domain :class:`InvalidAddressError` rather than library-specific
exceptions.
"""

from __future__ import annotations

from collections.abc import Sequence

from btx_lib_mail import validate_email_address

from sendinblue_transport.domain.addresses import parse_addresses
from sendinblue_transport.domain.errors import InvalidAddressError


def validate_address(address: str) -> None:
    """Validate a single address string, display name allowed.

    Raises:
        InvalidAddressError: When the string holds no valid email address.

    Example:
        >>> validate_address('"Doe, Jon" <jon@example.com>')  # no exception
        >>> validate_address("invalid")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidAddressError: Invalid address: invalid
    """
    parsed = parse_addresses(address)
    if not parsed:
        raise InvalidAddressError(f"Invalid address: {address}")
    for item in parsed:
        try:
            validate_email_address(item.address)
        except ValueError as e:
            raise InvalidAddressError(f"Invalid address: {address}") from e


def validate_addresses(addresses: str | Sequence[str] | None) -> None:
    """Validate runtime addresses.

    Args:
        addresses: Single address, sequence of addresses, or None (skip validation).

    Raises:
        InvalidAddressError: When an address has invalid email format.

    Example:
        >>> validate_addresses(None)  # no-op
        >>> validate_addresses(["a@example.com", "Bee <b@example.com>"])
    """
    if addresses is None:
        return
    address_list = [addresses] if isinstance(addresses, str) else list(addresses)
    for address in address_list:
        validate_address(address)


__all__ = ["validate_address", "validate_addresses"]
