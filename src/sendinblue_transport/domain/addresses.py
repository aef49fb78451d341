"""Address normalization for both Sendinblue API schemas.

Callers hand in addresses in whatever shape their mail composer produced:
a header string (``'"Doe, Jon" <jon@example.com>, ops@example.com'``), an
address mapping (``{"name": ..., "address": ...}``), a group mapping
(``{"name": "Team", "group": [...]}``), or a list mixing all of those.

Every value is first expanded into a flat list of entries, where each entry
is either a :class:`ParsedAddress` (from a header string) or the caller's own
mapping. Group labels are dropped during expansion. The version-specific
functions then reduce that list into the shape the API expects.

Contents:
    * :func:`parse_address_header` - RFC 5322 header parsing (groups flattened).
    * :func:`parse_addresses` - Any supported input to ``ParsedAddress`` list.
    * :func:`transform_addresses` - v2 recipients ``{address: name}``.
    * :func:`transform_from_address` - v2 sender/reply-to ``[address, name]``.
    * :func:`transform_v3_addresses` - v3 recipient object(s).
    * :func:`transform_v3_address` - v3 sender object.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from email.errors import HeaderParseError
from email.headerregistry import HeaderRegistry
from typing import Any, TypeAlias

from .errors import InvalidAddressError

_HEADERS = HeaderRegistry()


@dataclass(frozen=True, slots=True)
class ParsedAddress:
    """Single mailbox resolved from any supported input shape.

    Example:
        >>> ParsedAddress("jon@example.com", "Doe, Jon").name
        'Doe, Jon'
    """

    address: str
    name: str = ""


AddressEntry: TypeAlias = "ParsedAddress | Mapping[str, Any]"
V3Address: TypeAlias = "dict[str, Any]"


def parse_address_header(value: str) -> list[ParsedAddress]:
    """Parse an address header value into mailboxes, flattening groups.

    Supports comma-separated lists, quoted display names with embedded
    commas, and named groups with or without the closing ``;``.

    Raises:
        InvalidAddressError: When the header parser rejects the value.

    Example:
        >>> parse_address_header('"Doe, Jon" <jon@example.com>')
        [ParsedAddress(address='jon@example.com', name='Doe, Jon')]
        >>> [p.address for p in parse_address_header("Team: a@x.com, b@x.com;")]
        ['a@x.com', 'b@x.com']
    """
    try:
        header = _HEADERS("to", value)
    except (HeaderParseError, ValueError, IndexError) as exc:
        raise InvalidAddressError(f"invalid address: {value!r}") from exc
    return [
        ParsedAddress(address=mailbox.addr_spec, name=mailbox.display_name or "")
        for group in header.groups  # type: ignore[attr-defined]
        for mailbox in group.addresses
        if mailbox.addr_spec
    ]


def _mapping_address(entry: Mapping[str, Any]) -> str:
    address = entry.get("address") or entry.get("email")
    if not isinstance(address, str) or not address:
        raise InvalidAddressError(f"invalid address: {dict(entry)!r}")
    return address


def _expand(value: object) -> list[AddressEntry]:
    match value:
        case str():
            return list(parse_address_header(value))
        case {"group": list() | tuple() as members}:
            return [entry for member in members for entry in _expand(member)]
        case Mapping():
            _mapping_address(value)
            return [value]
        case list() | tuple():
            return [entry for item in value for entry in _expand(item)]
        case _:
            raise InvalidAddressError(f"invalid address: {value!r}")


def _as_parsed(entry: AddressEntry) -> ParsedAddress:
    match entry:
        case ParsedAddress():
            return entry
        case _:
            return ParsedAddress(address=_mapping_address(entry), name=str(entry.get("name") or ""))


def _as_v3(entry: AddressEntry) -> V3Address:
    match entry:
        case ParsedAddress(address=address, name=""):
            return {"email": address}
        case ParsedAddress(address=address, name=name):
            return {"email": address, "name": name}
        case _:
            return dict(entry)


def parse_addresses(value: object) -> list[ParsedAddress]:
    """Resolve any supported address input into an ordered mailbox list.

    Raises:
        InvalidAddressError: For values that are not strings, address
            mappings, group mappings or lists of those.

    Example:
        >>> parse_addresses(["a@x.com", {"name": "Bee", "address": "b@x.com"}])
        [ParsedAddress(address='a@x.com', name=''), ParsedAddress(address='b@x.com', name='Bee')]
    """
    return [_as_parsed(entry) for entry in _expand(value)]


def transform_addresses(value: object) -> dict[str, str] | None:
    """Return the v2 recipient mapping ``{address: display name}``.

    Duplicate addresses keep the last name seen. Input that resolves to no
    mailboxes (an empty group) is treated as absent.

    Example:
        >>> transform_addresses(["a@x.com", '"Don, Joe" <b@x.com>'])
        {'a@x.com': '', 'b@x.com': 'Don, Joe'}
        >>> transform_addresses(None) is None
        True
    """
    if not value:
        return None
    return {parsed.address: parsed.name for parsed in parse_addresses(value)} or None


def transform_from_address(value: object) -> list[str] | None:
    """Return the v2 sender pair ``[address, name]`` of the first address.

    Example:
        >>> transform_from_address('"Doe, Jon" <jon@example.com>, other@example.com')
        ['jon@example.com', 'Doe, Jon']
    """
    if not value:
        return None
    parsed = parse_addresses(value)
    if not parsed:
        return None
    return [parsed[0].address, parsed[0].name]


def transform_v3_addresses(value: object) -> V3Address | list[V3Address] | None:
    """Return v3 recipient object(s).

    List inputs always produce a list. Scalar inputs produce a single object
    when they resolve to exactly one address, otherwise a list.

    Example:
        >>> transform_v3_addresses("ops@example.com")
        {'email': 'ops@example.com'}
        >>> transform_v3_addresses(["a@x.com", '"Bee" <b@x.com>'])
        [{'email': 'a@x.com'}, {'email': 'b@x.com', 'name': 'Bee'}]
        >>> transform_v3_addresses({"name": "Don Joe", "address": "d@x.com"})
        {'name': 'Don Joe', 'address': 'd@x.com'}
    """
    if not value:
        return None
    shaped = [_as_v3(entry) for entry in _expand(value)]
    match value:
        case list() | tuple():
            return shaped or None
        case _ if len(shaped) == 1:
            return shaped[0]
        case _:
            return shaped or None


def transform_v3_address(value: object) -> V3Address | None:
    """Return the v3 sender object built from the first address.

    Example:
        >>> transform_v3_address("noreply@example.com")
        {'email': 'noreply@example.com'}
    """
    if not value:
        return None
    shaped = [_as_v3(entry) for entry in _expand(value)]
    return shaped[0] if shaped else None


__all__ = [
    "ParsedAddress",
    "parse_address_header",
    "parse_addresses",
    "transform_addresses",
    "transform_from_address",
    "transform_v3_address",
    "transform_v3_addresses",
]
