"""Property-based tests for address normalization.

Uses hypothesis to verify that header strings built from generated
mailboxes normalize to the same mailboxes for both API schemas, whatever
display names (including commas) they carry.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from sendinblue_transport.domain.addresses import (
    ParsedAddress,
    parse_address_header,
    transform_addresses,
    transform_v3_addresses,
)

# ======================== Strategy helpers ========================

_email_local_part = st.from_regex(r"[a-z][a-z0-9_]{0,15}", fullmatch=True)
_email_domain = st.from_regex(r"[a-z][a-z0-9]{0,10}\.[a-z]{2,4}", fullmatch=True)
_valid_email = st.builds(lambda local, domain: f"{local}@{domain}", _email_local_part, _email_domain)  # type: ignore[arg-type]
_display_name = st.from_regex(r"[A-Z][a-z]{0,8}(, [A-Z][a-z]{0,8})?", fullmatch=True)

_mailbox = st.builds(ParsedAddress, _valid_email, st.one_of(st.just(""), _display_name))  # type: ignore[arg-type]


def _render(mailbox: ParsedAddress) -> str:
    if not mailbox.name:
        return mailbox.address
    return f'"{mailbox.name}" <{mailbox.address}>'


# ======================== Header parsing ========================


@pytest.mark.os_agnostic
@given(mailboxes=st.lists(_mailbox, min_size=1, max_size=5))
@settings(max_examples=100)
def test_header_parsing_recovers_every_rendered_mailbox(mailboxes: list[ParsedAddress]) -> None:
    header = ", ".join(_render(m) for m in mailboxes)

    assert parse_address_header(header) == mailboxes


@pytest.mark.os_agnostic
@given(mailboxes=st.lists(_mailbox, min_size=1, max_size=5), terminated=st.booleans())
@settings(max_examples=50)
def test_group_members_match_the_flat_list(mailboxes: list[ParsedAddress], terminated: bool) -> None:
    flat = ", ".join(_render(m) for m in mailboxes)
    group = f"Team: {flat}{';' if terminated else ''}"

    assert parse_address_header(group) == parse_address_header(flat)


# ======================== Schema agreement ========================


@pytest.mark.os_agnostic
@given(mailboxes=st.lists(_mailbox, min_size=1, max_size=5, unique_by=lambda m: m.address))
@settings(max_examples=100)
def test_v2_and_v3_agree_on_addresses_and_names(mailboxes: list[ParsedAddress]) -> None:
    rendered = [_render(m) for m in mailboxes]

    v2 = transform_addresses(rendered)
    v3 = transform_v3_addresses(rendered)

    assert isinstance(v3, list)
    assert v2 == {entry["email"]: entry.get("name", "") for entry in v3}
    assert [entry["email"] for entry in v3] == [m.address for m in mailboxes]
