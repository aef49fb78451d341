"""Static package metadata surfaced to the CLI and configuration loader.

Values here must stay in sync with ``pyproject.toml``; the metadata tests
compare both sources.

Contents:
    * Package identity constants (name, title, version, homepage, author).
    * ``LAYEREDCONF_*`` identifiers used by lib_layered_config path discovery.
    * :func:`print_info` - Render the metadata block for ``info``.
"""

from __future__ import annotations

from typing import Final

#: Distribution name as published on the package index.
name: Final[str] = "sendinblue_transport"

#: One-line summary shown in CLI help.
title: Final[str] = "Sendinblue transactional email transport (API v2 and v3)"

#: Package version; keep in sync with ``[project].version``.
version: Final[str] = "1.0.0"

homepage: Final[str] = "https://github.com/bitranox/sendinblue_transport"
author: Final[str] = "bitranox"
author_email: Final[str] = "bitranox@gmail.com"

#: Console script name.
shell_command: Final[str] = "sendinblue-transport"

#: Vendor directory used on macOS/Windows configuration paths.
LAYEREDCONF_VENDOR: Final[str] = "bitranox"

#: Application directory used on macOS/Windows configuration paths.
LAYEREDCONF_APP: Final[str] = "Sendinblue Transport"

#: Slug used for XDG configuration paths on Linux (``~/.config/<slug>/``).
LAYEREDCONF_SLUG: Final[str] = "sendinblue-transport"


def print_info() -> None:
    """Print the package metadata block.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for sendinblue_transport:
        ...
    """
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    )
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
