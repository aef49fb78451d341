"""Config display wrapper: log flushing, API key masking, section errors.

Core rendering is lib_layered_config's; these tests cover what the wrapper
adds on top of it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from lib_layered_config import Config

from sendinblue_transport.adapters.config.display import display_config
from sendinblue_transport.domain.enums import OutputFormat


@pytest.mark.os_agnostic
@pytest.mark.parametrize("output_format", list(OutputFormat))
def test_display_config_raises_for_nonexistent_section(
    config_factory: Callable[[dict[str, Any]], Config],
    output_format: OutputFormat,
) -> None:
    config = config_factory({"sendinblue": {"api_url": "https://api.sendinblue.com/v3"}})

    with pytest.raises(ValueError, match="not found"):
        display_config(config, output_format=output_format, section="nonexistent")


@pytest.mark.os_agnostic
def test_display_human_masks_a_configured_api_key(capsys: pytest.CaptureFixture[str]) -> None:
    config = Config({"sendinblue": {"api_key": "xkeysib-secret", "api_url": "https://api.sendinblue.com/v3"}}, {})

    display_config(config, output_format=OutputFormat.HUMAN)

    output = capsys.readouterr().out
    assert "xkeysib-secret" not in output
    assert "[sendinblue]" in output
    assert "https://api.sendinblue.com/v3" in output


@pytest.mark.os_agnostic
def test_display_json_masks_a_configured_api_key(capsys: pytest.CaptureFixture[str]) -> None:
    config = Config({"sendinblue": {"api_key": "xkeysib-secret"}}, {})

    display_config(config, output_format=OutputFormat.JSON, section="sendinblue")

    output = capsys.readouterr().out
    assert "xkeysib-secret" not in output
    assert '"api_key"' in output


@pytest.mark.os_agnostic
def test_display_leaves_an_empty_api_key_visible(capsys: pytest.CaptureFixture[str]) -> None:
    config = Config({"sendinblue": {"api_key": "", "api_url": "https://api.sendinblue.com/v2.0"}}, {})

    display_config(config, output_format=OutputFormat.HUMAN, section="sendinblue")

    output = capsys.readouterr().out
    assert 'api_key = ""' in output
    assert "***" not in output


@pytest.mark.os_agnostic
def test_display_renders_other_sections_unchanged(capsys: pytest.CaptureFixture[str]) -> None:
    config = Config({"lib_log_rich": {"console_level": "DEBUG"}}, {})

    display_config(config, output_format=OutputFormat.JSON)

    output = capsys.readouterr().out
    assert '"console_level": "DEBUG"' in output
