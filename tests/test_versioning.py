"""API version detection from the configured base URL."""

from __future__ import annotations

import pytest

from sendinblue_transport.domain.enums import ApiVersion
from sendinblue_transport.domain.versioning import detect_api_version


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("api_url", "expected"),
    [
        ("https://api.sendinblue.com/v3", ApiVersion.V3),
        ("https://api.sendinblue.com/v3/", ApiVersion.V3),
        ("https://api.sendinblue.com/V3", ApiVersion.V3),
        ("dummy/v3", ApiVersion.V3),
        ("https://api.sendinblue.com/v2.0", ApiVersion.V2),
        ("dummy", ApiVersion.V2),
        ("", ApiVersion.V2),
    ],
)
def test_detect_api_version_reads_the_version_segment(api_url: str, expected: ApiVersion) -> None:
    assert detect_api_version(api_url) is expected


@pytest.mark.os_agnostic
def test_when_the_version_digit_is_unknown_it_falls_back_to_v2() -> None:
    assert detect_api_version("https://api.sendinblue.com/v9") is ApiVersion.V2


@pytest.mark.os_agnostic
def test_when_several_segments_match_the_first_one_wins() -> None:
    assert detect_api_version("https://proxy.example.com/v2/relay/v3") is ApiVersion.V2
