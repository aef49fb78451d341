"""Tests for the logging configuration model.

LoggingConfigModel validation is tested here. The init_logging function
is tested via CLI integration tests in test_cli_core.py.
"""

from __future__ import annotations

import pytest
from lib_layered_config import Config

from sendinblue_transport import __init__conf__
from sendinblue_transport.adapters.logging.setup import LoggingConfigModel, _runtime_config


@pytest.mark.os_agnostic
def test_logging_config_model_allows_extra_fields() -> None:
    """Extra fields pass through for lib_log_rich RuntimeConfig."""
    parsed = LoggingConfigModel.model_validate({"service": "test", "environment": "dev", "console_level": "DEBUG"})

    assert parsed.service == "test"
    assert parsed.environment == "dev"
    extra = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    assert extra == {"console_level": "DEBUG"}


@pytest.mark.os_agnostic
def test_logging_config_model_defaults() -> None:
    parsed = LoggingConfigModel.model_validate({})

    assert parsed.service is None
    assert parsed.environment == "prod"


@pytest.mark.os_agnostic
def test_runtime_config_falls_back_to_the_package_name() -> None:
    runtime = _runtime_config(Config({}, {}))

    assert runtime.service == __init__conf__.name
    assert runtime.environment == "prod"


@pytest.mark.os_agnostic
def test_runtime_config_uses_the_configured_service() -> None:
    runtime = _runtime_config(Config({"lib_log_rich": {"service": "mailer", "environment": "test"}}, {}))

    assert runtime.service == "mailer"
    assert runtime.environment == "test"
