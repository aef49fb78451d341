"""Shared pytest fixtures for transport, CLI and module-entry tests.

All shared fixtures live here; tests pick them up through pytest's conftest
discovery. HTTP is never performed for real: transport tests hand an
``httpx.MockTransport``-backed client to :class:`SendinblueTransport`, and CLI
tests swap ``send_mail`` for a :class:`MailSpy`.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from sendinblue_transport.adapters.memory.sendinblue import MailSpy
    from sendinblue_transport.composition import AppServices


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test."""
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests."""
    from sendinblue_transport.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before each test."""
    from sendinblue_transport.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts (no provenance)."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


# ======================== HTTP fixtures ========================


@dataclass
class RecordedApi:
    """Fake Sendinblue endpoint backed by ``httpx.MockTransport``.

    Attributes:
        status_code: Status returned for every request.
        body: Raw response body.
        requests: Every request received, in order.
        error: When set, raised instead of answering (simulates network failure).
    """

    status_code: int = 201
    body: bytes = b"{}"
    requests: list[httpx.Request] | None = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        if self.requests is None:
            self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        assert self.requests is not None
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self.body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_api() -> Callable[..., RecordedApi]:
    """Return a factory for fake API endpoints.

    Example:
        def test_send(fake_api) -> None:
            api = fake_api(status_code=201, body=b'{"messageId": "<1@x>"}')
            transport = SendinblueTransport(config, client=api.client())
    """

    def _create(*, status_code: int = 201, body: bytes = b"{}", error: Exception | None = None) -> RecordedApi:
        return RecordedApi(status_code=status_code, body=body, error=error)

    return _create


# ======================== CLI fixtures ========================


@dataclass
class MailCliContext:
    """Container for mail CLI test setup.

    Attributes:
        factory: Callable that returns wired AppServices for CLI invocation.
        spy: MailSpy instance for asserting on sends.
    """

    factory: Callable[[], Any]
    spy: MailSpy


@pytest.fixture
def mail_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], MailCliContext]:
    """Create mail CLI test context with injected config and a MailSpy.

    Takes the ``[sendinblue]`` section contents and returns the wired factory
    plus the spy capturing sends. Body building stays real.

    Example:
        def test_send_email(cli_runner, mail_cli_context) -> None:
            ctx = mail_cli_context({"api_key": "k", "api_url": "https://api.sendinblue.com/v3"})
            result = cli_runner.invoke(cli, ["send-email", "--to", "a@b.com"], obj=ctx.factory)
            assert ctx.spy.sent[0]["payload"]["to"] == [{"email": "a@b.com"}]
    """
    from sendinblue_transport.adapters.memory import load_transport_config_from_dict_in_memory
    from sendinblue_transport.adapters.memory.sendinblue import MailSpy as MailSpyImpl
    from sendinblue_transport.composition import AppServices, build_production

    def _create(section: dict[str, Any]) -> MailCliContext:
        spy = MailSpyImpl()
        config = Config({"sendinblue": section}, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            get_default_config_path=prod.get_default_config_path,
            display_config=prod.display_config,
            send_mail=spy.send_mail,
            build_request_body=prod.build_request_body,
            load_transport_config_from_dict=load_transport_config_from_dict_in_memory,
            init_logging=prod.init_logging,
        )
        return MailCliContext(factory=lambda: test_services, spy=spy)

    return _create


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create CLI test context with an injected config dict."""
    from sendinblue_transport.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            get_default_config_path=prod.get_default_config_path,
            display_config=prod.display_config,
            send_mail=prod.send_mail,
            build_request_body=prod.build_request_body,
            load_transport_config_from_dict=prod.load_transport_config_from_dict,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _create


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose get_config records the profile it was called with."""
    from sendinblue_transport.composition import AppServices, build_testing

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        base = build_testing()
        test_services = AppServices(
            get_config=_capturing_get_config,
            get_default_config_path=base.get_default_config_path,
            display_config=base.display_config,
            send_mail=base.send_mail,
            build_request_body=base.build_request_body,
            load_transport_config_from_dict=base.load_transport_config_from_dict,
            init_logging=base.init_logging,
        )
        return lambda: test_services

    return _inject
