import json
import logging
import sys

import pytest

from contracts_config.environment import EnvironmentSnapshot
from contracts_config.logging import (
    JsonFormatter,
    StructuredTextFormatter,
    build_log_extra,
    configure_logging,
    extract_log_context,
    log_duration,
)
from contracts_config.networks import build_networks
from contracts_config.settings import get_settings


class ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()

        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def test_build_log_extra_includes_structured_fields() -> None:
    extra = build_log_extra(
        network="hardhat",
        chain_id=1338,
        variable="SHOULD_FORK",
        config_path="/tmp/contracts-config.toml",
        additional={"operation": "resolve"},
    )

    assert extra == {
        "network": "hardhat",
        "chain_id": 1338,
        "env_var": "SHOULD_FORK",
        "config_path": "/tmp/contracts-config.toml",
        "operation": "resolve",
    }


def test_build_log_extra_omits_missing_fields() -> None:
    assert build_log_extra() == {}


def test_log_duration_records_elapsed_time() -> None:
    handler = ListHandler()

    logger = logging.getLogger("contracts_config.tests.logging")

    logger.setLevel(logging.DEBUG)

    logger.addHandler(handler)

    try:
        with log_duration(
            logger,
            "resolving configuration",
            level=logging.INFO,
            extra={"stage": "compose"},
        ):
            pass
    finally:
        logger.removeHandler(handler)

    assert len(handler.records) == 1

    record = handler.records[0]

    assert record.levelno == logging.INFO

    assert record.getMessage() == "resolving configuration"

    context = extract_log_context(record)

    assert context["stage"] == "compose"

    assert context["elapsed_seconds"] >= 0


def test_secrets_are_never_logged(caplog: pytest.LogCaptureFixture) -> None:
    env = EnvironmentSnapshot(
        {
            "MAINNET_PRIVKEY": "0xprivate",
            "DEVNET_PRIVKEY": "0xdevprivate",
            "SHOULD_FORK": "1",
        }
    )

    with caplog.at_level(logging.DEBUG):
        build_networks(env)

    formatter = StructuredTextFormatter("%(levelname)s %(message)s", color_enabled=False)

    for record in caplog.records:
        formatted = formatter.format(record)
        assert "0xprivate" not in formatted
        assert "0xdevprivate" not in formatted


def test_structured_formatter_applies_color_tokens() -> None:
    formatter = StructuredTextFormatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    record = logging.LogRecord(
        name="contracts_config.networks",
        level=logging.WARNING,
        pathname=__file__,
        lineno=0,
        msg="Provider key is not set",
        args=(),
        exc_info=None,
    )

    formatted = formatter.format(record)

    assert "\033[36m" in formatted  # cyan timestamp
    assert "\033[33mWARNING\033[0m" in formatted


def test_structured_formatter_appends_sorted_context() -> None:
    formatter = StructuredTextFormatter("%(levelname)s %(message)s", color_enabled=False)

    record = logging.makeLogRecord(
        {
            "name": "contracts_config.explorer",
            "levelno": logging.DEBUG,
            "levelname": "DEBUG",
            "msg": "Explorer API key is not set",
            "network": "nova",
            "env_var": "NOVA_FOGISCAN_API_KEY",
        }
    )

    formatted = formatter.format(record)

    assert "\033" not in formatted
    assert formatted == "DEBUG Explorer API key is not set | env_var=NOVA_FOGISCAN_API_KEY network=nova"


def test_json_formatter_serializes_context() -> None:
    formatter = JsonFormatter(datefmt="%Y-%m-%dT%H:%M:%S")

    record = logging.LogRecord(
        name="contracts_config.compilers",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="Adding interface tester compiler %s.",
        args=("0.8.20",),
        exc_info=None,
    )
    record.env_var = "INTERFACE_TESTER_SOLC_VERSION"  # type: ignore[attr-defined]

    payload = json.loads(formatter.format(record))

    assert payload["logger"] == "contracts_config.compilers"
    assert payload["message"] == "Adding interface tester compiler 0.8.20."
    assert payload["env_var"] == "INTERFACE_TESTER_SOLC_VERSION"


def test_json_formatter_serializes_exceptions() -> None:
    formatter = JsonFormatter(datefmt="%Y-%m-%dT%H:%M:%S")

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord(
            name="contracts_config.resolver",
            level=logging.ERROR,
            pathname=__file__,
            lineno=0,
            msg="Failed",
            args=(),
            exc_info=sys.exc_info(),
        )

    payload = formatter.format(record)

    assert '"level": "ERROR"' in payload
    assert '"exc_info":' in payload
    assert "RuntimeError: boom" in payload


@pytest.mark.parametrize(
    ("log_format", "formatter_type"),
    [("json", JsonFormatter), ("text", StructuredTextFormatter)],
)
def test_configure_logging_selects_formatter(
    monkeypatch: pytest.MonkeyPatch,
    log_format: str,
    formatter_type: type,
) -> None:
    monkeypatch.setenv("LOG_FORMAT", log_format)
    monkeypatch.setenv("LOG_LEVEL", "not-a-level")

    configure_logging(get_settings())

    root = logging.getLogger()

    assert root.level == logging.INFO
    assert any(isinstance(handler.formatter, formatter_type) for handler in root.handlers)
