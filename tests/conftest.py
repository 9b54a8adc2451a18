import logging
from pathlib import Path

import pytest

from contracts_config.environment import EnvironmentSnapshot
from contracts_config.resolver import reset_resolved_config_cache
from contracts_config.settings import get_settings


@pytest.fixture(autouse=True)
def reset_config_state() -> None:
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level

    get_settings.cache_clear()
    reset_resolved_config_cache()
    yield
    get_settings.cache_clear()
    reset_resolved_config_cache()

    # Drop stream handlers installed by configure_logging during the test.
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler and handler not in original_handlers:
            root.removeHandler(handler)

    root.setLevel(original_level)


@pytest.fixture
def empty_env() -> EnvironmentSnapshot:
    return EnvironmentSnapshot({})


@pytest.fixture
def base_fragment(tmp_path: Path) -> Path:
    config_file = tmp_path.joinpath("contracts-config.toml")
    config_file.write_text(
        """
        [named_accounts.deployer]
        default = 0

        [mocha]
        timeout = 0

        [typechain]
        out_dir = "build/types"
        target = "ethers-v5"
        """,
        encoding="utf-8",
    )
    return config_file
