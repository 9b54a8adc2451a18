from pathlib import Path

import pytest

from contracts_config.environment import EnvironmentSnapshot, capture_environment


def test_value_treats_empty_as_absent() -> None:
    env = EnvironmentSnapshot({"PRESENT": "x", "EMPTY": ""})

    assert env.value("PRESENT") == "x"
    assert env.value("EMPTY") is None
    assert env.value("MISSING") is None
    assert env.is_set("PRESENT")
    assert not env.is_set("EMPTY")


def test_mapping_access_keeps_raw_values() -> None:
    env = EnvironmentSnapshot({"EMPTY": ""})

    assert env["EMPTY"] == ""
    assert env.get("MISSING") is None
    assert "EMPTY" in env
    assert len(env) == 1


def test_snapshot_is_isolated_from_source() -> None:
    source = {"SHOULD_FORK": "1"}

    env = capture_environment(source)
    source["SHOULD_FORK"] = "0"

    assert env["SHOULD_FORK"] == "1"


def test_snapshot_is_read_only() -> None:
    env = EnvironmentSnapshot({"A": "1"})

    with pytest.raises(TypeError):
        env.variables["A"] = "2"  # type: ignore[index]


def test_snapshot_compares_as_mapping() -> None:
    env = EnvironmentSnapshot({"A": "1"})

    assert env == {"A": "1"}
    assert env == EnvironmentSnapshot({"A": "1"})
    assert env != {"A": "2"}

    with pytest.raises(TypeError):
        hash(env)


def test_repr_hides_values() -> None:
    env = EnvironmentSnapshot({"MAINNET_PRIVKEY": "0xsecret"})

    assert "0xsecret" not in repr(env)


def test_capture_environment_loads_dotenv_without_override(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    env_file = tmp_path.joinpath(".env")
    env_file.write_text("DOTENV_ONLY_VAR=from-file\nDOTENV_SHARED_VAR=from-file\n", encoding="utf-8")

    # Register the variable with monkeypatch so the value loaded from the file is undone.
    monkeypatch.setenv("DOTENV_ONLY_VAR", "placeholder")
    monkeypatch.delenv("DOTENV_ONLY_VAR")
    monkeypatch.setenv("DOTENV_SHARED_VAR", "from-process")

    env = capture_environment(env_file=env_file)

    assert env.value("DOTENV_ONLY_VAR") == "from-file"
    assert env.value("DOTENV_SHARED_VAR") == "from-process"
