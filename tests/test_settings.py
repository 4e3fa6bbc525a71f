"""Tests for RPC server settings resolution."""

from pathlib import Path

import pytest

from armory_core.settings import RpcSettings, load_env_file


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "ARMORY_DIR",
        "ARMORY_RPC_HOST",
        "ARMORY_RPC_PORT",
        "ARMORY_LOG_LEVEL",
        "ARMORY_ENV_FILE",
    ):
        # record the original value so values loaded by dotenv are undone
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))


def test_defaults(tmp_path: Path) -> None:
    settings = RpcSettings.resolve(start_dir=tmp_path, env_file=str(tmp_path / "absent.env"))
    assert settings == RpcSettings(host="127.0.0.1", port=55553, log_level="info")


def test_overrides_win_over_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARMORY_RPC_PORT", "6000")
    settings = RpcSettings.resolve(
        start_dir=tmp_path,
        overrides={"rpc_port": "6001", "log_level": "DEBUG"},
        env_file=str(tmp_path / "absent.env"),
    )
    assert settings.port == 6001
    assert settings.log_level == "debug"


def test_env_file_is_loaded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / "rpc.env"
    env_file.write_text("ARMORY_RPC_HOST=0.0.0.0\nARMORY_RPC_PORT=7100\n", encoding="utf-8")
    monkeypatch.setenv("ARMORY_ENV_FILE", str(env_file))

    assert load_env_file() == str(env_file)
    settings = RpcSettings.resolve(start_dir=tmp_path)

    assert settings.host == "0.0.0.0"
    assert settings.port == 7100


def test_workspace_config_supplies_port(tmp_path: Path) -> None:
    workspace = tmp_path / "project" / ".armory"
    workspace.mkdir(parents=True)
    (workspace / "config.toml").write_text('rpc_port = "7200"\n', encoding="utf-8")

    settings = RpcSettings.resolve(
        start_dir=tmp_path / "project", env_file=str(tmp_path / "absent.env")
    )
    assert settings.port == 7200


def test_non_integer_port_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="rpc_port must be an integer"):
        RpcSettings.resolve(
            start_dir=tmp_path,
            overrides={"rpc_port": "not-a-port"},
            env_file=str(tmp_path / "absent.env"),
        )
