"""Settings for the RPC server process."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from .workspace import WorkspaceResolver


def load_env_file(env_file: str | None = None) -> str:
    """
    Load env vars from .env.
    Priority:
      1) explicit env_file argument
      2) env var ARMORY_ENV_FILE
      3) .env in the current working directory
    Returns the path used.
    """
    path = env_file or os.getenv("ARMORY_ENV_FILE") or str(Path(".env"))
    load_dotenv(dotenv_path=path, override=False)
    return path


@dataclass(frozen=True)
class RpcSettings:
    host: str = "127.0.0.1"
    port: int = 55553
    log_level: str = "info"

    @staticmethod
    def resolve(
        *,
        start_dir: Path | None = None,
        overrides: Mapping[str, str] | None = None,
        env_file: str | None = None,
    ) -> "RpcSettings":
        """Layer CLI overrides, environment, workspace and user config.toml, defaults."""

        load_env_file(env_file)
        resolver = WorkspaceResolver(cli_overrides=overrides)
        host = resolver.resolve_setting("rpc_host", start_dir) or "127.0.0.1"
        raw_port = resolver.resolve_setting("rpc_port", start_dir) or "55553"
        try:
            port = int(raw_port)
        except ValueError as exc:
            raise ValueError(f"rpc_port must be an integer, got {raw_port!r}") from exc
        log_level = resolver.resolve_setting("log_level", start_dir) or "info"
        return RpcSettings(host=host, port=port, log_level=log_level.lower())
