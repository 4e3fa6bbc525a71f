"""Platform-independent helpers for Armory paths."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir, user_log_dir

_DEFAULT_APP_NAME = "armory"
_DEFAULT_APP_AUTHOR = "Armory"


@dataclass(frozen=True)
class UserDirs:
    """Expose the platform-configured locations for config/data/log trees."""

    app_name: str = _DEFAULT_APP_NAME
    app_author: str = _DEFAULT_APP_AUTHOR
    config_dir_override: Path | None = None
    data_dir_override: Path | None = None
    log_dir_override: Path | None = None

    def config_dir(self) -> Path:
        return (
            self.config_dir_override
            if self.config_dir_override
            else Path(user_config_dir(self.app_name, appauthor=self.app_author))
        )

    def data_dir(self) -> Path:
        return (
            self.data_dir_override
            if self.data_dir_override
            else Path(user_data_dir(self.app_name, appauthor=self.app_author))
        )

    def log_dir(self) -> Path:
        return (
            self.log_dir_override
            if self.log_dir_override
            else Path(user_log_dir(self.app_name, appauthor=self.app_author))
        )

    def modules_dir(self) -> Path:
        """User-wide module tree shared by every workspace."""

        return self.data_dir() / "modules"
