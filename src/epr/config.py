from pathlib import Path
from typing import Optional

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

from epr.exceptions import ConfigError


class AppSettings(BaseSettings):
    name: str = "EPR Summary Logs"
    version: str = "1.0.0"


class PathSettings(BaseSettings):
    uploads_dir: Path = Path("./data/uploads")
    db_path: Path = Path("./data/epr.db")


class StorageSettings(BaseSettings):
    """
    Runtime persistence selection. Only sqlite is wired for stored summary
    logs; in-memory repositories are built directly by `epr check` and tests.
    """
    backend: str = "sqlite"


class LoggingSettings(BaseSettings):
    format: str = "console"  # console | json
    level: str = "INFO"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__", env_file=".env", extra="ignore")
    app: AppSettings = AppSettings()
    paths: PathSettings = PathSettings()
    storage: StorageSettings = StorageSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        # Load from default path if exists
        default_path = Path("config/settings.yaml")
        path = config_path or (default_path if default_path.exists() else None)

        if not path:
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"config file not readable: {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid yaml in {path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigError(f"config root must be a mapping: {path}")

        return cls(**config_data)

settings = Settings.load()
