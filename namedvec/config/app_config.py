#!filepath: namedvec/config/app_config.py
from __future__ import annotations

import os
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .vector_config import VectorConfig
from namedvec.utils.logger import logs


ENV_OVERRIDES = {
    "NAMEDVEC_LOG_LEVEL": ("log", "level"),
    "NAMEDVEC_LOG_DIR": ("log", "dir"),
    "NAMEDVEC_BROADCAST_LAYOUT": ("vector", "broadcast_layout"),
}


def config_dir() -> str:
    """
    Directory holding the packaged base.yml:
    namedvec/config/app_config.py -> namedvec/config
    """
    return os.path.abspath(os.path.dirname(__file__))


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    vector: VectorConfig = Field(default_factory=VectorConfig)

    @classmethod
    def load(cls, path: str | None = None, env_file: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env
        - default file is namedvec/config/base.yml
        - NAMEDVEC_* environment variables override YAML values
        """
        # 1) .env (cwd by default, never overrides the real environment)
        load_dotenv(env_file or os.path.join(os.getcwd(), ".env"))

        # 2) resolve config path
        if path is None:
            path = os.path.join(config_dir(), "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) read YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) env overrides
        for env_key, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_key)
            if value:
                raw.setdefault(section, {})[key] = value

        return cls(**raw)


# ------------------------------------------------------------------
# Active process-wide config
# ------------------------------------------------------------------
_ACTIVE: Optional[AppConfig] = None


def get_config() -> AppConfig:
    global _ACTIVE
    if _ACTIVE is None:
        _ACTIVE = AppConfig()
    return _ACTIVE


def set_config(config: AppConfig) -> AppConfig:
    """Install config as the active one and re-apply its logging sinks."""
    global _ACTIVE
    _ACTIVE = config
    logs.configure(config.log)
    logs.debug(
        f"[config] active broadcast_layout={config.vector.broadcast_layout.value} "
        f"log_level={config.log.level}"
    )
    return config


def reset_config() -> None:
    global _ACTIVE
    _ACTIVE = None
