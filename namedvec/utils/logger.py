#!filepath: namedvec/utils/logger.py
from __future__ import annotations

import os
import sys
from typing import Optional

from loguru import logger

from namedvec.config.log_config import LogConfig

# loguru ships a DEBUG stderr handler; drop it once, on first configure
_LOGGER_CONFIGURED = False


class Logging:
    """
    Library logging module
    ---------------------------------------
    - stderr sink by default (no files touched on import)
    - optional dated file sink with rotation / retention
    - configure() may be called again to swap sinks
    ---------------------------------------
    """

    FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"

    def __init__(self, config: Optional[LogConfig] = None):
        self.config = config or LogConfig()
        self._sink_ids: list[int] = []
        self._configure()

    @property
    def level(self) -> str:
        return self.config.level

    def configure(self, config: LogConfig) -> None:
        """Re-apply sinks from a new LogConfig."""
        self.config = config
        self._configure()

    def _configure(self) -> None:
        global _LOGGER_CONFIGURED
        if not _LOGGER_CONFIGURED:
            logger.remove()
            _LOGGER_CONFIGURED = True

        for sink_id in self._sink_ids:
            try:
                logger.remove(sink_id)
            except ValueError:
                # already removed elsewhere (e.g. logger.remove() in tests)
                pass
        self._sink_ids = []

        cfg = self.config

        self._sink_ids.append(
            logger.add(
                sys.stderr,
                level=cfg.level,
                format=self.FORMAT,
                backtrace=False,
                diagnose=False,
            )
        )

        if cfg.dir:
            os.makedirs(cfg.dir, exist_ok=True)
            self._sink_ids.append(
                logger.add(
                    sink=f"{cfg.dir}/{{time:YYYY-MM-DD}}.log",
                    rotation=cfg.rotation,
                    retention=cfg.retention,
                    level=cfg.level,
                    format=self.FORMAT,
                    enqueue=True,
                    backtrace=True,
                    diagnose=True,
                )
            )

    # ---------- basic interface ----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)


# default global logs (reconfigured by config.set_config)
logs = Logging()
