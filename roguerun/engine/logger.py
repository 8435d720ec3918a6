"""Channelled logging for the run core."""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from roguerun.engine.settings import read_settings

DEFAULT_CHANNELS = {
    "rewards": True,
    "weapons": True,
    "barrier": True,
    "runs": True,
    "gacha": False,
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class LoggerConfig:
    """Level and per-channel switches."""

    level: int = logging.INFO
    channels: Dict[str, bool] = field(default_factory=lambda: DEFAULT_CHANNELS.copy())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggerConfig":
        level_name = str(data.get("logLevel", "INFO")).upper()
        level = getattr(logging, level_name, logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO
        channels = DEFAULT_CHANNELS.copy()
        overrides = data.get("logChannels", {})
        if isinstance(overrides, dict):
            channels.update({str(name): bool(flag) for name, flag in overrides.items()})
        return cls(level=level, channels=channels)

    @classmethod
    def from_settings(cls, settings_path: Optional[Path] = None) -> "LoggerConfig":
        return cls.from_dict(read_settings(settings_path))


class ChannelLogger:
    """Forwards records to a stdlib logger while its channel is switched on."""

    def __init__(self, name: str, logger: logging.Logger, enabled: bool) -> None:
        self._name = name
        self._logger = logger
        self._enabled = enabled

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    def _emit(self, level: int, msg: str, *args, **kwargs) -> None:
        if self._enabled:
            self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.ERROR, msg, *args, **kwargs)


class GameLogger:
    """Registry of named channels under the ``roguerun`` logger."""

    def __init__(self, config: LoggerConfig, *, stream=None) -> None:
        logging.basicConfig(level=config.level, format=LOG_FORMAT, stream=stream or sys.stdout)
        self._root = logging.getLogger("roguerun")
        self._root.setLevel(config.level)
        self._channels: Dict[str, ChannelLogger] = {}
        for name, enabled in config.channels.items():
            self._register(name, enabled)

    def _register(self, name: str, enabled: bool) -> ChannelLogger:
        channel = ChannelLogger(name, self._root.getChild(name), enabled)
        self._channels[name] = channel
        return channel

    def channel(self, name: str) -> ChannelLogger:
        existing = self._channels.get(name)
        if existing is not None:
            return existing
        # Channels missing from settings stay silent until switched on.
        return self._register(name, False)

    def set_enabled(self, name: str, enabled: bool) -> None:
        self.channel(name).enabled = enabled

    def channels(self) -> Iterable[str]:
        return self._channels.keys()


def init_logger(settings_path: Optional[Path] = None) -> GameLogger:
    """Build the channel registry from settings.json."""

    return GameLogger(LoggerConfig.from_settings(settings_path))


__all__ = ["GameLogger", "LoggerConfig", "ChannelLogger", "init_logger", "DEFAULT_CHANNELS"]
