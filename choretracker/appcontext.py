"""Start-up context of the command-line application: configuration and logging."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

import platformdirs

from choretracker.config import Config, default_config, load_config
from choretracker.ports import Validator
from choretracker.validator import DefaultValidator

__all__ = ["CONFIG_FILE", "AppContext", "init_cli"]

CONFIG_FILE = "config.toml"

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_MESSAGE_FORMAT = "%(asctime)s %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _level(name: str) -> int:
    return _LEVELS.get(name.strip().lower(), logging.INFO)


class _ColorFormatter(logging.Formatter):
    """Wraps each record in the ANSI colour of its level."""

    _COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = self._COLORS.get(record.levelno)
        return f"{color}{text}\033[0m" if color else text


@dataclass
class AppContext:
    """Configuration, logger and validator shared by all commands."""

    config: Config
    logger: logging.Logger
    validator: Validator

    def close(self) -> None:
        """Close and detach every log handler."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def __enter__(self) -> AppContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _build_logger(app_name: str, config: Config, log_file: Path) -> logging.Logger:
    logger = logging.Logger(app_name, logging.DEBUG)
    if config.log.console_output:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(_level(config.log.level))
        formatter_type = (
            _ColorFormatter if config.log.console_colors else logging.Formatter
        )
        console.setFormatter(formatter_type(_MESSAGE_FORMAT, _TIME_FORMAT))
        logger.addHandler(console)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_MESSAGE_FORMAT, _TIME_FORMAT))
    logger.addHandler(file_handler)
    return logger


def init_cli(
    app_name: str,
    config_dir: str | PathLike[str] | None = None,
    data_dir: str | PathLike[str] | None = None,
) -> AppContext:
    """Load the configuration and set up logging for ``app_name``.

    A configuration file that cannot be read or parsed is reported on
    standard error and the default configuration is used instead. Raises
    ``OSError`` when the log directory cannot be created.
    """
    config_root = (
        Path(config_dir)
        if config_dir is not None
        else platformdirs.user_config_path(app_name)
    )
    if data_dir is not None:
        data_root = Path(data_dir)
        log_file = data_root / f"{app_name}.log"
    else:
        data_root = platformdirs.user_data_path(app_name)
        log_file = platformdirs.user_log_path(app_name) / f"{app_name}.log"

    defaults = default_config(data_root)
    config_file = config_root / CONFIG_FILE
    config = defaults
    if config_file.exists():
        try:
            config = load_config(config_file, defaults)
        except (OSError, ValueError) as exc:
            print(
                f"config loading failed: {exc}\nfallback to default configuration...",
                file=sys.stderr,
            )
            config = defaults

    logger = _build_logger(app_name, config, log_file)
    return AppContext(config=config, logger=logger, validator=DefaultValidator())