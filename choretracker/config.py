"""Application constants and the TOML configuration of the chore tracker."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from os import PathLike
from pathlib import Path
from typing import Any

__all__ = [
    "APP_NAME",
    "VERSION",
    "STORAGE_FILE",
    "ADD_COMMAND",
    "GET_COMMAND",
    "UPDATE_COMMAND",
    "DELETE_COMMAND",
    "LIST_COMMAND",
    "SEARCH_COMMAND",
    "LoggerConfiguration",
    "NotificationConfiguration",
    "Config",
    "default_config",
    "load_config",
]

APP_NAME = "choretracker"
VERSION = "0.1.3"
STORAGE_FILE = "chores.json"

ADD_COMMAND = "add"
GET_COMMAND = "get"
UPDATE_COMMAND = "update"
DELETE_COMMAND = "delete"
LIST_COMMAND = "list"
SEARCH_COMMAND = "search"


@dataclass
class LoggerConfiguration:
    """Settings of the application logger (TOML table ``Logger``)."""

    enabled: bool = True
    level: str = "debug"
    file_path: str = ""
    console_output: bool = True
    console_colors: bool = False


def _default_methods() -> dict[str, bool]:
    return {"console": True, "os_notify": True, "telegram": False}


@dataclass
class NotificationConfiguration:
    """Settings of chore notifications (TOML table ``Notification``)."""

    enabled: bool = False
    notify_at: list[str] = field(default_factory=lambda: ["07:00", "21:30"])
    methods: dict[str, bool] = field(default_factory=_default_methods)


@dataclass
class Config:
    """The whole application configuration."""

    version: str = VERSION
    storage_path: str = ""
    log: LoggerConfiguration = field(default_factory=LoggerConfiguration)
    notification: NotificationConfiguration = field(
        default_factory=NotificationConfiguration
    )


def default_config(data_dir: str | PathLike[str]) -> Config:
    """Return the default configuration storing chores under ``data_dir``."""
    return Config(
        version=VERSION,
        storage_path=str(Path(data_dir) / STORAGE_FILE),
        log=LoggerConfiguration(),
        notification=NotificationConfiguration(),
    )


def _get(table: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    if key not in table:
        return default
    value = table[key]
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise ValueError(f"configuration key '{key}' must be of type {kind.__name__}")
    return value


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"configuration section '{name}' must be a table")
    return section


def load_config(path: str | PathLike[str], defaults: Config) -> Config:
    """Read a TOML configuration file, filling absent keys from ``defaults``.

    Raises ``OSError`` when the file cannot be read and ``ValueError`` when
    its content is malformed. ``defaults`` is left unchanged.
    """
    with open(path, "rb") as handle:
        try:
            data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"invalid configuration file: {exc}") from exc

    log_table = _section(data, "Logger")
    log = LoggerConfiguration(
        enabled=_get(log_table, "enabled", bool, defaults.log.enabled),
        level=_get(log_table, "level", str, defaults.log.level),
        file_path=_get(log_table, "filepath", str, defaults.log.file_path),
        console_output=_get(
            log_table, "console output", bool, defaults.log.console_output
        ),
        console_colors=_get(
            log_table, "console color", bool, defaults.log.console_colors
        ),
    )

    notify_table = _section(data, "Notification")
    notify_at = _get(
        notify_table, "notify_at", list, list(defaults.notification.notify_at)
    )
    if not all(isinstance(item, str) for item in notify_at):
        raise ValueError("configuration key 'notify_at' must hold strings")
    methods = dict(defaults.notification.methods)
    extra = _get(notify_table, "methods_enabled", dict, {})
    for name, enabled in extra.items():
        if not isinstance(enabled, bool):
            raise ValueError(f"notification method '{name}' must be true or false")
        methods[name] = enabled
    notification = NotificationConfiguration(
        enabled=_get(notify_table, "enabled", bool, defaults.notification.enabled),
        notify_at=list(notify_at),
        methods=methods,
    )

    return replace(
        defaults,
        version=_get(data, "version", str, defaults.version),
        storage_path=_get(data, "storage_path", str, defaults.storage_path),
        log=log,
        notification=notification,
    )