"""Reading and writing the stations configuration file."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .validation import trim

logger = logging.getLogger(__name__)

CONFIG_NAME = ".Stations.ini"
BACKUP_NAME = ".Stations.bak"

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_INT_PREFIX_RE = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")

_INT_KEYS = (
    "timeout0",
    "timeout1",
    "timeout2",
    "timeout3",
    "coeff_k",
    "coeff_w",
    "port",
)
_TEXT_KEYS = (
    "comments",
    "server_address1",
    "server_address2",
    "server_address3",
    "client_address1",
    "client_address2",
    "client_address3",
)
_WRITE_ORDER = (
    "comments",
    "timeout0",
    "timeout1",
    "timeout2",
    "timeout3",
    "coeff_k",
    "coeff_w",
    "port",
    "server_address1",
    "server_address2",
    "server_address3",
    "client_address1",
    "client_address2",
    "client_address3",
)


class ConfigError(Exception):
    """Raised when the configuration cannot be located or parsed."""


@dataclass
class Station:
    """One station entry of the configuration."""

    id: int = 0
    name: str = ""
    comments: str = ""
    timeout0: int = 5
    timeout1: int = 15
    timeout2: int = 10
    timeout3: int = 20
    coeff_k: int = 8
    coeff_w: int = 12
    port: int = 8000
    server_address1: str = "127.0.0.1"
    server_address2: str = ""
    server_address3: str = ""
    client_address1: str = "127.0.0.1"
    client_address2: str = ""
    client_address3: str = ""


def parse_value(line: str) -> tuple[str, str]:
    """Split ``key=value`` at the first ``=``.

    A line without ``=`` yields the whole line as both key and value.
    """
    key, sep, value = line.partition("=")
    if not sep:
        return line, line
    return key, value


def _to_int(key: str, value: str) -> int:
    match = _INT_PREFIX_RE.match(value)
    if match is None:
        raise ConfigError(f"invalid integer for '{key}': {value!r}")
    number = int(match.group(1))
    if not _INT_MIN <= number <= _INT_MAX:
        raise ConfigError(f"integer out of range for '{key}': {value!r}")
    return number


def parse_stations(text: str) -> list[Station]:
    """Parse the configuration text into stations numbered from 0.

    A line without ``=`` starts a new station named by it. The secondary
    addresses are not reset between stations, so a station that omits them
    inherits those of the station before it.
    """
    stations: list[Station] = []
    current: Station | None = None
    carried = {
        "server_address2": "",
        "server_address3": "",
        "client_address2": "",
        "client_address3": "",
    }

    for raw in text.split("\n"):
        line = trim(raw)
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            if current is not None:
                stations.append(current)
                carried = {k: getattr(current, k) for k in carried}
            current = Station(id=len(stations), name=line, **carried)
            continue

        key, value = parse_value(line)
        if current is None:
            # Values before any station header still feed the first station.
            current = Station(id=0, **carried)
            current.name = ""
            pending_before_header = True
        else:
            pending_before_header = False

        if key in _INT_KEYS:
            setattr(current, key, _to_int(key, value))
        elif key in _TEXT_KEYS:
            setattr(current, key, value)
        else:
            logger.warning("Внимание: неизвестный ключ '%s' в файле конфигурации.", key)

        if pending_before_header:
            carried = {k: getattr(current, k) for k in carried}
            current = None

    if current is not None:
        stations.append(current)
    return stations


def format_stations(stations: Iterable[Station]) -> str:
    """Render stations in the configuration file format."""
    lines: list[str] = []
    for station in stations:
        lines.append(station.name)
        lines.extend(f"{key}={getattr(station, key)}" for key in _WRITE_ORDER)
    return "".join(f"{line}\n" for line in lines)


def config_path(home: str | os.PathLike[str] | None = None, backup: bool = False) -> Path:
    """Return the path of the configuration (or backup) file in ``home``.

    Without ``home`` the ``HOME`` environment variable is used.
    """
    if home is None:
        home = os.environ.get("HOME")
        if not home:
            raise ConfigError("Переменная окружения $HOME не установлена.")
    return Path(home) / (BACKUP_NAME if backup else CONFIG_NAME)


def read_config(home: str | os.PathLike[str] | None = None) -> list[Station]:
    """Read stations from the configuration file; a missing file gives none."""
    path = config_path(home)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return []
    return parse_stations(text)


def write_config(
    stations: Iterable[Station],
    home: str | os.PathLike[str] | None = None,
    backup: bool = False,
) -> Path | None:
    """Write stations to the configuration or backup file.

    Returns the path written, or None if the file could not be opened.
    """
    path = config_path(home, backup)
    text = format_stations(stations)
    try:
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError:
        return None
    return path