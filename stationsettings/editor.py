"""Editing state of the station settings form, independent of any toolkit."""

from __future__ import annotations

import os
from dataclasses import fields, replace

from .config import Station, read_config, write_config
from .validation import validate_ip, validate_name

NEW_STATION_NAME = "Новая станция"
DEFAULT_ADDRESS = "127.0.0.1"

_INT_MAX = 2**31 - 1

# Ranges of the numeric inputs; values outside are clamped like a spin box.
_LIMITS = {
    "timeout0": (0, _INT_MAX),
    "timeout1": (0, _INT_MAX),
    "timeout2": (0, _INT_MAX),
    "timeout3": (0, _INT_MAX),
    "coeff_k": (1, _INT_MAX),
    "coeff_w": (1, _INT_MAX),
    "port": (1, 65535),
}

_PRIMARY_ADDRESSES = ("server_address1", "client_address1")
_SECONDARY_ADDRESSES = (
    "server_address2",
    "server_address3",
    "client_address2",
    "client_address3",
)

# (field, may be empty, message), checked in this order on save.
_ADDRESS_CHECKS = (
    ("server_address1", False, "Некорректный первый адрес сервера"),
    ("server_address2", True, "Некорректный второй адрес сервера"),
    ("server_address3", True, "Некорректный третий адрес сервера"),
    ("client_address1", False, "Некорректный первый адрес клиента"),
    ("client_address2", True, "Некорректный второй адрес клиента"),
    ("client_address3", True, "Некорректный третий адрес клиента"),
)

_STATION_FIELDS = tuple(f.name for f in fields(Station) if f.name != "id")


class ValidationError(ValueError):
    """Raised when the form holds a value that cannot be saved."""


def field_has_error(field: str, text: str) -> bool:
    """Return True if ``text`` should be highlighted as wrong in ``field``.

    Secondary addresses are highlighted while empty, although an empty
    secondary address is accepted on save.
    """
    if field == "name":
        return not validate_name(text)
    if field in _PRIMARY_ADDRESSES:
        return not validate_ip(text)
    if field in _SECONDARY_ADDRESSES:
        return not (validate_ip(text) and text != "")
    raise ValueError(f"field without validation: {field!r}")


def _clamped(station: Station) -> Station:
    return replace(
        station,
        **{
            key: min(max(int(getattr(station, key)), low), high)
            for key, (low, high) in _LIMITS.items()
        },
    )


def _initial_form() -> Station:
    return Station(
        id=0,
        name="",
        timeout0=5,
        timeout1=15,
        timeout2=10,
        timeout3=10,
        coeff_k=12,
        coeff_w=8,
        port=8000,
        server_address1="",
        client_address1="",
    )


class StationEditor:
    """The list of stations, the selected one and the form that edits it."""

    def __init__(self, home: str | os.PathLike[str] | None = None) -> None:
        self.home = home
        self.stations: list[Station] = read_config(home)
        self.newest_station_id = len(self.stations)
        self.form = _initial_form()
        self._id_shown = False
        self.current: int | None = None
        self.form_sensitive = False
        self.save_enabled = False
        self.delete_enabled = False

        if self.newest_station_id == 0:
            spins = self.form
            self.stations.append(
                Station(
                    id=self.newest_station_id,
                    name=NEW_STATION_NAME,
                    comments="",
                    timeout0=spins.timeout0,
                    timeout1=spins.timeout1,
                    timeout2=spins.timeout2,
                    timeout3=spins.timeout3,
                    coeff_k=spins.coeff_k,
                    coeff_w=spins.coeff_w,
                    port=spins.port,
                    server_address1=DEFAULT_ADDRESS,
                    server_address2="",
                    server_address3="",
                    client_address1=DEFAULT_ADDRESS,
                    client_address2="",
                    client_address3="",
                )
            )
            self.newest_station_id += 1
            self.select(len(self.stations) - 1)

    @property
    def form_id(self) -> int | None:
        """The identifier shown in the form, or None when it is cleared."""
        return self.form.id if self._id_shown else None

    @property
    def is_station(self) -> bool:
        return self.current is not None

    @property
    def current_station(self) -> Station | None:
        return None if self.current is None else self.stations[self.current]

    def _set_form_sensitive(self, sensitive: bool) -> None:
        self.save_enabled = sensitive
        self.delete_enabled = sensitive
        self.form_sensitive = sensitive
        if not sensitive:
            self.current = None

    def select(self, index: int | None) -> None:
        """Select the station at ``index``; None selects the servers group row."""
        if index is None:
            self._set_form_sensitive(False)
            self.save_enabled = True
            return
        if not 0 <= index < len(self.stations):
            raise IndexError(f"no station at index {index}")
        self.current = index
        self._set_form_sensitive(True)
        self.form = _clamped(self.stations[index])
        self._id_shown = True

    def clear_selection(self) -> None:
        """Leave nothing selected and disable the form."""
        self._set_form_sensitive(False)

    def new_station(self) -> None:
        """Fill the form with the values of a fresh station."""
        self.form = Station(
            id=self.newest_station_id,
            name=NEW_STATION_NAME,
            comments="",
            port=8000,
            timeout0=5,
            timeout1=15,
            timeout2=10,
            timeout3=10,
            coeff_k=12,
            coeff_w=8,
            server_address1=DEFAULT_ADDRESS,
            server_address2="",
            server_address3="",
            client_address1=DEFAULT_ADDRESS,
            client_address2="",
            client_address3="",
        )
        self._id_shown = True
        self._set_form_sensitive(True)
        self.delete_enabled = False

    def _validate_form(self) -> None:
        if not validate_name(self.form.name):
            raise ValidationError("Некорректное имя станции")
        for key, may_be_empty, message in _ADDRESS_CHECKS:
            text = getattr(self.form, key)
            if may_be_empty and text == "":
                continue
            if not validate_ip(text):
                raise ValidationError(message)

    def save(self) -> Station | None:
        """Store the form into the selected station and write the files.

        The previous state goes to the backup file first. Returns the stored
        station, or None when no station is selected.
        """
        if not self.is_station:
            return None
        self._validate_form()

        write_config(self.stations, self.home, backup=True)

        index = self.current
        values = _clamped(self.form)
        updated = replace(
            self.stations[index],
            **{key: getattr(values, key) for key in _STATION_FIELDS},
        )
        self.stations[index] = updated

        write_config(self.stations, self.home, backup=False)
        return updated

    def _clear_form(self) -> None:
        self.form = _clamped(
            replace(
                self.form,
                name="",
                port=1,
                timeout0=0,
                timeout1=0,
                timeout2=0,
                timeout3=0,
                coeff_k=0,
                coeff_w=0,
                server_address1="",
                server_address2="",
                server_address3="",
                client_address1="",
                client_address2="",
                client_address3="",
            )
        )
        self._id_shown = False

    def delete(self) -> None:
        """Remove the selected station and select the first one left."""
        if self.current is None:
            return
        del self.stations[self.current]
        self.current = None
        if self.stations:
            self.select(0)
        else:
            self._set_form_sensitive(False)
            self._clear_form()