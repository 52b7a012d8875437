# stationsettings

A small desktop editor for the network interaction settings of a set of
stations. Each station has a name, comments, four timeouts (T0–T3), the
coefficients K and W, a port, and up to three server and three client
IPv4 addresses. The window is built with Tkinter, so Python must have Tk
available.

## Running

```
pip install .
stationsettings
stationsettings --home /path/to/dir
```

By default the settings file is looked for in `$HOME`; `--home` names
another directory. If `HOME` is not set and `--home` is not given, the
command prints an error and exits with status 1.

The window shows the stations under "Серверы" on the left and the form of
the selected station on the right. The toolbar has three buttons:

- **Новая станция** fills the form with default values
  (T0=5, T1=15, T2=10, T3=10, K=12, W=8, port 8000, first server and
  client address 127.0.0.1) and disables **Удалить**;
- **Сохранить** (Ctrl+S) checks the form and stores it into the station
  selected in the list;
- **Удалить** (Delete key) removes the selected station and selects the
  first one left.

Before saving, the station name must not be blank, and the first server
and first client addresses must be dotted IPv4 addresses without leading
zeros. The second and third addresses may be empty, but if given they must
be valid too. A failed check is shown in an error dialog. While typing, the
name and address fields turn pink when their content is wrong; the second
and third addresses are also shown pink while empty, although an empty one
is accepted on save.

Numeric fields are limited like spin boxes: timeouts 0 and up, K and W
1 and up, the port 1–65535.

If the file holds no stations, the editor starts with one station named
"Новая станция" and selects it.

## What it does not do

Saving always writes the form into the station that is selected. **Новая
станция** only fills the form: it does not add an entry to the list, and
when no station is selected, **Сохранить** stores nothing. New stations
can be added by editing the settings file.

## The settings file

Settings live in `.Stations.ini` in the home directory. Every save first
writes the current list to `.Stations.bak`, then writes the updated list to
`.Stations.ini`.

The file is plain UTF-8 text. A line without `=` starts a new station and
is its name; the `key=value` lines after it set that station's fields.
Lines are stripped of surrounding whitespace; blank lines and lines
starting with `#` are ignored; unknown keys are reported as a warning
through the `stationsettings.config` logger.

```
Station A
comments=main uplink
timeout0=5
timeout1=15
timeout2=10
timeout3=20
coeff_k=8
coeff_w=12
port=8000
server_address1=127.0.0.1
server_address2=
server_address3=
client_address1=127.0.0.1
client_address2=
client_address3=
```

Keys left out of a station take these values: timeout0=5, timeout1=15,
timeout2=10, timeout3=20, coeff_k=8, coeff_w=12, port=8000,
server_address1 and client_address1 = 127.0.0.1. The second and third
server and client addresses are not reset between stations: a station that
omits them keeps those of the station before it.

Integer values are read from their leading digits (an optional sign
allowed); a value with no leading integer, or one outside the 32-bit signed
range, raises `ConfigError`. Stations are numbered from 0 in file order.

## Using it as a library

```python
from stationsettings.config import read_config, write_config
from stationsettings.validation import validate_ip, validate_name

stations = read_config("/home/me")
print(validate_ip("192.168.0.1"), validate_name("   "))  # True False
write_config(stations, "/home/me", backup=True)
```

- `stationsettings.validation`: `trim`, `validate_name`, `validate_ip`.
- `stationsettings.config`: the `Station` dataclass, `ConfigError`,
  `parse_value`, `parse_stations` and `format_stations` for the file's
  text, `config_path`, `read_config` (a missing file gives an empty list)
  and `write_config` (returns the path written, or `None` if the file could
  not be opened).
- `stationsettings.editor`: `StationEditor`, the editing logic used by the
  window without any user interface (`select`, `clear_selection`,
  `new_station`, `save`, `delete`), `ValidationError` raised by `save`,
  and `field_has_error` for field highlighting.
- `stationsettings.app`: `SettingsWindow` and `main`.

## Tests

```
pip install .[test]
pytest
```