import logging

import pytest

from stationsettings.config import (
    ConfigError,
    Station,
    config_path,
    format_stations,
    parse_stations,
    parse_value,
    read_config,
    write_config,
)


def test_parse_value_splits_at_first_equals():
    assert parse_value("comments=a=b") == ("comments", "a=b")


def test_parse_value_without_equals():
    assert parse_value("alpha") == ("alpha", "alpha")


def test_station_with_only_name_gets_defaults():
    (station,) = parse_stations("Alpha\n")
    assert station.name == "Alpha"
    assert station.id == 0
    assert (station.timeout0, station.timeout1, station.timeout2, station.timeout3) == (5, 15, 10, 20)
    assert (station.coeff_k, station.coeff_w, station.port) == (8, 12, 8000)
    assert station.server_address1 == "127.0.0.1"
    assert station.client_address1 == "127.0.0.1"


def test_parse_skips_comments_and_blank_lines():
    text = "# header\n\n  Alpha  \n  port=9000\n# note\nBeta\n"
    stations = parse_stations(text)
    assert [s.name for s in stations] == ["Alpha", "Beta"]
    assert [s.id for s in stations] == [0, 1]
    assert stations[0].port == 9000
    assert stations[1].port == 8000


def test_secondary_addresses_carry_over_to_next_station():
    text = "A\nserver_address2=10.0.0.2\nclient_address3=10.0.0.3\ncomments=x\nB\n"
    first, second = parse_stations(text)
    assert second.server_address2 == "10.0.0.2"
    assert second.client_address3 == "10.0.0.3"
    assert second.comments == ""


def test_integer_prefix_is_parsed():
    (station,) = parse_stations("A\ntimeout0=  12abc\n")
    assert station.timeout0 == 12


@pytest.mark.parametrize("value", ["abc", "", "99999999999"])
def test_bad_integer_raises(value):
    with pytest.raises(ConfigError):
        parse_stations(f"A\nport={value}\n")


def test_unknown_key_is_logged(caplog):
    with caplog.at_level(logging.WARNING):
        (station,) = parse_stations("A\nmystery=1\n")
    assert station.name == "A"
    assert "mystery" in caplog.text


def test_format_stations_layout():
    text = format_stations([Station(name="Alpha")])
    lines = text.split("\n")
    assert lines[0] == "Alpha"
    assert lines[1] == "comments="
    assert lines[9] == "server_address1=127.0.0.1"
    assert len(lines) == 16
    assert text.endswith("\n")


def test_format_parse_round_trip():
    stations = [
        Station(
            id=0,
            name="Alpha",
            comments="first",
            timeout0=1,
            timeout1=2,
            timeout2=3,
            timeout3=4,
            coeff_k=5,
            coeff_w=6,
            port=7000,
            server_address1="10.0.0.1",
            server_address2="10.0.0.2",
            server_address3="10.0.0.3",
            client_address1="192.168.0.1",
            client_address2="192.168.0.2",
            client_address3="192.168.0.3",
        ),
        Station(id=1, name="Beta", comments="second"),
    ]
    assert parse_stations(format_stations(stations)) == stations


def test_config_path_uses_home(tmp_path):
    assert config_path(tmp_path) == tmp_path / ".Stations.ini"
    assert config_path(tmp_path, True) == tmp_path / ".Stations.bak"


def test_config_path_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert config_path() == tmp_path / ".Stations.ini"


def test_config_path_without_home_raises(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    with pytest.raises(ConfigError):
        config_path()


def test_read_missing_config_gives_empty_list(tmp_path):
    assert read_config(tmp_path) == []


def test_write_then_read_round_trip(tmp_path):
    stations = [Station(id=0, name="Новая станция", comments="тест"), Station(id=1, name="Beta", port=1)]
    written = write_config(stations, tmp_path)
    assert written == tmp_path / ".Stations.ini"
    assert read_config(tmp_path) == stations


def test_backup_is_written_separately(tmp_path):
    stations = [Station(name="Alpha")]
    written = write_config(stations, tmp_path, backup=True)
    assert written == tmp_path / ".Stations.bak"
    assert not (tmp_path / ".Stations.ini").exists()
    assert written.read_text(encoding="utf-8") == format_stations(stations)


def test_write_into_missing_directory_returns_none(tmp_path):
    assert write_config([Station(name="A")], tmp_path / "absent") is None