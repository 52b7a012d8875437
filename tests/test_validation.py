import pytest

from stationsettings.validation import trim, validate_ip, validate_name


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  abc  ", "abc"),
        ("\t\nabc\r\f\v", "abc"),
        ("a b", "a b"),
        ("   ", ""),
        ("", ""),
    ],
)
def test_trim(raw, expected):
    assert trim(raw) == expected


def test_trim_is_idempotent():
    once = trim("  \t station one \n")
    assert trim(once) == once


@pytest.mark.parametrize("name", ["Новая станция", " x ", "Station"])
def test_validate_name_accepts(name):
    assert validate_name(name) is True


@pytest.mark.parametrize("name", ["", " ", "\t\n\r\f\v"])
def test_validate_name_rejects(name):
    assert validate_name(name) is False


@pytest.mark.parametrize(
    "ip",
    ["127.0.0.1", "0.0.0.0", "255.255.255.255", "10.20.199.250", "1.2.3.4"],
)
def test_validate_ip_accepts(ip):
    assert validate_ip(ip) is True


@pytest.mark.parametrize(
    "ip",
    [
        "",
        "256.0.0.1",
        "01.2.3.4",
        "1.2.3",
        "1.2.3.4.5",
        "1.2.3.4\n",
        " 1.2.3.4",
        "a.b.c.d",
        "1..2.3",
        "\u0661.2.3.4",
    ],
)
def test_validate_ip_rejects(ip):
    assert validate_ip(ip) is False