import pytest

from arp_lookup import cli, dispatcher, process
from arp_lookup.errors import NotFound
from arp_lookup.platforms import LinuxNeighborTable

TABLE = {"192.168.1.1": "AA:BB:CC:DD:EE:FF", "192.168.1.254": "00:11:22:33:44:55"}


@pytest.fixture
def fake_lookup(monkeypatch):
    seen = []

    async def lookup(ip, separator=":", timeout=None):
        seen.append((ip, separator, timeout))
        if ip not in TABLE:
            raise NotFound(ip)
        return TABLE[ip].replace(":", separator)

    monkeypatch.setattr(cli, "lookup", lookup)
    return seen


def fake_gateway(monkeypatch, address):
    async def get_gateway_ipv4():
        return address
    monkeypatch.setattr(cli, "get_gateway_ipv4", get_gateway_ipv4)


def test_all_found(fake_lookup, capsys):
    assert cli.main(["192.168.1.1", "192.168.1.254"]) == 0

    out = capsys.readouterr().out
    assert "AA:BB:CC:DD:EE:FF" in out
    assert "00:11:22:33:44:55" in out
    assert "2 found, 0 failed" in out


def test_failure_sets_exit_code(fake_lookup, capsys):
    assert cli.main(["192.168.1.1", "10.9.9.9"]) == 1

    out = capsys.readouterr().out
    assert "NotFound" in out
    assert "1 found, 1 failed" in out


def test_separator_and_timeout_are_passed(fake_lookup, capsys):
    cli.main(["192.168.1.1", "--separator", "", "--timeout", "3"])

    assert fake_lookup == [("192.168.1.1", "", 3.0)]
    assert "AABBCCDDEEFF" in capsys.readouterr().out


def test_gateway_flag(fake_lookup, monkeypatch, capsys):
    fake_gateway(monkeypatch, "192.168.1.254")

    assert cli.main(["--gateway"]) == 0
    assert [ip for ip, _, _ in fake_lookup] == ["192.168.1.254"]
    assert "Default gateway: 192.168.1.254" in capsys.readouterr().out


def test_nothing_to_look_up(fake_lookup, monkeypatch, capsys):
    fake_gateway(monkeypatch, None)

    assert cli.main(["--gateway"]) == 2
    assert fake_lookup == []
    assert "No default IPv4 gateway" in capsys.readouterr().out


def test_unstartable_arp_is_reported_per_address(monkeypatch, capsys):
    async def run(command, timeout=None):
        if command[0] == "arp":
            raise PermissionError(13, "Permission denied", "arp")
        return process.ProcessResult(tuple(command), 0, "", "")

    monkeypatch.setattr(dispatcher, "get_strategy", LinuxNeighborTable)
    monkeypatch.setattr(process, "run", run)

    assert cli.main(["192.168.1.1", "192.168.1.2"]) == 1

    out = capsys.readouterr().out
    assert out.count("ProcessError") == 2
    assert "0 found, 2 failed" in out
