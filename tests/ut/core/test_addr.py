import pytest
from unittest.mock import Mock

from tlvlink.core.transport.addr import format_addr, get_remote_addr, get_local_addr


@pytest.mark.ut
def test_get_remote_addr_with_socket():
    transport = Mock()
    sock = Mock()
    sock.getpeername.return_value = ("1.2.3.4", 5678)
    transport.get_extra_info.side_effect = lambda key: sock if key == "socket" else None

    assert get_remote_addr(transport) == ("1.2.3.4", 5678)


@pytest.mark.ut
def test_get_remote_addr_with_peername():
    transport = Mock()
    transport.get_extra_info.side_effect = lambda key: None if key == "socket" else ("5.6.7.8", 9999)

    assert get_remote_addr(transport) == ("5.6.7.8", 9999)


@pytest.mark.ut
def test_get_remote_addr_ipv6_peername():
    transport = Mock()
    transport.get_extra_info.side_effect = lambda key: None if key == "socket" else ("::1", 8080, 0, 0)

    assert get_remote_addr(transport) == ("::1", 8080)


@pytest.mark.ut
def test_get_remote_addr_invalid():
    transport = Mock()
    transport.get_extra_info.side_effect = lambda key: ("only-one-element",) if key == "peername" else None

    assert get_remote_addr(transport) is None


@pytest.mark.ut
def test_get_remote_addr_disconnected_socket():
    transport = Mock()
    sock = Mock()
    sock.getpeername.side_effect = OSError("not connected")
    transport.get_extra_info.side_effect = lambda key: sock if key == "socket" else None

    assert get_remote_addr(transport) is None


@pytest.mark.ut
def test_get_local_addr_with_socket():
    transport = Mock()
    sock = Mock()
    sock.getsockname.return_value = ("127.0.0.1", 1234)
    transport.get_extra_info.side_effect = lambda key: sock if key == "socket" else None

    assert get_local_addr(transport) == ("127.0.0.1", 1234)


@pytest.mark.ut
def test_get_local_addr_with_sockname():
    transport = Mock()
    transport.get_extra_info.side_effect = lambda key: None if key == "socket" else ("10.0.0.1", 8080)

    assert get_local_addr(transport) == ("10.0.0.1", 8080)


@pytest.mark.ut
@pytest.mark.parametrize("addr, expected", [
    (("127.0.0.1", 8080), "127.0.0.1:8080"),
    (("::1", 8080), "[::1]:8080"),
    (None, "?"),
])
def test_format_addr(addr, expected):
    assert format_addr(addr) == expected
