# tests/test_parser.py
import pytest

from waitfor.parser import parse
from waitfor.schemas import Protocol


@pytest.mark.parametrize("raw, proto, host, port", [
    ("tcp://db:5432", Protocol.TCP, "db", 5432),
    ("udp://10.0.0.7:53", Protocol.UDP, "10.0.0.7", 53),
    ("tcp://cache.internal.example.com:6379", Protocol.TCP, "cache.internal.example.com", 6379),
])
def test_parse_host_port(raw, proto, host, port):
    """Test that tcp/udp endpoints split into host and numeric port."""
    ep = parse(raw)
    assert ep.protocol is proto
    assert ep.host == host
    assert ep.port == port
    assert ep.error is None
    assert ep.target == f"{host}:{port}"


def test_host_is_everything_before_last_colon():
    """Extra colons stay in the host; there is no IPv6 awareness."""
    ep = parse("tcp://a:b:8080")
    assert ep.host == "a:b"
    assert ep.port == 8080


def test_unix_path_is_verbatim():
    """The unix path is taken as-is, colons included."""
    ep = parse("unix:///var/run/app:v2.sock")
    assert ep.protocol is Protocol.UNIX
    assert ep.path == "/var/run/app:v2.sock"
    assert ep.host is None and ep.port is None


@pytest.mark.parametrize("raw, reason", [
    ("", "missing protocol"),
    ("noproto", "missing protocol"),
    ("://db:5432", "missing protocol"),
    ("tcp://", "missing address"),
    ("tcp://db", "missing port"),
    ("tcp://:5432", "missing host"),
    ("udp://db:", "missing port"),
    ("tcp://db:70000", "invalid port '70000'"),
    ("http://db:80", "unsupported protocol 'http'"),
    ("TCP://db:5432", "unsupported protocol 'TCP'"),
])
def test_unusable_endpoints_are_unknown(raw, reason):
    """Test that malformed or unsupported endpoints come back UNKNOWN with a reason."""
    ep = parse(raw)
    assert ep.protocol is Protocol.UNKNOWN
    assert ep.error == reason
    assert str(ep) == raw


@pytest.mark.parametrize("raw", ["tcp://db:http", "udp://dns:domain"])
def test_service_name_ports_are_not_resolved(raw):
    """Service names are rejected as invalid ports rather than looked up."""
    ep = parse(raw)
    assert ep.protocol is Protocol.UNKNOWN
    assert ep.error.startswith("invalid port")
    assert ep.port is None


def test_endpoint_is_immutable():
    """Endpoints are frozen once parsed."""
    ep = parse("tcp://db:5432")
    with pytest.raises(AttributeError):
        ep.port = 1
