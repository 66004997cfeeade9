# waitfor/parser.py
from waitfor.schemas import Endpoint, Protocol

SEPARATOR = "://"


def _invalid(raw: str, reason: str) -> Endpoint:
    return Endpoint(raw=raw, protocol=Protocol.UNKNOWN, error=reason)


def parse(raw: str) -> Endpoint:
    """
    Turn 'tcp://host:port', 'udp://host:port' or 'unix:///path' into an Endpoint.

    Never raises: anything unusable comes back as a Protocol.UNKNOWN endpoint
    carrying the reason in `error`. The protocol is matched case-sensitively.
    Ports must be numeric (1-65535); service names such as "http" are not
    looked up and are reported as an invalid port.
    """
    proto, sep, rest = raw.partition(SEPARATOR)
    if not sep or not proto:
        return _invalid(raw, "missing protocol")
    if not rest:
        return _invalid(raw, "missing address")

    if proto == Protocol.UNIX.value:
        return Endpoint(raw=raw, protocol=Protocol.UNIX, path=rest)

    if proto not in (Protocol.TCP.value, Protocol.UDP.value):
        return _invalid(raw, f"unsupported protocol '{proto}'")

    # host/port split on the last colon of the whole string, not of `rest`
    start = len(proto) + len(SEPARATOR)
    colon = raw.rfind(":")
    if colon < start:
        return _invalid(raw, "missing port")
    host, port = raw[start:colon], raw[colon + 1:]
    if not host:
        return _invalid(raw, "missing host")
    if not port:
        return _invalid(raw, "missing port")
    if not (port.isascii() and port.isdigit()) or not 0 < int(port) < 65536:
        return _invalid(raw, f"invalid port '{port}'")

    return Endpoint(raw=raw, protocol=Protocol(proto), host=host, port=int(port))
