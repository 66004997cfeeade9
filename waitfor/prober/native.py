# waitfor/prober/native.py
import socket

from waitfor.prober.base import Prober
from waitfor.schemas import Endpoint, ProbeOutcome, Protocol


class SocketProber(Prober):
    """
    Probe endpoints with plain sockets from the standard library.

    One socket is opened per call and closed on every path out of it.

    UDP caveat: UDP is connectionless, so "open" only means a zero-length
    datagram was sent and no ICMP port-unreachable came back within
    `udp_wait` seconds. A listener that silently drops datagrams, or a
    firewall that filters the ICMP reply, is indistinguishable from a live
    service and is reported open.
    """

    def __init__(self, probe_timeout: float = 2.0, udp_wait: float = 0.5):
        self.probe_timeout = probe_timeout
        self.udp_wait = udp_wait

    def probe_once(self, endpoint: Endpoint) -> ProbeOutcome:
        proto = endpoint.protocol
        if proto is Protocol.UNKNOWN:
            return ProbeOutcome.invalid(endpoint.error or "unsupported protocol")
        if proto is Protocol.TCP:
            return self._probe_tcp(endpoint.host, endpoint.port)
        if proto is Protocol.UDP:
            return self._probe_udp(endpoint.host, endpoint.port)
        if proto is Protocol.UNIX:
            return self._probe_unix(endpoint.path)
        return ProbeOutcome.invalid(f"unhandled protocol {proto.value}")

    def _probe_tcp(self, host: str, port: int) -> ProbeOutcome:
        try:
            with socket.create_connection((host, port), timeout=self.probe_timeout):
                return ProbeOutcome.open()
        except OSError as e:
            return ProbeOutcome.closed(_describe(e))

    def _probe_udp(self, host: str, port: int) -> ProbeOutcome:
        try:
            family, stype, proto, _, addr = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)[0]
        except OSError as e:
            return ProbeOutcome.closed(_describe(e))

        with socket.socket(family, stype, proto) as sock:
            sock.settimeout(self.udp_wait)
            try:
                # connect() so the kernel reports ICMP unreachable back to us
                sock.connect(addr)
                sock.send(b"")
                sock.recv(1)
            except socket.timeout:
                # silence is the best UDP can offer
                return ProbeOutcome.open()
            except OSError as e:
                return ProbeOutcome.closed(_describe(e))
        return ProbeOutcome.open()

    def _probe_unix(self, path: str) -> ProbeOutcome:
        family = getattr(socket, "AF_UNIX", None)
        if family is None:
            return ProbeOutcome.invalid("unix sockets are not supported on this platform")
        with socket.socket(family, socket.SOCK_STREAM) as sock:
            sock.settimeout(self.probe_timeout)
            try:
                sock.connect(path)
            except OSError as e:
                return ProbeOutcome.closed(_describe(e))
        return ProbeOutcome.open()


def _describe(exc: OSError) -> str:
    if isinstance(exc, socket.timeout):
        return "probe timed out"
    return exc.strerror or str(exc) or exc.__class__.__name__
