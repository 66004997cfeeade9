# waitfor/prober/netcat.py
import math
import shutil
import subprocess

from waitfor.prober.base import Prober
from waitfor.schemas import Endpoint, ProbeOutcome, Protocol

DEFAULT_NC_BIN = shutil.which("nc") or "/usr/bin/nc"


class NetcatProber(Prober):
    """
    Wrapper around the 'nc' binary in zero-I/O mode (-z). Useful where hosts are
    reached through the same tooling the containers themselves use.
    Refuses to construct when the binary is missing, so callers fail at startup
    rather than on every probe.
    """

    def __init__(self, nc_bin: str = DEFAULT_NC_BIN, probe_timeout: float = 2.0):
        self.nc = nc_bin
        self.probe_timeout = probe_timeout
        if not shutil.which(self.nc):
            raise FileNotFoundError(f"nc binary not found at {self.nc}")

    def _build_cmd(self, endpoint: Endpoint) -> list:
        wait = str(max(1, math.ceil(self.probe_timeout)))
        if endpoint.protocol is Protocol.UNIX:
            return [self.nc, "-z", "-U", endpoint.path]
        cmd = [self.nc, "-z", "-w", wait]
        if endpoint.protocol is Protocol.UDP:
            cmd.append("-u")
        return cmd + [endpoint.host, str(endpoint.port)]

    def _run_cmd(self, cmd: list) -> subprocess.CompletedProcess:
        # nc's own -w doesn't bound name resolution, so cap the whole call too
        return subprocess.run(cmd, check=False, stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
                              text=True, timeout=self.probe_timeout + 1)

    def probe_once(self, endpoint: Endpoint) -> ProbeOutcome:
        if endpoint.protocol is Protocol.UNKNOWN:
            return ProbeOutcome.invalid(endpoint.error or "unsupported protocol")

        try:
            proc = self._run_cmd(self._build_cmd(endpoint))
        except subprocess.TimeoutExpired:
            return ProbeOutcome.closed("probe timed out")
        except OSError as e:
            return ProbeOutcome.closed(f"could not run {self.nc}: {e}")

        if proc.returncode == 0:
            return ProbeOutcome.open()
        out = (proc.stdout or "").strip()
        return ProbeOutcome.closed(out or f"nc exited with status {proc.returncode}")
