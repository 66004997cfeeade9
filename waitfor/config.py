import os
from dataclasses import dataclass
from typing import Mapping, Optional

PROBERS = ("socket", "nc")
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    timeout: int = 30              # per-endpoint budget, seconds
    interval: float = 1.0          # sleep between probes of one endpoint
    probe_timeout: float = 2.0     # a single connect attempt
    udp_wait: float = 0.5          # how long to listen for an ICMP refusal
    prober: str = "socket"
    debug: bool = False
    quiet: bool = False

    def __post_init__(self):
        if self.timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {self.timeout}")
        if self.interval <= 0:
            raise ValueError(f"interval must be > 0, got {self.interval}")
        if self.probe_timeout <= 0:
            raise ValueError(f"probe_timeout must be > 0, got {self.probe_timeout}")
        if self.debug and self.quiet:
            raise ValueError("debug and quiet are mutually exclusive")
        if self.prober not in PROBERS:
            raise ValueError(f"unknown prober {self.prober!r}, expected one of {PROBERS}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Settings":
        """
        Build settings from WAITFOR_* variables; keyword overrides (e.g. parsed
        CLI flags) win over the environment. None-valued overrides are ignored.
        """
        env = os.environ if environ is None else environ
        values = {}
        if "WAITFOR_TIMEOUT" in env:
            values["timeout"] = int(env["WAITFOR_TIMEOUT"])
        if "WAITFOR_INTERVAL" in env:
            values["interval"] = float(env["WAITFOR_INTERVAL"])
        if "WAITFOR_PROBE_TIMEOUT" in env:
            values["probe_timeout"] = float(env["WAITFOR_PROBE_TIMEOUT"])
        if "WAITFOR_PROBER" in env:
            values["prober"] = env["WAITFOR_PROBER"]
        if "WAITFOR_DEBUG" in env:
            values["debug"] = env["WAITFOR_DEBUG"].strip().lower() in _TRUTHY
        if "WAITFOR_QUIET" in env:
            values["quiet"] = env["WAITFOR_QUIET"].strip().lower() in _TRUTHY
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
