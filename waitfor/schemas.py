# waitfor/schemas.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional

ProbeStatus = Literal["open", "closed", "invalid"]
PollStatus = Literal["succeeded", "timed_out"]


class Protocol(Enum):
    TCP = "tcp"
    UDP = "udp"
    UNIX = "unix"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Endpoint:
    raw: str
    protocol: Protocol
    host: Optional[str] = None
    port: Optional[int] = None
    path: Optional[str] = None
    error: Optional[str] = None   # why the endpoint can't be probed

    @property
    def target(self) -> str:
        if self.protocol is Protocol.UNIX:
            return self.path
        if self.protocol in (Protocol.TCP, Protocol.UDP):
            return f"{self.host}:{self.port}"
        return self.raw

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class ProbeOutcome:
    status: ProbeStatus
    reason: Optional[str] = None

    @classmethod
    def open(cls) -> "ProbeOutcome":
        return cls("open")

    @classmethod
    def closed(cls, reason: Optional[str] = None) -> "ProbeOutcome":
        return cls("closed", reason)

    @classmethod
    def invalid(cls, reason: str) -> "ProbeOutcome":
        return cls("invalid", reason)


@dataclass
class PollResult:
    endpoint: Endpoint
    status: PollStatus
    attempts: int = 0
    elapsed: float = 0.0
    reason: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"


@dataclass
class OverallResult:
    results: list = field(default_factory=list)

    @property
    def all_up(self) -> bool:
        return all(r.succeeded for r in self.results)

    @property
    def succeeded(self) -> list:
        return [r for r in self.results if r.succeeded]

    @property
    def failed(self) -> list:
        return [r for r in self.results if not r.succeeded]

    @property
    def exit_code(self) -> int:
        return 0 if self.all_up else 1
