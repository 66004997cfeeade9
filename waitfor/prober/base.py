# waitfor/prober/base.py
from abc import ABC, abstractmethod

from waitfor.schemas import Endpoint, ProbeOutcome


class Prober(ABC):
    @abstractmethod
    def probe_once(self, endpoint: Endpoint) -> ProbeOutcome:
        """Make exactly one connection attempt and report open/closed/invalid."""
        raise NotImplementedError
