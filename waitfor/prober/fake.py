# waitfor/prober/fake.py
from collections import deque

from waitfor.prober.base import Prober
from waitfor.schemas import Endpoint, ProbeOutcome


class FakeProber(Prober):
    """
    script: dict[raw endpoint] -> list of ProbeOutcome to return, one per call.
    Invalid endpoints still come back invalid; once an endpoint's script is
    used up it reports closed.
    """
    def __init__(self, script=None):
        self.script = {}
        self.calls = []
        if script:
            for k, v in script.items():
                self.script[k] = deque(v)

    def probe_once(self, endpoint: Endpoint) -> ProbeOutcome:
        self.calls.append(endpoint.raw)
        if endpoint.error:
            return ProbeOutcome.invalid(endpoint.error)
        dq = self.script.get(endpoint.raw)
        if dq:
            return dq.popleft()
        return ProbeOutcome.closed("scripted closed")
