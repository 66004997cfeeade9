# waitfor/engine/state.py
from dataclasses import dataclass
from typing import Optional

from waitfor.schemas import ProbeOutcome


@dataclass
class PollState:
    timeout: float
    attempts: int = 0
    elapsed: float = 0.0
    last: Optional[ProbeOutcome] = None

    def record(self, outcome: ProbeOutcome):
        self.attempts += 1
        self.last = outcome

    def advance(self, seconds: float):
        # rounded so repeated fractional intervals still land on the budget
        self.elapsed = round(self.elapsed + seconds, 6)
