# waitfor/engine/rules.py
from waitfor.schemas import ProbeOutcome


def reachable(outcome: ProbeOutcome) -> bool:
    return outcome.status == "open"


def retryable(outcome: ProbeOutcome) -> bool:
    """Only a closed endpoint is worth another probe; invalid ones never change."""
    return outcome.status == "closed"


def exhausted(elapsed: float, timeout: float) -> bool:
    return elapsed >= timeout
