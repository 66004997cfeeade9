# waitfor/engine/poller.py

import logging
import time
from typing import Optional

from waitfor.engine.rules import exhausted, reachable, retryable
from waitfor.engine.state import PollState
from waitfor.schemas import Endpoint, PollResult, ProbeOutcome

logger = logging.getLogger(__name__)


class Poller:
    def __init__(self, prober, settings, sleep=time.sleep):
        self.prober = prober
        self.s = settings
        self.sleep = sleep

    def poll_until_open(self, endpoint: Endpoint, timeout: Optional[float] = None, stop=None) -> PollResult:
        """`stop` is an optional threading.Event; once set the loop gives up before its next probe."""
        budget = self.s.timeout if timeout is None else timeout
        state = PollState(timeout=budget)

        while True:
            outcome = self.prober.probe_once(endpoint)
            state.record(outcome)

            if reachable(outcome):
                logger.info("%s is available after %gs", endpoint, state.elapsed)
                return self._result(endpoint, state, "succeeded")

            if not retryable(outcome):
                # configuration problem: report it now instead of waiting out the budget
                logger.error("%s cannot be probed: %s", endpoint, outcome.reason)
                return self._result(endpoint, state, "timed_out")

            logger.debug("%s not available yet (attempt %d, %gs/%gs): %s",
                         endpoint, state.attempts, state.elapsed, budget, outcome.reason)

            if exhausted(state.elapsed, state.timeout):
                logger.error("timed out after %gs waiting for %s", budget, endpoint)
                return self._result(endpoint, state, "timed_out")

            self.sleep(self.s.interval)
            state.advance(self.s.interval)

            if stop is not None and stop.is_set():
                logger.debug("stopped waiting for %s", endpoint)
                state.last = ProbeOutcome.closed("interrupted")
                return self._result(endpoint, state, "timed_out")

    @staticmethod
    def _result(endpoint: Endpoint, state: PollState, status) -> PollResult:
        return PollResult(
            endpoint=endpoint,
            status=status,
            attempts=state.attempts,
            elapsed=state.elapsed,
            reason=state.last.reason if state.last else None,
        )
