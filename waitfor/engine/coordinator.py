# waitfor/engine/coordinator.py

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Mapping, Optional, Sequence

from waitfor.engine.poller import Poller
from waitfor.parser import parse
from waitfor.schemas import Endpoint, OverallResult, PollResult

logger = logging.getLogger(__name__)


class Coordinator:
    """
    Wait for a whole set of endpoints.

    A single endpoint is polled on the calling thread. Several endpoints each get
    their own worker thread and the call returns once every worker is done:
    one endpoint timing out never cuts the others short, so the result always
    says exactly which endpoints came up and which did not.
    """

    def __init__(self, prober, settings, sleep=time.sleep):
        self.prober = prober
        self.s = settings
        self.poller = Poller(prober, settings, sleep=sleep)

    def wait_for_all(self,
                     raw_endpoints: Sequence[str],
                     timeout: Optional[float] = None,
                     overrides: Optional[Mapping[str, float]] = None) -> OverallResult:
        budget = self.s.timeout if timeout is None else timeout
        overrides = dict(overrides or {})
        endpoints = [parse(raw) for raw in raw_endpoints]

        if not endpoints:
            logger.debug("no endpoints to wait for")
            return OverallResult([])

        jobs = [(ep, overrides.get(ep.raw, budget)) for ep in endpoints]
        for ep, seconds in jobs:
            logger.info("waiting %gs for %s", seconds, ep)

        if len(jobs) == 1:
            results = [self._poll(*jobs[0])]
        else:
            stop = threading.Event()
            with ThreadPoolExecutor(max_workers=len(jobs), thread_name_prefix="waitfor") as pool:
                try:
                    futures = [pool.submit(self._poll, ep, seconds, stop) for ep, seconds in jobs]
                    # barrier: every endpoint gets its full budget
                    results = [f.result() for f in futures]
                except KeyboardInterrupt:
                    # workers notice `stop` after their current probe or sleep
                    logger.warning("interrupted, abandoning %d endpoint(s)", len(jobs))
                    stop.set()
                    pool.shutdown(wait=False, cancel_futures=True)
                    raise

        overall = OverallResult(results)
        if overall.all_up:
            logger.info("all %d endpoint(s) are available", len(results))
        else:
            logger.error("%d of %d endpoint(s) did not become available: %s",
                         len(overall.failed), len(results),
                         ", ".join(r.endpoint.raw for r in overall.failed))
        return overall

    def _poll(self, endpoint: Endpoint, timeout: float, stop=None) -> PollResult:
        try:
            return self.poller.poll_until_open(endpoint, timeout, stop=stop)
        except Exception as e:
            logger.exception("unexpected error while polling %s", endpoint)
            return PollResult(endpoint=endpoint, status="timed_out", reason=str(e) or e.__class__.__name__)
