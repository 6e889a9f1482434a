# reachscan/brain/controller.py

import asyncio
import logging
from ipaddress import IPv4Address

from reachscan.brain.rules import new_state
from reachscan.config import ProbePolicy
from reachscan.prober.base import Prober
from reachscan.prober.classify import classify
from reachscan.schemas import CampaignVerdict

log = logging.getLogger(__name__)


class CampaignController:
    def __init__(self, prober: Prober, policy: ProbePolicy):
        self.prober = prober
        self.policy = policy.normalized()

    async def attempt_once(self, address: str) -> bool:
        timeout = self.policy.per_attempt_timeout
        try:
            ev = await asyncio.wait_for(self.prober.attempt(address, timeout), timeout=timeout)
        except asyncio.TimeoutError:
            log.debug("%s: attempt timed out after %.2fs", address, timeout)
            return False
        except OSError as e:
            log.warning("%s: transport error: %s", address, e)
            return False
        return classify(bool(ev.get("completed")), ev.get("output") or "")

    async def run(self, address: IPv4Address) -> CampaignVerdict:
        state = new_state(self.policy)
        target = str(address)

        while not state.finished:
            # -------------------------------
            # 1) One attempt, classified
            # -------------------------------
            ok = await self.attempt_once(target)
            state.record(ok)
            log.debug(
                "%s: attempt %d/%d %s (successes=%d, consecutive_failures=%d)",
                target, state.attempts, self.policy.max_attempts,
                "ok" if ok else "failed", state.successes, state.consecutive_failures,
            )

            # -------------------------------
            # 2) Pace only if another attempt follows
            # -------------------------------
            if not state.finished and self.policy.inter_attempt_delay > 0:
                await asyncio.sleep(self.policy.inter_attempt_delay)

        verdict = CampaignVerdict(
            address=address,
            reachable=state.final_verdict(),
            attempts=state.attempts,
            successes=state.successes,
        )
        log.debug("%s: %s after %d attempts", target,
                  "reachable" if verdict.reachable else "unreachable", verdict.attempts)
        return verdict
