# reachscan/prober/fake.py
import asyncio
from collections import deque
from datetime import datetime, timezone

from reachscan.prober.base import Prober
from reachscan.schemas import AttemptResult


def _event(address: str, completed: bool, output: str) -> AttemptResult:
    return {
        "target": address,
        "completed": completed,
        "returncode": 0 if completed else 1,
        "output": output,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class FakeProber(Prober):
    """
    script: dict[address] -> sequence of bools or AttemptResult dicts, one per call.
    If no scripted event is left, the attempt fails like a timeout.

    latency: seconds each attempt takes (lets tests overlap campaigns).
    Tracks calls per address and the peak number of attempts in flight.
    """
    def __init__(self, script=None, latency: float = 0.0):
        self.script = {}
        if script:
            for k, v in script.items():
                self.script[str(k)] = deque(v)
        self.latency = latency
        self.calls: dict[str, int] = {}
        self.in_flight = 0
        self.peak_in_flight = 0

    async def attempt(self, address: str, timeout: float) -> AttemptResult:
        self.calls[address] = self.calls.get(address, 0) + 1
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            if self.latency:
                await asyncio.sleep(self.latency)
            dq = self.script.get(address)
            if dq:
                ev = dq.popleft()
                if isinstance(ev, bool):
                    return _event(address, ev, "")
                return ev
            # default: timeout
            return _event(address, False, "timeout")
        finally:
            self.in_flight -= 1
