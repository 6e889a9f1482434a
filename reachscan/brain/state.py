# reachscan/brain/state.py
from dataclasses import dataclass
from typing import Optional

from reachscan.config import ProbePolicy


@dataclass
class CampaignState:
    """Per-address counters. Owned by the single task running that campaign."""
    policy: ProbePolicy          # expected normalized
    successes: int = 0
    consecutive_failures: int = 0
    attempts: int = 0
    verdict: Optional[bool] = None

    @property
    def finished(self) -> bool:
        return self.verdict is not None or self.attempts >= self.policy.max_attempts

    def record(self, succeeded: bool) -> Optional[bool]:
        """Apply one attempt outcome. Returns the verdict once one is reached early."""
        self.attempts += 1
        if succeeded:
            self.successes += 1
            self.consecutive_failures = 0
            if self.successes >= self.policy.success_threshold:
                self.verdict = True
        else:
            self.consecutive_failures += 1
            stop = self.policy.consecutive_failure_threshold
            if stop is not None and self.consecutive_failures >= stop:
                self.verdict = False
        return self.verdict

    def final_verdict(self) -> bool:
        if self.verdict is not None:
            return self.verdict
        # exhausted without an early exit
        return self.successes >= self.policy.success_threshold
