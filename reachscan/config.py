# reachscan/config.py
from dataclasses import dataclass, field, replace
from typing import Optional

from reachscan.errors import InvalidPolicy


@dataclass(frozen=True)
class ProbePolicy:
    max_attempts: int = 5
    success_threshold: int = 2
    # None (or <= 0) disables the early "unreachable" exit
    consecutive_failure_threshold: Optional[int] = 3
    per_attempt_timeout: float = 2.0   # seconds
    inter_attempt_delay: float = 1.0   # seconds, only between attempts

    def __post_init__(self):
        if self.per_attempt_timeout <= 0:
            raise InvalidPolicy(f"per_attempt_timeout must be > 0, got {self.per_attempt_timeout}")
        if self.inter_attempt_delay < 0:
            raise InvalidPolicy(f"inter_attempt_delay must be >= 0, got {self.inter_attempt_delay}")

    @property
    def failure_stop_enabled(self) -> bool:
        return self.consecutive_failure_threshold is not None and self.consecutive_failure_threshold > 0

    def normalized(self) -> "ProbePolicy":
        """Effective policy: success threshold of at least 1, disabled failure stop as None."""
        return replace(
            self,
            success_threshold=max(1, self.success_threshold),
            consecutive_failure_threshold=(
                self.consecutive_failure_threshold if self.failure_stop_enabled else None
            ),
        )


DEFAULT_POLICY = ProbePolicy()


@dataclass
class Settings:
    address_file: str = "iplist.txt"
    concurrency: int = 20
    policy: ProbePolicy = field(default_factory=lambda: DEFAULT_POLICY)
    ping_bin: Optional[str] = None   # None -> look up `ping` on PATH
