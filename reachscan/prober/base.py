# reachscan/prober/base.py
from abc import ABC, abstractmethod

from reachscan.schemas import AttemptResult


class Prober(ABC):
    @abstractmethod
    async def attempt(self, address: str, timeout: float) -> AttemptResult:
        """Run exactly one reachability attempt against address and report what happened."""
        raise NotImplementedError
