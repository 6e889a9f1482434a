# reachscan/schemas.py
from dataclasses import dataclass, field
from ipaddress import IPv4Address
from typing import Optional, TypedDict


class AttemptResult(TypedDict, total=False):
    target: str
    completed: bool             # primary signal, e.g. exit status == 0
    returncode: Optional[int]
    output: str                 # raw diagnostic text for the classifier
    timestamp: Optional[str]


@dataclass(frozen=True)
class CampaignVerdict:
    address: IPv4Address
    reachable: bool
    attempts: int = 0
    successes: int = 0


@dataclass
class SessionResult:
    reachable: list[IPv4Address] = field(default_factory=list)
    unreachable: list[IPv4Address] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "reachable": [str(a) for a in self.reachable],
            "unreachable": [str(a) for a in self.unreachable],
        }
