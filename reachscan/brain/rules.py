# reachscan/brain/rules.py
from ipaddress import IPv4Address
from typing import Iterable, Union

from reachscan.brain.state import CampaignState
from reachscan.config import ProbePolicy
from reachscan.schemas import CampaignVerdict


def new_state(policy: ProbePolicy) -> CampaignState:
    return CampaignState(policy=policy.normalized())


def evaluate_sequence(
    outcomes: Iterable[bool],
    policy: ProbePolicy,
    address: Union[str, IPv4Address] = "0.0.0.0",
) -> CampaignVerdict:
    """
    Replay a recorded sequence of attempt outcomes through the decision rules.
    Consumes at most max_attempts outcomes and stops at the first early verdict;
    a shorter sequence is treated as exhausted.
    """
    state = new_state(policy)
    it = iter(outcomes)
    while not state.finished:
        try:
            ok = next(it)
        except StopIteration:
            break
        state.record(bool(ok))
    return CampaignVerdict(
        address=IPv4Address(address),
        reachable=state.final_verdict(),
        attempts=state.attempts,
        successes=state.successes,
    )
