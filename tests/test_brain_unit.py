# tests/test_brain_unit.py
import asyncio
from ipaddress import IPv4Address

import pytest

from reachscan.brain.controller import CampaignController
from reachscan.brain.rules import evaluate_sequence
from reachscan.config import DEFAULT_POLICY, ProbePolicy
from reachscan.errors import InvalidPolicy
from reachscan.prober.base import Prober
from reachscan.prober.fake import FakeProber

IP = "192.0.2.1"


def fast_policy(**kw) -> ProbePolicy:
    kw.setdefault("inter_attempt_delay", 0)
    kw.setdefault("per_attempt_timeout", 0.5)
    return ProbePolicy(**kw)


def run_campaign(prober, policy):
    ctrl = CampaignController(prober, policy)
    return asyncio.run(ctrl.run(IPv4Address(IP)))


def test_default_policy_values():
    """Defaults match the documented policy."""
    p = DEFAULT_POLICY
    assert (p.max_attempts, p.success_threshold, p.consecutive_failure_threshold) == (5, 2, 3)
    assert p.per_attempt_timeout == 2.0
    assert p.inter_attempt_delay == 1.0


def test_policy_rejects_bad_timing():
    with pytest.raises(InvalidPolicy):
        ProbePolicy(per_attempt_timeout=0)
    with pytest.raises(InvalidPolicy):
        ProbePolicy(inter_attempt_delay=-1)


def test_policy_normalization():
    p = ProbePolicy(success_threshold=0, consecutive_failure_threshold=0).normalized()
    assert p.success_threshold == 1
    assert p.consecutive_failure_threshold is None


def test_two_successes_stop_early():
    """[True, True] with success_threshold=2 is reachable after exactly 2 attempts."""
    for max_attempts in (2, 5, 50):
        v = evaluate_sequence([True, True, False, False], fast_policy(max_attempts=max_attempts))
        assert v.reachable is True
        assert v.attempts == 2


def test_three_failures_stop_early():
    v = evaluate_sequence([False, False, False, True, True], fast_policy(consecutive_failure_threshold=3))
    assert v.reachable is False
    assert v.attempts == 3


def test_exhaustion_with_failure_stop_disabled():
    """One success out of five is not enough when two are needed."""
    policy = fast_policy(max_attempts=5, success_threshold=2, consecutive_failure_threshold=None)
    v = evaluate_sequence([True, False, False, False, False], policy)
    assert v.reachable is False
    assert v.attempts == 5
    assert v.successes == 1


def test_success_resets_failure_streak():
    policy = fast_policy(max_attempts=5, success_threshold=2, consecutive_failure_threshold=3)
    v = evaluate_sequence([False, False, True, False, False], policy)
    assert v.reachable is False
    assert v.attempts == 5


def test_late_success_after_failures():
    policy = fast_policy(max_attempts=5, success_threshold=2, consecutive_failure_threshold=3)
    v = evaluate_sequence([False, True, False, True], policy)
    assert v.reachable is True
    assert v.attempts == 4


def test_zero_max_attempts_is_unreachable_without_probing():
    prober = FakeProber(script={IP: [True, True]})
    v = run_campaign(prober, fast_policy(max_attempts=0))
    assert v.reachable is False
    assert v.attempts == 0
    assert prober.calls == {}


def test_success_threshold_below_one_is_one():
    v = evaluate_sequence([True], fast_policy(success_threshold=0))
    assert v.reachable is True
    assert v.attempts == 1


def test_sequence_replay_is_deterministic():
    seq = [False, True, False, False, True]
    policy = fast_policy(consecutive_failure_threshold=None)
    assert evaluate_sequence(seq, policy) == evaluate_sequence(seq, policy)


def test_controller_matches_replay():
    """The live campaign and the recorded replay agree on the same outcomes."""
    seq = [False, True, False, True]
    policy = fast_policy(max_attempts=5)
    live = run_campaign(FakeProber(script={IP: seq}), policy)
    replay = evaluate_sequence(seq, policy, address=IP)
    assert live == replay


def test_controller_uses_output_fallback():
    """A non-zero exit status with reply text still counts as a success."""
    ev = {"target": IP, "completed": False, "returncode": 1, "output": "64 bytes from 192.0.2.1: ttl=54"}
    prober = FakeProber(script={IP: [ev, ev]})
    v = run_campaign(prober, fast_policy())
    assert v.reachable is True
    assert v.attempts == 2


def test_controller_unscripted_attempts_fail():
    prober = FakeProber(script={})
    v = run_campaign(prober, fast_policy())
    assert v.reachable is False
    assert prober.calls[IP] == 3


class HangingProber(Prober):
    async def attempt(self, address, timeout):
        await asyncio.sleep(timeout * 10)
        return {"target": address, "completed": True, "output": ""}


class BrokenProber(Prober):
    async def attempt(self, address, timeout):
        raise OSError("network is unreachable")


def test_attempt_timeout_is_a_failed_attempt():
    v = run_campaign(HangingProber(), fast_policy(per_attempt_timeout=0.05))
    assert v.reachable is False
    assert v.attempts == 3


def test_transport_error_is_a_failed_attempt():
    v = run_campaign(BrokenProber(), fast_policy(consecutive_failure_threshold=2))
    assert v.reachable is False
    assert v.attempts == 2


def test_delay_only_between_attempts(monkeypatch):
    """Pacing sleeps happen between attempts, never after the last one."""
    sleeps = []
    real_sleep = asyncio.sleep

    async def fake_sleep(delay, *a, **kw):
        sleeps.append(delay)
        await real_sleep(0)

    monkeypatch.setattr("reachscan.brain.controller.asyncio.sleep", fake_sleep)
    policy = fast_policy(inter_attempt_delay=1.5)
    v = run_campaign(FakeProber(script={IP: [True, True]}), policy)
    assert v.attempts == 2
    assert sleeps == [1.5]
