# reachscan/brain/orchestrator.py
import asyncio
import logging
from ipaddress import IPv4Address
from typing import Iterable, Optional, Union

from reachscan.brain.controller import CampaignController
from reachscan.config import DEFAULT_POLICY, ProbePolicy
from reachscan.errors import InvalidConcurrency
from reachscan.prober.base import Prober
from reachscan.schemas import CampaignVerdict, SessionResult
from reachscan.targets.expander import parse_address

log = logging.getLogger(__name__)

AddressLike = Union[str, IPv4Address]


def _distinct(addresses: Iterable[AddressLike]) -> list[IPv4Address]:
    seen: set[IPv4Address] = set()
    out: list[IPv4Address] = []
    for a in addresses:
        addr = a if isinstance(a, IPv4Address) else parse_address(str(a).strip())
        if addr not in seen:
            seen.add(addr)
            out.append(addr)
    return out


async def probe_addresses(
    addresses: Iterable[AddressLike],
    concurrency: int,
    policy: ProbePolicy = DEFAULT_POLICY,
    prober: Optional[Prober] = None,
) -> SessionResult:
    """
    Run one campaign per distinct address, at most `concurrency` at a time,
    and partition the verdicts into reachable / unreachable.
    """
    if concurrency <= 0:
        raise InvalidConcurrency(f"concurrency must be > 0, got {concurrency}")
    targets = _distinct(addresses)
    if not targets:
        return SessionResult()

    if prober is None:
        from reachscan.prober.ping import PingProber
        prober = PingProber()

    ctrl = CampaignController(prober, policy)
    gate = asyncio.Semaphore(concurrency)

    async def campaign(addr: IPv4Address) -> CampaignVerdict:
        async with gate:
            return await ctrl.run(addr)

    log.info("probing %d addresses (concurrency=%d)", len(targets), concurrency)
    verdicts = await asyncio.gather(*(campaign(a) for a in targets))

    result = SessionResult()
    for v in verdicts:
        (result.reachable if v.reachable else result.unreachable).append(v.address)
    log.info("%d reachable, %d unreachable", len(result.reachable), len(result.unreachable))
    return result


def ping_ips(
    addresses: Iterable[AddressLike],
    concurrency: int,
    policy: ProbePolicy = DEFAULT_POLICY,
    prober: Optional[Prober] = None,
) -> SessionResult:
    return asyncio.run(probe_addresses(addresses, concurrency, policy, prober))
