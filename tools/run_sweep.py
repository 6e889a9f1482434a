# tools/run_sweep.py
# Usage examples:
#   python3 -m tools.run_sweep iplist.txt
#   python3 -m tools.run_sweep iplist.txt --concurrency 50 --max-attempts 3 --success-threshold 1 --json
#   python3 -m tools.run_sweep fake

import argparse
import json
import logging
import sys

from reachscan.brain.orchestrator import ping_ips
from reachscan.config import ProbePolicy, Settings
from reachscan.errors import ReachscanError
from reachscan.targets.expander import expand_lines, read_address_file

FAKE_LINES = [
    "# demo list",
    "10.0.0.1-10.0.0.3",
    "192.0.2.8/30",
]


def fake_prober():
    from reachscan.prober.fake import FakeProber
    script = {
        "10.0.0.1": [True, True],
        "10.0.0.2": [False, True, True],
        "10.0.0.3": [True, False, False, False],
        "192.0.2.9": [True, True],
    }
    return FakeProber(script=script)


def settings_from_args(args) -> Settings:
    policy = ProbePolicy(
        max_attempts=args.max_attempts,
        success_threshold=args.success_threshold,
        consecutive_failure_threshold=args.fail_threshold or None,
        per_attempt_timeout=args.timeout,
        inter_attempt_delay=args.interval,
    )
    return Settings(
        address_file=args.address_file,
        concurrency=args.concurrency,
        policy=policy,
        ping_bin=args.ping_bin,
    )


def print_result(res, as_json: bool = False):
    if as_json:
        print(json.dumps(res.as_dict(), indent=2))
        return
    print("=== reachable ===")
    for ip in res.reachable:
        print(ip)
    print("\n=== unreachable ===")
    for ip in res.unreachable:
        print(ip)


def run(args) -> int:
    try:
        s = settings_from_args(args)
        if s.address_file == "fake":
            addresses = expand_lines(FAKE_LINES)
            prober = fake_prober()
        else:
            from reachscan.prober.ping import PingProber
            addresses = read_address_file(s.address_file)
            prober = PingProber(ping_bin=s.ping_bin)
        res = ping_ips(addresses, s.concurrency, s.policy, prober)
    except (ReachscanError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print_result(res, as_json=args.json)
    return 0


def build_argparser():
    defaults = Settings()
    policy = defaults.policy
    ap = argparse.ArgumentParser(description="Concurrent ping sweep with a per-address confidence policy")
    ap.add_argument("address_file", nargs="?", default=defaults.address_file,
                    help="Address list (single IPs, CIDR blocks, start-end ranges) or 'fake'")
    ap.add_argument("--concurrency", type=int, default=defaults.concurrency, help="Max addresses probed at once")
    ap.add_argument("--max-attempts", type=int, default=policy.max_attempts, help="Max attempts per address")
    ap.add_argument("--success-threshold", type=int, default=policy.success_threshold,
                    help="Successful attempts needed to call an address reachable")
    ap.add_argument("--fail-threshold", type=int, default=policy.consecutive_failure_threshold,
                    help="Consecutive failures that end a campaign early (0 disables)")
    ap.add_argument("--timeout", type=float, default=policy.per_attempt_timeout, help="Per-attempt timeout (seconds)")
    ap.add_argument("--interval", type=float, default=policy.inter_attempt_delay,
                    help="Delay between attempts on the same address (seconds)")
    ap.add_argument("--ping-bin", default=defaults.ping_bin, help="Path to the ping binary")
    ap.add_argument("--json", action="store_true", help="Print results as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv=None) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
