# reachscan/prober/ping.py
import asyncio
import logging
import math
import shutil
import sys
from datetime import datetime, timezone
from typing import Optional

from reachscan.prober.base import Prober
from reachscan.schemas import AttemptResult

log = logging.getLogger(__name__)

DEFAULT_PING_BIN = shutil.which("ping") or "/bin/ping"


class PingProber(Prober):
    """
    Sends a single ICMP echo through the platform `ping` binary and returns
    its exit status plus combined stdout/stderr for the classifier.
    """

    def __init__(self, ping_bin: Optional[str] = None, platform: Optional[str] = None):
        self.ping = ping_bin or DEFAULT_PING_BIN
        self.platform = platform or sys.platform
        if not shutil.which(self.ping):
            raise FileNotFoundError(f"ping binary not found at {self.ping}")

    def build_cmd(self, address: str, timeout: float) -> list[str]:
        if self.platform.startswith("win"):
            # -w is milliseconds
            return [self.ping, "-n", "1", "-w", str(int(timeout * 1000)), address]
        if self.platform == "darwin":
            # macOS -W is milliseconds too
            return [self.ping, "-c", "1", "-W", str(int(timeout * 1000)), address]
        # Linux -W takes whole seconds
        secs = max(1, math.ceil(timeout))
        return [self.ping, "-c", "1", "-W", str(secs), address]

    def _result(self, address: str, completed: bool, returncode: Optional[int], output: str) -> AttemptResult:
        return {
            "target": address,
            "completed": completed,
            "returncode": returncode,
            "output": output,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def attempt(self, address: str, timeout: float) -> AttemptResult:
        cmd = self.build_cmd(address, timeout)
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            log.warning("could not start %s: %s", self.ping, e)
            return self._result(address, False, None, f"exception: {e}")

        try:
            out, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            return self._result(address, False, None, "timeout")
        finally:
            # also runs on cancellation; never leave a child behind
            if proc.returncode is None:
                try:
                    proc.kill()
                except ProcessLookupError:
                    pass
                await proc.wait()

        text = out.decode("utf-8", errors="replace") if out else ""
        return self._result(address, proc.returncode == 0, proc.returncode, text)
