# reachscan/prober/classify.py
import re

# "4 received", "4 packets received"
RECEIVED_RE = re.compile(r"\b(\d+)\s+(?:packets\s+)?received\b", re.IGNORECASE)
# "0% packet loss", "0.0% packet loss"
LOSS_RE = re.compile(r"(?<![\d.])(\d+(?:\.\d+)?)%\s*packet\s*loss", re.IGNORECASE)

# Substrings that only show up when an echo reply actually arrived.
REPLY_INDICATORS = (
    "bytes from",
    "reply from",
    "ttl=",
    "time=",
    "time<",
    "已接收",
    "来自",
)


def output_indicates_reply(output: str) -> bool:
    """
    Guess from raw ping output whether a reply came back. Counted forms
    win over the generic indicators so that "0 received" is never read
    as a success just because the same text also contains e.g. "time=".
    """
    if not output:
        return False
    low = output.lower()

    m = RECEIVED_RE.search(low)
    if m:
        return int(m.group(1)) != 0

    m = LOSS_RE.search(low)
    if m:
        return float(m.group(1)) == 0

    return any(s in low for s in REPLY_INDICATORS)


def classify(completed: bool, output: str) -> bool:
    """Primary completion signal first, text heuristics as fallback."""
    if completed:
        return True
    return output_indicates_reply(output)
