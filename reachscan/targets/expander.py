# reachscan/targets/expander.py
import logging
from ipaddress import AddressValueError, IPv4Address, IPv4Network
from typing import Iterable, Optional

from reachscan.errors import (
    ExpansionError,
    InconsistentRange,
    InvalidAddress,
    InvalidRangeSyntax,
    RangeTooLarge,
)

log = logging.getLogger(__name__)

# Hard cap on addresses produced by a single CIDR block or range line.
EXPANSION_LIMIT = 1_000_000

COMMENT_PREFIXES = ("#", "//")


def parse_address(text: str, line_number: Optional[int] = None) -> IPv4Address:
    try:
        return IPv4Address(text)
    except AddressValueError as e:
        raise InvalidAddress(text, str(e), line_number=line_number) from None


def _enumerate(first: int, last: int) -> list[IPv4Address]:
    return [IPv4Address(n) for n in range(first, last + 1)]


def expand_cidr(line: str, line_number: Optional[int] = None) -> list[IPv4Address]:
    """
    A.B.C.D/N -> every address in the block, network and broadcast included.
    Host bits of the base address are masked off.
    """
    parts = line.split("/")
    if len(parts) != 2:
        raise InvalidRangeSyntax(line, "expected address/prefix", line_number=line_number)
    base_text, prefix_text = parts[0].strip(), parts[1].strip()

    base = parse_address(base_text, line_number)
    # ASCII digits only
    if not (prefix_text.isascii() and prefix_text.isdigit()):
        raise InvalidRangeSyntax(line, f"bad prefix length {prefix_text!r}", line_number=line_number)
    prefix = int(prefix_text)
    if prefix > 32:
        raise InvalidRangeSyntax(line, f"prefix length {prefix} out of range 0-32", line_number=line_number)

    size = 1 << (32 - prefix)
    if size > EXPANSION_LIMIT:
        raise RangeTooLarge(line, f"{size} addresses > {EXPANSION_LIMIT}", line_number=line_number)

    net = IPv4Network((base, prefix), strict=False)
    first = int(net.network_address)
    return _enumerate(first, first + size - 1)


def expand_range(line: str, line_number: Optional[int] = None) -> list[IPv4Address]:
    """A.B.C.D-E.F.G.H -> every address from start to end, both inclusive."""
    parts = line.split("-")
    if len(parts) != 2:
        raise InvalidRangeSyntax(line, "expected start-end", line_number=line_number)

    start = parse_address(parts[0].strip(), line_number)
    end = parse_address(parts[1].strip(), line_number)
    if int(start) > int(end):
        raise InconsistentRange(line, line_number=line_number)

    count = int(end) - int(start) + 1
    if count > EXPANSION_LIMIT:
        raise RangeTooLarge(line, f"{count} addresses > {EXPANSION_LIMIT}", line_number=line_number)

    return _enumerate(int(start), int(end))


def expand(line: str, line_number: Optional[int] = None) -> list[IPv4Address]:
    """
    Expand one address-specification line into concrete IPv4 addresses,
    ascending. The caller strips the line and filters blanks/comments.
    """
    if "/" in line:
        return expand_cidr(line, line_number)
    if "-" in line:
        return expand_range(line, line_number)
    return [parse_address(line, line_number)]


def is_skippable(line: str) -> bool:
    return not line or line.startswith(COMMENT_PREFIXES)


def expand_lines(lines: Iterable[str]) -> list[IPv4Address]:
    """
    Expand an address list. Blank lines and '#' / '//' comments are skipped.
    The first bad line aborts the whole batch; nothing partial is returned.
    """
    out: list[IPv4Address] = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if is_skippable(line):
            continue
        out.extend(expand(line, line_number=lineno))
    return out


def read_address_file(path: str) -> list[IPv4Address]:
    with open(path, encoding="utf-8") as fh:
        try:
            addresses = expand_lines(fh)
        except ExpansionError as e:
            log.error("failed to parse %s: %s", path, e)
            raise
    log.info("loaded %d addresses from %s", len(addresses), path)
    return addresses
