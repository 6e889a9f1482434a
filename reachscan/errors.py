# reachscan/errors.py
from typing import Optional


class ReachscanError(Exception):
    """Base for configuration and parsing problems. Probe failures never raise."""


class ExpansionError(ReachscanError, ValueError):
    """An address-specification line could not be expanded."""

    reason = "invalid address specification"

    def __init__(self, text: str, detail: Optional[str] = None, line_number: Optional[int] = None):
        self.text = text
        self.detail = detail
        self.line_number = line_number
        super().__init__(str(self))

    def __str__(self) -> str:
        msg = f"{self.reason}: {self.text!r}"
        if self.detail:
            msg += f" ({self.detail})"
        if self.line_number is not None:
            msg = f"line {self.line_number}: {msg}"
        return msg


class InvalidAddress(ExpansionError):
    reason = "invalid IPv4 address"


class InvalidRangeSyntax(ExpansionError):
    reason = "invalid range syntax"


class InconsistentRange(ExpansionError):
    reason = "range start is greater than range end"


class RangeTooLarge(ExpansionError):
    reason = "range exceeds expansion limit"


class InvalidConcurrency(ReachscanError, ValueError):
    pass


class InvalidPolicy(ReachscanError, ValueError):
    pass
