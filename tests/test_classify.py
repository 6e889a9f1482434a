# tests/test_classify.py
import pytest

from reachscan.prober.classify import classify, output_indicates_reply

LINUX_OK = """PING 8.8.8.8 (8.8.8.8) 56(84) bytes of data.
64 bytes from 8.8.8.8: icmp_seq=1 ttl=117 time=9.81 ms

--- 8.8.8.8 ping statistics ---
1 packets transmitted, 1 received, 0% packet loss, time 0ms
"""

LINUX_FAIL = """PING 10.255.0.1 (10.255.0.1) 56(84) bytes of data.

--- 10.255.0.1 ping statistics ---
1 packets transmitted, 0 received, 100% packet loss, time 0ms
"""

MACOS_FAIL = """PING 10.255.0.1 (10.255.0.1): 56 data bytes
Request timeout for icmp_seq 0

--- 10.255.0.1 ping statistics ---
1 packets transmitted, 0 packets received, 100.0% packet loss
"""

WINDOWS_OK = """Pinging 8.8.8.8 with 32 bytes of data:
Reply from 8.8.8.8: bytes=32 time=10ms TTL=117

Ping statistics for 8.8.8.8:
    Packets: Sent = 1, Received = 1, Lost = 0 (0% loss),
"""

WINDOWS_ZH_OK = """正在 Ping 8.8.8.8 具有 32 字节的数据:
来自 8.8.8.8 的回复: 字节=32 时间=10ms TTL=117

8.8.8.8 的 Ping 统计信息:
    数据包: 已发送 = 1，已接收 = 1，丢失 = 0 (0% 丢失)，
"""


def test_completion_signal_wins():
    assert classify(True, "") is True
    assert classify(True, LINUX_FAIL) is True


def test_zero_received_is_failure():
    assert classify(False, "0 received, 100% packet loss") is False


def test_counts_received_is_success():
    assert classify(False, "4 packets transmitted, 4 received, 0% packet loss") is True


def test_ttl_marker_alone_is_success():
    assert classify(False, "ttl=54") is True


def test_zero_received_beats_indicators():
    """A reply indicator does not override an explicit zero count."""
    assert classify(False, "time=0ms 0 received") is False
    assert classify(False, "bytes from somewhere, 0 packets received") is False


def test_packet_loss_rule():
    assert classify(False, "0% packet loss") is True
    assert classify(False, "0.0% packet loss") is True
    assert classify(False, "100% packet loss") is False
    assert classify(False, "25% Packet Loss") is False


def test_case_insensitive():
    assert classify(False, "3 RECEIVED") is True
    assert classify(False, "REPLY FROM 10.0.0.1") is True


@pytest.mark.parametrize("text,expected", [
    (LINUX_OK, True),
    (LINUX_FAIL, False),
    (MACOS_FAIL, False),
    (WINDOWS_OK, True),
    (WINDOWS_ZH_OK, True),
    ("", False),
    ("timeout", False),
    ("ping: unknown host", False),
])
def test_platform_outputs(text, expected):
    assert output_indicates_reply(text) is expected
