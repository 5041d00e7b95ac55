"""Collect TCP_INFO statistics from a connected TCP socket."""

from __future__ import annotations

import socket
import struct
import sys
from dataclasses import dataclass, fields

# Linux struct tcp_info: eight single-byte fields followed by 24 u32 fields.
_LAYOUT = struct.Struct("=8B24I")
TCP_INFO_SIZE = _LAYOUT.size


def has_tcpinfo() -> bool:
    """Whether this platform can report TCP_INFO."""
    return sys.platform.startswith(("linux", "freebsd", "netbsd")) and hasattr(
        socket, "TCP_INFO"
    )


def has_tcpinfo_retransmits() -> bool:
    """Whether TCP_INFO on this platform carries a retransmit count."""
    if sys.platform.startswith(("linux", "freebsd")):
        return True
    return sys.platform.startswith("netbsd") and hasattr(socket, "TCP_INFO")


@dataclass(frozen=True)
class TcpInfo:
    """Snapshot of a socket's TCP_INFO record."""

    state: int = 0
    ca_state: int = 0
    retransmits: int = 0
    probes: int = 0
    backoff: int = 0
    options: int = 0
    wscale: int = 0
    app_limited: int = 0
    rto: int = 0
    ato: int = 0
    snd_mss: int = 0
    rcv_mss: int = 0
    unacked: int = 0
    sacked: int = 0
    lost: int = 0
    retrans: int = 0
    fackets: int = 0
    last_data_sent: int = 0
    last_ack_sent: int = 0
    last_data_recv: int = 0
    last_ack_recv: int = 0
    path_mtu: int = 0
    rcv_ssthresh: int = 0
    rtt_usecs: int = 0
    rttvar_usecs: int = 0
    snd_ssthresh: int = 0
    snd_cwnd: int = 0
    advmss: int = 0
    reordering: int = 0
    rcv_rtt: int = 0
    rcv_space: int = 0
    total_retrans: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "TcpInfo":
        """Decode a raw TCP_INFO buffer; a short buffer is zero-filled."""
        raw = bytes(data[:TCP_INFO_SIZE]).ljust(TCP_INFO_SIZE, b"\0")
        values = _LAYOUT.unpack(raw)
        return cls(**{f.name: v for f, v in zip(fields(cls), values)})

    def total_retransmits(self) -> int:
        """Total number of retransmitted segments."""
        return self.total_retrans

    def snd_cwnd_bytes(self) -> int:
        """Send congestion window in octets."""
        return self.snd_cwnd * self.snd_mss

    def rtt(self) -> int:
        """Smoothed round-trip time in microseconds."""
        return self.rtt_usecs

    def rttvar(self) -> int:
        """Round-trip time variance in microseconds."""
        return self.rttvar_usecs

    def pmtu(self) -> int:
        """Path MTU in bytes."""
        return self.path_mtu


def read_tcp_info(sock: socket.socket) -> TcpInfo | None:
    """Read TCP_INFO from *sock*, or return None where it is unsupported.

    Raises OSError if the kernel refuses the request.
    """
    if not has_tcpinfo():
        return None
    data = sock.getsockopt(socket.IPPROTO_TCP, socket.TCP_INFO, TCP_INFO_SIZE)
    return TcpInfo.from_bytes(data)