"""Assorted helpers: entropy, cookies, payload patterns, CPU usage, JSON building."""

from __future__ import annotations

import errno
import os
import platform
import select
import socket
import time
from dataclasses import dataclass
from typing import IO, Any, Iterable, NamedTuple

COOKIE_SIZE = 37  # 36 visible characters plus the terminator slot
_COOKIE_CHARS = "abcdefghijklmnopqrstuvwxyz234567"
_PATTERN = b"0123456789"

FEATURE_NAMES = (
    "CPU affinity setting",
    "IPv6 flow label",
    "SCTP",
    "TCP congestion algorithm setting",
    "sendfile / zerocopy",
    "socket pacing",
    "authentication",
)


def read_entropy(size: int) -> bytes:
    """Return *size* bytes from the system's random source."""
    if size < 0:
        raise ValueError("size must not be negative")
    if size == 0:
        return b""
    return os.urandom(size)


def repeating_pattern(size: int) -> bytes:
    """Return *size* bytes of the repeating digits ``0123456789``."""
    if size < 0:
        raise ValueError("size must not be negative")
    repeats, extra = divmod(size, len(_PATTERN))
    return _PATTERN * repeats + _PATTERN[:extra]


def make_cookie() -> str:
    """Generate a random test identifier of ``COOKIE_SIZE - 1`` characters."""
    raw = read_entropy(COOKIE_SIZE - 1)
    return "".join(_COOKIE_CHARS[b % len(_COOKIE_CHARS)] for b in raw)


def is_closed(fd: Any) -> bool:
    """Whether the descriptor (or object with ``fileno()``) is closed."""
    try:
        select.select([fd], [], [], 0)
    except ValueError:
        # A closed socket object reports a descriptor of -1.
        return True
    except OSError as exc:
        return exc.errno == errno.EBADF
    return False


def timeval_diff(a: tuple[int, int], b: tuple[int, int]) -> float:
    """Absolute difference in seconds between two ``(secs, usecs)`` pairs."""
    first = a[0] + a[1] / 1_000_000.0
    second = b[0] + b[1] / 1_000_000.0
    return abs(first - second)


class CpuUsage(NamedTuple):
    """CPU usage percentages over a measured period."""

    total: float
    user: float
    system: float


@dataclass
class _CpuSnapshot:
    wall: float
    process: float
    user: float
    system: float

    @classmethod
    def take(cls) -> "_CpuSnapshot":
        times = os.times()
        return cls(time.monotonic(), time.process_time(), times.user, times.system)


class CpuMeter:
    """Measures process CPU usage relative to elapsed wall-clock time."""

    def __init__(self) -> None:
        self._last = _CpuSnapshot.take()

    def start(self) -> None:
        """Begin a new measurement period."""
        self._last = _CpuSnapshot.take()

    def sample(self) -> CpuUsage:
        """Percentages of total, user and system CPU since :meth:`start`."""
        now = _CpuSnapshot.take()
        elapsed = now.wall - self._last.wall
        if elapsed <= 0:
            return CpuUsage(0.0, 0.0, 0.0)
        return CpuUsage(
            (now.process - self._last.process) / elapsed * 100,
            (now.user - self._last.user) / elapsed * 100,
            (now.system - self._last.system) / elapsed * 100,
        )


def get_system_info() -> str:
    """System name, host name, release, version and machine on one line."""
    info = platform.uname()
    return f"{info.system} {info.node} {info.release} {info.version} {info.machine}"


def _detect_features() -> list[str]:
    available = {
        "CPU affinity setting": hasattr(os, "sched_setaffinity"),
        "SCTP": hasattr(socket, "IPPROTO_SCTP"),
        "TCP congestion algorithm setting": hasattr(socket, "TCP_CONGESTION"),
        "sendfile / zerocopy": hasattr(os, "sendfile"),
    }
    return [name for name in FEATURE_NAMES if available.get(name, False)]


def get_optional_features(features: Iterable[str] | None = None) -> str:
    """Describe the optional features available, detecting them if not given."""
    names = list(_detect_features() if features is None else features)
    listing = ", ".join(names) if names else "None"
    return f"Optional features available: {listing}"


def json_printf(fmt: str, *args: Any) -> dict[str, Any]:
    """Build a dict from a ``name: %x`` format string.

    ``%b`` takes a boolean, ``%d`` an integer, ``%f`` a float and ``%s`` a
    string. A colon ends a field name; blanks are ignored.
    """
    result: dict[str, Any] = {}
    values = iter(args)
    name: list[str] = []
    name_done = False
    chars = iter(fmt)
    for ch in chars:
        if ch == " ":
            continue
        if ch == ":":
            name_done = True
            continue
        if ch != "%":
            if not name_done:
                name.append(ch)
            continue
        spec = next(chars, "")
        if spec not in ("b", "d", "f", "s"):
            raise ValueError(f"unknown format specifier %{spec}")
        try:
            value = next(values)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None
        if spec == "b":
            item: Any = bool(value)
        elif spec == "d":
            item = int(value)
        elif spec == "f":
            item = float(value)
        else:
            if not isinstance(value, str):
                raise TypeError(f"%s expects a string, got {type(value).__name__}")
            item = value
        result["".join(name)] = item
        name = []
        name_done = False
    return result


def dump_fdset(stream: IO[str], label: str, fds: Iterable[int]) -> None:
    """Write ``label: [fd, fd, ...]`` with the descriptors in ascending order."""
    listing = ", ".join(str(fd) for fd in sorted({fd for fd in fds if fd >= 0}))
    stream.write(f"{label}: [{listing}]\n")