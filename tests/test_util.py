import io
import math
import os
import platform
import socket

import pytest

from bwmeter.util import (
    COOKIE_SIZE,
    CpuMeter,
    dump_fdset,
    get_optional_features,
    get_system_info,
    is_closed,
    json_printf,
    make_cookie,
    read_entropy,
    repeating_pattern,
    timeval_diff,
)


def test_cookie_is_36_characters():
    cookie = make_cookie()
    assert len(cookie) == 36
    assert len(cookie) == COOKIE_SIZE - 1


def test_cookie_alphabet():
    cookie = make_cookie()
    assert set(cookie) <= set("abcdefghijklmnopqrstuvwxyz234567")


def test_cookies_differ():
    assert len({make_cookie() for _ in range(5)}) == 5


def test_read_entropy_sizes():
    assert read_entropy(0) == b""
    assert len(read_entropy(16)) == 16


def test_read_entropy_negative():
    with pytest.raises(ValueError):
        read_entropy(-1)


def test_repeating_pattern_digits():
    assert repeating_pattern(12) == b"012345678901"
    assert repeating_pattern(0) == b""


@pytest.mark.parametrize("size", [1, 9, 10, 11, 1460])
def test_repeating_pattern_invariant(size):
    data = repeating_pattern(size)
    assert len(data) == size
    assert all(b == ord("0") + i % 10 for i, b in enumerate(data))


def test_is_closed_open_socket():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        assert is_closed(sock.fileno()) is False


def test_is_closed_closed_socket_object():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.close()
    assert is_closed(sock) is True


def test_is_closed_closed_fd():
    r, w = os.pipe()
    os.close(w)
    os.close(r)
    assert is_closed(r) is True


def test_timeval_diff_symmetric():
    a = (5, 500000)
    b = (3, 0)
    assert timeval_diff(a, b) == pytest.approx(2.5)
    assert timeval_diff(a, b) == timeval_diff(b, a)
    assert timeval_diff(a, a) == 0.0


def test_cpu_meter_sample_non_negative():
    meter = CpuMeter()
    meter.start()
    sum(i * i for i in range(200000))
    usage = meter.sample()
    assert all(math.isfinite(v) and v >= 0 for v in usage)
    assert usage.total == usage[0]


def test_system_info_contents():
    info = get_system_info()
    assert info.startswith(platform.system() + " ")
    assert platform.node() in info
    assert info.endswith(platform.machine())


def test_optional_features_none():
    assert get_optional_features([]) == "Optional features available: None"


def test_optional_features_listing():
    text = get_optional_features(["SCTP", "socket pacing"])
    assert text == "Optional features available: SCTP, socket pacing"


def test_optional_features_detected():
    assert get_optional_features().startswith("Optional features available: ")


def test_json_printf_sample():
    result = json_printf("foo: %b  bar: %d  bletch: %f  eep: %s", 1, 42, 1.5, "hi")
    assert result == {"foo": True, "bar": 42, "bletch": 1.5, "eep": "hi"}
    assert isinstance(result["bletch"], float)


def test_json_printf_unknown_specifier():
    with pytest.raises(ValueError):
        json_printf("foo: %x", 1)


def test_json_printf_too_few_args():
    with pytest.raises(TypeError):
        json_printf("foo: %d bar: %d", 1)


def test_json_printf_string_type():
    with pytest.raises(TypeError):
        json_printf("eep: %s", None)


def test_dump_fdset_sorted():
    buf = io.StringIO()
    dump_fdset(buf, "read", {5, 1, 3})
    assert buf.getvalue() == "read: [1, 3, 5]\n"


def test_dump_fdset_empty():
    buf = io.StringIO()
    dump_fdset(buf, "write", [])
    assert buf.getvalue() == "write: []\n"