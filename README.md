# bwmeter

Building blocks for measuring network bandwidth between two hosts. The package has no
dependencies outside the standard library and targets POSIX systems.

## Installation

```
pip install .
```

To install the test requirements as well:

```
pip install ".[test]"
```

## Modules

- `bwmeter.units`: parses sizes such as `"4G"` with `unit_atof` and `unit_atoi`
  (1024-based suffixes) and rates with `unit_atof_rate` (1000-based suffixes), and
  formats byte counts with `format_units(value, fmt)`. Upper-case formats
  `B K M G T` give bytes, lower-case `b k m g t` give bits, and `A`/`a` pick the
  unit adaptively.
- `bwmeter.timer`: `TimerQueue`, which schedules one-shot and periodic callbacks.
  `timeout()` gives the seconds until the next timer is due (or `None` when no
  timer is pending), `run()` fires every timer that is due, and `reset()`,
  `cancel()` and `destroy()` manage scheduled timers. Times are in microseconds
  from `now_usecs()` or a clock passed to the queue.
- `bwmeter.tcp_info`: `read_tcp_info(sock)` returns a `TcpInfo` with retransmits,
  congestion window, RTT, RTT variance and path MTU, or `None` where the platform
  does not support TCP_INFO (see `has_tcpinfo()`).
- `bwmeter.util`: random test cookies (`make_cookie`), entropy (`read_entropy`),
  repeating-digit payloads (`repeating_pattern`), CPU usage sampling (`CpuMeter`),
  `get_system_info`, `get_optional_features`, `json_printf` for building a dict
  from a `name: %d` style format, `is_closed`, `timeval_diff` and `dump_fdset`.
- `bwmeter.net`: `netdial` and `netannounce` to open connected or bound sockets,
  `timeout_connect`, `nread` and `nwrite` for whole-buffer I/O (raising
  `NetSoftError` or `NetHardError` on failure), `set_nonblocking` and
  `get_sock_domain`.

## Examples

```python
from bwmeter.units import unit_atoi, format_units

unit_atoi("4G")                  # 4294967296
format_units(1024.0, "A")        # '1.00 KByte'
format_units(1000.0 * 1000, "a") # '8.00 Mbit'
```

```python
from bwmeter.timer import TimerQueue

fired = []
queue = TimerQueue()
queue.create(lambda data, now: fired.append(data), "tick", 1_000_000, False)
queue.run()          # fires every timer that is due
print(queue.timeout())
```

```python
from bwmeter.util import make_cookie, json_printf

make_cookie()                               # 36 random characters
json_printf("bytes: %d  ok: %b", 1024, 1)   # {'bytes': 1024, 'ok': True}
```

## What the package does not do

There is no command-line tool and no client or server that runs a bandwidth test:
the package provides the parts such a tool is built from (unit handling, timers,
socket helpers, TCP statistics) but does not exchange test parameters, run streams
or report results. UDP streams, their packet headers and loss and jitter
accounting are not provided either.

## Running the tests

```
pytest
```