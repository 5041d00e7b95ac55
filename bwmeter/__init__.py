"""Building blocks for measuring network bandwidth: units, timers, sockets, TCP info."""

__version__ = "0.1.0"