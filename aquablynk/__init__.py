"""Water and air quality calculations with a small toolkit for sensor stations."""

__version__ = "0.1.0"
__all__ = [
    "clock",
    "fifo",
    "handlers",
    "helpers",
    "monitor",
    "netutil",
    "ota",
    "streams",
    "timer",
    "timeutils",
    "transport",
]