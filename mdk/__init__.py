"""Building blocks for network servers: config files, buffers, queues, signals, tasks, threads, logging and sockets."""

__version__ = "0.1.0"

__all__ = [
    "configfile",
    "iobuffer",
    "logger",
    "notify",
    "ringqueue",
    "sockets",
    "sockopt",
    "task",
    "threads",
    "utils",
]