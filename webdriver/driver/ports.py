"""TCP port helpers for locally hosted drivers."""

import contextlib
import socket

MAX_PORT = 65535


def validate_port(port: int) -> int:
    """
    Check that ``port`` is usable as a listening port.

    Raises:
        ValueError: If port <= 0 or port >= 65535
    """
    if isinstance(port, bool) or not isinstance(port, int) or port <= 0 or port >= MAX_PORT:
        raise ValueError(f"out of range port {port}")
    return port


def free_port(host: str = "127.0.0.1") -> int:
    """Ask the OS for an unused port on ``host`` and release it immediately."""
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return s.getsockname()[1]
