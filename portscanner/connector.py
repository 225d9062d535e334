from __future__ import annotations

import logging
import socket
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectFailure:
    host_port: str
    reason: str

    def __bool__(self) -> bool:
        return False


def join_host_port(host: str, port: int) -> str:
    if ":" in host and not host.startswith("["):
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def split_host_port(host_port: str) -> Tuple[str, int]:
    """
    Inverse of join_host_port.
    Accepts "host:port" and "[v6addr]:port".
    """
    if host_port.startswith("["):
        end = host_port.find("]")
        if end < 0 or host_port[end + 1:end + 2] != ":":
            raise ValueError(f"Invalid address: {host_port}")
        host, port_s = host_port[1:end], host_port[end + 2:]
    else:
        host, sep, port_s = host_port.rpartition(":")
        if not sep or ":" in host:
            raise ValueError(f"Invalid address: {host_port}")

    if not host or not port_s.isdigit():
        raise ValueError(f"Invalid address: {host_port}")
    return host, int(port_s)


def connect(host_port: str, timeout: Optional[float]) -> Union[socket.socket, ConnectFailure]:
    """
    Resolve and dial host_port within timeout.
    Returns the connected socket, or a ConnectFailure for any resolution or
    connection error. The caller owns the socket and must close it.
    """
    try:
        host, port = split_host_port(host_port)
        return socket.create_connection((host, port), timeout=timeout)
    except (socket.timeout, ConnectionRefusedError, OSError, OverflowError, ValueError) as e:
        logger.debug("connect %s failed: %s", host_port, e)
        return ConnectFailure(host_port=host_port, reason=str(e) or type(e).__name__)


@contextmanager
def open_connection(host_port: str, timeout: Optional[float], connector=connect) -> Iterator[Optional[socket.socket]]:
    conn = connector(host_port, timeout)
    if isinstance(conn, ConnectFailure):
        yield None
        return
    try:
        yield conn
    finally:
        try:
            conn.close()
        except OSError:
            pass


def is_reachable(host_port: str, timeout: Optional[float], connector=connect) -> bool:
    with open_connection(host_port, timeout, connector) as conn:
        return conn is not None
