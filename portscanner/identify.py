from __future__ import annotations

import logging
import socket
import time
from typing import Iterable, Optional

from .connector import connect, is_reachable, join_host_port, open_connection
from .known_ports import UNKNOWN, lookup
from .models import ScannerConfig
from .predictors import Predictor

logger = logging.getLogger(__name__)

HTTP_PORTS = (80, 8080)

MYSQL_LABEL = "MySQL"
MYSQL_READ_DEADLINE = 3.0
MYSQL_READ_BYTES = 20


def is_http(port: int) -> bool:
    # Independent of KNOWN_PORTS; keep both in sync by hand.
    return port in HTTP_PORTS


def predict_using_predictors(
    predictors: Iterable[Predictor],
    host_port: str,
    timeout: Optional[float],
    connector=connect,
) -> str:
    """
    Run predictors in order and return the first non-empty label.
    A predictor is skipped when host_port does not accept a connection.
    """
    for predictor in predictors:
        if not is_reachable(host_port, timeout, connector):
            continue
        try:
            result = predictor.predict(host_port, timeout=timeout, connector=connector)
        except Exception:
            logger.exception("%r raised on %s", predictor, host_port)
            continue
        if result:
            return result
    return UNKNOWN


def _read_window(sock: socket.socket, size: int, deadline: float) -> bytes:
    """
    Read up to size bytes before the deadline.
    A peer that closes early yields what it sent. Raises socket.timeout when
    the deadline passes first and EOFError when the peer sent nothing.
    """
    end = time.monotonic() + deadline
    data = b""
    while len(data) < size:
        remaining = end - time.monotonic()
        if remaining <= 0:
            raise socket.timeout("read deadline exceeded")
        sock.settimeout(remaining)
        chunk = sock.recv(size - len(data))
        if not chunk:
            if not data:
                raise EOFError("connection closed before greeting")
            break
        data += chunk
    return data


def get_mysql_version(host_port: str, assumed: str, timeout: Optional[float], connector=connect) -> str:
    """
    Append the first bytes of the server greeting to assumed.
    The greeting is not parsed; the raw read window is used as is.
    """
    with open_connection(host_port, timeout, connector) as sock:
        if sock is None:
            return assumed
        try:
            data = _read_window(sock, MYSQL_READ_BYTES, MYSQL_READ_DEADLINE)
        except (socket.timeout, OSError, EOFError) as e:
            logger.debug("mysql greeting read from %s failed: %s", host_port, e)
            return assumed

    return assumed + " version: " + data.decode(errors="replace")


def describe_port(config: ScannerConfig, port: int, connector=connect) -> str:
    if not config.use_predictor:
        return lookup(port)

    host_port = join_host_port(config.host, port)

    if is_http(port):
        return predict_using_predictors(config.predictors, host_port, config.timeout, connector)

    assumed = lookup(port)
    if assumed == UNKNOWN:
        return predict_using_predictors(config.predictors, host_port, config.timeout, connector)
    if assumed == MYSQL_LABEL:
        return get_mysql_version(host_port, assumed, config.timeout, connector)
    return assumed
