from __future__ import annotations

import logging
import re
import socket
from typing import Optional

from ..connector import connect, open_connection, split_host_port
from .base import Predictor

logger = logging.getLogger(__name__)

_PRINTABLE = re.compile(r"[^\x09\x0a\x0d\x20-\x7e]")

DEFAULT_PREDICT_TIMEOUT = 2.0
MAX_HEADER_BYTES = 16384


def _clean_text(s: str, max_len: int = 200) -> str:
    s = _PRINTABLE.sub("", s)
    s = s.strip()
    if len(s) > max_len:
        return s[:max_len] + "..."
    return s


def _read_headers(sock: socket.socket, timeout: float) -> bytes:
    sock.settimeout(timeout)
    data = b""
    while b"\r\n\r\n" not in data and len(data) < MAX_HEADER_BYTES:
        try:
            chunk = sock.recv(4096)
        except OSError:
            break
        if not chunk:
            break
        data += chunk
    return data


def parse_server_header(response: bytes) -> Optional[str]:
    """
    Return the Server header of an HTTP response head, or None when the
    bytes are not an HTTP response or carry no Server header.
    """
    text = response.decode(errors="ignore")
    lines = text.split("\r\n\r\n", 1)[0].splitlines()
    if not lines or not lines[0].startswith("HTTP/"):
        return None

    for line in lines[1:]:
        if line.lower().startswith("server:"):
            server = _clean_text(line.split(":", 1)[1])
            return server or None
    return None


def host_header(host: str) -> str:
    if ":" in host:
        return f"[{host}]"
    return host


class HTTPServerPredictor(Predictor):
    """
    Sends HEAD / and matches the Server response header against
    server_pattern. The header value is the label.
    """

    server_pattern = ""

    def __init__(self, timeout: float = DEFAULT_PREDICT_TIMEOUT):
        self.timeout = timeout
        self._pattern = re.compile(self.server_pattern, re.IGNORECASE)

    def fetch_server_header(self, host_port: str, timeout: Optional[float] = None, connector=None) -> Optional[str]:
        if timeout is None:
            timeout = self.timeout
        try:
            host, _ = split_host_port(host_port)
        except ValueError:
            return None

        with open_connection(host_port, timeout, connector or connect) as sock:
            if sock is None:
                return None
            req = f"HEAD / HTTP/1.1\r\nHost: {host_header(host)}\r\nConnection: close\r\n\r\n"
            try:
                sock.sendall(req.encode())
            except OSError as e:
                logger.debug("%r: send to %s failed: %s", self, host_port, e)
                return None
            response = _read_headers(sock, timeout)

        return parse_server_header(response)

    def predict(self, host_port: str, timeout: Optional[float] = None, connector=None) -> Optional[str]:
        server = self.fetch_server_header(host_port, timeout, connector)
        if server and self._pattern.search(server):
            return server
        return None


class ApachePredictor(HTTPServerPredictor):
    server_pattern = r"apache"


class NginxPredictor(HTTPServerPredictor):
    server_pattern = r"nginx"
