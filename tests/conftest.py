import random
import socket
import threading

import pytest

from portscanner.connector import connect


class LocalServer:
    """
    Listening TCP socket on 127.0.0.1 served from a background thread.
    handler(conn, stop_event) runs once per accepted connection.
    """

    def __init__(self, handler=None, port=0):
        self.handler = handler
        self.stop = threading.Event()
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.sock.bind(("127.0.0.1", port))
        self.sock.listen(128)
        self.sock.settimeout(0.1)
        self.port = self.sock.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    @property
    def host_port(self):
        return f"127.0.0.1:{self.port}"

    def _serve(self):
        while not self.stop.is_set():
            try:
                conn, _ = self.sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            threading.Thread(target=self._handle, args=(conn,), daemon=True).start()

    def _handle(self, conn):
        with conn:
            if self.handler is not None:
                try:
                    self.handler(conn, self.stop)
                except OSError:
                    pass

    def close(self):
        self.stop.set()
        self._thread.join(timeout=2)
        self.sock.close()


@pytest.fixture
def local_server():
    servers = []

    def factory(handler=None, port=0):
        server = LocalServer(handler, port)
        servers.append(server)
        return server

    yield factory
    for server in servers:
        server.close()


@pytest.fixture
def closed_port():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port


@pytest.fixture
def port_block(local_server):
    """
    Ten consecutive high ports with listeners on base+2 and base+5.
    Returns (base, {open ports}).
    """
    for _ in range(50):
        base = random.randint(20000, 30000)
        try:
            a = local_server(port=base + 2)
            b = local_server(port=base + 5)
        except OSError:
            continue
        return base, {a.port, b.port}
    pytest.skip("no free port block on 127.0.0.1")


def redirecting_connector(mapping, calls=None):
    """Connector that dials mapping[host_port] in place of host_port."""

    def connector(host_port, timeout):
        if calls is not None:
            calls.append(host_port)
        return connect(mapping.get(host_port, host_port), timeout)

    return connector


def http_handler(server_header):
    def handler(conn, stop):
        data = b""
        conn.settimeout(2)
        while b"\r\n\r\n" not in data:
            chunk = conn.recv(1024)
            if not chunk:
                return
            data += chunk
        head = "HTTP/1.1 200 OK\r\n"
        if server_header:
            head += f"Server: {server_header}\r\n"
        head += "Content-Length: 0\r\nConnection: close\r\n\r\n"
        conn.sendall(head.encode())

    return handler
