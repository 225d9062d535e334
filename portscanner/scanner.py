from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Set

from . import identify
from .connector import connect, is_reachable, join_host_port
from .known_ports import lookup
from .models import PortReport, ScannerConfig, check_threads, check_timeout
from .predictors import Predictor

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 1.0
DEFAULT_THREADS = 100


class PortScanner:
    """
    TCP connect scanner for a single host.

    Open ports are found with get_opened_ports(); each one can then be
    labelled with describe_port(), which combines the static port table,
    the registered predictors and the MySQL greeting read.
    """

    def __init__(
        self,
        host: str,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        threads: int = DEFAULT_THREADS,
        connector=connect,
    ):
        self._config = ScannerConfig(host=host, timeout=timeout, threads=threads)
        self._connector = connector

    @property
    def config(self) -> ScannerConfig:
        return self._config

    def toggle_predictor(self, use_predictor: bool) -> None:
        self._config.use_predictor = use_predictor

    def set_threads(self, threads: int) -> None:
        self._config.threads = check_threads(threads)

    def set_timeout(self, timeout: Optional[float]) -> None:
        self._config.timeout = check_timeout(timeout)

    def register_predictor(self, predictor: Predictor) -> None:
        if any(p is predictor for p in self._config.predictors):
            return
        self._config.predictors.append(predictor)

    def host_port(self, port: int) -> str:
        return join_host_port(self._config.host, port)

    def is_open(self, port: int) -> bool:
        return is_reachable(self.host_port(port), self._config.timeout, self._connector)

    def get_opened_ports(self, start: int, end: int, progress_every: int = 0) -> Set[int]:
        """
        Probe every port in [start, end] and return the ones that accept a
        connection. At most config.threads probes are in flight at once.
        """
        threads = self._config.threads
        gate = threading.BoundedSemaphore(threads)
        lock = threading.Lock()
        open_ports: Set[int] = set()
        total = max(end - start + 1, 0)
        scanned = 0
        start_all = time.perf_counter()

        def probe(port: int) -> None:
            nonlocal scanned
            try:
                found = self.is_open(port)
            except Exception:
                logger.exception("probe of port %d failed", port)
                found = False
            finally:
                gate.release()

            with lock:
                if found:
                    open_ports.add(port)
                scanned += 1
                done = scanned
                open_count = len(open_ports)

            if progress_every > 0 and (done % progress_every == 0 or done == total):
                elapsed = time.perf_counter() - start_all
                rate = done / elapsed if elapsed > 0 else 0.0
                print(
                    f"\r[*] Scanned {done}/{total} | open={open_count} | {rate:.0f} scans/s",
                    end="",
                    flush=True,
                )

        logger.debug("scanning %s ports %d-%d with %d threads", self._config.host, start, end, threads)
        with ThreadPoolExecutor(max_workers=threads) as pool:
            for port in range(start, end + 1):
                gate.acquire()
                try:
                    pool.submit(probe, port)
                except BaseException:
                    gate.release()
                    raise

        if progress_every > 0 and total:
            print()  # newline after progress
        logger.debug("found %d open ports on %s", len(open_ports), self._config.host)
        return open_ports

    def predict_port(self, port: int) -> str:
        return lookup(port)

    def is_http(self, port: int) -> bool:
        return identify.is_http(port)

    def predict_using_predictors(self, host_port: str) -> str:
        return identify.predict_using_predictors(
            self._config.predictors, host_port, self._config.timeout, self._connector
        )

    def describe_port(self, port: int) -> str:
        return identify.describe_port(self._config, port, self._connector)

    def scan(self, start: int, end: int, progress_every: int = 0) -> List[PortReport]:
        """Find open ports in [start, end] and describe each, sorted by port."""
        open_ports = self.get_opened_ports(start, end, progress_every=progress_every)
        return [
            PortReport(host=self._config.host, port=port, service=self.describe_port(port))
            for port in sorted(open_ports)
        ]
