from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .predictors import Predictor, default_predictors


def check_threads(threads: int) -> int:
    if threads < 1:
        raise ValueError(f"threads must be >= 1, got {threads}")
    return threads


def check_timeout(timeout: Optional[float]) -> Optional[float]:
    # None means blocking connect; 0 would make the socket non-blocking
    if timeout is not None and timeout <= 0:
        raise ValueError(f"timeout must be > 0 or None, got {timeout}")
    return timeout


@dataclass
class ScannerConfig:
    host: str
    timeout: Optional[float]
    threads: int
    use_predictor: bool = True
    predictors: List[Predictor] = field(default_factory=default_predictors)

    def __post_init__(self) -> None:
        check_threads(self.threads)
        check_timeout(self.timeout)


@dataclass(frozen=True)
class PortReport:
    host: str
    port: int
    service: str
