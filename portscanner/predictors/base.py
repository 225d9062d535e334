from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class Predictor(ABC):
    """
    An active fingerprinting strategy for one kind of service.

    predict() connects to host_port itself and returns a label when it
    recognises the service, or None / "" when it does not. Network failures
    must be reported as no match, never raised.

    The scanner passes its own timeout and connector; None means the
    predictor's defaults.
    """

    @abstractmethod
    def predict(self, host_port: str, timeout: Optional[float] = None, connector=None) -> Optional[str]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
