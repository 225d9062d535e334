from .connector import ConnectFailure, connect
from .known_ports import KNOWN_PORTS, UNKNOWN
from .models import PortReport, ScannerConfig
from .predictors import ApachePredictor, NginxPredictor, Predictor
from .scanner import PortScanner

__all__ = [
    "ApachePredictor",
    "ConnectFailure",
    "KNOWN_PORTS",
    "NginxPredictor",
    "PortReport",
    "PortScanner",
    "Predictor",
    "ScannerConfig",
    "UNKNOWN",
    "connect",
]
