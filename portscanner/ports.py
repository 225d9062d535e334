from __future__ import annotations

from typing import Tuple

MIN_PORT = 1
MAX_PORT = 65535


def parse_port_range(spec: str) -> Tuple[int, int]:
    """
    Parses a port specification string into an inclusive (start, end) range.
    Supports:
    - Single port: "80"
    - Range: "1-1024"
    """
    spec = spec.strip()
    if not spec:
        raise ValueError("Empty port spec")

    try:
        if "-" in spec:
            start_s, end_s = spec.split("-", 1)
            start, end = int(start_s), int(end_s)
        else:
            start = end = int(spec)
    except ValueError:
        raise ValueError(f"Invalid port spec: {spec}") from None

    if start < MIN_PORT or end > MAX_PORT or start > end:
        raise ValueError(f"Invalid port range: {spec}")
    return start, end
