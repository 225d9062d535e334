from __future__ import annotations

import csv
import json
import os
from datetime import datetime
from typing import List

from .models import PortReport


def format_row(r: PortReport) -> str:
    return f"Port {r.port}: open | Service: {r.service}"


def print_results(results: List[PortReport]) -> None:
    print(f"Found {len(results)} open ports")

    for r in sorted(results, key=lambda x: x.port):
        print(format_row(r))


def save_results(results: List[PortReport], fmt: str, out_dir: str = "SCANS") -> str:
    os.makedirs(out_dir, exist_ok=True)
    ts = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    path = os.path.join(out_dir, f"{ts}_port_scan.{fmt}")

    rows = sorted(results, key=lambda x: x.port)

    if fmt == "txt":
        with open(path, "w", encoding="utf-8") as f:
            f.write(f"Found {len(rows)} open ports\n")
            for r in rows:
                f.write(format_row(r) + "\n")

    elif fmt == "csv":
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["host", "port", "service"])
            for r in rows:
                w.writerow([r.host, r.port, r.service])

    elif fmt == "json":
        payload = [{"host": r.host, "port": r.port, "service": r.service} for r in rows]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    else:
        raise ValueError(f"Unsupported format: {fmt}")

    return path
