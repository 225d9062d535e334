from __future__ import annotations

import argparse
import logging

from .output import print_results, save_results
from .ports import parse_port_range
from .scanner import DEFAULT_THREADS, DEFAULT_TIMEOUT, PortScanner


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="TCP port scanner with service identification")
    p.add_argument("--target", required=True, help="Hostname or IP address")
    p.add_argument("--ports", default="1-1024", help="Port range: 80 or 1-1024 (default: 1-1024)")
    p.add_argument("--threads", type=int, default=DEFAULT_THREADS,
                   help=f"Concurrent probes (default: {DEFAULT_THREADS})")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                   help=f"Connect timeout seconds (default: {DEFAULT_TIMEOUT})")
    p.add_argument("--no-predict", action="store_true",
                   help="Only use the known-port table, no active probing")
    p.add_argument("--format", choices=["txt", "csv", "json"], help="Save results to file")
    p.add_argument("--out-dir", default="SCANS", help="Output directory for saved files")
    p.add_argument("--progress-every", type=int, default=1000, help="Progress update interval (default: 1000)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        start, end = parse_port_range(args.ports)
    except ValueError as e:
        parser.error(str(e))

    if args.threads < 1:
        raise SystemExit("--threads must be >= 1")
    if args.timeout <= 0:
        raise SystemExit("--timeout must be > 0")

    scanner = PortScanner(args.target, timeout=args.timeout, threads=args.threads)
    scanner.toggle_predictor(not args.no_predict)

    print(f"[*] Target: {args.target} | Ports: {start}-{end} | Threads: {args.threads}")
    results = scanner.scan(start, end, progress_every=args.progress_every)

    print_results(results)

    if args.format:
        path = save_results(results, fmt=args.format, out_dir=args.out_dir)
        print(f"Saved results to {path}")

    return 0
