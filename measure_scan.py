"""
Rough timing for the two hot paths: hashing one 64 KB file and scanning a
directory of 100 small files.

Usage: python measure_scan.py [--rounds N] [--workers N]
"""

import argparse
import tempfile
import time
from pathlib import Path

from kushn.core.file_scanner import FileScanner
from kushn.core.hashing import calculate_file_hash


def _time(label: str, func, rounds: int) -> None:
    start = time.perf_counter()
    for _ in range(rounds):
        func()
    elapsed = time.perf_counter() - start
    print(f"{label:<32} {elapsed / rounds * 1e6:10.1f} us/iter  ({rounds} rounds)")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--rounds", type=int, default=200)
    parser.add_argument("--workers", type=int, default=1)
    args = parser.parse_args()

    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)

        sample = root / "sample.bin"
        sample.write_bytes(bytes(64 * 1024))
        _time("calculate_file_hash 64KB", lambda: calculate_file_hash(sample), args.rounds)

        tree = root / "tree"
        tree.mkdir()
        for i in range(100):
            (tree / f"file_{i:03}.txt").write_bytes(b"benchmark data")

        scanner = FileScanner(max_workers=args.workers)
        _time("scan 100 files", lambda: scanner.scan(tree), args.rounds)


if __name__ == "__main__":
    main()
