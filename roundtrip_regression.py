#!/usr/bin/env python3
"""
projectdoc round-trip regression and timing collection

Runs every project document found under the given paths through
parse/serialize, checks that the parsed project survives a round trip and
that canonical text is a fixed point, and records timing statistics.
"""

import argparse
import json
import logging
import statistics
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from projectdoc import parse, serialize

DOCUMENT_SUFFIXES = (".md", ".txt")


class RoundTripRegression:
    """Round-trip regression runner over a set of project documents."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("regression_results")
        self.results: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "python_version": sys.version,
            "documents": [],
            "metrics": {},
            "summary": {},
        }
        self.logger = logging.getLogger("projectdoc.regression")
        self.timings: Dict[str, List[float]] = {"parse": [], "serialize": []}

    def collect_documents(self, paths: Iterable[Path]) -> List[Path]:
        """Expand files and directories into a sorted list of document paths."""
        found = set()
        for path in paths:
            if path.is_dir():
                for suffix in DOCUMENT_SUFFIXES:
                    found.update(path.rglob(f"*{suffix}"))
            elif path.is_file():
                found.add(path)
            else:
                self.logger.warning(f"Skipping missing path: {path}")
        return sorted(found)

    def check_text(self, name: str, text: str) -> Dict[str, Any]:
        """Round-trip one document and report stability and timings."""
        start = time.perf_counter()
        project = parse(text)
        parse_time = time.perf_counter() - start

        start = time.perf_counter()
        canonical = serialize(project)
        serialize_time = time.perf_counter() - start

        self.timings["parse"].append(parse_time)
        self.timings["serialize"].append(serialize_time)

        stable = parse(canonical) == project
        idempotent = serialize(parse(canonical)) == canonical
        success = stable and idempotent

        if success:
            self.logger.info(f"[PASS] {name} ({len(project.tasks)} tasks)")
        else:
            self.logger.error(f"[FAIL] {name}: stable={stable} idempotent={idempotent}")

        return {
            "document": name,
            "success": success,
            "stable": stable,
            "idempotent": idempotent,
            "canonical_changed": canonical != text,
            "counts": {
                "people": len(project.people),
                "timeline": len(project.timeline),
                "tasks": len(project.tasks),
            },
            "parse_duration": parse_time,
            "serialize_duration": serialize_time,
        }

    def run(self, documents: List[Path]) -> Dict[str, Any]:
        started = time.time()
        for path in documents:
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                self.logger.error(f"[FAIL] {path}: could not read ({e})")
                self.results["documents"].append(
                    {"document": str(path), "success": False, "error": str(e)}
                )
                continue
            self.results["documents"].append(self.check_text(str(path), text))

        for operation, samples in self.timings.items():
            if samples:
                self.results["metrics"][f"{operation}_performance"] = {
                    "count": len(samples),
                    "average": statistics.mean(samples),
                    "min": min(samples),
                    "max": max(samples),
                    "std_dev": statistics.stdev(samples) if len(samples) > 1 else 0.0,
                }

        passed = sum(1 for doc in self.results["documents"] if doc.get("success"))
        total = len(self.results["documents"])
        self.results["summary"] = {
            "total_documents": total,
            "passed_documents": passed,
            "failed_documents": total - passed,
            "success_rate": (passed / total) if total else 1.0,
            "total_duration": time.time() - started,
        }
        return self.results

    def save_results(self) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        results_file = self.output_dir / f"roundtrip_{stamp}.json"
        results_file.write_text(json.dumps(self.results, indent=2), encoding="utf-8")
        self.logger.info(f"Results saved: {results_file}")
        return results_file


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for round-trip regression runs."""
    parser = argparse.ArgumentParser(description="projectdoc round-trip regression")
    parser.add_argument("paths", nargs="+", type=Path, help="Documents or directories to check")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("regression_results"),
        help="Output directory for the JSON report",
    )
    parser.add_argument("--no-report", action="store_true", help="Do not write a JSON report")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    runner = RoundTripRegression(args.output_dir)
    runner.run(runner.collect_documents(args.paths))
    if not args.no_report:
        runner.save_results()

    return 0 if runner.results["summary"]["success_rate"] == 1.0 else 1


if __name__ == "__main__":
    sys.exit(main())
