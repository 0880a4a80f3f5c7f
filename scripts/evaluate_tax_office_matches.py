#!/usr/bin/env python3
"""
Evaluate tax office resolution against labelled locality cases.

Each case is a locality string and the expected office code (empty means
"no match expected"). Reports pass/fail per case and overall accuracy.

Usage:
  python scripts/evaluate_tax_office_matches.py
  python scripts/evaluate_tax_office_matches.py --reference data/ugd.csv
  python scripts/evaluate_tax_office_matches.py --cases data/my_cases.csv --json results.json
  python scripts/evaluate_tax_office_matches.py --log-to-file   # Debug traces in logs/
"""

import argparse
import csv
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from tqdm import tqdm

load_dotenv()

from tax_office_resolver.cli.logging import print_section_header, setup_logging
from tax_office_resolver.config import get_data_dir, get_reference_table_path, get_settings
from tax_office_resolver.reference.loader import load_reference_table
from tax_office_resolver.resolution.resolver import TaxOfficeResolver


def load_cases(filepath: Path) -> list[dict]:
    """Load evaluation cases (input, expected_code)."""
    if not filepath.exists():
        raise FileNotFoundError(f"{filepath} not found")

    with open(filepath, encoding="utf-8") as f:
        return list(csv.DictReader(f))


def evaluate(resolver: TaxOfficeResolver, cases: list[dict]) -> dict:
    """Run every case through the resolver."""
    results = []
    for case in tqdm(cases, desc="Resolving", unit="case"):
        expected = (case.get("expected_code") or "").strip() or None
        details = resolver.resolve_with_details(case["input"])
        actual = details.record.code if details.record else None
        results.append(
            {
                "input": case["input"],
                "expected_code": expected,
                "actual_code": actual,
                "passed": actual == expected,
                "details": details.to_dict(),
            }
        )

    passed = sum(1 for r in results if r["passed"])
    total = len(results)
    return {
        "passed": passed,
        "total": total,
        "accuracy": passed / total if total > 0 else 0,
        "results": results,
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate tax office resolution")
    parser.add_argument(
        "--reference",
        type=Path,
        default=None,
        help="Reference CSV (default: UGD_REFERENCE_PATH or data/ugd.csv)",
    )
    parser.add_argument(
        "--cases",
        type=Path,
        default=get_data_dir() / "ugd_evaluation_cases.csv",
        help="Cases CSV with input,expected_code columns",
    )
    parser.add_argument("--json", type=Path, default=None, help="Write results as JSON")
    parser.add_argument(
        "--log-to-file",
        action="store_true",
        help="Also write DEBUG logs (scoring traces) to logs/",
    )
    args = parser.parse_args()

    logger = setup_logging("evaluate_tax_office_matches", log_to_file=args.log_to_file)
    print_section_header("Tax Office Resolution Evaluation", logger)

    settings = get_settings()
    reference_path = args.reference or get_reference_table_path(settings)
    table = load_reference_table(reference_path)
    if table.is_empty:
        logger.error(f"No reference data loaded from {reference_path}")
        sys.exit(1)

    resolver = TaxOfficeResolver(
        table,
        min_confidence=settings.ugd_min_confidence,
        score_floor=settings.ugd_candidate_floor,
        top_candidates=settings.ugd_top_candidates,
    )
    summary = evaluate(resolver, load_cases(args.cases))

    for result in summary["results"]:
        status = "PASSED" if result["passed"] else "FAILED"
        logger.info(
            f"{status}: '{result['input']}' -> expected {result['expected_code']}, "
            f"got {result['actual_code']}"
        )

    logger.info("")
    logger.info(
        f"Accuracy: {summary['passed']}/{summary['total']} ({summary['accuracy']:.1%})"
    )

    if args.json:
        with open(args.json, "w", encoding="utf-8") as f:
            json.dump(summary, f, ensure_ascii=False, indent=2)
        logger.info(f"Results written to {args.json}")


if __name__ == "__main__":
    main()
