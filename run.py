#!/usr/bin/env python3
"""
Inventory extraction pipeline - CLI entry point.

Usage:
  python run.py --text "five bottles of wine and three cases of beer" --catalog products.json
  python run.py --input transcript.txt --catalog products.csv --output result.json
  python run.py --input invoice_ocr.txt --catalog products.json --review-threshold 0.8

Reads a transcript or OCR'd invoice text, matches the extracted line items against the
catalog, and prints (or writes) the structured JSON result.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from inventory_pipeline.catalog import CatalogError, FileCatalog
from inventory_pipeline.config import PipelineSettings, get_settings
from inventory_pipeline.logging_config import configure_logging
from inventory_pipeline.pipeline import process_text
from inventory_pipeline.review import suggest_review_actions


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract inventory line items from text and match them against a product catalog."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        "-i",
        type=str,
        help="Text file containing a transcript or OCR'd invoice",
    )
    source.add_argument(
        "--text",
        "-t",
        type=str,
        help="Transcript text given inline",
    )
    parser.add_argument(
        "--catalog",
        "-c",
        type=str,
        required=True,
        help="Product catalog file (JSON list or CSV with id,name,unit,price)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Write the structured JSON result to this file instead of stdout",
    )
    parser.add_argument(
        "--match-threshold",
        type=float,
        default=None,
        help="Minimum similarity to accept a catalog match (default: INVENTORY_MATCH_THRESHOLD or 0.5)",
    )
    parser.add_argument(
        "--review-threshold",
        type=float,
        default=None,
        help="Flag matches below this confidence for review (default: INVENTORY_REVIEW_THRESHOLD or 0.7)",
    )
    parser.add_argument(
        "--suggest-actions",
        action="store_true",
        help="Include suggested reviewer actions for flagged items",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines on stderr",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level, json=args.json_logs or settings.log_json)

    try:
        thresholds = PipelineSettings(
            match_threshold=settings.match_threshold if args.match_threshold is None else args.match_threshold,
            review_threshold=settings.review_threshold if args.review_threshold is None else args.review_threshold,
        )
    except ValidationError as e:
        print(f"Invalid threshold: {e}", file=sys.stderr)
        return 1

    if args.input:
        input_path = Path(args.input)
        if not input_path.exists():
            print(f"Input file not found: {input_path.absolute()}", file=sys.stderr)
            return 1
        text = input_path.read_text(encoding="utf-8")
    else:
        text = args.text

    try:
        result = process_text(
            text,
            FileCatalog(args.catalog),
            match_threshold=thresholds.match_threshold,
            review_threshold=thresholds.review_threshold,
        )
    except CatalogError as e:
        print(f"Catalog error: {e}", file=sys.stderr)
        return 1

    payload = result.model_dump()
    if args.suggest_actions:
        payload["review_suggestions"] = [s.model_dump() for s in suggest_review_actions(result.results)]

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        print(f"Output written to: {output_path.absolute()}")
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False))

    print(
        f"Extracted {len(result.results)} item(s): {result.recognized_count} recognized, "
        f"{len(result.needs_review)} need review, {len(result.unmatched)} unmatched",
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
