#!/usr/bin/env python3
"""OCR scanned diary pages and split each page into dated segments.

Usage:
  PYTHONPATH=. python3 scripts/scan_to_segments.py scan1.jpg [scan2.png ...] --out-dir ./out \
    --engine openai --entry-date 2024-05-01

Outputs per scan:
  <out-dir>/<slug>/page.txt       raw OCR text
  <out-dir>/<slug>/segments.json  page metadata + segments

Env:
  openai: OPENAI_API_KEY (optional OPENAI_OCR_MODEL, OPENAI_BASE_URL)
  azure:  AZURE_VISION_ENDPOINT, AZURE_VISION_KEY
  (or put them in .env)
"""

from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path

from diary_reader.ingest import ingest_scan, load_scan
from diary_reader.ocr.registry import build_engine


def slug(s: str) -> str:
    s = s.strip().lower()
    s = re.sub(r"[^a-z0-9]+", "-", s)
    s = re.sub(r"-+", "-", s).strip("-")
    return s or "page"


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("inputs", nargs="+", help="Scanned page image(s)")
    ap.add_argument("--out-dir", default="./out", help="Output directory")
    ap.add_argument("--engine", default="openai", help="OCR engine: openai|azure (default: openai)")
    ap.add_argument("--openai-model", default=None, help="Vision model (default: $OPENAI_OCR_MODEL or gpt-4o-mini)")
    ap.add_argument("--azure-language", default="en", help="Azure Read language hint (default: en)")
    ap.add_argument("--timeout", type=int, default=180, help="OCR request timeout seconds (default: 180)")
    ap.add_argument("--entry-date", default=None, help="YYYY-MM-DD fallback for undated text")
    ap.add_argument("--page-number", type=int, default=None, help="Page number (only with a single input)")
    args = ap.parse_args()

    if args.page_number is not None and len(args.inputs) > 1:
        raise SystemExit("--page-number only makes sense with a single input")

    out_dir = Path(args.out_dir).resolve()
    out_dir.mkdir(parents=True, exist_ok=True)

    try:
        engine = build_engine(
            args.engine,
            openai_model=args.openai_model,
            azure_language=args.azure_language,
            timeout_s=args.timeout,
        )
    except (RuntimeError, ValueError) as e:
        raise SystemExit(str(e))

    for inp in args.inputs:
        path = Path(inp).expanduser().resolve()
        try:
            page = load_scan(path, entry_date=args.entry_date, page_number=args.page_number)
        except (FileNotFoundError, ValueError) as e:
            print(f"Skipped: {e}", file=sys.stderr)
            continue

        result = ingest_scan(page, engine)

        doc_out = out_dir / slug(path.stem)
        doc_out.mkdir(parents=True, exist_ok=True)
        (doc_out / "page.txt").write_text(result.raw_text, encoding="utf-8")
        seg_path = doc_out / "segments.json"
        seg_path.write_text(json.dumps(result.to_record(), ensure_ascii=False, indent=2) + "\n", encoding="utf-8")

        if result.segments:
            print(f"OK: {path.name} -> {seg_path} ({len(result.segments)} segments)")
        else:
            print(f"WARN: {path.name} -> {seg_path} (OCR returned no text)")


if __name__ == "__main__":
    main()
