#!/usr/bin/env python3
"""Split OCR'd diary text into per-day segments.

A line consisting only of a date ("March 4, 2024", "Mar 4", "3/4/24") starts a
new segment. Text before the first date header gets --fallback-date.

Usage:
  PYTHONPATH=. python3 scripts/segment_text.py page.txt --fallback-date 2024-05-01
  cat page.txt | PYTHONPATH=. python3 scripts/segment_text.py - --format md
  PYTHONPATH=. python3 scripts/segment_text.py pages/*.txt --out-dir ./segments
"""

from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path

from diary_reader.date.types import Segment
from diary_reader.segment import segment_diary_text

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def render_json(segments: list[Segment]) -> str:
    return json.dumps([s.to_record() for s in segments], ensure_ascii=False, indent=2) + "\n"


def render_md(segments: list[Segment], title: str) -> str:
    parts: list[str] = [f"# {title}\n"]
    for s in segments:
        parts.append(f"\n## {s.index}: {s.date or '(undated)'}\n")
        parts.append(s.text.rstrip() + "\n")
    return "\n".join(parts).strip() + "\n"


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("inputs", nargs="+", help="Text file(s), or - for stdin")
    ap.add_argument("--fallback-date", default=None, help="YYYY-MM-DD for text before the first date header")
    ap.add_argument("--format", choices=["json", "md"], default="json")
    ap.add_argument("--out-dir", default=None, help="Write <name>.segments.<fmt> here instead of stdout")
    args = ap.parse_args()

    if args.fallback_date and not ISO_DATE_RE.match(args.fallback_date):
        raise SystemExit(f"--fallback-date must be YYYY-MM-DD, got {args.fallback_date!r}")

    out_dir = Path(args.out_dir).expanduser().resolve() if args.out_dir else None
    if out_dir:
        out_dir.mkdir(parents=True, exist_ok=True)

    for inp in args.inputs:
        if inp == "-":
            name = "stdin"
            text = sys.stdin.read()
        else:
            p = Path(inp).expanduser().resolve()
            if not p.exists():
                print(f"Missing: {p}", file=sys.stderr)
                continue
            name = p.stem
            text = p.read_text(encoding="utf-8", errors="replace")

        segments = segment_diary_text(text, args.fallback_date)
        rendered = render_json(segments) if args.format == "json" else render_md(segments, name)

        if not out_dir:
            sys.stdout.write(rendered)
            continue

        out_path = out_dir / f"{name}.segments.{args.format}"
        out_path.write_text(rendered, encoding="utf-8")
        if segments:
            print(f"OK: wrote {out_path} ({len(segments)} segments)")
        else:
            print(f"WARN: wrote {out_path} (no text)")


if __name__ == "__main__":
    main()
