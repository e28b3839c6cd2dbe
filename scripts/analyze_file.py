#!/usr/bin/env python3
"""Analyze a local transcript file and print summary and action items as JSON.

Usage (from repo root):
    python scripts/analyze_file.py sample_data/transcript1.txt
    python scripts/analyze_file.py sample_data/transcript1.txt --enhance --out result.json
"""
import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from app.core.config import settings
from app.ingest.worker import run_analysis


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Summarize a transcript and extract action items.")
    parser.add_argument("path", type=Path, help="UTF-8 transcript file, one utterance per line")
    parser.add_argument("--enhance", action="store_true", help="annotate short key points and add a dated header")
    parser.add_argument("--out", type=Path, help="write JSON here instead of stdout")
    args = parser.parse_args(argv)

    if not args.path.exists():
        print(f"Error: Input file not found: {args.path}", file=sys.stderr)
        return 1

    content = args.path.read_bytes()
    if len(content) > settings.max_transcript_kb * 1024:
        print(f"Error: {args.path} exceeds {settings.max_transcript_kb} KB", file=sys.stderr)
        return 1

    result = run_analysis(content.decode("utf-8", errors="replace"), enhance=args.enhance)
    output = result.model_dump_json(indent=2)

    if args.out:
        args.out.write_text(output + "\n", encoding="utf-8")
        print(f"Saved analysis to: {args.out}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
