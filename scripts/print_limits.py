#!/usr/bin/env python3
"""Print analysis and API limits (from config and the loaded lexicons). Run from repo root: python scripts/print_limits.py"""
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from app.core.config import settings
from app.lexicons.loader import get_lexicons


def main():
    """Print MAX_TRANSCRIPT_KB, key-point limits, lexicon sizes and the rate limit."""
    lx = get_lexicons()
    print("Analysis & API limits")
    print("---------------------")
    print(f"  MAX_TRANSCRIPT_KB     = {settings.max_transcript_kb} KB (max transcript size)")
    print(f"  MAX_KEY_POINTS        = {settings.max_key_points} (key points per transcript)")
    print(f"  MIN_KEY_POINT_CHARS   = {settings.min_key_point_chars} (shorter points are dropped)")
    print(f"  KEY_POINT_MAX_CHARS   = {settings.key_point_max_chars} (longer points are truncated)")
    print(f"  ENHANCE_MAX_CHARS     = {settings.enhance_max_chars} (shorter points are annotated when enhancing)")
    print(f"  Rate limit            = {settings.rate_limit_requests} requests / {settings.rate_limit_window_seconds} s (per client IP)")
    print("")
    print(f"Lexicons {lx.version}: {len(lx.importance_indicators)} importance words, "
          f"{len(lx.task_keywords)} task keywords, {len(lx.surnames)} surnames")
    print("")
    print("Env: MAX_TRANSCRIPT_KB, MAX_KEY_POINTS, LEXICON_VERSION, ... (see .env.example)")


if __name__ == "__main__":
    main()
