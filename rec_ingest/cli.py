# rec_ingest/cli.py
"""
Batch runner for the recommendation ingestion pipeline.
Runs one ingestion without starting FastAPI.

- Prints a per-source summary, or writes the full snapshot JSON with --out
- --seed makes the fallback shuffle reproducible
- Exit code is 0 for both READY and DEGRADED; a fallback is not a failure
"""

from __future__ import annotations
import argparse
import asyncio
import json
import random
import sys
from pathlib import Path

from loguru import logger

from rec_ingest.config import COLLABORATIVE_SOURCE, CONTENT_BASED_SOURCE, RecommendationSnapshot
from rec_ingest.ingest import run_ingestion


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def write_snapshot(snapshot: RecommendationSnapshot, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = snapshot.model_dump(mode="json", by_alias=True)
    out_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def summarize(snapshot: RecommendationSnapshot) -> str:
    lines = [
        f"State: {snapshot.state.value}",
        f"Content ids: {len(snapshot.content_ids)}",
        f"Collaborative lists: {len(snapshot.collaborative_recommendations)}",
        f"Content-based lists: {len(snapshot.content_based_recommendations)}",
    ]
    if snapshot.error:
        lines.append(f"Error: {snapshot.error}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Ingest collaborative and content-based recommendation exports")
    ap.add_argument("--collaborative", default=COLLABORATIVE_SOURCE, help="collaborative export URL or path")
    ap.add_argument("--content-based", dest="content_based", default=CONTENT_BASED_SOURCE,
                    help="content-based export URL or path")
    ap.add_argument("--out", dest="out", type=str, default=None, help="optional snapshot JSON output file")
    ap.add_argument("--seed", type=int, default=None, help="seed for the fallback shuffle")
    ap.add_argument("--log-level", dest="log_level", default="INFO", help="loguru level (default INFO)")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    rng = random.Random(args.seed) if args.seed is not None else None
    snapshot = asyncio.run(run_ingestion(args.collaborative, args.content_based, rng=rng))

    print(summarize(snapshot))
    if args.out:
        out = Path(args.out)
        write_snapshot(snapshot, out)
        print(f"Wrote snapshot to {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
