#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from streamer.core.stream import StreamError
from streamer.integration.config_loader import ConfigLoadError, load_definition
from streamer.integration.simulate import run_simulation


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        description="Run a YAML stream definition through its claim schedule and print a JSON report"
    )
    ap.add_argument("definition", type=str, help="path to the stream definition (.yaml)")
    ap.add_argument("--out", type=str, default="", help="write the report here instead of stdout")
    ap.add_argument("-v", "--verbose", action="store_true", help="log every operation")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        report = run_simulation(load_definition(args.definition))
    except (ConfigLoadError, StreamError, KeyError) as exc:
        print(f"[stream-sim] FAIL: {exc}", file=sys.stderr)
        return 1

    text = json.dumps(report, indent=2, sort_keys=True)
    if args.out:
        Path(args.out).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
