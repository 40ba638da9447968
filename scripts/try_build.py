#!/usr/bin/env python3
"""
Generate a build from a free-text request and print the result.
Calls the live oracle and the live reference datasets.

  export OPENAI_API_KEY=your-openai-api-key-here
  python3 scripts/try_build.py "Make me a 6'2 point guard sharpshooter"
  python3 scripts/try_build.py --find "two-way slasher at small forward"
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure project root on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from buildlab.creator import create_build
from buildlab.finder import find_build


def main() -> int:
    parser = argparse.ArgumentParser(description="Recommend a build from a playstyle description.")
    parser.add_argument("prompt", help="e.g. \"Make me a 6'2 point guard sharpshooter\"")
    parser.add_argument("--find", action="store_true", help="Match an existing build instead of generating one")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline steps")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    out = find_build(args.prompt) if args.find else create_build(args.prompt)
    print(json.dumps(out, indent=2))
    if "error" in out:
        return 1
    build = out["build"]
    if not args.find:
        print(f"\n{build['buildName']} - {build['position']} - overall {build['overall']}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
