#!/usr/bin/env python3
"""
Verify that the development environment is ready.

Usage (from project root):
    python scripts/verify_setup.py
    python scripts/verify_setup.py --health-url http://localhost:8000/health
"""

import argparse
import sys
from itertools import groupby
from pathlib import Path

# Add parent directory to path so we can import app modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.logging import configure_logging
from app.devops.environment import all_passed, verify_setup


def main() -> int:
    parser = argparse.ArgumentParser(description="Setup verification")
    parser.add_argument("--root", type=Path, default=Path.cwd(), help="Project root (default: current directory)")
    parser.add_argument("--health-url", default=None, help="Also check that the API answers on this URL")
    args = parser.parse_args()

    configure_logging("WARNING")

    checks = verify_setup(args.root, health_url=args.health_url)
    for category, items in groupby(checks, key=lambda check: check.category):
        print(f"\n{category.title()}:")
        for check in items:
            mark = "OK " if check.ok else ("!! " if check.required else "?? ")
            print(f"  {mark}{check.name}")
            if check.hint and not check.ok:
                print(f"      {check.hint}")

    if all_passed(checks):
        print("\nAll checks passed! Your environment is ready for development.")
        return 0
    print("\nSome checks failed. Please resolve the issues above.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
