#!/usr/bin/env python3
"""
Prepare a local development environment.

Checks the tools the project needs, lists the GitHub secrets the CI
workflows can use and writes .env.example / .env.

Usage (from project root):
    python scripts/devops_setup.py
    python scripts/devops_setup.py --overwrite-example
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path so we can import app modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.logging import configure_logging
from app.devops.environment import GITHUB_SECRETS, check_prerequisites, write_env_files


def main() -> int:
    parser = argparse.ArgumentParser(description="Local environment setup")
    parser.add_argument("--root", type=Path, default=Path.cwd(), help="Project root (default: current directory)")
    parser.add_argument("--overwrite-example", action="store_true", help="Rewrite .env.example even if it exists")
    args = parser.parse_args()

    configure_logging("WARNING")

    print("Checking prerequisites...\n")
    for result in check_prerequisites():
        mark = "OK " if result.ok else "!! "
        print(f"  {mark}{result.name}: {result.version or 'not installed or not in PATH'}")

    print("\nGitHub secrets (Repository -> Settings -> Secrets and variables -> Actions):\n")
    for secret in GITHUB_SECRETS:
        status = "[REQUIRED]" if secret.required else "[OPTIONAL]"
        print(f"  {status} {secret.name}")
        print(f"      {secret.description}")

    print("\nCreating environment files...\n")
    written = write_env_files(args.root, overwrite=args.overwrite_example)
    if written:
        for path in written:
            print(f"  created {path}")
    else:
        print("  nothing to do, .env.example and .env already exist")

    print("\nNext steps:")
    print('  1. pip install -e ".[test]"')
    print("  2. python scripts/verify_setup.py")
    print("  3. uvicorn app.main:app --reload")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
