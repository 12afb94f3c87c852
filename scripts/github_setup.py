#!/usr/bin/env python3
"""
Create the GitHub repository for this project and push it.

Requires git and an authenticated GitHub CLI (gh auth login).

Usage (from project root):
    python scripts/github_setup.py [username] [repo-name]
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path so we can import app modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.logging import configure_logging
from app.devops.github import DEFAULT_REPO_NAME, GitHubBootstrap, resolve_username


def main() -> int:
    parser = argparse.ArgumentParser(description="GitHub setup helper")
    parser.add_argument("username", nargs="?", default=None, help="GitHub user or org (default: gh's logged-in user)")
    parser.add_argument("repo_name", nargs="?", default=DEFAULT_REPO_NAME)
    args = parser.parse_args()

    configure_logging("INFO")

    setup = GitHubBootstrap(args.username or resolve_username(), args.repo_name)
    print(f"Setting up repository: {setup.full_name}\n")

    report = setup.run()
    for step in report.steps:
        mark = "OK " if step.ok else "!! "
        print(f"  {mark}{step.name}" + (f" - {step.message}" if step.message else ""))

    if report.aborted:
        print("\nPre-flight checks failed. Please resolve the issues above.")
        return 1

    print("\nNext steps:")
    for number, line in enumerate(setup.next_steps(), start=1):
        print(f"  {number}. {line}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
