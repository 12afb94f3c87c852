"""
Local environment setup and verification.

Used by ``scripts/devops_setup.py`` and ``scripts/verify_setup.py``:
checks that the tools the project relies on are installed, writes the
``.env.example`` / ``.env`` pair, and verifies the project layout.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import httpx

from app.devops.commands import Runner, run_command

logger = logging.getLogger(__name__)

MIN_PYTHON = (3, 11)


@dataclass
class PrerequisiteResult:
    name: str
    ok: bool
    version: Optional[str] = None


@dataclass
class CheckResult:
    category: str
    name: str
    ok: bool
    hint: Optional[str] = None
    # Warnings are reported but do not fail the overall verification
    required: bool = True


@dataclass
class GitHubSecret:
    name: str
    description: str
    required: bool = False


PREREQUISITES: Tuple[Tuple[str, Sequence[str]], ...] = (
    ("Python", (sys.executable, "--version")),
    ("pip", (sys.executable, "-m", "pip", "--version")),
    ("Git", ("git", "--version")),
    ("Docker", ("docker", "--version")),
    ("Docker Compose", ("docker", "compose", "version")),
)

GITHUB_SECRETS: Tuple[GitHubSecret, ...] = (
    GitHubSecret("CODECOV_TOKEN", "Token for code coverage reporting (get from codecov.io)"),
    GitHubSecret("SNYK_TOKEN", "Token for Snyk security scanning (get from snyk.io)"),
    GitHubSecret("SLACK_WEBHOOK_URL", "Slack webhook URL for notifications"),
)

REQUIRED_PACKAGES = (
    "fastapi",
    "uvicorn",
    "sqlalchemy",
    "aiosqlite",
    "pydantic_settings",
    "jinja2",
    "httpx",
)

BACKEND_ENV_TEMPLATE = """\
# Backend environment variables
APP_NAME="Todo App"
DEBUG=false
LOG_LEVEL=INFO

# SQLite file used by the API (created on first start)
DATABASE_URL=sqlite+aiosqlite:///./data/todos.db

# Origins allowed to call the API from a browser (JSON list)
CORS_ORIGINS=["http://localhost:3000","http://localhost:5173"]
"""

TEST_ENV_TEMPLATE = """\
# Test environment variables
APP_NAME="Todo App (test)"
TESTING=true
LOG_LEVEL=WARNING
"""

ENV_TEMPLATES = {
    "backend": BACKEND_ENV_TEMPLATE,
    "test": TEST_ENV_TEMPLATE,
}


def check_prerequisites(runner: Runner = run_command) -> List[PrerequisiteResult]:
    """Run ``--version`` for each tool; a missing tool is reported, not raised."""
    results = []
    for name, command in PREREQUISITES:
        outcome = runner(command)
        version = outcome.output or outcome.stderr.strip() or None
        results.append(PrerequisiteResult(name, outcome.ok, version if outcome.ok else None))
        if not outcome.ok:
            logger.warning("%s: not installed or not in PATH", name)
    return results


def render_env_file(kind: str = "backend") -> str:
    try:
        return ENV_TEMPLATES[kind]
    except KeyError:
        raise ValueError(f"Unknown env file kind {kind!r}; expected one of {sorted(ENV_TEMPLATES)}") from None


def write_env_files(root: Path, overwrite: bool = False) -> List[Path]:
    """
    Write ``.env.example`` and, if missing, ``.env`` under ``root``.

    ``.env.example`` is refreshed when ``overwrite`` is set; an existing
    ``.env`` is never touched since it may hold local secrets.
    Returns the paths that were written.
    """
    root = Path(root)
    content = render_env_file("backend")
    written = []

    example = root / ".env.example"
    if overwrite or not example.exists():
        example.write_text(content, encoding="utf-8")
        written.append(example)

    env = root / ".env"
    if not env.exists():
        env.write_text(content, encoding="utf-8")
        written.append(env)

    for path in written:
        logger.info("Created %s", path)
    return written


def _python_version_check() -> CheckResult:
    ok = sys.version_info[:2] >= MIN_PYTHON
    wanted = ".".join(str(part) for part in MIN_PYTHON)
    current = ".".join(str(part) for part in sys.version_info[:3])
    return CheckResult(
        "system",
        f"Python {current} (>= {wanted})",
        ok,
        hint=None if ok else f"Install Python {wanted} or newer",
    )


def _path_check(root: Path, relative: str, is_dir: bool) -> CheckResult:
    path = root / relative
    ok = path.is_dir() if is_dir else path.is_file()
    kind = "directory" if is_dir else "file"
    return CheckResult("structure", f"{relative} {kind} exists", ok)


def check_service(url: str, client: Optional[httpx.Client] = None) -> CheckResult:
    """Hit the API's /health endpoint. A stopped server is only a warning."""
    try:
        if client is None:
            response = httpx.get(url, timeout=2.0)
        else:
            response = client.get(url)
        ok = response.status_code == 200 and response.json().get("status") == "OK"
    except (httpx.HTTPError, ValueError):
        ok = False
    return CheckResult(
        "services",
        f"API is running at {url}",
        ok,
        hint=None if ok else "Start it with: uvicorn app.main:app --reload",
        required=False,
    )


def verify_setup(
    root: Path,
    runner: Runner = run_command,
    health_url: Optional[str] = None,
    client: Optional[httpx.Client] = None,
) -> List[CheckResult]:
    root = Path(root)
    checks = [_python_version_check()]

    git = runner(("git", "--version"))
    checks.append(CheckResult("system", "Git is installed", git.ok, hint=None if git.ok else "Install Git"))

    for directory in ("app", "tests", "scripts"):
        checks.append(_path_check(root, directory, is_dir=True))
    for filename in ("pyproject.toml", "app/main.py", ".env.example", ".gitignore"):
        checks.append(_path_check(root, filename, is_dir=False))

    env_ok = (root / ".env").is_file()
    checks.append(CheckResult(
        "configuration",
        ".env file exists",
        env_ok,
        hint=None if env_ok else "Copy from .env.example: cp .env.example .env",
        required=False,
    ))

    for package in REQUIRED_PACKAGES:
        installed = importlib.util.find_spec(package) is not None
        checks.append(CheckResult(
            "dependencies",
            f"{package} is installed",
            installed,
            hint=None if installed else 'Run: pip install -e ".[test]"',
        ))

    if health_url:
        checks.append(check_service(health_url, client))

    return checks


def all_passed(checks: Sequence[CheckResult]) -> bool:
    return all(check.ok for check in checks if check.required)
