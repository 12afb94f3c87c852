"""
GitHub repository bootstrap.

Drives ``git`` and the GitHub CLI (``gh``) to publish the project: create
the repository, wire the remote, make the first commit, create the
``develop`` branch, push both branches and set up labels. Commands go
through an injectable runner, see ``app.devops.commands``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from app.devops.commands import Runner, run_command

logger = logging.getLogger(__name__)

DEFAULT_REPO_NAME = "todo-app"
DEFAULT_DESCRIPTION = "Todo app with a FastAPI backend and a single-page frontend"
INITIAL_COMMIT_MESSAGE = "feat: initial project setup"
FALLBACK_USERNAME = "your-username"


@dataclass
class Label:
    name: str
    color: str
    description: str


LABELS = (
    Label("bug", "d73a4a", "Something isn't working"),
    Label("enhancement", "a2eeef", "New feature or request"),
    Label("good first issue", "7057ff", "Good for newcomers"),
    Label("help wanted", "008672", "Extra attention is needed"),
    Label("documentation", "0075ca", "Improvements or additions to documentation"),
    Label("ci/cd", "f9d71c", "Related to CI/CD pipeline"),
    Label("security", "b60205", "Security related issue"),
    Label("performance", "fbca04", "Performance improvements"),
)


@dataclass
class StepResult:
    name: str
    ok: bool
    message: str = ""
    # A failed required step stops the bootstrap
    required: bool = False


@dataclass
class BootstrapReport:
    steps: List[StepResult] = field(default_factory=list)
    aborted: bool = False

    @property
    def ok(self) -> bool:
        return not self.aborted and all(step.ok for step in self.steps if step.required)


def resolve_username(runner: Runner = run_command) -> str:
    """The logged-in GitHub user, or a placeholder when gh cannot tell."""
    result = runner(("gh", "api", "user", "--jq", ".login"))
    if result.ok and result.output:
        return result.output
    return FALLBACK_USERNAME


class GitHubBootstrap:
    """Publish the current working tree as ``<username>/<repo_name>`` on GitHub."""

    def __init__(
        self,
        username: str,
        repo_name: str = DEFAULT_REPO_NAME,
        description: str = DEFAULT_DESCRIPTION,
        runner: Runner = run_command,
        labels: Sequence[Label] = LABELS,
    ):
        self.username = username
        self.repo_name = repo_name
        self.description = description
        self.runner = runner
        self.labels = labels

    @property
    def full_name(self) -> str:
        return f"{self.username}/{self.repo_name}"

    @property
    def remote_url(self) -> str:
        return f"https://github.com/{self.full_name}.git"

    def _step(self, name: str, args: Sequence[str], failure: str, required: bool = False) -> StepResult:
        result = self.runner(args)
        if result.ok:
            logger.info("%s: ok", name)
            return StepResult(name, True, required=required)
        logger.warning("%s: %s", name, failure)
        return StepResult(name, False, failure, required=required)

    def preflight(self) -> List[StepResult]:
        return [
            self._step("GitHub CLI installed", ("gh", "--version"),
                       "Install it from https://cli.github.com/", required=True),
            self._step("Inside a git repository", ("git", "status"),
                       "Run: git init", required=True),
            self._step("GitHub CLI authenticated", ("gh", "auth", "status"),
                       "Run: gh auth login", required=True),
        ]

    def create_repo(self) -> StepResult:
        return self._step(
            "Create GitHub repository",
            ("gh", "repo", "create", self.repo_name, "--public",
             "--description", self.description, "--clone=false"),
            "Could not create the repository; continuing with an existing one",
        )

    def add_remote(self) -> StepResult:
        return self._step(
            "Add remote origin",
            ("git", "remote", "add", "origin", self.remote_url),
            "Remote origin may already exist",
        )

    def initial_commit(self) -> StepResult:
        staged = self._step("Stage files", ("git", "add", "."), "Nothing to stage")
        if not staged.ok:
            return staged
        return self._step(
            "Initial commit",
            ("git", "commit", "-m", INITIAL_COMMIT_MESSAGE),
            "Initial commit may already exist",
        )

    def create_develop_branch(self) -> StepResult:
        return self._step(
            "Create develop branch",
            ("git", "branch", "develop"),
            "Develop branch may already exist",
        )

    def push(self) -> StepResult:
        for branch in ("main", "develop"):
            result = self._step(
                f"Push {branch}",
                ("git", "push", "-u", "origin", branch),
                "Manual push required: git push -u origin main && git push -u origin develop",
            )
            if not result.ok:
                return StepResult("Push to GitHub", False, result.message)
        return StepResult("Push to GitHub", True)

    def create_labels(self) -> StepResult:
        failed = []
        for label in self.labels:
            result = self.runner((
                "gh", "label", "create", label.name,
                "--color", label.color,
                "--description", label.description,
                "--repo", self.full_name,
            ))
            if not result.ok:
                failed.append(label.name)
        if failed:
            message = f"Labels not created (may already exist): {', '.join(failed)}"
            logger.warning(message)
            return StepResult("Create labels", False, message)
        return StepResult("Create labels", True)

    def enable_features(self) -> StepResult:
        return self._step(
            "Enable issues, wiki and projects",
            ("gh", "repo", "edit", self.full_name,
             "--enable-issues", "--enable-wiki", "--enable-projects"),
            "Some features may already be enabled",
        )

    def run(self) -> BootstrapReport:
        report = BootstrapReport(steps=self.preflight())
        if not report.ok:
            report.aborted = True
            logger.error("Pre-flight checks failed for %s", self.full_name)
            return report

        for step in (
            self.create_repo,
            self.add_remote,
            self.initial_commit,
            self.create_develop_branch,
            self.push,
            self.create_labels,
            self.enable_features,
        ):
            report.steps.append(step())
        return report

    def next_steps(self) -> List[str]:
        base = f"https://github.com/{self.full_name}"
        return [
            f"View your repository: {base}",
            f"Protect the main branch: {base}/settings/branches",
            f"Add deployment secrets: {base}/settings/secrets/actions",
            "Start developing: git checkout develop && git checkout -b feature/your-first-feature",
            f"Watch GitHub Actions: {base}/actions",
        ]

