"""
Result Models

Dataclass models for per-version outcomes and the overall deployment report.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class ResultStatus(Enum):
    """Status of an operation result."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class VersionResult:
    """Outcome of one version's sync or manifest write."""

    version: str
    status: ResultStatus
    path: Optional[Path] = None
    message: str = ""

    @property
    def is_success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status == ResultStatus.FAILURE

    def __repr__(self) -> str:
        return f"VersionResult(version={self.version}, status={self.status.value})"


@dataclass
class RelaunchResult:
    """Result of the credentialed relaunch (child stdout, exit code, error)."""

    returncode: Optional[int] = None
    output: str = ""
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the child started and exited cleanly."""
        return self.error is None and self.returncode == 0

    def __repr__(self) -> str:
        return f"RelaunchResult(returncode={self.returncode}, error={self.error!r})"


@dataclass
class DeploymentReport:
    """Everything one orchestrator run did."""

    mode: object
    sync_results: List[VersionResult] = field(default_factory=list)
    manifest_results: List[VersionResult] = field(default_factory=list)
    relaunch: Optional[RelaunchResult] = None
    errors: List[str] = field(default_factory=list)
    completed: bool = False

    @property
    def exit_code(self) -> int:
        """
        Process exit code.

        Recoverable errors are logged, never turned into exit codes, so every
        run that returns a report exits 0.
        """
        return 0

    @property
    def failed_versions(self) -> List[str]:
        """Versions whose manifest write failed."""
        return [r.version for r in self.manifest_results if r.is_failure]

    def add_error(self, error: str) -> None:
        self.errors.append(error)
