"""
Sync Models — Per-repository outcomes and the run summary.

A SyncOutcome is produced once per repository and never mutated.
The RunSummary folds outcomes in list order and decides the exit code.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class StepResult:
    """Result of one named step in a repository sync."""

    step: str
    ok: bool
    detail: Optional[str] = None


@dataclass(frozen=True)
class SyncOutcome:
    """Final result of syncing one repository."""

    success: bool
    repo: str
    created: bool = False
    visibility_updated: bool = False
    description_updated: bool = False
    archived: bool = False
    error: Optional[str] = None
    steps: Tuple[StepResult, ...] = ()

    @classmethod
    def failed(cls, repo: str, error: str, steps: Tuple[StepResult, ...] = ()) -> "SyncOutcome":
        return cls(success=False, repo=repo, error=error, steps=steps)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RunSummary:
    """Counts and failures accumulated over a whole run."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    created: int = 0
    updated: int = 0
    visibility_updated: int = 0
    description_updated: int = 0
    archived: int = 0
    failures: List[Tuple[str, str]] = field(default_factory=list)
    outcomes: List[SyncOutcome] = field(default_factory=list)

    def record(self, outcome: SyncOutcome, display_name: Optional[str] = None) -> None:
        """Fold one repository's outcome into the summary."""
        self.total += 1
        self.outcomes.append(outcome)

        if not outcome.success:
            self.failed += 1
            self.failures.append((display_name or outcome.repo, outcome.error or "Unknown error"))
            return

        self.successful += 1
        if outcome.created:
            self.created += 1
        else:
            self.updated += 1
        if outcome.visibility_updated:
            self.visibility_updated += 1
        if outcome.description_updated:
            self.description_updated += 1
        if outcome.archived:
            self.archived += 1

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "created": self.created,
            "updated": self.updated,
            "visibility_updated": self.visibility_updated,
            "description_updated": self.description_updated,
            "archived": self.archived,
            "failures": [{"repo": repo, "error": error} for repo, error in self.failures],
            "outcomes": [o.to_dict() for o in self.outcomes],
        }
