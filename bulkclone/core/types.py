"""Small types and Enums used by bulkclone."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum


class RunState(str, Enum):
    """Lifecycle of a single bulk-clone run."""

    init = "init"
    validating = "validating"
    running = "running"
    done = "done"
    aborted = "aborted"


@dataclass(frozen=True)
class Repository:
    """The minimal data needed to clone one repository."""

    name: str
    ssh_url: str


@dataclass(frozen=True)
class CloneResult:
    ok: bool
    skipped: bool = False
    error: str | None = None


@dataclass
class CloneReport:
    """Thread-safe tally of what happened to every repository of a run."""

    cloned: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    aborted: list[str] = field(default_factory=list)
    error: str | None = None
    state: RunState = RunState.init
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, repo: Repository, result: CloneResult) -> None:
        with self._lock:
            if not result.ok:
                self.failed.append(repo.name)
                if self.error is None:
                    self.error = result.error
            elif result.skipped:
                self.skipped.append(repo.name)
            else:
                self.cloned.append(repo.name)

    def record_aborted(self, repo: Repository) -> None:
        with self._lock:
            self.aborted.append(repo.name)

    def summary(self) -> str:
        if self.state == RunState.aborted:
            return (
                f"Aborted. cloned={len(self.cloned)}, skipped={len(self.skipped)}, "
                f"failed={len(self.failed)}, aborted={len(self.aborted)}."
            )
        return f"Done. cloned={len(self.cloned)}, skipped={len(self.skipped)}."
